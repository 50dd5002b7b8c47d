from flagtree.parser import CommandParser


def build_parser():
    parser = CommandParser(program="prog")
    parser.add_flag("verbose", "v")
    parser.add_value_flag("out", "o")
    parser.add_parameter("src")
    parser.add_subparsers(
        "cmd",
        "Command",
        {"run": lambda sub: sub.add_parameter("target")},
    )
    return parser


def test_long_help_suppresses_errors():
    parser = build_parser()
    result = parser.parse_args(["--bogus", "--help", "-z"])
    assert result.help_requested
    assert result.errors == []
    assert result.values["help"] is True


def test_short_help_in_cluster():
    parser = build_parser()
    result = parser.parse_args(["-vhz"])
    assert result.help_requested
    assert result.values["verbose"] is True
    assert result.errors == []


def test_help_without_positionals():
    parser = build_parser()
    result = parser.parse_args(["-h"])
    assert result.help_requested
    assert result.errors == []


def test_help_inside_subparser():
    parser = build_parser()
    result = parser.parse_args(["main.c", "run", "--help"])
    assert result.help_requested
    assert result.errors == []
    assert result.values["cmd"] == "run"
    assert result.subparser_chain == ["run"]


def test_help_before_dispatch_with_subparser_errors():
    parser = build_parser()
    result = parser.parse_args(["-h", "main.c", "run", "--nope"])
    assert result.help_requested
    assert result.errors == []


def test_help_after_invalid_discriminator():
    parser = build_parser()
    result = parser.parse_args(["main.c", "walk", "-xh"])
    assert result.help_requested
    assert result.errors == []

    result = parser.parse_args(["main.c", "walk", "--", "x"])
    assert not result.help_requested
    assert len(result.errors) == 1


def test_help_key_absent_unless_requested():
    parser = build_parser()
    result = parser.parse_args(["main.c", "run", "web"])
    assert "help" not in result.values
    assert not result.help_requested


def test_value_flag_consumes_help_token():
    parser = build_parser()
    result = parser.parse_args(["--bogus", "--out", "--help"])
    assert not result.help_requested
    assert "help" not in result.values
    assert result.values["out"] == "--help"
    assert [str(error) for error in result.errors] == [
        "unknown flag `--bogus'",
        "missing required parameter `src'",
        "missing required parameter `cmd'",
    ]
