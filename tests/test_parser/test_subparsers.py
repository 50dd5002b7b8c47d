from flagtree.parser import CommandParser, ParameterOption, ParseErrorKind


def run_config(parser):
    parser.add_flag("fast", "f", "Go fast")
    parser.add_parameter("target", "Run target")


def build_parser():
    parser = CommandParser(program="prog")
    parser.add_flag("verbose", "v", "Log more")
    parser.add_subparsers(
        "cmd",
        "Command",
        {
            "run": run_config,
            "stop": lambda sub: sub.add_flag("now", "n"),
            "_debug": CommandParser(),
        },
    )
    return parser


def test_dispatch_merges_values():
    parser = CommandParser()
    parser.add_subparsers("cmd", "Command", {"run": lambda sub: sub.add_flag("fast")})
    result = parser.parse_args(["run", "--fast"])
    assert result.values == {"cmd": "run", "fast": True}
    assert result.ok
    assert result.subparser_chain == ["run"]


def test_dispatch_with_parent_flags_before():
    parser = build_parser()
    result = parser.parse_args(["-v", "run", "-f", "web"])
    assert result.values == {
        "verbose": True,
        "cmd": "run",
        "fast": True,
        "target": "web",
    }
    assert result.ok


def test_parent_flags_after_dispatch_belong_to_subparser():
    parser = build_parser()
    result = parser.parse_args(["stop", "--verbose"])
    assert result.values["verbose"] is False
    assert [str(error) for error in result.errors] == ["unknown flag `--verbose'"]


def test_subparser_reports_its_own_missing_parameters():
    parser = build_parser()
    result = parser.parse_args(["run"])
    assert [(error.kind, error.name) for error in result.errors] == [
        (ParseErrorKind.MISSING_PARAMETER, "target")
    ]


def test_positionals_after_dispatch_not_required():
    parser = CommandParser()
    parser.add_parameter("first")
    parser.add_subparsers("cmd", "Command", {"run": lambda sub: sub.add_flag("fast")})
    parser.add_parameter("after")
    parser.add_list_parameter("rest", min_count=2)

    result = parser.parse_args(["one", "run", "--fast"])
    assert result.values == {"first": "one", "cmd": "run", "fast": True}
    assert result.ok


def test_missing_dispatch_parameter():
    parser = build_parser()
    result = parser.parse_args([])
    assert [str(error) for error in result.errors] == ["missing required parameter `cmd'"]
    assert result.subparser_chain == []


def test_subparser_values_take_precedence():
    parser = CommandParser()
    parser.add_value_flag("mode", default="parent")
    parser.add_subparsers(
        "cmd",
        "Command",
        {"run": lambda sub: sub.add_value_flag("mode", default="child")},
    )

    result = parser.parse_args(["--mode", "explicit", "run"])
    assert result.values["mode"] == "child"

    result = parser.parse_args(["run", "--mode", "explicit"])
    assert result.values["mode"] == "explicit"


def test_hidden_subparser_is_accepted():
    parser = build_parser()
    result = parser.parse_args(["debug"])
    assert result.values["cmd"] == "debug"
    assert result.ok
    assert parser.get_subparser("debug") is not None
    assert parser.get_subparser("_debug") is None
    assert parser.dispatch_parameter.options[-1] == ParameterOption("debug", hidden=True)


def test_invalid_discriminator_short_circuits():
    parser = build_parser()
    result = parser.parse_args(["walk", "--fast", "extra", "more"])
    assert result.values == {"verbose": False, "cmd": "walk"}
    assert len(result.errors) == 1
    assert result.errors[0].kind == ParseErrorKind.BAD_ARGUMENT
    assert str(result.errors[0]) == 'bad argument "walk" for parameter `cmd\''
    assert result.subparser_chain == []


def test_nested_subparsers():
    def remote_config(remote):
        remote.add_subparsers(
            "action",
            "Remote action",
            {
                "add": lambda add: add.add_parameter("name"),
                "remove": lambda remove: remove.add_parameter("name"),
            },
        )

    parser = CommandParser()
    parser.add_flag("quiet", "q")
    parser.add_subparsers("cmd", "Command", {"remote": remote_config})

    result = parser.parse_args(["-q", "remote", "add", "origin"])
    assert result.values == {
        "quiet": True,
        "cmd": "remote",
        "action": "add",
        "name": "origin",
    }
    assert result.subparser_chain == ["remote", "add"]
    assert result.ok

    result = parser.parse_args(["remote", "rename", "origin"])
    assert [str(error) for error in result.errors] == [
        'bad argument "rename" for parameter `action\''
    ]


def test_configured_parser_instances_are_used_as_is():
    child = CommandParser()
    child.add_parameter("path")
    parser = CommandParser()
    registry = parser.add_subparsers("cmd", "Command", {"open": child})

    assert registry["open"] is child
    assert parser.parse_args(["open", "/tmp"]).values == {"cmd": "open", "path": "/tmp"}


def test_subparser_order_follows_registration():
    parser = build_parser()
    assert list(parser.subparsers) == ["run", "stop", "debug"]
    assert parser.dispatch_parameter.option_values == ("run", "stop", "debug")
