from flagtree.parser import CommandParser, ParseErrorKind


def test_posix_bundling():
    """Test the bundling of short flags in the POSIX style."""
    parser = CommandParser()
    parser.add_flag("alpha", "a", "Alpha option", set_by_default=True)
    parser.add_flag("beta", "b", "Beta option")
    parser.add_flag("charlie", "c", "Charlie option")

    bundled = parser.parse_args(["-abc"])
    separate = parser.parse_args(["-a", "-b", "-c"])
    assert bundled.values == separate.values
    assert bundled.values == {"alpha": False, "beta": True, "charlie": True}
    assert bundled.ok


def test_posix_bundling_with_value_flag():
    """Value flags in a cluster consume the following tokens in cluster order."""
    parser = CommandParser()
    parser.add_flag("verbose", "v")
    parser.add_value_flag("out", "o")
    parser.add_value_flag("level", "l")

    result = parser.parse_args(["-vol", "file", "3"])
    assert result.values == {"verbose": True, "out": "file", "level": "3"}
    assert result.ok


def test_posix_bundling_value_flag_missing_value():
    parser = CommandParser()
    parser.add_flag("verbose", "v")
    parser.add_value_flag("out", "o")

    result = parser.parse_args(["-vo"])
    assert result.values == {"verbose": True, "out": ""}
    assert [str(error) for error in result.errors] == ["missing value for flag `o'"]


def test_posix_bundling_unknown_characters():
    """Each unknown character yields its own error; known ones still apply."""
    parser = CommandParser()
    parser.add_flag("alpha", "a")

    result = parser.parse_args(["-xay"])
    assert result.values["alpha"] is True
    assert [error.kind for error in result.errors] == [
        ParseErrorKind.UNKNOWN_FLAG,
        ParseErrorKind.UNKNOWN_FLAG,
    ]
    assert [str(error) for error in result.errors] == [
        "unknown flag `-x'",
        "unknown flag `-y'",
    ]


def test_short_name_optional():
    parser = CommandParser()
    parser.add_flag("dry-run")

    result = parser.parse_args(["--dry-run"])
    assert result.values["dry-run"] is True

    result = parser.parse_args(["-d"])
    assert [str(error) for error in result.errors] == ["unknown flag `-d'"]
