import pytest

from flagtree.config import ParserDefinition, build_parser, loader
from flagtree.exceptions import ConfigLoadError

YAML_DEFINITION = """\
program: deploy
value_flags:
  - {long: region, short: r, description: Target region, value_name: name, default: us-east-1}
flags:
  - {long: verbose, short: v, description: Log more}
parameters:
  - name: env
    description: Environment
    options: [dev, prod, {value: qa, hidden: true}]
subparsers:
  name: command
  description: Action to run
  parsers:
    up:
      parameters:
        - {name: stack, description: Stack to create}
    _debug: {}
"""

TOML_DEFINITION = """\
program = "copy"

[[flags]]
long = "force"
short = "f"
description = "Overwrite"

[[parameters]]
name = "dest"
description = "Destination"

[list]
name = "files"
description = "Files to copy"
min_count = 1
"""


@pytest.fixture
def yaml_path(tmp_path):
    path = tmp_path / "flagtree.yaml"
    path.write_text(YAML_DEFINITION, encoding="UTF-8")
    return path


def test_yaml_loader(yaml_path):
    parser = loader(yaml_path)
    assert parser.program == "deploy"

    result = parser.parse_args(["-v", "qa", "up", "web"])
    assert result.ok
    assert result.values == {
        "region": "us-east-1",
        "verbose": True,
        "env": "qa",
        "command": "up",
        "stack": "web",
    }
    assert parser.parse_args(["dev", "debug"]).ok


def test_yaml_loader_hidden_entries_not_in_usage(yaml_path):
    usage = loader(yaml_path).get_usage(plain_text=True)
    assert "\n dev\n prod" in usage
    assert " qa" not in usage
    assert "debug" not in usage
    assert "\n up" in usage


def test_yaml_loader_program_override(yaml_path):
    parser = loader(str(yaml_path), program="other")
    assert parser.get_usage(plain_text=True).startswith("usage: other ")
    assert parser.get_subparser("up").program == "other"


def test_toml_loader(tmp_path):
    path = tmp_path / "flagtree.toml"
    path.write_text(TOML_DEFINITION, encoding="UTF-8")
    parser = loader(path)

    assert parser.list_parameter.min_count == 1
    result = parser.parse_args(["out", "a", "b", "-f"])
    assert result.values == {"force": True, "dest": "out", "files": ["a", "b"]}


def test_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_loader_bad_path_type():
    with pytest.raises(TypeError):
        loader(42)


def test_loader_unsupported_format(tmp_path):
    path = tmp_path / "flagtree.json"
    path.write_text("{}", encoding="UTF-8")
    with pytest.raises(ConfigLoadError):
        loader(path)


def test_loader_unparsable_yaml(tmp_path):
    path = tmp_path / "flagtree.yaml"
    path.write_text("flags: [unclosed", encoding="UTF-8")
    with pytest.raises(ConfigLoadError):
        loader(path)


@pytest.mark.parametrize(
    "raw_config",
    [
        ["not", "a", "mapping"],
        {"flags": [{"long": "verbose", "unknown": True}]},
        {"flags": [{"long": "verbose"}, {"long": "verbose"}]},
        {"flags": [{"long": "help"}]},
        {"list": {"name": "files", "min_count": -1}},
        {"subparsers": {"name": "cmd", "parsers": {}}},
    ],
)
def test_invalid_definitions(raw_config):
    with pytest.raises(ConfigLoadError):
        build_parser(raw_config)


def test_definition_accepts_field_name_for_list():
    definition = ParserDefinition.model_validate({"list_parameter": {"name": "rest"}})
    assert definition.to_parser().list_parameter.name == "rest"
