# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative parser definitions loaded from YAML or TOML files.

A definition mirrors the registration API of `CommandParser`:

    program: deploy
    value_flags:
      - {long: region, short: r, description: Target region, value_name: name, default: us-east-1}
    flags:
      - {long: verbose, short: v, description: Log more}
    parameters:
      - {name: env, description: Environment, options: [dev, prod, {value: qa, hidden: true}]}
    subparsers:
      name: command
      description: Action to run
      parsers:
        up:
          parameters:
            - {name: stack, description: Stack to create}
        _debug: {}
    list:
      name: files
      min_count: 1

Parameters are registered in the order value flags, flags, parameters,
sub-parsers, list parameter, so the dispatch parameter always follows the
plain positionals.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flagtree.exceptions import ConfigLoadError, ParserConfigError
from flagtree.logger import logger
from flagtree.parser.command_parser import CommandParser
from flagtree.parser.parameter import ParameterOption


class FlagDefinition(BaseModel):
    """Boolean flag definition."""

    model_config = ConfigDict(extra="forbid")

    long: str
    short: str | None = None
    description: str = ""
    default: bool = False


class ValueFlagDefinition(BaseModel):
    """Value flag definition."""

    model_config = ConfigDict(extra="forbid")

    long: str
    short: str | None = None
    description: str = ""
    value_name: str = ""
    default: str = ""


class OptionDefinition(BaseModel):
    """Choice option; `hidden` options are accepted but not listed in help."""

    model_config = ConfigDict(extra="forbid")

    value: str
    hidden: bool = False


class ParameterDefinition(BaseModel):
    """Positional parameter definition; options restrict the accepted values."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    options: list[str | OptionDefinition] = Field(default_factory=list)

    def to_options(self) -> list[ParameterOption]:
        return [
            ParameterOption(option)
            if isinstance(option, str)
            else ParameterOption(option.value, hidden=option.hidden)
            for option in self.options
        ]


class ListDefinition(BaseModel):
    """Variadic tail definition."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    min_count: int = Field(default=0, ge=0)


class SubparsersDefinition(BaseModel):
    """Dispatch parameter and the sub-parsers it selects between."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    parsers: dict[str, ParserDefinition]


class ParserDefinition(BaseModel):
    """A complete parser, possibly with nested sub-parsers."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    program: str | None = None
    value_flags: list[ValueFlagDefinition] = Field(default_factory=list)
    flags: list[FlagDefinition] = Field(default_factory=list)
    parameters: list[ParameterDefinition] = Field(default_factory=list)
    subparsers: SubparsersDefinition | None = None
    list_parameter: ListDefinition | None = Field(default=None, alias="list")

    def to_parser(self, program: str | None = None) -> CommandParser:
        """Build a `CommandParser` from this definition."""
        parser = CommandParser(program=program or self.program)
        for value_flag in self.value_flags:
            parser.add_value_flag(
                value_flag.long,
                value_flag.short,
                value_flag.description,
                value_flag.value_name,
                value_flag.default,
            )
        for flag in self.flags:
            parser.add_flag(flag.long, flag.short, flag.description, flag.default)
        for parameter in self.parameters:
            if parameter.options:
                parser.add_choice_parameter(
                    parameter.name, parameter.description, parameter.to_options()
                )
            else:
                parser.add_parameter(parameter.name, parameter.description)
        if self.subparsers is not None:
            parser.add_subparsers(
                self.subparsers.name,
                self.subparsers.description,
                {
                    key: definition.to_parser(program=parser.program)
                    for key, definition in self.subparsers.parsers.items()
                },
            )
        if self.list_parameter is not None:
            parser.add_list_parameter(
                self.list_parameter.name,
                self.list_parameter.description,
                self.list_parameter.min_count,
            )
        return parser


SubparsersDefinition.model_rebuild()
ParserDefinition.model_rebuild()


def build_parser(raw_config: Any, program: str | None = None) -> CommandParser:
    """Validate a raw definition mapping and build its parser."""
    if not isinstance(raw_config, dict):
        raise ConfigLoadError(
            "Parser definition must be a mapping.\n"
            "Example:\n"
            "program: 'deploy'\n"
            "flags:\n"
            "  - long: 'verbose'\n"
            "    short: 'v'\n"
            "    description: 'Log more'"
        )
    try:
        definition = ParserDefinition.model_validate(raw_config)
        return definition.to_parser(program=program)
    except ValidationError as error:
        raise ConfigLoadError(f"Invalid parser definition: {error}") from error
    except ParserConfigError as error:
        raise ConfigLoadError(f"Invalid parser definition: {error}") from error


def loader(file_path: Path | str, program: str | None = None) -> CommandParser:
    """
    Load a parser definition from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the definition file.
        program (str | None): Overrides the `program` entry of the file.

    Returns:
        CommandParser: The configured parser.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the format is unsupported or the definition is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such definition file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigLoadError(f"Unsupported definition format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigLoadError(f"Could not parse {path}: {error}") from error

    logger.debug("Loaded parser definition from %s", path)
    return build_parser(raw_config, program=program)
