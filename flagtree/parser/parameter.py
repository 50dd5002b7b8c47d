# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the immutable parameter descriptors used by `CommandParser`.

Each descriptor describes one kind of command-line input. They are created by the
registration methods on `CommandParser` (`add_flag()`, `add_value_flag()`,
`add_parameter()`, `add_choice_parameter()`, `add_list_parameter()`,
`add_subparsers()`) and never change afterwards.

Kinds:
- `FlagParam`: boolean switch toggled away from its default by presence.
- `ValueFlagParam`: flag that consumes the following token as its string value.
- `PositionalParam`: required, order-sensitive argument, optionally restricted to
  a set of `ParameterOption` values. The sub-parser discriminator is a
  `PositionalParam` with `dispatch=True`.
- `ListParam`: the variadic tail consuming every remaining non-flag token.

The `*_text()` helpers return the fragments the usage renderer lays out, so the
summary line and the description blocks stay consistent with each other.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterOption:
    """
    A permitted value of a restricted positional parameter.

    Attributes:
        value (str): The accepted token.
        hidden (bool): Accepted on the command line but omitted from help text.
    """

    value: str
    hidden: bool = False

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FlagParam:
    """
    Represents a boolean switch.

    Attributes:
        long_name (str): Long name, matched as `--long_name` and used as the value key.
        short_name (str | None): Optional single-character alias, matched as `-c`.
        description (str): Help text.
        set_by_default (bool): Value when the flag is absent; presence toggles it.
    """

    long_name: str
    short_name: str | None = None
    description: str = ""
    set_by_default: bool = False

    def get_flag_text(self) -> str:
        """Get the flag prefix shown in usage and description blocks."""
        if self.short_name:
            return f"-{self.short_name}, --{self.long_name}"
        return f"--{self.long_name}"


@dataclass(frozen=True)
class ValueFlagParam:
    """
    Represents a flag carrying one string argument.

    Attributes:
        long_name (str): Long name, matched as `--long_name` and used as the value key.
        short_name (str | None): Optional single-character alias.
        description (str): Help text.
        value_name (str): Placeholder for the value in help text (upper case).
        default (str): Value when the flag is absent.
    """

    long_name: str
    short_name: str | None = None
    description: str = ""
    value_name: str = ""
    default: str = ""

    def get_flag_text(self) -> str:
        """Get the flag prefix, including the value placeholder."""
        if self.short_name:
            return f"-{self.short_name}, --{self.long_name} {self.value_name}"
        return f"--{self.long_name} {self.value_name}"


@dataclass(frozen=True)
class PositionalParam:
    """
    Represents a required positional parameter.

    Attributes:
        name (str): Value key and display label.
        description (str): Help text.
        options (tuple[ParameterOption, ...]): Permitted values; empty means any value.
        dispatch (bool): True if this parameter selects a sub-parser.
    """

    name: str
    description: str = ""
    options: tuple[ParameterOption, ...] = ()
    dispatch: bool = False

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)

    @property
    def visible_options(self) -> tuple[ParameterOption, ...]:
        return tuple(option for option in self.options if not option.hidden)

    def accepts(self, value: str) -> bool:
        """Return True if `value` is allowed for this parameter."""
        return not self.options or value in self.option_values


@dataclass(frozen=True)
class ListParam:
    """
    Represents the variadic tail parameter.

    Attributes:
        name (str): Value key and display label.
        description (str): Help text.
        min_count (int): Minimum number of values required.
    """

    name: str
    description: str = ""
    min_count: int = 0

    def get_usage_text(self) -> str:
        """Get the tail as shown in usage: the name `min_count` times, then an ellipsis."""
        text = "".join(f" {self.name}" for _ in range(self.min_count))
        return f"{text} [{self.name}...]"
