# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value, error and state models shared by the parse and marshal engines.

Contents:
- `Value` / `ValueMapping`: the parse result type. A value is a `bool` (flags),
  a `str` (value-flags and positionals) or a `list[str]` (the variadic tail).
- `ParseErrorKind` / `ParseError`: inspectable parse errors. The parse engine
  collects these instead of raising.
- `ParseResult`: the value mapping, the collected errors, and the chain of
  sub-parsers that handled the tokens.
- `TokenCursor`: the remaining-token state of one parse call. It is created per
  call and handed down to sub-parsers, so a configured parser never holds it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from flagtree.exceptions import CommandParseError

Value = Union[bool, str, list[str]]
ValueMapping = dict[str, Value]

HELP_KEY = "help"


class ParseErrorKind(Enum):
    """Categories of errors collected while parsing."""

    UNKNOWN_FLAG = "unknown_flag"
    MISSING_VALUE = "missing_value"
    BAD_ARGUMENT = "bad_argument"
    UNEXPECTED_ARGUMENT = "unexpected_argument"
    INSUFFICIENT_VALUES = "insufficient_values"
    MISSING_PARAMETER = "missing_parameter"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseError:
    """
    A single problem found in the token stream.

    Attributes:
        kind (ParseErrorKind): Error category.
        message (str): Human-readable description.
        name (str): The flag or parameter the error concerns, if any.
        token (str | None): The offending token, if any.
    """

    kind: ParseErrorKind
    message: str
    name: str = ""
    token: str | None = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def unknown_flag(cls, flag: str) -> ParseError:
        return cls(ParseErrorKind.UNKNOWN_FLAG, f"unknown flag `{flag}'", token=flag)

    @classmethod
    def missing_value(cls, name: str) -> ParseError:
        return cls(
            ParseErrorKind.MISSING_VALUE, f"missing value for flag `{name}'", name=name
        )

    @classmethod
    def bad_argument(cls, name: str, value: str) -> ParseError:
        return cls(
            ParseErrorKind.BAD_ARGUMENT,
            f'bad argument "{value}" for parameter `{name}\'',
            name=name,
            token=value,
        )

    @classmethod
    def unexpected_argument(cls, token: str) -> ParseError:
        return cls(
            ParseErrorKind.UNEXPECTED_ARGUMENT,
            f'unexpected argument "{token}"',
            token=token,
        )

    @classmethod
    def insufficient_values(cls, name: str, min_count: int) -> ParseError:
        return cls(
            ParseErrorKind.INSUFFICIENT_VALUES,
            f"list parameter `{name}' requires at least {min_count} value(s)",
            name=name,
        )

    @classmethod
    def missing_parameter(cls, name: str) -> ParseError:
        return cls(
            ParseErrorKind.MISSING_PARAMETER,
            f"missing required parameter `{name}'",
            name=name,
        )


@dataclass
class ParseResult:
    """
    Outcome of `CommandParser.parse_args()`.

    Attributes:
        values (ValueMapping): Parsed values keyed by parameter name.
        errors (list[ParseError]): Every error found; empty when help was requested.
        subparser_chain (list[str]): Discriminator values dispatched on, outermost first.
    """

    values: ValueMapping = field(default_factory=dict)
    errors: list[ParseError] = field(default_factory=list)
    subparser_chain: list[str] = field(default_factory=list)

    @property
    def help_requested(self) -> bool:
        return self.values.get(HELP_KEY) is True

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise `CommandParseError` if any errors were collected."""
        if self.errors:
            raise CommandParseError(self.errors)


@dataclass
class TokenCursor:
    """Remaining-token state for a single parse call."""

    tokens: list[str]
    position: int = 0

    def has_next(self) -> bool:
        return self.position < len(self.tokens)

    def pop(self) -> str | None:
        """Consume and return the next token, or None when exhausted."""
        if not self.has_next():
            return None
        token = self.tokens[self.position]
        self.position += 1
        return token

    def drain(self) -> list[str]:
        """Consume and return every remaining token."""
        remaining = self.tokens[self.position :]
        self.position = len(self.tokens)
        return remaining
