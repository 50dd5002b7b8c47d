# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by flagtree.

Parse errors are not exceptions: the parse engine collects them as `ParseError`
values and returns them alongside the best-effort value mapping. The classes here
cover the failures that should stop the caller outright: an invalid parser
definition, a malformed value mapping handed to the marshal engine, or an explicit
request to turn collected parse errors into an exception.

All exceptions inherit from `FlagtreeError`, the base exception for the package.

Exception Hierarchy:
- FlagtreeError
    ├── ParserConfigError
    ├── ConfigLoadError
    ├── CommandParseError
    └── MarshalError
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from flagtree.parser.parser_types import ParseError


class FlagtreeError(Exception):
    """Base exception for flagtree."""


class ParserConfigError(FlagtreeError):
    """Exception raised when a parser is configured with conflicting or invalid parameters."""


class ConfigLoadError(FlagtreeError):
    """Exception raised when a parser definition file cannot be read or validated."""


class CommandParseError(FlagtreeError):
    """Exception raised on request when a parse produced one or more errors."""

    def __init__(self, errors: Sequence[ParseError]):
        self.errors: list[ParseError] = list(errors)
        plural = "s" if len(self.errors) != 1 else ""
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} parse error{plural}: {details}")


class MarshalErrorKind(Enum):
    """Categories of marshal failures."""

    MISSING_VALUE = "missing_value"
    WRONG_TYPE = "wrong_type"
    BAD_COUNT = "bad_count"
    UNKNOWN_SUBPARSER = "unknown_subparser"

    def __str__(self) -> str:
        return self.value


class MarshalError(FlagtreeError):
    """Exception raised when a value mapping cannot be turned back into a command line."""

    def __init__(self, kind: MarshalErrorKind, name: str, message: str):
        self.kind = kind
        self.name = name
        super().__init__(message)
