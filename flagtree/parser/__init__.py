"""
Flagtree CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command_parser import HIDDEN_PREFIX, CommandParser
from .parameter import FlagParam, ListParam, ParameterOption, PositionalParam, ValueFlagParam
from .parser_types import ParseError, ParseErrorKind, ParseResult, Value, ValueMapping
from .usage import UsageFormatter

__all__ = [
    "CommandParser",
    "FlagParam",
    "HIDDEN_PREFIX",
    "ListParam",
    "ParameterOption",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "PositionalParam",
    "UsageFormatter",
    "Value",
    "ValueFlagParam",
    "ValueMapping",
]
