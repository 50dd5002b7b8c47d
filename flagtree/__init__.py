"""
Flagtree CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .config import loader
from .exceptions import (
    CommandParseError,
    ConfigLoadError,
    FlagtreeError,
    MarshalError,
    MarshalErrorKind,
    ParserConfigError,
)
from .parser import CommandParser, ParameterOption, ParseError, ParseErrorKind, ParseResult

logger = logging.getLogger("flagtree")


__all__ = [
    "CommandParser",
    "CommandParseError",
    "ConfigLoadError",
    "FlagtreeError",
    "MarshalError",
    "MarshalErrorKind",
    "ParameterOption",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "ParserConfigError",
    "loader",
]
