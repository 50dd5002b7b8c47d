# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CommandParser`, a small declarative command-line parser with
named sub-parsers and an exact inverse that turns parsed values back into a command
line.

A parser is built by registering flags, value-flags, positional parameters, at most
one variadic tail, and at most one set of sub-parsers. It can then:

- parse a token list into a value mapping plus every error found
  (`parse_args()`), recursing into the sub-parser chosen by the dispatch parameter,
- marshal a value mapping back into tokens or a shell-escaped string
  (`marshal_tokens()`, `marshal()`) that parses to an equivalent mapping,
- render usage text scoped to a chosen sub-parser (`get_usage()`, `render_usage()`).

Parsing never raises for bad input. Errors are collected as `ParseError` values and
returned with the fullest mapping that could be built. A help request (`-h`,
`--help`) anywhere in the tokens suppresses every other error. Marshalling is
fail-fast and raises `MarshalError`.

Public Interface:
- `add_flag(...)`, `add_value_flag(...)`, `add_parameter(...)`,
  `add_choice_parameter(...)`, `add_list_parameter(...)`, `add_subparsers(...)`
- `parse_args(...)`: Parse tokens into a `ParseResult`.
- `parse_args_with_help(...)` / `parse_args_or_exit(...)`: Process-level wrappers
  that print usage and exit with 0 on help or 1 on errors.
- `marshal_tokens(...)` / `marshal(...)`: Rebuild a command line from values.
- `get_usage(...)` / `render_usage(...)`: Usage text.

Example Usage:
    parser = CommandParser(program="deploy")
    parser.add_flag("verbose", "v", "Log more")
    parser.add_value_flag("region", "r", "Target region", "name", "us-east-1")
    parser.add_subparsers(
        "command",
        "Action to run",
        {"up": lambda sub: sub.add_parameter("stack", "Stack to create")},
    )

    result = parser.parse_args(["-v", "up", "web"])
    # result.values == {'verbose': True, 'region': 'us-east-1',
    #                   'command': 'up', 'stack': 'web'}
    parser.marshal(result.values)
    # '--region us-east-1 --verbose up web'
"""
from __future__ import annotations

import shlex
import sys
from typing import Any, Callable, Iterable, Mapping, Sequence

from rich.console import Console
from rich.markup import escape

from flagtree.console import console
from flagtree.exceptions import MarshalError, MarshalErrorKind, ParserConfigError
from flagtree.logger import logger
from flagtree.parser.parameter import (
    FlagParam,
    ListParam,
    ParameterOption,
    PositionalParam,
    ValueFlagParam,
)
from flagtree.parser.parser_types import (
    HELP_KEY,
    ParseError,
    ParseResult,
    TokenCursor,
    Value,
    ValueMapping,
)
from flagtree.parser.usage import UsageFormatter
from flagtree.utils import get_program_invocation

HIDDEN_PREFIX = "_"

SubparserFactory = Callable[["CommandParser"], Any]


class CommandParser:
    """
    Declarative command-line parser with sub-parser dispatch.

    Registration order matters: positional parameters are matched in the order
    they were added, and usage text lists every group in registration order. A
    parser is read-only once built; every parse or marshal call keeps its own
    state, so one configured parser can serve concurrent calls.

    Features:
    - Boolean flags toggled away from their default.
    - Value-flags consuming the following token.
    - POSIX-style clustering of short aliases (`-abc`).
    - Required positionals, optionally restricted to a set of options.
    - One variadic tail with a minimum count.
    - One dispatch parameter handing the remaining tokens to a named sub-parser.
    - Collect-all error reporting with help precedence.
    - Marshalling back to a shell-safe command line.
    """

    def __init__(
        self,
        program: str | None = None,
        console: Console = console,
    ) -> None:
        """Initialize the CommandParser."""
        self.program: str | None = program
        self.console: Console = console
        self._flags: list[FlagParam] = []
        self._value_flags: list[ValueFlagParam] = []
        self._parameters: list[PositionalParam] = []
        self._list_parameter: ListParam | None = None
        self._dispatch_parameter: PositionalParam | None = None
        self._subparsers: dict[str, CommandParser] = {}
        self._long_map: dict[str, FlagParam | ValueFlagParam] = {}
        self._short_map: dict[str, FlagParam | ValueFlagParam] = {}
        self._dest_set: set[str] = set()

    @property
    def flags(self) -> tuple[FlagParam, ...]:
        return tuple(self._flags)

    @property
    def value_flags(self) -> tuple[ValueFlagParam, ...]:
        return tuple(self._value_flags)

    @property
    def parameters(self) -> tuple[PositionalParam, ...]:
        return tuple(self._parameters)

    @property
    def list_parameter(self) -> ListParam | None:
        return self._list_parameter

    @property
    def dispatch_parameter(self) -> PositionalParam | None:
        return self._dispatch_parameter

    @property
    def subparsers(self) -> dict[str, CommandParser]:
        return dict(self._subparsers)

    def _validate_dest(self, name: str) -> str:
        """Validate a long name or parameter name used as a value key."""
        if not isinstance(name, str) or not name:
            raise ParserConfigError("Parameter names must be non-empty strings")
        if name.startswith("-"):
            raise ParserConfigError(
                f"Parameter name '{name}' must not start with '-'; "
                "prefixes are added when matching"
            )
        if any(char.isspace() for char in name):
            raise ParserConfigError(f"Parameter name '{name}' must not contain whitespace")
        if name == HELP_KEY:
            raise ParserConfigError(f"'{HELP_KEY}' is reserved for help requests")
        if name in self._dest_set:
            raise ParserConfigError(
                f"Name '{name}' is already defined. Flags, parameters and the list "
                "parameter share one namespace and must be unique."
            )
        return name

    def _validate_short_name(self, short_name: str | None) -> str | None:
        if not short_name:
            return None
        if not isinstance(short_name, str) or len(short_name) != 1:
            raise ParserConfigError(
                f"Short name {short_name!r} must be a single character"
            )
        if short_name == "-" or short_name.isspace():
            raise ParserConfigError(f"Short name {short_name!r} is not allowed")
        if short_name == "h":
            raise ParserConfigError("Short name 'h' is reserved for help requests")
        if short_name in self._short_map:
            existing = self._short_map[short_name]
            raise ParserConfigError(
                f"Short name '-{short_name}' is already used by '{existing.long_name}'"
            )
        return short_name

    def _register_flag(self, flag: FlagParam | ValueFlagParam) -> None:
        self._long_map[flag.long_name] = flag
        if flag.short_name:
            self._short_map[flag.short_name] = flag
        self._dest_set.add(flag.long_name)

    def add_flag(
        self,
        long_name: str,
        short_name: str | None = None,
        description: str = "",
        set_by_default: bool = False,
    ) -> FlagParam:
        """
        Define a boolean flag.

        Args:
            long_name (str): Matched as `--long_name`; the key in parsed values.
            short_name (str | None): Optional single-character alias.
            description (str): Help text.
            set_by_default (bool): Value when absent. Presence toggles it.

        Returns:
            FlagParam: The registered descriptor.
        """
        if not isinstance(set_by_default, bool):
            raise ParserConfigError(
                f"set_by_default must be a boolean, got {type(set_by_default).__name__}"
            )
        flag = FlagParam(
            long_name=self._validate_dest(long_name),
            short_name=self._validate_short_name(short_name),
            description=description,
            set_by_default=set_by_default,
        )
        self._flags.append(flag)
        self._register_flag(flag)
        return flag

    def add_value_flag(
        self,
        long_name: str,
        short_name: str | None = None,
        description: str = "",
        value_name: str = "",
        default: str = "",
    ) -> ValueFlagParam:
        """
        Define a flag that takes the following token as its value.

        Args:
            long_name (str): Matched as `--long_name`; the key in parsed values.
            short_name (str | None): Optional single-character alias.
            description (str): Help text.
            value_name (str): Placeholder shown in help; upper-cased. Defaults to
                the long name.
            default (str): Value when absent.

        Returns:
            ValueFlagParam: The registered descriptor.
        """
        if not isinstance(default, str):
            raise ParserConfigError(
                f"Default for value flag '{long_name}' must be a string, "
                f"got {type(default).__name__}"
            )
        long_name = self._validate_dest(long_name)
        value_flag = ValueFlagParam(
            long_name=long_name,
            short_name=self._validate_short_name(short_name),
            description=description,
            value_name=(value_name or long_name).upper(),
            default=default,
        )
        self._value_flags.append(value_flag)
        self._register_flag(value_flag)
        return value_flag

    def _normalize_options(
        self, name: str, options: Iterable[str | ParameterOption]
    ) -> tuple[ParameterOption, ...]:
        if isinstance(options, (str, dict)):
            raise ParserConfigError(
                f"Options for '{name}' must be a list of strings or ParameterOption"
            )
        normalized: list[ParameterOption] = []
        seen: set[str] = set()
        for option in options:
            if isinstance(option, str):
                option = ParameterOption(option)
            elif not isinstance(option, ParameterOption):
                raise ParserConfigError(
                    f"Invalid option {option!r} for '{name}': expected a string"
                )
            if not option.value:
                raise ParserConfigError(f"Options for '{name}' must be non-empty")
            if option.value in seen:
                raise ParserConfigError(
                    f"Option '{option.value}' is listed twice for '{name}'"
                )
            seen.add(option.value)
            normalized.append(option)
        if not normalized:
            raise ParserConfigError(f"Choice parameter '{name}' needs at least one option")
        return tuple(normalized)

    def _register_parameter(self, parameter: PositionalParam) -> PositionalParam:
        self._parameters.append(parameter)
        self._dest_set.add(parameter.name)
        return parameter

    def add_parameter(self, name: str, description: str = "") -> PositionalParam:
        """Define a required positional parameter accepting any value."""
        return self._register_parameter(
            PositionalParam(name=self._validate_dest(name), description=description)
        )

    def add_choice_parameter(
        self,
        name: str,
        description: str,
        options: Iterable[str | ParameterOption],
    ) -> PositionalParam:
        """
        Define a required positional parameter restricted to `options`.

        Options given as `ParameterOption(value, hidden=True)` are accepted but
        left out of help text.
        """
        name = self._validate_dest(name)
        return self._register_parameter(
            PositionalParam(
                name=name,
                description=description,
                options=self._normalize_options(name, options),
            )
        )

    def add_list_parameter(
        self, name: str, description: str = "", min_count: int = 0
    ) -> ListParam:
        """
        Define the variadic tail collecting all tokens left after the positionals.

        Raises:
            ParserConfigError: If a list parameter is already defined.
        """
        if self._list_parameter is not None:
            raise ParserConfigError("parsers support a maximum of one list parameter")
        if not isinstance(min_count, int) or isinstance(min_count, bool) or min_count < 0:
            raise ParserConfigError(
                f"min_count for '{name}' must be a non-negative integer"
            )
        list_parameter = ListParam(
            name=self._validate_dest(name),
            description=description,
            min_count=min_count,
        )
        self._list_parameter = list_parameter
        self._dest_set.add(list_parameter.name)
        return list_parameter

    def add_subparsers(
        self,
        name: str,
        description: str,
        subparsers: Mapping[str, CommandParser | SubparserFactory],
    ) -> dict[str, CommandParser]:
        """
        Register named sub-parsers behind a dispatch parameter.

        A positional choice parameter called `name` is appended; its options are
        the sub-parser names. When parsing reaches it, the rest of the tokens are
        handed to the chosen sub-parser. Names starting with `_` are hidden: they
        are accepted without the leading `_` and left out of help text.

        Args:
            name (str): Name of the dispatch parameter.
            description (str): Help text for the dispatch parameter.
            subparsers (Mapping): Sub-parser name to either a configured
                `CommandParser` or a callable that configures a fresh one.

        Returns:
            dict[str, CommandParser]: The registered sub-parsers by accepted name.
        """
        if self._dispatch_parameter is not None:
            raise ParserConfigError(
                f"Sub-parsers are already registered under "
                f"'{self._dispatch_parameter.name}'"
            )
        name = self._validate_dest(name)
        registry: dict[str, CommandParser] = {}
        options: list[ParameterOption] = []
        for key, entry in subparsers.items():
            hidden = key.startswith(HIDDEN_PREFIX)
            value = key[len(HIDDEN_PREFIX) :] if hidden else key
            if isinstance(entry, CommandParser):
                child = entry
            elif callable(entry):
                child = CommandParser(program=self.program, console=self.console)
                entry(child)
            else:
                raise ParserConfigError(
                    f"Sub-parser '{key}' must be a CommandParser or a callable "
                    f"that configures one, got {type(entry).__name__}"
                )
            if child is self or child._reaches(self):
                raise ParserConfigError(
                    f"Sub-parser '{key}' cannot be this parser or one of its ancestors"
                )
            options.append(ParameterOption(value, hidden=hidden))
            registry[value] = child

        dispatch = PositionalParam(
            name=name,
            description=description,
            options=self._normalize_options(name, options),
            dispatch=True,
        )
        self._subparsers = registry
        self._dispatch_parameter = dispatch
        self._register_parameter(dispatch)
        logger.debug("Registered sub-parsers for '%s': %s", name, ", ".join(registry))
        return dict(registry)

    def get_subparser(self, name: str) -> CommandParser | None:
        """Return the sub-parser registered under `name`, if any."""
        return self._subparsers.get(name)

    def _reaches(self, target: CommandParser) -> bool:
        """Whether `target` is somewhere in this parser's sub-parser tree."""
        seen: set[int] = set()
        pending = list(self._subparsers.values())
        while pending:
            parser = pending.pop()
            if parser is target:
                return True
            if id(parser) in seen:
                continue
            seen.add(id(parser))
            pending.extend(parser._subparsers.values())
        return False

    def get_parameter(
        self, name: str
    ) -> FlagParam | ValueFlagParam | PositionalParam | ListParam | None:
        """Return the descriptor whose value key is `name`, if defined at this level."""
        if name in self._long_map:
            return self._long_map[name]
        for parameter in self._parameters:
            if parameter.name == name:
                return parameter
        if self._list_parameter and self._list_parameter.name == name:
            return self._list_parameter
        return None

    def to_definition_list(self) -> list[dict[str, Any]]:
        """
        Convert the parameter model into a serializable list of dicts.

        Sub-parsers are nested under the dispatch parameter's `subparsers` key.
        """
        defs: list[dict[str, Any]] = []
        for value_flag in self._value_flags:
            defs.append(
                {
                    "kind": "value_flag",
                    "name": value_flag.long_name,
                    "short_name": value_flag.short_name,
                    "value_name": value_flag.value_name,
                    "default": value_flag.default,
                    "description": value_flag.description,
                }
            )
        for flag in self._flags:
            defs.append(
                {
                    "kind": "flag",
                    "name": flag.long_name,
                    "short_name": flag.short_name,
                    "default": flag.set_by_default,
                    "description": flag.description,
                }
            )
        for parameter in self._parameters:
            definition: dict[str, Any] = {
                "kind": "subparsers" if parameter.dispatch else "parameter",
                "name": parameter.name,
                "options": [option.value for option in parameter.options],
                "description": parameter.description,
            }
            if parameter.dispatch:
                definition["subparsers"] = {
                    key: child.to_definition_list()
                    for key, child in self._subparsers.items()
                }
            defs.append(definition)
        if self._list_parameter is not None:
            defs.append(
                {
                    "kind": "list",
                    "name": self._list_parameter.name,
                    "min_count": self._list_parameter.min_count,
                    "description": self._list_parameter.description,
                }
            )
        return defs

    def _defaults(self) -> ValueMapping:
        values: ValueMapping = {flag.long_name: flag.set_by_default for flag in self._flags}
        for value_flag in self._value_flags:
            values[value_flag.long_name] = value_flag.default
        return values

    def _apply_flag(
        self,
        param: FlagParam | ValueFlagParam,
        display_name: str,
        cursor: TokenCursor,
        values: ValueMapping,
        errors: list[ParseError],
    ) -> None:
        if isinstance(param, FlagParam):
            values[param.long_name] = not param.set_by_default
            return
        value = cursor.pop()
        if value is None:
            errors.append(ParseError.missing_value(display_name))
            value = ""
        values[param.long_name] = value

    def _handle_long_flag(
        self,
        long_name: str,
        cursor: TokenCursor,
        values: ValueMapping,
        errors: list[ParseError],
    ) -> None:
        if long_name == HELP_KEY:
            values[HELP_KEY] = True
            return
        param = self._long_map.get(long_name)
        if param is None:
            errors.append(ParseError.unknown_flag(f"--{long_name}"))
            return
        self._apply_flag(param, long_name, cursor, values, errors)

    def _handle_short_flags(
        self,
        cluster: str,
        cursor: TokenCursor,
        values: ValueMapping,
        errors: list[ParseError],
    ) -> None:
        # e.g. -vo out -> -v -o out; value-flags take their values in cluster order
        for short_name in cluster:
            if short_name == "h":
                values[HELP_KEY] = True
                continue
            param = self._short_map.get(short_name)
            if param is None:
                errors.append(ParseError.unknown_flag(f"-{short_name}"))
                continue
            self._apply_flag(param, short_name, cursor, values, errors)

    @staticmethod
    def _is_help_token(token: str) -> bool:
        if token == f"--{HELP_KEY}":
            return True
        return token.startswith("-") and not token.startswith("--") and "h" in token[1:]

    def _dispatch(
        self,
        parameter: PositionalParam,
        token: str,
        cursor: TokenCursor,
        values: ValueMapping,
        errors: list[ParseError],
        chain: list[str],
    ) -> None:
        values[parameter.name] = token
        subparser = self._subparsers.get(token)
        if subparser is None:
            errors.append(ParseError.bad_argument(parameter.name, token))
            if any(self._is_help_token(rest) for rest in cursor.drain()):
                values[HELP_KEY] = True
            logger.debug("No sub-parser '%s' for '%s'", token, parameter.name)
            return

        chain.append(token)
        logger.debug("Dispatching to sub-parser '%s' for '%s'", token, parameter.name)
        sub_values, sub_errors = subparser._parse_level(cursor, chain)
        values.update(sub_values)
        errors.extend(sub_errors)

    def _parse_level(
        self, cursor: TokenCursor, chain: list[str]
    ) -> tuple[ValueMapping, list[ParseError]]:
        """Parse the remaining tokens against this parser's own parameters."""
        values = self._defaults()
        errors: list[ParseError] = []
        list_values: list[str] = []
        position = 0

        while (token := cursor.pop()) is not None:
            if token.startswith("--"):
                self._handle_long_flag(token[2:], cursor, values, errors)
            elif token.startswith("-") and token != "-":
                self._handle_short_flags(token[1:], cursor, values, errors)
            elif position < len(self._parameters):
                parameter = self._parameters[position]
                if parameter.dispatch:
                    self._dispatch(parameter, token, cursor, values, errors, chain)
                    return values, errors
                if not parameter.accepts(token):
                    errors.append(ParseError.bad_argument(parameter.name, token))
                values[parameter.name] = token
                position += 1
            elif self._list_parameter is not None:
                list_values.append(token)
            else:
                errors.append(ParseError.unexpected_argument(token))

        if self._list_parameter is not None:
            if len(list_values) < self._list_parameter.min_count:
                errors.append(
                    ParseError.insufficient_values(
                        self._list_parameter.name, self._list_parameter.min_count
                    )
                )
            values[self._list_parameter.name] = list_values

        for parameter in self._parameters[position:]:
            errors.append(ParseError.missing_parameter(parameter.name))

        return values, errors

    def parse_args(self, args: Sequence[str] | None = None) -> ParseResult:
        """
        Parse a token list into values and errors.

        Args:
            args (Sequence[str] | None): Tokens, without the program name.

        Returns:
            ParseResult: Values for every declared parameter that could be filled,
                every error found, and the chain of sub-parsers used. When help was
                requested, `errors` is empty.
        """
        if args is None:
            args = []
        if isinstance(args, str):
            raise TypeError("args must be a sequence of tokens, not a string")

        cursor = TokenCursor(list(args))
        chain: list[str] = []
        values, errors = self._parse_level(cursor, chain)
        result = ParseResult(values=values, errors=errors, subparser_chain=chain)
        if result.help_requested:
            logger.debug("Help requested; suppressing %d error(s)", len(errors))
            result.errors = []
        elif errors:
            logger.debug(
                "Parsed %d token(s) with %d error(s)", len(cursor.tokens), len(errors)
            )
        return result

    def _marshal_string(self, name: str, values: Mapping[str, Any]) -> str:
        if name not in values:
            raise MarshalError(
                MarshalErrorKind.MISSING_VALUE,
                name,
                f"missing value for required parameter `{name}'",
            )
        value = values[name]
        if not isinstance(value, str):
            raise MarshalError(
                MarshalErrorKind.WRONG_TYPE,
                name,
                f"value for parameter `{name}' must be a string, "
                f"got {type(value).__name__}",
            )
        return value

    def _marshal_level(
        self, values: Mapping[str, Any], tokens: list[tuple[str, bool]]
    ) -> None:
        """Append (token, is_value) pairs for this level and the chosen sub-parser."""
        for parameter in self._parameters:
            if parameter.dispatch:
                break
            tokens.append((self._marshal_string(parameter.name, values), True))

        for value_flag in self._value_flags:
            value = values.get(value_flag.long_name, value_flag.default)
            if not isinstance(value, str):
                raise MarshalError(
                    MarshalErrorKind.WRONG_TYPE,
                    value_flag.long_name,
                    f"value for flag `{value_flag.long_name}' must be a string, "
                    f"got {type(value).__name__}",
                )
            tokens.append((f"--{value_flag.long_name}", False))
            tokens.append((value, True))

        for flag in self._flags:
            value = values.get(flag.long_name, flag.set_by_default)
            if not isinstance(value, bool):
                raise MarshalError(
                    MarshalErrorKind.WRONG_TYPE,
                    flag.long_name,
                    f"value for flag `{flag.long_name}' must be a boolean, "
                    f"got {type(value).__name__}",
                )
            if value != flag.set_by_default:
                tokens.append((f"--{flag.long_name}", False))

        if self._dispatch_parameter is None:
            self._marshal_list(values, tokens)
            return

        name = self._dispatch_parameter.name
        discriminator = self._marshal_string(name, values)
        subparser = self._subparsers.get(discriminator)
        if subparser is None:
            raise MarshalError(
                MarshalErrorKind.UNKNOWN_SUBPARSER,
                name,
                f'no sub-parser "{discriminator}" for parameter `{name}\'',
            )
        tokens.append((discriminator, True))
        subparser._marshal_level(values, tokens)

    def _marshal_list(
        self, values: Mapping[str, Any], tokens: list[tuple[str, bool]]
    ) -> None:
        list_parameter = self._list_parameter
        if list_parameter is None:
            return
        items = values.get(list_parameter.name, [])
        if not isinstance(items, (list, tuple)) or not all(
            isinstance(item, str) for item in items
        ):
            raise MarshalError(
                MarshalErrorKind.WRONG_TYPE,
                list_parameter.name,
                f"value for list parameter `{list_parameter.name}' must be a list "
                "of strings",
            )
        if len(items) < list_parameter.min_count:
            raise MarshalError(
                MarshalErrorKind.BAD_COUNT,
                list_parameter.name,
                f"list parameter `{list_parameter.name}' requires at least "
                f"{list_parameter.min_count} value(s), got {len(items)}",
            )
        tokens.extend((item, True) for item in items)

    def marshal_tokens(self, values: Mapping[str, Value]) -> list[str]:
        """
        Rebuild the token list that parses back to `values`.

        Order per level: positionals before the dispatch parameter, value-flags
        (defaults filled in), flags differing from their default, then either the
        list parameter's values or the dispatch value followed by the chosen
        sub-parser's tokens.

        Raises:
            MarshalError: On the first missing value, wrong type, short list or
                unknown sub-parser.
        """
        tokens: list[tuple[str, bool]] = []
        self._marshal_level(values, tokens)
        return [token for token, _ in tokens]

    def marshal(self, values: Mapping[str, Value]) -> str:
        """Rebuild a shell-escaped command line that parses back to `values`."""
        tokens: list[tuple[str, bool]] = []
        self._marshal_level(values, tokens)
        return " ".join(
            shlex.quote(token) if is_value else token for token, is_value in tokens
        )

    def get_usage(self, subparser: str | None = None, plain_text: bool = False) -> str:
        """
        Render usage text, scoped to `subparser` when given.

        Args:
            subparser (str | None): A registered sub-parser name to describe.
            plain_text (bool): Return text without rich markup.
        """
        program = self.program or get_program_invocation()
        return UsageFormatter(self, plain_text=plain_text).get_usage(program, subparser)

    def render_usage(self, subparser: str | None = None) -> None:
        """Print usage text to the parser's console."""
        self.console.print(self.get_usage(subparser), soft_wrap=True, highlight=False)

    def _usage_scope(self, result: ParseResult) -> str | None:
        if self._dispatch_parameter is None:
            return None
        chosen = result.values.get(self._dispatch_parameter.name)
        if isinstance(chosen, str) and chosen in self._subparsers:
            return chosen
        return None

    def parse_args_with_help(self, args: Sequence[str] | None = None) -> ParseResult:
        """
        Parse `args` (default: `sys.argv[1:]`), printing usage and exiting with
        status 0 if help was requested.
        """
        if args is None:
            args = sys.argv[1:]
        result = self.parse_args(args)
        if result.help_requested:
            self.render_usage(self._usage_scope(result))
            sys.exit(0)
        return result

    def parse_args_or_exit(self, args: Sequence[str] | None = None) -> ValueMapping:
        """
        Parse `args` (default: `sys.argv[1:]`) and return the values.

        Exits with status 0 after printing usage on help, or with status 1 after
        printing usage and the error list if any errors were found.
        """
        result = self.parse_args_with_help(args)
        if result.errors:
            self.render_usage(self._usage_scope(result))
            self.console.print(
                "\nencountered errors when parsing arguments:",
                style="usage.error.heading",
                highlight=False,
            )
            for error in result.errors:
                self.console.print(
                    f" {escape(str(error))}", style="usage.error", highlight=False
                )
            sys.exit(1)
        return result.values

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        list_name = self._list_parameter.name if self._list_parameter else None
        return (
            f"CommandParser(flags={len(self._flags)}, "
            f"value_flags={len(self._value_flags)}, "
            f"parameters={len(self._parameters)}, list={list_name}, "
            f"subparsers={len(self._subparsers)})"
        )

    def __repr__(self) -> str:
        return str(self)
