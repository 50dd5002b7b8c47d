"""
Flagtree CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import json
import logging
import os
import shlex
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape

from flagtree.config import loader
from flagtree.console import console
from flagtree.exceptions import ConfigLoadError, MarshalError
from flagtree.logger import logger
from flagtree.parser import CommandParser
from flagtree.themes import OneColors
from flagtree.utils import setup_logging

stdout_console = Console(highlight=False)


def find_flagtree_config() -> Path | None:
    candidates = [
        Path.cwd() / "flagtree.yaml",
        Path.cwd() / "flagtree.toml",
        Path.cwd() / ".flagtree.yaml",
        Path.cwd() / ".flagtree.toml",
        Path(os.environ.get("FLAGTREE_CONFIG", "flagtree.yaml")),
    ]
    return next((p for p in candidates if p.exists()), None)


def parse_config(parser: CommandParser) -> None:
    parser.add_value_flag(
        "tokens",
        "t",
        "Command line to parse, as one shell-quoted string",
        "line",
        "",
    )


def marshal_config(parser: CommandParser) -> None:
    parser.add_parameter("values", "JSON object mapping parameter names to values")


def usage_config(parser: CommandParser) -> None:
    parser.add_value_flag(
        "subparser", "s", "Describe only this sub-parser", "name", ""
    )


def get_cli_parser() -> CommandParser:
    parser = CommandParser(program="flagtree")
    parser.add_value_flag(
        "config", "c", "Parser definition file (YAML or TOML)", "path", ""
    )
    parser.add_value_flag("program", "p", "Program name shown in usage", "name", "")
    parser.add_flag("verbose", "v", "Enable debug logging")
    parser.add_subparsers(
        "command",
        "Operation to run against the definition",
        {
            "parse": parse_config,
            "marshal": marshal_config,
            "usage": usage_config,
        },
    )
    return parser


def run_parse(target: CommandParser, values: dict[str, Any]) -> int:
    try:
        tokens = shlex.split(values["tokens"])
    except ValueError as error:
        console.print(f"[{OneColors.DARK_RED}]❌ Invalid command line:[/] {escape(str(error))}")
        return 1
    result = target.parse_args(tokens)
    stdout_console.print_json(
        data={
            "values": result.values,
            "errors": [
                {"kind": str(error.kind), "message": error.message}
                for error in result.errors
            ],
            "subparsers": result.subparser_chain,
        }
    )
    return 0 if result.ok else 1


def run_marshal(target: CommandParser, values: dict[str, Any]) -> int:
    try:
        data = json.loads(values["values"])
    except json.JSONDecodeError as error:
        console.print(f"[{OneColors.DARK_RED}]❌ Invalid JSON:[/] {escape(str(error))}")
        return 1
    if not isinstance(data, dict):
        console.print(f"[{OneColors.DARK_RED}]❌ Values must be a JSON object.[/]")
        return 1
    try:
        line = target.marshal(data)
    except MarshalError as error:
        logger.debug("Marshal failed (%s): %s", error.kind, error)
        console.print(f"[{OneColors.DARK_RED}]❌ {escape(str(error))}[/]")
        return 1
    stdout_console.print(line, markup=False, soft_wrap=True)
    return 0


def run_usage(target: CommandParser, values: dict[str, Any]) -> int:
    usage = target.get_usage(values["subparser"] or None, plain_text=True)
    stdout_console.print(usage, markup=False, soft_wrap=True)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    cli = get_cli_parser()
    values = cli.parse_args_or_exit(argv)
    if values["verbose"]:
        setup_logging(console_log_level=logging.DEBUG)

    config_path = Path(values["config"]) if values["config"] else find_flagtree_config()
    if config_path is None:
        console.print(
            f"[{OneColors.DARK_RED}]❌ No parser definition found.[/] "
            f"[{OneColors.COMMENT_GREY}]Pass --config or create flagtree.yaml.[/]"
        )
        return 1
    try:
        target = loader(config_path, program=values["program"] or None)
    except (FileNotFoundError, ConfigLoadError) as error:
        logger.debug("Could not load '%s': %s", config_path, error)
        console.print(f"[{OneColors.DARK_RED}]❌ {escape(str(error))}[/]")
        return 1

    command = values["command"]
    if command == "parse":
        return run_parse(target, values)
    if command == "marshal":
        return run_marshal(target, values)
    return run_usage(target, values)


if __name__ == "__main__":
    sys.exit(main())
