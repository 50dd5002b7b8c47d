# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage and help text rendering for `CommandParser`.

`UsageFormatter` walks the same ordered parameter model the parse and marshal
engines use and produces:

- a one-line summary: value-flags, flags, positionals (the chosen sub-parser's
  name emphasised and expanded in place of the dispatch parameter), then the
  variadic tail,
- a `flags:` block and a `parameters:` block, each aligned to its widest prefix,
- one `options for parameter` block per positional with visible options.

When a sub-parser name is given, the description and option blocks describe only
that sub-parser. Output is rich markup by default; `plain_text=True` returns the
same layout without markup.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

if TYPE_CHECKING:
    from flagtree.parser.command_parser import CommandParser


class UsageFormatter:
    """Builds usage text for a parser and, optionally, one of its sub-parsers."""

    def __init__(self, parser: CommandParser, plain_text: bool = False) -> None:
        self.parser = parser
        self.plain_text = plain_text

    def _text(self, text: str) -> str:
        return text if self.plain_text else escape(text)

    def _styled(self, text: str, style: str) -> str:
        if self.plain_text:
            return text
        return f"[{style}]{escape(text)}[/{style}]"

    def _for(self, parser: CommandParser) -> UsageFormatter:
        return UsageFormatter(parser, plain_text=self.plain_text)

    def _scope(self, subparser: str | None) -> CommandParser:
        """Return the parser whose own parameters should be described."""
        if subparser:
            child = self.parser.get_subparser(subparser)
            if child is not None:
                return child
        return self.parser

    def _aligned(self, rows: list[tuple[str, str]]) -> str:
        if not rows:
            return ""
        width = max(len(prefix) for prefix, _ in rows)
        lines = []
        for prefix, description in rows:
            padding = " " * (width - len(prefix) + 1)
            lines.append(
                f"\n {self._text(prefix)}:{padding}{self._text(description)}"
            )
        return "".join(lines)

    def get_param_string(self, subparser: str | None = None) -> str:
        """Render the summary line fragment following the program name."""
        parser = self.parser
        usage = ""
        for value_flag in parser.value_flags:
            usage += self._text(f" [{value_flag.get_flag_text()}]")
        for flag in parser.flags:
            usage += self._text(f" [{flag.get_flag_text()}]")
        for parameter in parser.parameters:
            child = parser.get_subparser(subparser) if subparser else None
            if parameter.dispatch and child is not None:
                usage += " " + self._styled(subparser or "", "usage.subparser")
                usage += self._for(child).get_param_string()
            else:
                usage += self._text(f" {parameter.name}")
        if parser.list_parameter is not None:
            usage += self._text(parser.list_parameter.get_usage_text())
        return usage

    def get_flag_descriptions(self, subparser: str | None = None) -> str:
        parser = self._scope(subparser)
        rows = [(vf.get_flag_text(), vf.description) for vf in parser.value_flags]
        rows.extend((flag.get_flag_text(), flag.description) for flag in parser.flags)
        return self._aligned(rows)

    def get_parameter_descriptions(self, subparser: str | None = None) -> str:
        parser = self._scope(subparser)
        rows = [(param.name, param.description) for param in parser.parameters]
        if parser.list_parameter is not None:
            rows.append(
                (
                    parser.list_parameter.get_usage_text(),
                    parser.list_parameter.description,
                )
            )
        return self._aligned(rows)

    def get_parameter_options(self, subparser: str | None = None) -> list[str]:
        parser = self._scope(subparser)
        blocks = []
        for parameter in parser.parameters:
            visible = parameter.visible_options
            if not visible:
                continue
            block = self._text(f"\noptions for parameter `{parameter.name}':")
            for option in visible:
                block += "\n " + self._text(option.value)
            blocks.append(block)
        return blocks

    def get_usage(self, program: str, subparser: str | None = None) -> str:
        """Render the complete usage text."""
        usage = self._styled("usage:", "usage.heading") + " " + self._text(program)
        usage += self.get_param_string(subparser)

        flag_descriptions = self.get_flag_descriptions(subparser)
        if flag_descriptions:
            usage += "\n\n" + self._styled("flags:", "usage.heading")
            usage += flag_descriptions

        parameter_descriptions = self.get_parameter_descriptions(subparser)
        if parameter_descriptions:
            usage += "\n\n" + self._styled("parameters:", "usage.heading")
            usage += parameter_descriptions

        for option_block in self.get_parameter_options(subparser):
            usage += "\n" + option_block

        return usage
