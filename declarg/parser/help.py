# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders help text for one command level from its `CommandSpec`.

Help is built once as Rich markup; `format_help` returns the plain-text rendering
and `render_help` prints the styled version through the shared console. Rendering
only reads descriptors and never consults parse results.

Layout:
    usage: app build <target> [extra...] [options]

    Build the project.

    positional:
      target                         (required) Target to build
    commands:
      clean                          Remove build output
    options:
      -o, --output <string>          Output directory (default: "dist")
      -h, --help                     Show this help message
"""
from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from declarg.console import console as default_console
from declarg.parser.descriptors import CommandSpec, OptionDescriptor, PositionalDescriptor
from declarg.utils import get_program_invocation

COLUMN_WIDTH = 30


def _format_default(value: Any) -> str:
    return json.dumps(value, default=str)


def _entry(left: str, left_markup: str, right: str) -> str:
    if not right:
        return f"  {left_markup}"
    if len(left) > COLUMN_WIDTH:
        return f"  {left_markup}\n{'':<{COLUMN_WIDTH + 3}}{right}"
    padding = " " * (COLUMN_WIDTH - len(left))
    return f"  {left_markup}{padding} {right}"


def _describe(description: str, markers: list[str]) -> str:
    parts = list(markers)
    if description:
        parts.append(escape(description))
    return " ".join(parts)


def _positional_markers(positional: PositionalDescriptor, show_defaults: bool) -> list[str]:
    markers = []
    if positional.required:
        markers.append("[marker](required)[/marker]")
    if positional.rest:
        markers.append("[hint](rest)[/hint]")
    if positional.raw:
        markers.append("[hint](raw)[/hint]")
    if show_defaults and positional.default is not None:
        markers.append(f"[muted]{escape(f'(default: {_format_default(positional.default)})')}[/muted]")
    return markers


def _option_line(option: OptionDescriptor, show_defaults: bool) -> str:
    if option.short:
        flags = f"-{option.short}, {option.long_flag}"
    else:
        flags = f"    {option.long_flag}"
    hint = option.type.get_hint()
    left = f"{flags} {hint}" if hint else flags
    left_markup = f"[flag]{flags}[/flag]"
    if hint:
        left_markup += f" [hint]{escape(hint)}[/hint]"

    markers = []
    if option.required:
        markers.append("[marker](required)[/marker]")
    if show_defaults and option.default is not None:
        markers.append(f"[muted]{escape(f'(default: {_format_default(option.default)})')}[/muted]")
    return _entry(left, left_markup, _describe(option.description, markers))


def get_usage(spec: CommandSpec, command_path: str = "") -> str:
    """Return the usage line (without the `usage:` prefix) as Rich markup."""
    path = command_path or spec.name or get_program_invocation()
    app, _, rest = path.partition(" ")
    parts = [f"[app]{escape(app)}[/app]"]
    if rest:
        parts.append(f"[path]{escape(rest)}[/path]")
    parts.extend(
        f"[positional]{escape(positional.placeholder)}[/positional]"
        for positional in spec.positionals
    )
    if spec.subcommands:
        parts.append("[hint]<command>[/hint]")
    parts.append("[muted]\\[options][/muted]")
    return " ".join(parts)


def build_help(
    spec: CommandSpec,
    command_path: str = "",
    show_defaults: bool = True,
    is_root: bool | None = None,
) -> str:
    """Build the help text of one command level as Rich markup."""
    lines = [f"[usage]usage:[/usage] {get_usage(spec, command_path)}", ""]

    if spec.description:
        lines.extend([escape(spec.description), ""])

    if spec.positionals:
        lines.append("[heading]positional:[/heading]")
        for positional in spec.positionals:
            left = f"{positional.name}..." if positional.is_terminal else positional.name
            lines.append(
                _entry(
                    left,
                    f"[positional]{escape(left)}[/positional]",
                    _describe(
                        positional.description,
                        _positional_markers(positional, show_defaults),
                    ),
                )
            )

    if spec.subcommands:
        lines.append("[heading]commands:[/heading]")
        for subcommand in spec.subcommands:
            lines.append(
                _entry(
                    subcommand.name,
                    f"[path]{escape(subcommand.name)}[/path]",
                    escape(subcommand.get_description()),
                )
            )

    if is_root is None:
        is_root = " " not in command_path.strip()
    heading = "global options:" if is_root and spec.subcommands else "options:"
    lines.append(f"[heading]{heading}[/heading]")
    for option in spec.options:
        lines.append(_option_line(option, show_defaults))
    lines.append(
        _entry("-h, --help", "[flag]-h, --help[/flag]", "Show this help message")
    )
    return "\n".join(lines)


def format_help(
    spec: CommandSpec,
    command_path: str = "",
    show_defaults: bool = True,
    is_root: bool | None = None,
) -> str:
    """Return the help text of one command level as plain text."""
    return Text.from_markup(build_help(spec, command_path, show_defaults, is_root)).plain


def render_help(
    spec: CommandSpec,
    command_path: str = "",
    show_defaults: bool = True,
    color: bool = True,
    console: Console | None = None,
    is_root: bool | None = None,
) -> None:
    """Print the help text of one command level using Rich output."""
    console = console or default_console
    if color:
        console.print(
            build_help(spec, command_path, show_defaults, is_root), highlight=False
        )
    else:
        console.print(
            format_help(spec, command_path, show_defaults, is_root),
            markup=False,
            highlight=False,
        )
