# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process entry adapter for the Declarg parsing engine.

`parse_command` raises structured errors and flow signals; `run` converts them into
process behavior:

- help requested → help on stdout, exit status 0
- parse error → one `"<command path>: <message>"` line on stderr, exit status 1
- `gen-completions <shell>` → completion script on stdout, exit status 0

`on_help` and `on_error` replace the printing step, the exit still follows. With
`exit_on_error=False` or `exit_on_help=False` nothing is reported for that case and
the `ParseError` or `HelpSignal` propagates to the caller instead.

`gen-completions` is answered before the root level is finalized, so required root
arguments do not block script generation.
"""
from __future__ import annotations

import sys
from typing import Any, Callable, Sequence

from rich.console import Console
from rich.markup import escape

from declarg.console import console as default_console
from declarg.console import error_console as default_error_console
from declarg.exceptions import ParseError, StructuralError
from declarg.logger import logger
from declarg.parser.completions import SUPPORTED_SHELLS, generate_completions
from declarg.parser.descriptors import CommandSpec
from declarg.parser.dispatcher import find_help_request, find_subcommand, parse_command
from declarg.parser.help import format_help, render_help
from declarg.signals import HelpSignal
from declarg.utils import get_program_invocation
from declarg.validators import one_of, required


GEN_COMPLETIONS = "gen-completions"
HELP_COMMAND = "help"


def completions_spec() -> CommandSpec:
    """Spec of the built-in `gen-completions` subcommand."""
    spec = CommandSpec(
        name=GEN_COMPLETIONS,
        description="Generate a shell completion script.",
    )
    spec.add_positional(
        "shell",
        validators=[required(), one_of(SUPPORTED_SHELLS)],
        description=f"Target shell ({', '.join(SUPPORTED_SHELLS)})",
    )
    return spec


def with_completions(spec: CommandSpec) -> CommandSpec:
    """Return a copy of `spec` exposing the `gen-completions` subcommand."""
    if spec.get_subcommand(GEN_COMPLETIONS) is not None:
        return spec
    extended = spec.copy()
    extended.add_subcommand(
        GEN_COMPLETIONS,
        completions_spec,
        description="Generate shell completions",
    )
    return extended


def _resolve_default_command(spec: CommandSpec, command_path: str) -> list[str]:
    if spec.default_command == HELP_COMMAND:
        raise HelpSignal(spec, command_path)
    if spec.get_subcommand(spec.default_command or "") is None:
        raise StructuralError(
            f"default_command '{spec.default_command}' is neither 'help' "
            f"nor a subcommand of '{spec.name}'"
        )
    logger.debug("No arguments given, dispatching to '%s'", spec.default_command)
    return [spec.default_command]  # type: ignore[list-item]


def _requested_completions(
    root: CommandSpec, tokens: list[str], command_path: str
) -> str | None:
    """Return the shell named by a built-in `gen-completions` call, if any."""
    index = find_subcommand(root, tokens)
    if index is None or tokens[index] != GEN_COMPLETIONS:
        return None
    if find_help_request(root, tokens[:index], command_path) is not None:
        raise HelpSignal(root, command_path)
    result = parse_command(
        completions_spec(),
        tokens[index + 1 :],
        f"{command_path} {GEN_COMPLETIONS}",
    )
    return result["shell"]


def _print_error(error: ParseError, error_console: Console, color: bool) -> None:
    if color:
        error_console.print(
            f"[error]{escape(error.command_path)}:[/error] {escape(error.message)}",
            highlight=False,
            soft_wrap=True,
        )
    else:
        error_console.print(
            f"{error.command_path}: {error.message}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


def run(
    spec: CommandSpec,
    argv: Sequence[str] | None = None,
    *,
    exit_on_error: bool = True,
    exit_on_help: bool = True,
    completions: bool = True,
    show_defaults: bool = True,
    color: bool = True,
    console: Console | None = None,
    error_console: Console | None = None,
    on_error: Callable[[ParseError], None] | None = None,
    on_help: Callable[[str], None] | None = None,
) -> dict[str, Any]:
    """
    Parse the process arguments against `spec`, handling help and errors.

    Args:
        spec (CommandSpec): Root command description.
        argv (Sequence[str] | None): Tokens to parse. Defaults to `sys.argv[1:]`.
        exit_on_error (bool): Report parse errors and exit with the error's status.
            When False the `ParseError` propagates.
        exit_on_help (bool): Print help and exit with status 0. When False the
            `HelpSignal` propagates.
        completions (bool): Expose the built-in `gen-completions` subcommand.
        show_defaults (bool): Show default values in help output.
        color (bool): Style help output.
        console (Console | None): Console for help and completion output.
        error_console (Console | None): Console for error output.
        on_error (Callable[[ParseError], None] | None): Receives the error instead
            of it being printed. The process still exits afterwards.
        on_help (Callable[[str], None] | None): Receives the plain help text
            instead of it being printed. The process still exits afterwards.

    Returns:
        dict[str, Any]: The parse result tree.
    """
    console = console or default_console
    error_console = error_console or default_error_console
    tokens = list(sys.argv[1:] if argv is None else argv)
    root = with_completions(spec) if completions else spec
    command_path = root.name or get_program_invocation()

    try:
        if not tokens and root.default_command:
            tokens = _resolve_default_command(root, command_path)
        if root is not spec:
            shell = _requested_completions(root, tokens, command_path)
            if shell is not None:
                script = generate_completions(spec, shell, spec.name or command_path)
                console.print(script, markup=False, highlight=False, soft_wrap=True)
                if exit_on_help:
                    sys.exit(0)
                return {GEN_COMPLETIONS: {"shell": shell}}
        return parse_command(root, tokens, command_path)
    except HelpSignal as signal:
        if not exit_on_help:
            raise
        help_spec = signal.spec or root
        help_path = signal.command_path or command_path
        is_root = signal.spec is None or signal.spec is root
        if on_help is not None:
            on_help(format_help(help_spec, help_path, show_defaults, is_root))
        else:
            render_help(
                help_spec,
                help_path,
                show_defaults=show_defaults,
                color=color,
                console=console,
                is_root=is_root,
            )
        sys.exit(0)
    except ParseError as error:
        logger.debug("Parse failed (%s): %s", error.kind, error)
        if not exit_on_error:
            raise
        error.with_command_path(command_path)
        if on_error is not None:
            on_error(error)
        else:
            _print_error(error, error_console, color)
        sys.exit(error.exit_code)
