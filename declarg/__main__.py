# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Command-line entry point for Declarg.

Parses command lines against YAML or TOML spec definitions, renders their help and
generates their shell completions:

    declarg parse app.yaml --port 8080 build --output dist
    declarg help app.yaml build
    declarg completions app.yaml --shell fish
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Sequence

from rich.markup import escape

from declarg.config import load_spec
from declarg.console import console, error_console
from declarg.exceptions import DeclargError
from declarg.parser.arg_type import ArgType
from declarg.parser.completions import SUPPORTED_SHELLS, generate_completions
from declarg.parser.descriptors import CommandSpec
from declarg.parser.help import render_help
from declarg.runner import run
from declarg.utils import setup_logging
from declarg.validators import one_of, required


def build_cli_spec() -> CommandSpec:
    """Spec of the `declarg` command itself."""
    spec = CommandSpec(
        name="declarg",
        description="Parse command lines against a YAML or TOML spec definition.",
        default_command="help",
    )
    spec.add_option(
        "verbose",
        ArgType.BOOLEAN,
        short="v",
        default=False,
        description="Enable debug logging",
    )

    parse = CommandSpec(name="parse", description="Parse arguments and print the result as JSON.")
    parse.add_positional("spec_file", validators=[required()], description="Spec definition file")
    parse.add_positional("args", raw=True, description="Arguments to parse")
    spec.add_subcommand("parse", parse, description="Parse arguments against a spec")

    help_command = CommandSpec(name="help", description="Show the help of a command level.")
    help_command.add_positional(
        "spec_file", validators=[required()], description="Spec definition file"
    )
    help_command.add_positional("path", rest=True, description="Subcommand path")
    spec.add_subcommand("help", help_command, description="Render help for a spec")

    completions = CommandSpec(
        name="completions", description="Print a shell completion script."
    )
    completions.add_positional(
        "spec_file", validators=[required()], description="Spec definition file"
    )
    completions.add_option(
        "shell",
        short="s",
        default="fish",
        validators=[one_of(SUPPORTED_SHELLS)],
        description="Target shell",
    )
    spec.add_subcommand("completions", completions, description="Generate completions")
    return spec


def _walk(spec: CommandSpec, path: list[str]) -> tuple[CommandSpec, str]:
    command_path = spec.name
    for name in path:
        subcommand = spec.get_subcommand(name)
        if subcommand is None:
            raise DeclargError(f"Unknown command '{name}' under '{command_path}'")
        spec = subcommand.resolve()
        command_path = f"{command_path} {name}"
    return spec, command_path


def dispatch(result: dict[str, Any]) -> None:
    if "parse" in result:
        options = result["parse"]
        target = load_spec(options["spec_file"])
        parsed = run(target, options["args"])
        console.print_json(data=parsed, default=str)
    elif "help" in result:
        options = result["help"]
        target, command_path = _walk(load_spec(options["spec_file"]), options["path"])
        render_help(target, command_path, is_root=not options["path"])
    elif "completions" in result:
        options = result["completions"]
        target = load_spec(options["spec_file"])
        console.print(
            generate_completions(target, options["shell"]),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


def main(argv: Sequence[str] | None = None) -> None:
    result = run(build_cli_spec(), argv, completions=False)
    setup_logging(console_log_level=logging.DEBUG if result["verbose"] else logging.WARNING)
    try:
        dispatch(result)
    except (DeclargError, FileNotFoundError) as error:
        error_console.print(f"[error]declarg:[/error] {escape(str(error))}", highlight=False)
        sys.exit(1)


if __name__ == "__main__":
    main()
