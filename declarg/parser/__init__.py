"""
Declarg CLI Parsing Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arg_type import ArgType
from .completions import generate_completions, generate_fish_completions, suggest_next
from .descriptors import (
    CommandSpec,
    OptionDescriptor,
    PositionalDescriptor,
    SubCommandDescriptor,
)
from .dispatcher import find_subcommand, parse_command
from .help import format_help, render_help
from .signature import spec_from_func

__all__ = [
    "ArgType",
    "CommandSpec",
    "OptionDescriptor",
    "PositionalDescriptor",
    "SubCommandDescriptor",
    "find_subcommand",
    "format_help",
    "generate_completions",
    "generate_fish_completions",
    "parse_command",
    "render_help",
    "spec_from_func",
    "suggest_next",
]
