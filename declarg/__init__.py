"""
Declarg CLI Parsing Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    DeclargError,
    ErrorKind,
    MissingArgumentError,
    ParseError,
    StructuralError,
    UnknownArgumentError,
)
from .parser import ArgType, CommandSpec, parse_command, spec_from_func
from .runner import run
from .signals import HelpSignal

logger = logging.getLogger("declarg")


__all__ = [
    "ArgType",
    "CommandSpec",
    "DeclargError",
    "ErrorKind",
    "HelpSignal",
    "MissingArgumentError",
    "ParseError",
    "StructuralError",
    "UnknownArgumentError",
    "parse_command",
    "run",
    "spec_from_func",
]
