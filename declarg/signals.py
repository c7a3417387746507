# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Declarg engine.

Signals interrupt parsing without being treated as errors. They inherit from
`FlowSignal`, a subclass of `BaseException`, so they bypass standard
`except Exception` blocks in caller code.

Signals:
- HelpSignal: A help flag was seen; carries the command level to render.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from declarg.parser.descriptors import CommandSpec


class FlowSignal(BaseException):
    """Base class for all flow control signals in Declarg.

    These are not errors. They are used to stop parsing early, for example when
    help is requested.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information for one command level."""

    def __init__(
        self,
        spec: CommandSpec | None = None,
        command_path: str = "",
        message: str = "Help signal received.",
    ):
        super().__init__(message)
        self.spec = spec
        self.command_path = command_path
