# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Declarg parsing engine.

Parse-time errors are raised as structured values so that callers embedding the
engine as a library can inspect them. The process entry adapter (`declarg.runner.run`)
converts them into a single printed line plus a non-zero exit status.

Exception Hierarchy:
- DeclargError
    ├── StructuralError
    ├── ConfigError
    └── ParseError
        ├── UnknownArgumentError
        ├── MissingValueError
        ├── CoercionError
        │   ├── InvalidNumberError
        │   └── InvalidBooleanError
        ├── ValidationError
        └── MissingArgumentError

`StructuralError` signals a configuration bug in a `CommandSpec` and is raised once,
when the spec is built. Every `ParseError` is fatal for the parse call that raised it.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Stable identifiers for every parse-time failure."""

    UNKNOWN_ARGUMENT = "unknown_argument"
    MISSING_VALUE = "missing_value"
    INVALID_NUMBER = "invalid_number"
    INVALID_BOOLEAN = "invalid_boolean"
    VALIDATION_ERROR = "validation_error"
    MISSING_ARGUMENT = "missing_argument"

    def __str__(self) -> str:
        return self.value


class DeclargError(Exception):
    """Base exception for the Declarg engine."""


class StructuralError(DeclargError):
    """Exception raised when a CommandSpec breaks a structural rule."""


class ConfigError(DeclargError):
    """Exception raised when a spec definition file cannot be loaded."""


class ParseError(DeclargError):
    """
    Exception raised when a token stream cannot be parsed against a CommandSpec.

    Attributes:
        kind (ErrorKind): The category of the failure.
        message (str): Human-readable, single-line description.
        argument (str | None): The flag or descriptor name the error is attributed to.
        value (str | None): The offending raw token, if any.
        command_path (str): Space-joined command path where the error occurred.
        exit_code (int): Process exit status to use when terminating.
    """

    kind: ErrorKind = ErrorKind.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        value: str | None = None,
        command_path: str = "",
        exit_code: int = 1,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.argument = argument
        self.value = value
        self.command_path = command_path
        self.exit_code = exit_code

    def with_command_path(self, command_path: str) -> ParseError:
        """Attach the command path if it has not been set yet."""
        if not self.command_path:
            self.command_path = command_path
        return self

    def __str__(self) -> str:
        return self.message


class UnknownArgumentError(ParseError):
    """Raised for a flag or token that no descriptor accepts."""

    kind = ErrorKind.UNKNOWN_ARGUMENT


class MissingValueError(ParseError):
    """Raised when a non-boolean flag has no value to bind."""

    kind = ErrorKind.MISSING_VALUE


class CoercionError(ParseError):
    """Raised when a raw string cannot be converted to the target type."""


class InvalidNumberError(CoercionError):
    """Raised for a non-numeric token where a number was expected."""

    kind = ErrorKind.INVALID_NUMBER


class InvalidBooleanError(CoercionError):
    """Raised for an explicit boolean value that is not a boolean literal."""

    kind = ErrorKind.INVALID_BOOLEAN


class ValidationError(ParseError):
    """Raised with the message of the first failing validator."""

    kind = ErrorKind.VALIDATION_ERROR


class MissingArgumentError(ParseError):
    """Raised when a required positional or option is absent."""

    kind = ErrorKind.MISSING_ARGUMENT
