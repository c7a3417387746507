# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token classification helpers shared by the positional matcher, the option scanner
and the subcommand dispatcher.

All three components must agree on which tokens are flags and which tokens are the
values of a preceding flag, so the flag-vs-value heuristic lives here:

- `--name=value` and `-n=value` always carry their own value.
- A space-separated value binds to a non-boolean flag unless it starts with `--`.
- A boolean flag only takes a following token that is a literal `true`, `false`,
  `1` or `0`.
- Negative numbers (`-5`, `-2.5`) and a lone `-` are never flags.
- Everything after a bare `--` is a positional candidate.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from declarg.parser.coercion import is_boolean_literal, is_number

if TYPE_CHECKING:
    from declarg.parser.descriptors import CommandSpec, OptionDescriptor

SEPARATOR = "--"
HELP_FLAGS = ("--help", "-h")


class TokenKind(Enum):
    """Role of a token within one command level."""

    FLAG = "flag"
    VALUE = "value"
    OPERAND = "operand"
    SEPARATOR = "separator"
    PASSTHROUGH = "passthrough"


def is_separator(token: str) -> bool:
    return token == SEPARATOR


def is_help_flag(token: str) -> bool:
    return token in HELP_FLAGS


def is_long_flag(token: str) -> bool:
    return token.startswith("--") and len(token) > 2


def is_short_flag(token: str) -> bool:
    return (
        token.startswith("-")
        and not token.startswith("--")
        and len(token) > 1
        and not is_number(token)
    )


def is_flag(token: str) -> bool:
    """Return True for tokens shaped like `--name` or `-x` (negative numbers excluded)."""
    return is_long_flag(token) or is_short_flag(token)


def split_flag(token: str) -> tuple[str, str | None]:
    """Split `--name=value` into `("--name", "value")`; other flags get `None`."""
    if "=" in token:
        flag, value = token.split("=", 1)
        return flag, value
    return token, None


def is_bundle(flag: str) -> bool:
    """Return True for combined boolean short flags such as `-abc`."""
    return is_short_flag(flag) and "=" not in flag and len(flag) > 2


def value_binds(option: OptionDescriptor | None, following: str | None) -> bool:
    """Whether `following` is taken as the space-separated value of `option`."""
    if option is None or following is None:
        return False
    if option.is_boolean:
        return is_boolean_literal(following)
    return not following.startswith("--")


def consumes_next(spec: CommandSpec, token: str, following: str | None) -> bool:
    """Whether the flag `token` swallows the token after it as its value."""
    if not is_flag(token) or is_help_flag(token):
        return False
    flag, value = split_flag(token)
    if value is not None or is_bundle(flag):
        return False
    return value_binds(spec.get_option(flag), following)


def classify(spec: CommandSpec, tokens: list[str]) -> list[TokenKind]:
    """
    Assign a `TokenKind` to every token of one command level.

    Unknown flags are classified as flags that take no value; rejecting them is left
    to the option scanner.
    """
    kinds: list[TokenKind] = []
    index = 0
    after_separator = False
    while index < len(tokens):
        token = tokens[index]
        if after_separator:
            kinds.append(TokenKind.PASSTHROUGH)
        elif is_separator(token):
            kinds.append(TokenKind.SEPARATOR)
            after_separator = True
        elif is_flag(token):
            kinds.append(TokenKind.FLAG)
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if consumes_next(spec, token, following):
                kinds.append(TokenKind.VALUE)
                index += 1
        else:
            kinds.append(TokenKind.OPERAND)
        index += 1
    return kinds
