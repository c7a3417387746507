# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Consumes flag tokens against the options of one command level.

Supported forms:
- `--name value`, `--name=value`, `--name` (boolean)
- `-n value`, `-n=value`, `-n` (boolean)
- `-abc` (every letter a boolean short flag)
- `--help` / `-h`

Tokens that are not flags pass through untouched. Scanning stops at `--`; the tokens
after it are passed through as well. When a flag is repeated, the last occurrence
wins.
"""
from __future__ import annotations

from typing import Any

from declarg.exceptions import MissingValueError, UnknownArgumentError
from declarg.parser.coercion import coerce_value
from declarg.parser.descriptors import CommandSpec
from declarg.parser.tokens import (
    consumes_next,
    is_bundle,
    is_flag,
    is_help_flag,
    is_separator,
    split_flag,
    value_binds,
)
from declarg.signals import HelpSignal


def _scan_bundle(spec: CommandSpec, flag: str, values: dict[str, Any]) -> None:
    for char in flag[1:]:
        option = spec.get_option(f"-{char}")
        if option is None:
            raise UnknownArgumentError(f"Unknown argument: -{char}", argument=f"-{char}")
        if not option.is_boolean:
            raise UnknownArgumentError(
                f"Combined short flag -{char} must be boolean (found in {flag})",
                argument=f"-{char}",
                value=flag,
            )
        values[option.name] = True


def scan_options(
    spec: CommandSpec,
    tokens: list[str],
    command_path: str = "",
) -> tuple[dict[str, Any], list[str]]:
    """
    Consume every flag token of `tokens` against `spec.options`.

    Args:
        spec (CommandSpec): The command level being parsed.
        tokens (list[str]): Tokens left over by the positional matcher.
        command_path (str): Command path, carried by a `HelpSignal`.

    Returns:
        tuple[dict[str, Any], list[str]]: Coerced values of the options present in
        the input, and the tokens that no option consumed.

    Raises:
        HelpSignal: If `--help` or `-h` is scanned.
        UnknownArgumentError: For a flag no option accepts.
        MissingValueError: For a non-boolean flag without a value.
        InvalidNumberError: If a number value cannot be parsed.
        InvalidBooleanError: If an explicit boolean value is not recognised.
    """
    values: dict[str, Any] = {}
    leftovers: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]

        if is_separator(token):
            leftovers.extend(tokens[index + 1 :])
            break

        if is_help_flag(token):
            raise HelpSignal(spec, command_path)

        if not is_flag(token):
            leftovers.append(token)
            index += 1
            continue

        flag, inline = split_flag(token)
        if inline is None and is_bundle(flag):
            _scan_bundle(spec, flag, values)
            index += 1
            continue

        option = spec.get_option(flag)
        if option is None:
            raise UnknownArgumentError(f"Unknown argument: {flag}", argument=flag)

        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if inline is not None:
            raw_value = inline
            index += 1
        elif value_binds(option, following):
            raw_value = following  # type: ignore[assignment]
            index += 2
        elif option.is_boolean:
            values[option.name] = True
            index += 1
            continue
        else:
            raise MissingValueError(
                f"Missing value for argument: {flag}", argument=option.name
            )

        values[option.name] = coerce_value(
            raw_value, option.type, label=flag, name=option.name
        )
    return values, leftovers


def has_help_flag(spec: CommandSpec, tokens: list[str]) -> bool:
    """
    Whether `tokens` request help, without coercing or rejecting anything.

    Walks the tokens the way `scan_options` does: values swallowed by a flag and
    tokens after `--` never count as a help request.
    """
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if is_separator(token):
            return False
        if is_help_flag(token):
            return True
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        index += 2 if consumes_next(spec, token, following) else 1
    return False
