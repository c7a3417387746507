# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Declarg argument parsing.

This module converts raw string tokens into the typed values described by `ArgType`.
Failures raise `InvalidNumberError` or `InvalidBooleanError` carrying the flag label
and the offending token, never a silent zero or False.

Functions:
- coerce_number: Convert a string to an int or float.
- coerce_bool: Convert a string to a boolean.
- coerce_value: General-purpose coercion to an `ArgType` (including comma-split arrays).
- coerce_each: Coerce a list of tokens element-wise (used by rest positionals).
- is_boolean_literal: Whether a following token can be bound to a boolean flag.
"""
from __future__ import annotations

import math
from typing import Any

from declarg.exceptions import InvalidBooleanError, InvalidNumberError
from declarg.parser.arg_type import ArgType

TRUE_VALUES = {"true", "t", "1", "yes", "on"}
FALSE_VALUES = {"false", "f", "0", "no", "off"}
BOOLEAN_LITERALS = {"true", "false", "1", "0"}


def is_boolean_literal(token: str) -> bool:
    """Return True for the literals a boolean flag may take as a separate token."""
    return token.strip().lower() in BOOLEAN_LITERALS


def is_number(token: str) -> bool:
    """Return True if the token parses as a (possibly negative) number."""
    try:
        return not math.isnan(float(token))
    except ValueError:
        return False


def coerce_number(
    value: str,
    label: str = "value",
    name: str | None = None,
    in_array: bool = False,
) -> int | float:
    """
    Convert a string to a number.

    Integral literals (`"8080"`, `"-3"`) yield `int`; every other numeric literal
    yields `float`.

    Args:
        value (str): The input string.
        label (str): Display label used in the error message (e.g. `--port`).
        name (str | None): Descriptor name the error is attributed to.
        in_array (bool): Whether the token is one element of an array value.

    Returns:
        int | float: Parsed number.

    Raises:
        InvalidNumberError: If the string is empty or non-numeric. NaN and
            digit-group underscores (`1_000`) are rejected too.
    """
    text = value.strip()
    try:
        number = float(text) if "_" not in text else math.nan
    except ValueError:
        number = math.nan
    if math.isnan(number):
        where = "in array for" if in_array else "for"
        raise InvalidNumberError(
            f"Invalid number {where} {label}: {value}", argument=name, value=value
        )
    try:
        return int(text)
    except ValueError:
        return number


def coerce_bool(value: str | bool, label: str = "value", name: str | None = None) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 't', '1', 'yes', 'on' and 'false', 'f', '0', 'no', 'off'
    (case-insensitive).

    Raises:
        InvalidBooleanError: For any other input.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    elif normalized in FALSE_VALUES:
        return False
    raise InvalidBooleanError(
        f"Invalid boolean for {label}: {value}", argument=name, value=value
    )


def coerce_value(
    value: str,
    arg_type: ArgType,
    label: str = "value",
    name: str | None = None,
) -> Any:
    """
    Attempt to convert a raw token to the given argument type.

    Array types split the token on `,` and coerce each stripped element
    independently; an empty token yields an empty list.

    Args:
        value (str): The raw token.
        arg_type (ArgType): The desired type.
        label (str): Display label used in error messages.
        name (str | None): Descriptor name the error is attributed to.

    Returns:
        Any: The coerced value.

    Raises:
        InvalidNumberError: If a number (or number element) cannot be parsed.
        InvalidBooleanError: If a boolean literal is not recognised.
    """
    if arg_type is ArgType.NUMBER:
        return coerce_number(value, label, name)

    if arg_type is ArgType.BOOLEAN:
        return coerce_bool(value, label, name)

    if arg_type.is_array:
        if value.strip() == "":
            return []
        elements = [element.strip() for element in value.split(",")]
        if arg_type is ArgType.NUMBER_ARRAY:
            return [
                coerce_number(element, label, name, in_array=True)
                for element in elements
            ]
        return elements

    return value


def coerce_each(
    values: list[str],
    arg_type: ArgType,
    label: str = "value",
    name: str | None = None,
) -> list[Any]:
    """Coerce every token to the element type of `arg_type`, without comma splitting."""
    element_type = arg_type.element_type
    if element_type is ArgType.NUMBER:
        return [coerce_number(value, label, name, in_array=True) for value in values]
    return [coerce_value(value, element_type, label, name) for value in values]
