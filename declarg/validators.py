# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value validators attached to option and positional descriptors.

A validator is any callable taking the coerced value and returning an error message,
or `None` (or an empty string) when the value is acceptable. Validators are attached
directly to their descriptor at construction time and run in declared order; the
first failure wins.

Validators ignore values of a type they do not check (e.g. `min_value` on a string),
so they can be combined freely. Only `required` reacts to `None`.

Included Validators:
- required: Rejects missing values, blank strings and empty lists.
- min_value / max_value / value_range: Numeric bounds (inclusive).
- integer: Rejects non-integral numbers.
- length: String length bounds.
- pattern: Regular expression match for strings.
- one_of: Membership in a fixed set of values.
- array_length: List size bounds.
- custom: Wraps a predicate with a fixed message.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Sequence

Validator = Callable[[Any], "str | None"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Required:
    """Validator rejecting missing or empty values.

    Descriptors carrying this validator are reported as required in help output
    and a missing value is raised as a missing argument rather than a validation
    failure.
    """

    def __call__(self, value: Any) -> str | None:
        if value is None:
            return "is required"
        if isinstance(value, str) and value.strip() == "":
            return "cannot be empty"
        if isinstance(value, list) and not value:
            return "cannot be empty"
        return None

    def __repr__(self) -> str:
        return "required()"


def required() -> Required:
    """Validator for values that must be provided and non-empty."""
    return Required()


def is_required_validator(validator: Validator) -> bool:
    return isinstance(validator, Required)


def min_value(minimum: float) -> Validator:
    """Validator for a minimum numeric value (inclusive)."""

    def validate(value: Any) -> str | None:
        if _is_number(value) and value < minimum:
            return f"must be at least {minimum}"
        return None

    return validate


def max_value(maximum: float) -> Validator:
    """Validator for a maximum numeric value (inclusive)."""

    def validate(value: Any) -> str | None:
        if _is_number(value) and value > maximum:
            return f"must be at most {maximum}"
        return None

    return validate


def value_range(minimum: float, maximum: float) -> Validator:
    """Validator for numeric ranges."""

    def validate(value: Any) -> str | None:
        if _is_number(value) and not minimum <= value <= maximum:
            return f"must be between {minimum} and {maximum}"
        return None

    return validate


def integer() -> Validator:
    """Validator for whole numbers."""

    def validate(value: Any) -> str | None:
        if _is_number(value) and not float(value).is_integer():
            return "must be an integer"
        return None

    return validate


def length(min_length: int, max_length: int | None = None) -> Validator:
    """Validator for string length."""

    def validate(value: Any) -> str | None:
        if isinstance(value, str):
            if len(value) < min_length:
                return f"must be at least {min_length} characters long"
            if max_length is not None and len(value) > max_length:
                return f"must be at most {max_length} characters long"
        return None

    return validate


def pattern(regex: str | re.Pattern[str], message: str | None = None) -> Validator:
    """Validator for strings matching a regular expression."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def validate(value: Any) -> str | None:
        if isinstance(value, str) and not compiled.search(value):
            return message or f"must match pattern {compiled.pattern}"
        return None

    return validate


def one_of(allowed: Iterable[Any]) -> Validator:
    """Validator for a fixed set of choices."""
    choices: Sequence[Any] = list(allowed)

    def validate(value: Any) -> str | None:
        if value not in choices:
            return f"must be one of: {', '.join(str(choice) for choice in choices)}"
        return None

    return validate


def array_length(min_items: int, max_items: int | None = None) -> Validator:
    """Validator for list sizes."""

    def validate(value: Any) -> str | None:
        if isinstance(value, list):
            if len(value) < min_items:
                return f"must have at least {min_items} items"
            if max_items is not None and len(value) > max_items:
                return f"must have at most {max_items} items"
        return None

    return validate


def custom(predicate: Callable[[Any], bool], message: str) -> Validator:
    """Validator built from a predicate returning True for valid values."""

    def validate(value: Any) -> str | None:
        if not predicate(value):
            return message
        return None

    return validate


def run_validators(value: Any, validators: Iterable[Validator]) -> str | None:
    """
    Run a validator chain against a value.

    Validators run in declared order and the chain stops at the first validator
    returning a non-empty message.

    Returns:
        str | None: The first error message, or None when every validator passes.
    """
    for validator in validators:
        error = validator(value)
        if error:
            return error
    return None
