# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgType`, the enum of value types an option or positional argument can hold.

Supports alias coercion for Python-flavoured or config-friendly spellings, so spec
definitions can say `int`, `bool` or `list[str]` and still resolve to one of the five
supported types.

Example:
    ArgType("number")    → ArgType.NUMBER
    ArgType("int")       → ArgType.NUMBER (via alias)
    ArgType("list[str]") → ArgType.STRING_ARRAY (via alias)
"""
from __future__ import annotations

from enum import Enum


class ArgType(Enum):
    """
    The value type of a descriptor.

    Members:
        STRING: Raw string value.
        NUMBER: Parsed floating-point number (integral literals stay `int`).
        BOOLEAN: True/false flag.
        STRING_ARRAY: Comma-separated list of strings.
        NUMBER_ARRAY: Comma-separated list of numbers.

    Aliases:
        - "str" → "string"
        - "int", "float" → "number"
        - "bool" → "boolean"
        - "list", "list[str]", "strings" → "string[]"
        - "list[int]", "list[float]", "numbers" → "number[]"
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_ARRAY = "string[]"
    NUMBER_ARRAY = "number[]"

    @classmethod
    def choices(cls) -> list[ArgType]:
        """Return a list of all argument types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "int": "number",
            "float": "number",
            "bool": "boolean",
            "list": "string[]",
            "list[str]": "string[]",
            "strings": "string[]",
            "list[int]": "number[]",
            "list[float]": "number[]",
            "numbers": "number[]",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_array(self) -> bool:
        return self in (ArgType.STRING_ARRAY, ArgType.NUMBER_ARRAY)

    @property
    def element_type(self) -> ArgType:
        """Scalar type of the elements for array types, the type itself otherwise."""
        if self is ArgType.STRING_ARRAY:
            return ArgType.STRING
        if self is ArgType.NUMBER_ARRAY:
            return ArgType.NUMBER
        return self

    @property
    def array_type(self) -> ArgType:
        """Array type holding elements of this type."""
        if self.is_array:
            return self
        if self is ArgType.NUMBER:
            return ArgType.NUMBER_ARRAY
        return ArgType.STRING_ARRAY

    def get_hint(self) -> str:
        """Return the value hint shown next to a flag in help output."""
        if self is ArgType.BOOLEAN:
            return ""
        if self.is_array:
            element = self.element_type.value
            return f"<{element},{element},...>"
        return f"<{self.value}>"

    def __str__(self) -> str:
        """Return the string representation of the argument type."""
        return self.value
