"""JsonFieldType: the closed set of JSON value kinds used in payload documentation."""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any

__all__ = ["JsonFieldType"]


class JsonFieldType(StrEnum):
    """Kind of a JSON field.

    Values are the capitalised member names ("Object", "Number", ...), which
    is how types appear in rendered documentation.  ``VARIES`` is both a
    declarable wildcard that matches anything and the inferred type of a
    wildcard path whose elements have different kinds.
    """

    @staticmethod
    def _generate_next_value_(
        name: str, start: int, count: int, last_values: list[Any]
    ) -> str:
        return name.capitalize()

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    VARIES = auto()

    @classmethod
    def of(cls, value: Any) -> JsonFieldType:
        """Classify a decoded JSON value.

        Raises:
            TypeError: If ``value`` is not something the JSON decoder produces.
        """
        # bool MUST be checked before int: bool subclasses int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if value is None:
            return cls.NULL
        if isinstance(value, dict):
            return cls.OBJECT
        if isinstance(value, list):
            return cls.ARRAY
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, int | float):
            return cls.NUMBER
        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")
