"""Exceptions raised while handling documented JSON payloads.

Every exception derives from ``PayloadHandlingError`` so callers can catch the
whole family in one place.  ``FieldDoesNotExistError`` is the only one that is
routinely caught inside the package: presence checks and removal operations
turn it into ``False`` or a no-op.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ContentDecodingError",
    "EmptyContentError",
    "FieldDoesNotExistError",
    "FieldTypeMismatchError",
    "PathParseError",
    "PayloadHandlingError",
]


class PayloadHandlingError(Exception):
    """Base class for payload documentation failures."""


class PathParseError(PayloadHandlingError, ValueError):
    """Raised when a field path expression has malformed bracket syntax."""

    def __init__(self, path: str, position: int, reason: str) -> None:
        self.path = path
        self.position = position
        super().__init__(f"Invalid field path '{path}' at position {position}: {reason}")


class FieldDoesNotExistError(PayloadHandlingError):
    """Raised when a field path does not resolve against a document."""

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"The payload does not contain a field with the path '{path}'")


class FieldTypeMismatchError(PayloadHandlingError):
    """Raised when a declared field type contradicts the type found in the payload."""

    def __init__(self, descriptor: Any, actual_type: Any) -> None:
        self.descriptor = descriptor
        self.actual_type = actual_type
        super().__init__(
            f"The documented type of the field '{descriptor.path}' is "
            f"{_describe_type(descriptor.type)} but the actual type is {actual_type}"
        )


class ContentDecodingError(PayloadHandlingError):
    """Raised when raw payload bytes are not valid JSON."""


class EmptyContentError(PayloadHandlingError):
    """Raised when a structure summary is requested for an empty payload."""


def _describe_type(declared: Any) -> str:
    if isinstance(declared, str | bytes) or not hasattr(declared, "__iter__"):
        return str(declared)
    return " or ".join(str(t) for t in declared)
