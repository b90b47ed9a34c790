"""FieldDescriptor: a caller's claim about one field of a payload.

Descriptors are immutable.  The builder functions and modifier methods return
new instances, so partially built descriptors can be shared safely::

    descriptors = [
        field_with_path("id").of_type(JsonFieldType.NUMBER).described_as("Id"),
        field_with_path("name").as_optional(),
        subsection_with_path("links"),
    ]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from json_payload_docs.fields.path import FieldPath, compile_path

__all__ = [
    "FieldDescriptor",
    "apply_path_prefix",
    "field_with_path",
    "subsection_with_path",
]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Declares a field expected in a payload.

    Attributes:
        path: Field path text, e.g. ``"items[].id"``.
        description: Human-readable description used in documentation.
        optional: When True, the field's absence is not an error, and a null
            value satisfies any declared type.
        type: Declared type.  One ``JsonFieldType``, a collection of them, a
            custom tag (anything else, never checked against the payload), or
            None to infer the type from the payload.
        subsection: When True, removing the field removes its entire subtree
            instead of only a leaf value.
        attributes: Extra values made available to documentation templates.
    """

    path: str
    description: str | None = None
    optional: bool = False
    type: Any = None
    subsection: bool = False
    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Fail fast on malformed paths rather than on first use
        compile_path(self.path)

    @property
    def field_path(self) -> FieldPath:
        return compile_path(self.path)

    def as_optional(self) -> FieldDescriptor:
        return replace(self, optional=True)

    def of_type(self, type_: Any) -> FieldDescriptor:
        return replace(self, type=type_)

    def described_as(self, description: str) -> FieldDescriptor:
        return replace(self, description=description)

    def with_attributes(self, **attributes: Any) -> FieldDescriptor:
        merged = {**self.attributes, **attributes}
        return replace(self, attributes=MappingProxyType(merged))


def field_with_path(path: str) -> FieldDescriptor:
    """Return a descriptor for the leaf field at ``path``."""
    return FieldDescriptor(path=path)


def subsection_with_path(path: str) -> FieldDescriptor:
    """Return a descriptor documenting the whole subtree at ``path`` at once."""
    return FieldDescriptor(path=path, subsection=True)


def apply_path_prefix(
    prefix: str, descriptors: Iterable[FieldDescriptor]
) -> list[FieldDescriptor]:
    """Return copies of ``descriptors`` with ``prefix`` prepended to each path.

    Example::

        apply_path_prefix("user.", [field_with_path("name")])
        # [FieldDescriptor(path="user.name", ...)]
    """
    return [replace(descriptor, path=prefix + descriptor.path) for descriptor in descriptors]
