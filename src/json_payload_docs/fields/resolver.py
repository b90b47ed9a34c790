"""FieldTypeResolver: determines the JsonFieldType of a located field."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_payload_docs.fields.path import FieldPath, as_field_path
from json_payload_docs.fields.processor import FieldProcessor
from json_payload_docs.fields.types import JsonFieldType

if TYPE_CHECKING:
    from json_payload_docs.fields.descriptor import FieldDescriptor

__all__ = ["FieldTypeResolver", "common_type"]


def common_type(values: list[Any]) -> JsonFieldType | None:
    """Return the type shared by every value, ``VARIES`` if they differ.

    Returns None for an empty list.
    """
    shared: JsonFieldType | None = None
    for value in values:
        value_type = JsonFieldType.of(value)
        if shared is None:
            shared = value_type
        elif value_type != shared:
            return JsonFieldType.VARIES
    return shared


class FieldTypeResolver:
    """Resolves the actual type of a field from the payload that contains it."""

    def __init__(self, processor: FieldProcessor | None = None) -> None:
        self._processor = processor if processor is not None else FieldProcessor()

    def resolve_field_type(
        self,
        field: FieldDescriptor | FieldPath | str,
        document: Any,
    ) -> JsonFieldType:
        """Return the type of the field at the descriptor's (or given) path.

        A path without wildcards classifies the single value it addresses.  A
        wildcard path classifies every matched value: the shared type when
        they agree, ``VARIES`` when they do not, and ``VARIES`` as well when
        nothing matched because every array along the way was empty.

        Raises:
            FieldDoesNotExistError: If the path does not resolve.
        """
        return self.resolve_matched_type(field, document) or JsonFieldType.VARIES

    def resolve_matched_type(
        self,
        field: FieldDescriptor | FieldPath | str,
        document: Any,
    ) -> JsonFieldType | None:
        """Like ``resolve_field_type`` but None when a wildcard path matched nothing."""
        path = as_field_path(field if isinstance(field, FieldPath | str) else field.path)
        extracted = self._processor.extract(path, document)
        if path.is_precise:
            return JsonFieldType.of(extracted)
        return common_type(extracted)
