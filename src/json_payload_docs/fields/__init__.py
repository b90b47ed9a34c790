"""fields subpackage - addressing, reading and removing fields of JSON documents.

Re-exports:
- FieldPath: compiled field path (``a.b``, ``a[].b``, ``['a.b']``)
- FieldProcessor: extract / has_field / remove / remove_subsection
- JsonFieldType, FieldTypeResolver: type classification of located fields
- FieldDescriptor and its builders: what a caller claims a payload contains
"""

from json_payload_docs.fields.descriptor import (
    FieldDescriptor,
    apply_path_prefix,
    field_with_path,
    subsection_with_path,
)
from json_payload_docs.fields.path import FieldPath, compile_path
from json_payload_docs.fields.processor import FieldProcessor
from json_payload_docs.fields.resolver import FieldTypeResolver
from json_payload_docs.fields.types import JsonFieldType

__all__ = [
    "FieldDescriptor",
    "FieldPath",
    "FieldProcessor",
    "FieldTypeResolver",
    "JsonFieldType",
    "apply_path_prefix",
    "compile_path",
    "field_with_path",
    "subsection_with_path",
]
