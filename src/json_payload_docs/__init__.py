"""json-payload-docs - check and summarise documented JSON payloads."""

from __future__ import annotations

from json_payload_docs.api import (
    determine_field_type,
    find_missing_fields,
    get_undocumented_content,
    summarize_structure,
)
from json_payload_docs.config import HandlerConfig
from json_payload_docs.content import JsonContentHandler
from json_payload_docs.errors import (
    ContentDecodingError,
    EmptyContentError,
    FieldDoesNotExistError,
    FieldTypeMismatchError,
    PathParseError,
    PayloadHandlingError,
)
from json_payload_docs.fields import (
    FieldDescriptor,
    FieldPath,
    FieldProcessor,
    FieldTypeResolver,
    JsonFieldType,
    apply_path_prefix,
    field_with_path,
    subsection_with_path,
)
from json_payload_docs.structure import Structure, StructureSummarizer

__version__: str = "0.1.0"
__all__: list[str] = [
    "ContentDecodingError",
    "EmptyContentError",
    "FieldDescriptor",
    "FieldDoesNotExistError",
    "FieldPath",
    "FieldProcessor",
    "FieldTypeMismatchError",
    "FieldTypeResolver",
    "HandlerConfig",
    "JsonContentHandler",
    "JsonFieldType",
    "PathParseError",
    "PayloadHandlingError",
    "Structure",
    "StructureSummarizer",
    "apply_path_prefix",
    "determine_field_type",
    "field_with_path",
    "find_missing_fields",
    "get_undocumented_content",
    "subsection_with_path",
    "summarize_structure",
]
