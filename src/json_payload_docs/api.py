"""Public API functions for json-payload-docs.

Each call builds fresh collaborators and decodes the payload itself, so calls
never share state.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from json_payload_docs.config import HandlerConfig
from json_payload_docs.content import JsonContentHandler
from json_payload_docs.fields.descriptor import FieldDescriptor
from json_payload_docs.structure.summarizer import (
    StructureSummarizer,
    create_structure_model,
)

__all__ = [
    "determine_field_type",
    "find_missing_fields",
    "get_undocumented_content",
    "summarize_structure",
]


def find_missing_fields(
    content: bytes | str,
    descriptors: Sequence[FieldDescriptor],
    config: HandlerConfig | None = None,
) -> list[FieldDescriptor]:
    """Return the required descriptors whose field is absent from ``content``.

    See ``JsonContentHandler.find_missing_fields``.
    """
    return JsonContentHandler(content, config=config).find_missing_fields(descriptors)


def get_undocumented_content(
    content: bytes | str,
    descriptors: Sequence[FieldDescriptor],
    config: HandlerConfig | None = None,
) -> str | None:
    """Return the pretty-printed part of ``content`` no descriptor documents, or None."""
    return JsonContentHandler(content, config=config).get_undocumented_content(
        descriptors
    )


def determine_field_type(
    content: bytes | str,
    descriptor: FieldDescriptor,
    config: HandlerConfig | None = None,
) -> Any:
    """Return the type to document for ``descriptor``.

    See ``JsonContentHandler.determine_field_type`` for the reconciliation
    rules and the errors raised.
    """
    return JsonContentHandler(content, config=config).determine_field_type(descriptor)


def summarize_structure(
    content: bytes | str,
    payload_kind: str = "request",
    config: HandlerConfig | None = None,
) -> str:
    """Return the rendered structure outline of ``content``.

    Args:
        content: Raw payload content.
        payload_kind: What the payload is ("request" or "response"), used in
            error messages.
        config: Decoding settings.  Defaults to ``HandlerConfig()``.

    Returns:
        The indented outline text.

    Raises:
        EmptyContentError: If ``content`` is empty.
        ContentDecodingError: If ``content`` is not valid JSON.
    """
    structure = create_structure_model(content, payload_kind, config)["structure"]
    return StructureSummarizer().render(structure)
