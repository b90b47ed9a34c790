"""JsonContentHandler: checks field descriptors against a raw JSON payload.

The handler keeps only the raw bytes.  Each operation decodes a fresh document,
so the in-place removals done while looking for undocumented content can never
leak into another operation.

Type reconciliation (``determine_field_type``) follows these rules:
- No declared type: the type found in the payload.
- A declared custom type (anything that is not a ``JsonFieldType``, or a
  collection holding one): returned as declared, never checked.
- Declared ``JsonFieldType`` value(s): the declaration stands when the actual
  type equals one of them, when one of them is ``VARIES``, or when the field
  is optional and its value is null.  Otherwise ``FieldTypeMismatchError``.
- An absent field contradicts nothing, so a declared ``JsonFieldType`` (or
  collection of them) is returned as is.  With no declared type there is
  nothing to return, and ``FieldDoesNotExistError`` propagates.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection, Sequence
from typing import Any

from json_payload_docs.config import HandlerConfig
from json_payload_docs.errors import (
    ContentDecodingError,
    FieldDoesNotExistError,
    FieldTypeMismatchError,
)
from json_payload_docs.fields.descriptor import FieldDescriptor
from json_payload_docs.fields.processor import FieldProcessor
from json_payload_docs.fields.resolver import FieldTypeResolver
from json_payload_docs.fields.types import JsonFieldType

__all__ = ["JsonContentHandler", "decode_content"]

logger = logging.getLogger(__name__)


def decode_content(content: bytes | str, config: HandlerConfig | None = None) -> Any:
    """Decode raw payload content into plain Python JSON values.

    Args:
        content: Raw payload bytes, or already decoded text.
        config: Supplies the text encoding.  Defaults to ``HandlerConfig()``.

    Raises:
        ContentDecodingError: If the bytes are not valid text in the configured
            encoding or the text is not valid JSON.
    """
    config = config if config is not None else HandlerConfig()
    try:
        text = content.decode(config.encoding) if isinstance(content, bytes) else content
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ContentDecodingError(f"Cannot decode payload as JSON: {exc}") from exc


class JsonContentHandler:
    """Compares field descriptors with the JSON payload they document.

    Example::

        handler = JsonContentHandler(b'{"a": 1, "b": 2}')
        handler.find_missing_fields([field_with_path("c")])   # [descriptor c]
        handler.get_undocumented_content([field_with_path("a")])
        # '{\\n  "b": 2\\n}'
    """

    def __init__(
        self,
        content: bytes | str,
        config: HandlerConfig | None = None,
    ) -> None:
        """Initialise the handler and verify that ``content`` decodes.

        Args:
            content: Raw payload bytes (or text).
            config: Decoding and serialisation settings.  Defaults to
                ``HandlerConfig()``.

        Raises:
            ContentDecodingError: If ``content`` is not valid JSON.
        """
        self._config: HandlerConfig = config if config is not None else HandlerConfig()
        self._content = content
        self._processor = FieldProcessor()
        self._resolver = FieldTypeResolver(self._processor)
        self._read_content()

    # ------------------------------------------------------------------
    # Missing and undocumented fields
    # ------------------------------------------------------------------

    def find_missing_fields(
        self, descriptors: Sequence[FieldDescriptor]
    ) -> list[FieldDescriptor]:
        """Return the required descriptors whose field is absent from the payload.

        A required field is not reported when it sits beneath another
        descriptor that is optional and absent itself: the parent's absence
        already explains it.

        Args:
            descriptors: Descriptors to check, in documentation order.

        Returns:
            The missing descriptors, in input order.
        """
        payload = self._read_content()
        missing: list[FieldDescriptor] = []
        for descriptor in descriptors:
            if descriptor.optional:
                continue
            if self._processor.has_field(descriptor.field_path, payload):
                continue
            if self._is_nested_beneath_missing_optional_field(
                descriptor, descriptors, payload
            ):
                continue
            missing.append(descriptor)
        if missing:
            logger.debug(
                "Missing fields: %s", ", ".join(str(d.field_path) for d in missing)
            )
        return missing

    def _is_nested_beneath_missing_optional_field(
        self,
        missing: FieldDescriptor,
        descriptors: Sequence[FieldDescriptor],
        payload: Any,
    ) -> bool:
        for candidate in descriptors:
            if candidate is missing or not candidate.optional:
                continue
            if missing.field_path.is_nested_beneath(
                candidate.field_path
            ) and not self._processor.has_field(candidate.field_path, payload):
                return True
        return False

    def get_undocumented_content(
        self, descriptors: Sequence[FieldDescriptor]
    ) -> str | None:
        """Return the part of the payload that no descriptor documents.

        Every descriptor's field is removed from a fresh copy of the payload:
        the whole subtree for subsection descriptors, the leaf value
        otherwise.  Fields that are absent are skipped.

        Returns:
            The remaining content pretty-printed as JSON, or None when nothing
            but an empty object or array is left.
        """
        content = self._read_content()
        for descriptor in descriptors:
            if descriptor.subsection:
                self._processor.remove_subsection(descriptor.field_path, content)
            else:
                self._processor.remove(descriptor.field_path, content)
        if isinstance(content, dict | list) and not content:
            return None
        undocumented = json.dumps(
            content,
            indent=self._config.indent,
            ensure_ascii=self._config.ensure_ascii,
        )
        logger.debug("Undocumented content remains (%d characters)", len(undocumented))
        return undocumented

    # ------------------------------------------------------------------
    # Type reconciliation
    # ------------------------------------------------------------------

    def determine_field_type(self, descriptor: FieldDescriptor) -> Any:
        """Return the type to document for ``descriptor``.

        Returns:
            The resolved ``JsonFieldType`` when no type is declared, otherwise
            the declared type (a ``JsonFieldType``, a collection of them, or a
            custom tag).

        Raises:
            FieldTypeMismatchError: If the declared type contradicts the payload.
            FieldDoesNotExistError: If the field is absent and no type is
                declared.
        """
        declared = descriptor.type
        payload = self._read_content()
        if declared is None:
            return self._resolver.resolve_field_type(descriptor, payload)
        if isinstance(declared, JsonFieldType):
            declared_types = [declared]
        elif _is_type_collection(declared):
            declared_types = list(declared)
        else:
            return declared
        try:
            actual = self._resolver.resolve_matched_type(descriptor, payload)
        except FieldDoesNotExistError:
            logger.debug("Field '%s' is absent; keeping its declared type", descriptor.path)
            return declared
        return self._reconcile(descriptor, declared_types, actual)

    def _reconcile(
        self,
        descriptor: FieldDescriptor,
        declared_types: list[JsonFieldType],
        actual: JsonFieldType | None,
    ) -> Any:
        # None: only empty arrays were reached, nothing to contradict
        if actual is None:
            return descriptor.type
        for declared_type in declared_types:
            if (
                declared_type == JsonFieldType.VARIES
                or declared_type == actual
                or (descriptor.optional and actual == JsonFieldType.NULL)
            ):
                return descriptor.type
        raise FieldTypeMismatchError(descriptor, actual)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _read_content(self) -> Any:
        return decode_content(self._content, self._config)


def _is_type_collection(declared: Any) -> bool:
    """True for a non-empty collection made only of ``JsonFieldType`` values."""
    if isinstance(declared, str | bytes) or not isinstance(declared, Collection):
        return False
    return bool(declared) and all(isinstance(t, JsonFieldType) for t in declared)
