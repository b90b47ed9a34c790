"""Unit tests for the public API functions.

find_missing_fields, get_undocumented_content, determine_field_type and
summarize_structure.
"""

from __future__ import annotations

import pytest

from json_payload_docs import (
    ContentDecodingError,
    EmptyContentError,
    FieldTypeMismatchError,
    HandlerConfig,
    JsonFieldType,
    determine_field_type,
    field_with_path,
    find_missing_fields,
    get_undocumented_content,
    subsection_with_path,
    summarize_structure,
)

PAYLOAD = b'{"id": 7, "name": null, "links": {"self": "/items/7"}, "tags": ["a", "b"]}'


class TestFindMissingFields:
    def test_nothing_missing(self) -> None:
        descriptors = [field_with_path("id"), field_with_path("links.self")]
        assert find_missing_fields(PAYLOAD, descriptors) == []

    def test_reports_missing(self) -> None:
        missing = field_with_path("price")
        assert find_missing_fields(PAYLOAD, [field_with_path("id"), missing]) == [missing]

    def test_invalid_json(self) -> None:
        with pytest.raises(ContentDecodingError):
            find_missing_fields(b"not json", [])


class TestGetUndocumentedContent:
    def test_fully_documented(self) -> None:
        descriptors = [
            field_with_path("id"),
            field_with_path("name"),
            field_with_path("tags[]"),
            subsection_with_path("links"),
        ]
        assert get_undocumented_content(PAYLOAD, descriptors) is None

    def test_partially_documented(self) -> None:
        descriptors = [field_with_path("id"), field_with_path("name"), field_with_path("tags")]
        assert get_undocumented_content(PAYLOAD, descriptors) == (
            '{\n  "links": {\n    "self": "/items/7"\n  }\n}'
        )

    def test_config_passthrough(self) -> None:
        descriptors = [field_with_path("id"), field_with_path("name"), field_with_path("tags")]
        undocumented = get_undocumented_content(
            PAYLOAD, descriptors, config=HandlerConfig(indent=4)
        )
        assert undocumented == '{\n    "links": {\n        "self": "/items/7"\n    }\n}'


class TestDetermineFieldType:
    def test_resolved(self) -> None:
        assert determine_field_type(PAYLOAD, field_with_path("tags")) is JsonFieldType.ARRAY

    def test_optional_null(self) -> None:
        descriptor = field_with_path("name").as_optional().of_type(JsonFieldType.STRING)
        assert determine_field_type(PAYLOAD, descriptor) is JsonFieldType.STRING

    def test_mismatch(self) -> None:
        descriptor = field_with_path("id").of_type(JsonFieldType.STRING)
        with pytest.raises(FieldTypeMismatchError):
            determine_field_type(PAYLOAD, descriptor)


class TestSummarizeStructure:
    def test_outline(self) -> None:
        assert summarize_structure(PAYLOAD) == (
            "{\n"
            "    id: Number\n"
            "    name: Null\n"
            "    links: {\n"
            "        self: String\n"
            "    }\n"
            "    tags: [ \n"
            "        String\n"
            "    ]\n"
            "}\n"
        )

    def test_key_with_quote_and_bracket(self) -> None:
        assert summarize_structure(b'{"a\']b": 1}') == "{\n    a']b: Number\n}\n"

    def test_empty_response(self) -> None:
        with pytest.raises(EmptyContentError, match="response body is empty"):
            summarize_structure(b"", payload_kind="response")

    def test_no_global_state_between_calls(self) -> None:
        first = summarize_structure(b'{"a": 1}')
        summarize_structure(b'{"b": [true]}')
        assert summarize_structure(b'{"a": 1}') == first
