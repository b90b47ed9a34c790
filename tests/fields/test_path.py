"""Tests for FieldPath compilation, canonical rendering and prefix checks.

Covers:
- Bare, dotted, quoted and wildcard segments
- Equivalence of bare and quoted spellings of the same key
- PathParseError on malformed brackets (with path and position)
- Canonical rendering round-trips through compile
- is_precise, parent and is_nested_beneath
- Compile cache returns the same instance, also when shared across threads
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError

import pytest

from json_payload_docs.errors import PathParseError
from json_payload_docs.fields.path import (
    WILDCARD,
    FieldPath,
    PathSegment,
    as_field_path,
    compile_path,
)

# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


class TestCompile:
    def test_single_key(self) -> None:
        assert compile_path("a").segments == (PathSegment("a"),)

    def test_dotted_keys(self) -> None:
        assert compile_path("a.b.c").segments == (
            PathSegment("a"),
            PathSegment("b"),
            PathSegment("c"),
        )

    def test_wildcard_between_keys(self) -> None:
        assert compile_path("a[].b").segments == (PathSegment("a"), WILDCARD, PathSegment("b"))

    def test_consecutive_wildcards(self) -> None:
        assert compile_path("a[][]").segments == (PathSegment("a"), WILDCARD, WILDCARD)

    def test_root_wildcard(self) -> None:
        assert compile_path("[]").segments == (WILDCARD,)

    def test_quoted_key_keeps_dots(self) -> None:
        assert compile_path("['a.b']").segments == (PathSegment("a.b"),)

    def test_quoted_key_keeps_brackets(self) -> None:
        assert compile_path("['a[]']").segments == (PathSegment("a[]"),)

    def test_empty_quoted_key(self) -> None:
        assert compile_path("['']").segments == (PathSegment(""),)

    def test_quoted_and_bare_spellings_are_equal(self) -> None:
        assert compile_path("['a']['b'][]['c']") == compile_path("a.b[].c")

    def test_bare_key_directly_after_bracket(self) -> None:
        assert compile_path("['a']b[]") == compile_path("a.b[]")

    def test_empty_string_is_root(self) -> None:
        path = compile_path("")
        assert path.segments == ()
        assert path.is_root

    def test_redundant_dots_are_ignored(self) -> None:
        assert compile_path(".a..b") == compile_path("a.b")

    def test_classmethod_matches_function(self) -> None:
        assert FieldPath.compile("a[].b") == compile_path("a[].b")

    def test_compile_is_cached(self) -> None:
        assert compile_path("cached.path[]") is compile_path("cached.path[]")


class TestMalformedPaths:
    @pytest.mark.parametrize(
        "text",
        ["a[", "a]", "a[0]", "a[*]", "a['b'", "a[b]", "]", "a['b]"],
    )
    def test_malformed_brackets_raise(self, text: str) -> None:
        with pytest.raises(PathParseError):
            compile_path(text)

    def test_error_carries_path_and_position(self) -> None:
        with pytest.raises(PathParseError) as excinfo:
            compile_path("a[0]")
        assert excinfo.value.path == "a[0]"
        assert excinfo.value.position == 1

    def test_unmatched_close_bracket_position(self) -> None:
        with pytest.raises(PathParseError) as excinfo:
            compile_path("ab]")
        assert excinfo.value.position == 2

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid field path"):
            compile_path("a[")


# ---------------------------------------------------------------------------
# Canonical rendering
# ---------------------------------------------------------------------------


class TestCanonicalForm:
    @pytest.mark.parametrize(
        ("text", "canonical"),
        [
            ("a", "a"),
            ("a.b", "a.b"),
            ("a[].b", "a[].b"),
            ("['a']['b']", "a.b"),
            ("['a.b'].c", "['a.b'].c"),
            ("[].a", "[].a"),
            ("a[][]", "a[][]"),
            ("['']", "['']"),
            ("", ""),
        ],
    )
    def test_rendering(self, text: str, canonical: str) -> None:
        assert str(compile_path(text)) == canonical

    @pytest.mark.parametrize(
        "text", ["a", "a.b[].c", "['a.b'][]['c[]']", "[][]", "['x']y.z", "['']"]
    )
    def test_round_trip(self, text: str) -> None:
        path = compile_path(text)
        assert compile_path(str(path)) == path


# ---------------------------------------------------------------------------
# Properties and relations
# ---------------------------------------------------------------------------


class TestPathProperties:
    def test_precise_without_wildcard(self) -> None:
        assert compile_path("a.b").is_precise

    def test_not_precise_with_wildcard(self) -> None:
        assert not compile_path("a[].b").is_precise

    def test_root_is_precise(self) -> None:
        assert compile_path("").is_precise

    def test_parent_drops_last_segment(self) -> None:
        assert compile_path("a[].b").parent == compile_path("a[]")

    def test_parent_of_root_is_root(self) -> None:
        assert compile_path("").parent.is_root

    def test_frozen(self) -> None:
        path = compile_path("a")
        with pytest.raises(FrozenInstanceError):
            path.segments = ()  # type: ignore[misc]

    def test_as_field_path_passes_compiled_path_through(self) -> None:
        path = compile_path("a.b")
        assert as_field_path(path) is path

    def test_as_field_path_compiles_text(self) -> None:
        assert as_field_path("a.b") == compile_path("a.b")


class TestNestedBeneath:
    def test_child_is_nested_beneath_parent(self) -> None:
        assert compile_path("a.b").is_nested_beneath(compile_path("a"))

    def test_parent_is_not_nested_beneath_child(self) -> None:
        assert not compile_path("a").is_nested_beneath(compile_path("a.b"))

    def test_accepts_text(self) -> None:
        assert compile_path("a[].b").is_nested_beneath("a[]")

    def test_uses_canonical_form_of_other(self) -> None:
        assert compile_path("a.b.c").is_nested_beneath("['a']['b']")

    def test_equal_paths_count_as_nested(self) -> None:
        assert compile_path("a.b").is_nested_beneath("a.b")

    def test_prefix_check_is_textual(self) -> None:
        assert compile_path("ab").is_nested_beneath("a")

    def test_unrelated_paths(self) -> None:
        assert not compile_path("b.a").is_nested_beneath("a")


# ---------------------------------------------------------------------------
# Cache shared across threads
# ---------------------------------------------------------------------------


class TestConcurrentCompile:
    def test_threads_get_equal_paths(self) -> None:
        texts = [f"items[].field_{n % 50}.value" for n in range(2000)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            compiled = list(pool.map(compile_path, texts))
        assert [str(path) for path in compiled] == texts

    def test_threads_share_cached_instances(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            compiled = list(pool.map(compile_path, ["shared.path[]"] * 500))
        assert all(path is compiled[0] for path in compiled)
