"""FieldPath: compiled addresses into decoded JSON documents.

Grammar (informal)::

    path     := segment*
    segment  := ["."] identifier      bare key, no ".", "[" or "]"
              | "['" name "']"         quoted key, may hold "." or "["
              | "[]"                   every element of the array here

``"a.b[].c"`` and ``"['a']['b'][]['c']"`` compile to the same path.  The empty
string compiles to the root path, which addresses the whole document.

Compiled paths are immutable and cached, so one instance is shared by every
caller that compiles the same text.  ``str(path)`` renders the canonical form,
which is also the form used for the "nested beneath" prefix check.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass

from cachetools import LRUCache, cached

from json_payload_docs.errors import PathParseError

__all__ = ["WILDCARD", "FieldPath", "PathSegment", "as_field_path", "compile_path"]

logger = logging.getLogger(__name__)

# Distinct path texts kept compiled; shared by every thread
_CACHE_SIZE = 1024

_QUOTED_KEY = re.compile(r"\['(.*?)'\]")
# Characters that force the quoted rendering of a key
_UNSAFE_KEY_CHARS = frozenset(".[]")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One step of a field path.

    Attributes:
        key: Object key to descend into; None for the array wildcard ``[]``.
    """

    key: str | None

    @property
    def is_wildcard(self) -> bool:
        return self.key is None

    def render(self, first: bool) -> str:
        """Return the canonical text for this segment.

        Args:
            first: Whether the segment starts the path (no leading ".").
        """
        if self.key is None:
            return "[]"
        if not self.key or any(ch in _UNSAFE_KEY_CHARS for ch in self.key):
            return f"['{self.key}']"
        return self.key if first else f".{self.key}"


WILDCARD = PathSegment(None)


@dataclass(frozen=True, slots=True)
class FieldPath:
    """An immutable, compiled field path.

    Example::

        path = FieldPath.compile("items[].id")
        path.segments      # (PathSegment("items"), WILDCARD, PathSegment("id"))
        path.is_precise    # False
        str(path)          # "items[].id"
    """

    segments: tuple[PathSegment, ...]

    @classmethod
    def compile(cls, text: str) -> FieldPath:
        """Compile ``text`` into a FieldPath (cached)."""
        return compile_path(text)

    @property
    def is_precise(self) -> bool:
        """True when the path contains no wildcard and addresses a single value."""
        return not any(segment.is_wildcard for segment in self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def parent(self) -> FieldPath:
        """The path minus its final segment.  The root is its own parent."""
        return FieldPath(self.segments[:-1])

    def is_nested_beneath(self, other: FieldPath | str) -> bool:
        """Return True if this path's canonical text starts with ``other``'s.

        This is a textual prefix check, so ``"ab"`` counts as nested beneath
        ``"a"``, and a path counts as nested beneath an equal path.
        """
        return str(self).startswith(str(as_field_path(other)))

    def __str__(self) -> str:
        return "".join(
            segment.render(first=index == 0)
            for index, segment in enumerate(self.segments)
        )


@cached(LRUCache(maxsize=_CACHE_SIZE), lock=threading.Lock())
def compile_path(text: str) -> FieldPath:
    """Compile a textual field path.

    Args:
        text: Path expression such as ``"a.b"``, ``"a[].b"`` or ``"['a.b']"``.

    Returns:
        The compiled FieldPath.

    Raises:
        PathParseError: If ``[`` or ``]`` appear outside ``[]`` or ``['name']``.
    """
    logger.debug("Compiling field path %r", text)
    segments: list[PathSegment] = []
    pos = 0
    end = len(text)
    while pos < end:
        char = text[pos]
        if char == ".":
            pos += 1
        elif char == "[":
            if text.startswith("[]", pos):
                segments.append(WILDCARD)
                pos += 2
                continue
            match = _QUOTED_KEY.match(text, pos)
            if match is None:
                raise PathParseError(text, pos, "expected '[]' or \"['name']\"")
            segments.append(PathSegment(match.group(1)))
            pos = match.end()
        elif char == "]":
            raise PathParseError(text, pos, "unmatched ']'")
        else:
            stop = pos
            while stop < end and text[stop] not in ".[]":
                stop += 1
            segments.append(PathSegment(text[pos:stop]))
            pos = stop
    return FieldPath(tuple(segments))


def as_field_path(path: FieldPath | str) -> FieldPath:
    """Return ``path`` compiled if it is text, unchanged if already compiled."""
    if isinstance(path, FieldPath):
        return path
    return compile_path(path)
