"""FieldProcessor: resolves field paths against decoded JSON documents.

``extract``, ``has_field``, ``remove`` and ``remove_subsection`` all run the
same traversal and differ only in what they do with each match, so reading a
field and removing it always agree on what a path denotes.

Traversal:
- A key segment descends into an object holding that key; anything else is
  a dead end for that branch.
- A wildcard segment descends into every element of an array.  Reaching an
  empty array is recorded: such a field exists but has no values.
- Each match is a handle (root, object entry or array element) that knows its
  parent, so removals can prune containers they leave empty.

Array elements are never deleted mid-walk.  They are replaced by a tombstone
and filtered out once the walk is over, so indices stay valid while sibling
elements are still being visited.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from json_payload_docs.errors import FieldDoesNotExistError
from json_payload_docs.fields.path import FieldPath, PathSegment, as_field_path

__all__ = ["FieldProcessor"]

logger = logging.getLogger(__name__)


class _Tombstone:
    def __repr__(self) -> str:
        return "<removed>"


_TOMBSTONE = _Tombstone()


# ---------------------------------------------------------------------------
# Match handles
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _Traversal:
    """Mutable bookkeeping for one walk over one document."""

    reached_empty_array: bool = False
    # id(list) -> (list, elements not yet tombstoned)
    tombstoned: dict[int, tuple[list[Any], int]] = field(default_factory=dict)

    def tombstone(self, items: list[Any], index: int) -> bool:
        """Tombstone ``items[index]``; True once every element of ``items`` is gone."""
        key = id(items)
        _, live = self.tombstoned.get(key, (items, len(items)))
        items[index] = _TOMBSTONE
        self.tombstoned[key] = (items, live - 1)
        return live == 1

    def purge(self) -> None:
        for items, _ in self.tombstoned.values():
            items[:] = [item for item in items if item is not _TOMBSTONE]
        self.tombstoned.clear()


@dataclass(slots=True)
class _RootMatch:
    value: Any

    def remove(self, subsection: bool) -> None:
        # The document itself is never removed
        return None


@dataclass(slots=True)
class _EntryMatch:
    container: dict[str, Any]
    key: str
    parent: _Match

    @property
    def value(self) -> Any:
        return self.container[self.key]

    def remove(self, subsection: bool) -> None:
        if self.key not in self.container:
            return
        if not subsection and _has_own_structure(self.value):
            return
        del self.container[self.key]
        if not self.container:
            self.parent.remove(subsection)


@dataclass(slots=True)
class _ElementMatch:
    container: list[Any]
    index: int
    parent: _Match
    traversal: _Traversal

    @property
    def value(self) -> Any:
        return self.container[self.index]

    def remove(self, subsection: bool) -> None:
        if self.value is _TOMBSTONE:
            return
        if not subsection and _has_own_structure(self.value):
            return
        if self.traversal.tombstone(self.container, self.index):
            self.parent.remove(subsection)


_Match = _RootMatch | _EntryMatch | _ElementMatch


def _has_own_structure(value: Any) -> bool:
    """True for values whose contents must be documented separately.

    That is a non-empty object, or an array holding objects or arrays.
    Arrays of scalars are leaves.
    """
    if isinstance(value, dict):
        return bool(value)
    if isinstance(value, list):
        return any(isinstance(item, dict | list) for item in value)
    return False


# ---------------------------------------------------------------------------
# Processor
# ---------------------------------------------------------------------------


class FieldProcessor:
    """Extracts, tests for and removes fields identified by a FieldPath.

    The processor holds no state; one instance can serve any number of
    documents.  Paths may be given compiled or as text.

    Example::

        processor = FieldProcessor()
        doc = {"items": [{"id": 1}, {"id": 2}]}
        processor.extract("items[].id", doc)     # [1, 2]
        processor.has_field("items[].name", doc) # False
        processor.remove("items[].id", doc)      # doc is now {}
    """

    def extract(self, path: FieldPath | str, document: Any) -> Any:
        """Return the value(s) at ``path``.

        Args:
            path: The field path.
            document: A decoded JSON document.

        Returns:
            The single value for a path without wildcards, otherwise a list of
            every matched value in document order.  A wildcard path that only
            reaches empty arrays yields ``[]``.

        Raises:
            FieldDoesNotExistError: If the path does not resolve.
        """
        field_path = as_field_path(path)
        values: list[Any] = []
        traversal = self._traverse(
            field_path, document, lambda match: values.append(match.value)
        )
        if field_path.is_precise:
            if not values:
                raise FieldDoesNotExistError(field_path)
            return values[0]
        if not values and not traversal.reached_empty_array:
            raise FieldDoesNotExistError(field_path)
        return values

    def has_field(self, path: FieldPath | str, document: Any) -> bool:
        """Return True if ``path`` resolves against ``document``."""
        try:
            self.extract(path, document)
        except FieldDoesNotExistError:
            return False
        return True

    def remove(self, path: FieldPath | str, document: Any) -> None:
        """Remove the leaf value(s) at ``path`` from ``document`` in place.

        Values that still carry their own structure (non-empty objects, arrays
        of objects or arrays) are left alone.  Containers emptied by the
        removal are removed from their parents in turn.  Paths that do not
        resolve are ignored.
        """
        self._remove(as_field_path(path), document, subsection=False)

    def remove_subsection(self, path: FieldPath | str, document: Any) -> None:
        """Remove the whole value(s) at ``path`` from ``document`` in place.

        Unlike ``remove``, the matched value is dropped whatever it contains.
        """
        self._remove(as_field_path(path), document, subsection=True)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _remove(self, path: FieldPath, document: Any, subsection: bool) -> None:
        count = 0

        def _visit(match: _Match) -> None:
            nonlocal count
            count += 1
            match.remove(subsection)

        traversal = self._traverse(path, document, _visit)
        traversal.purge()
        logger.debug(
            "Removed %s at '%s' (%d match(es))",
            "subsection" if subsection else "field",
            path,
            count,
        )

    def _traverse(
        self,
        path: FieldPath,
        document: Any,
        visit: Callable[[_Match], None],
    ) -> _Traversal:
        traversal = _Traversal()
        root = _RootMatch(document)
        if path.is_root:
            visit(root)
        else:
            self._descend(document, path.segments, 0, root, visit, traversal)
        return traversal

    def _descend(
        self,
        value: Any,
        segments: tuple[PathSegment, ...],
        index: int,
        parent: _Match,
        visit: Callable[[_Match], None],
        traversal: _Traversal,
    ) -> None:
        segment = segments[index]
        is_leaf = index == len(segments) - 1

        if segment.is_wildcard:
            if not isinstance(value, list):
                return
            if not value:
                traversal.reached_empty_array = True
                return
            for position in range(len(value)):
                if value[position] is _TOMBSTONE:
                    continue
                element = _ElementMatch(value, position, parent, traversal)
                if is_leaf:
                    visit(element)
                else:
                    self._descend(
                        value[position], segments, index + 1, element, visit, traversal
                    )
            return

        if not isinstance(value, dict) or segment.key not in value:
            return
        entry = _EntryMatch(value, segment.key, parent)
        if is_leaf:
            visit(entry)
        else:
            self._descend(value[segment.key], segments, index + 1, entry, visit, traversal)
