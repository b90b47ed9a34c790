"""StructureSummarizer: builds and renders a deduplicated outline of a JSON document.

The outline shows every key once per distinct shape, so a large array of
similar objects collapses into a single representative::

    {
        a: {
            b: Number
            c: [
                {
                    d: Varies
                }
            ]
        }
        e: [
            Number
        ]
    }

Scalar types are not stored in the shape tree.  Each node keeps a field path
back into the original document, and the type is resolved from every value
that path reaches when the outline is rendered, so ``d`` above is ``Varies``
because the two ``c`` elements hold a number and a boolean.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from json_payload_docs.config import HandlerConfig
from json_payload_docs.content import decode_content
from json_payload_docs.errors import EmptyContentError
from json_payload_docs.fields.path import WILDCARD, FieldPath, PathSegment
from json_payload_docs.fields.resolver import FieldTypeResolver
from json_payload_docs.structure.nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    ShapeNode,
    add_shape,
)

__all__ = ["Structure", "StructureSummarizer", "create_structure_model"]

logger = logging.getLogger(__name__)

_INDENT = "    "

_ROOT = FieldPath(())


@dataclass(frozen=True, slots=True)
class Structure:
    """A shape tree together with the document it was built from.

    Attributes:
        root: Root shape node.
        content: The decoded document; node paths resolve against it.
    """

    root: ShapeNode
    content: Any

    def __str__(self) -> str:
        return StructureSummarizer().render(self)


class StructureSummarizer:
    """Builds shape trees and renders them as indented text.

    Example::

        summarizer = StructureSummarizer()
        structure = summarizer.build({"ids": [1, 2, 3]})
        print(summarizer.render(structure))
        # {
        #     ids: [
        #         Number
        #     ]
        # }
    """

    def __init__(self, resolver: FieldTypeResolver | None = None) -> None:
        self._resolver = resolver if resolver is not None else FieldTypeResolver()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self, document: Any) -> Structure:
        """Return the Structure of a decoded JSON document."""
        return Structure(root=self._build_node(None, _ROOT, document), content=document)

    def _build_node(
        self, name: str | None, parent_path: FieldPath, value: Any
    ) -> ShapeNode:
        # Built from segments; keys may hold any character
        path = parent_path if name is None else _child(parent_path, PathSegment(name))
        if isinstance(value, list):
            path = _child(path, WILDCARD)
            array_node = ArrayNode(name=name, path=path)
            for item in value:
                add_shape(array_node.children, self._build_node(None, path, item))
            return array_node

        if isinstance(value, dict):
            object_node = ObjectNode(name=name, path=path)
            for key, child in value.items():
                object_node.children[key] = self._build_node(key, path, child)
            return object_node

        return ScalarNode(name=name, path=path)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, structure: Structure) -> str:
        """Render ``structure`` as an outline with a four-space indent per level.

        Every line, including the last, ends with a newline.  An array opens
        with "[ " (bracket and a trailing space).
        """
        lines: list[str] = []
        self._render_node(structure.root, structure.content, 0, lines)
        return "".join(f"{line}\n" for line in lines)

    def _render_node(
        self, node: ShapeNode, content: Any, depth: int, lines: list[str]
    ) -> None:
        indent = _INDENT * depth
        label = indent if node.name is None else f"{indent}{node.name}: "
        if isinstance(node, ObjectNode):
            lines.append(f"{label}{{")
            for child in node.children.values():
                self._render_node(child, content, depth + 1, lines)
            lines.append(f"{indent}}}")
        elif isinstance(node, ArrayNode):
            lines.append(f"{label}[ ")
            for child in node.children:
                self._render_node(child, content, depth + 1, lines)
            lines.append(f"{indent}]")
        else:
            field_type = self._resolver.resolve_field_type(node.path, content)
            lines.append(f"{label}{field_type}")


def _child(parent: FieldPath, segment: PathSegment) -> FieldPath:
    return FieldPath((*parent.segments, segment))


def create_structure_model(
    content: bytes | str,
    payload_kind: str = "request",
    config: HandlerConfig | None = None,
) -> dict[str, Structure]:
    """Build the template model documenting a payload's structure.

    Args:
        content: Raw payload content.
        payload_kind: What the payload is ("request" or "response"), used in
            error messages.
        config: Decoding settings.  Defaults to ``HandlerConfig()``.

    Returns:
        ``{"structure": Structure}``.

    Raises:
        EmptyContentError: If ``content`` is empty.
        ContentDecodingError: If ``content`` is not valid JSON.
    """
    if len(content) == 0:
        raise EmptyContentError(
            f"Cannot document {payload_kind} fields as the {payload_kind} body is empty"
        )
    structure = StructureSummarizer().build(decode_content(content, config))
    logger.debug("Built %s structure rooted at %s", payload_kind, type(structure.root).__name__)
    return {"structure": structure}
