"""Shape nodes for structure summaries, and the shape equality used to dedupe them.

Three node kinds mirror a JSON document:
- ScalarNode: any string, number, boolean or null.
- ObjectNode: named children in insertion order.
- ArrayNode:  the distinct shapes of the array's elements.

Shape equality ignores names, paths and concrete scalar values:
- every ScalarNode has the same shape as every other ScalarNode;
- two ObjectNodes match when they have the same key set and each key's
  children match;
- two ArrayNodes match when each one's child shapes all appear in the other.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from json_payload_docs.fields.path import FieldPath

__all__ = ["ArrayNode", "ObjectNode", "ScalarNode", "ShapeNode", "add_shape", "same_shape"]


@dataclass(slots=True, eq=False)
class ScalarNode:
    """A leaf.

    Attributes:
        name: Key of this node in its parent object; None inside arrays and at
            the root.
        path: Compiled field path that re-extracts the value(s) this node
            stands for from the summarised document.
    """

    name: str | None
    path: FieldPath


@dataclass(slots=True, eq=False)
class ObjectNode:
    name: str | None
    path: FieldPath
    children: dict[str, ShapeNode] = field(default_factory=dict)


@dataclass(slots=True, eq=False)
class ArrayNode:
    name: str | None
    path: FieldPath
    children: list[ShapeNode] = field(default_factory=list)


ShapeNode = ScalarNode | ObjectNode | ArrayNode


def same_shape(left: ShapeNode, right: ShapeNode) -> bool:
    """Return True if the two nodes have the same structural shape."""
    if isinstance(left, ScalarNode) or isinstance(right, ScalarNode):
        return isinstance(left, ScalarNode) and isinstance(right, ScalarNode)
    if isinstance(left, ObjectNode) and isinstance(right, ObjectNode):
        if left.children.keys() != right.children.keys():
            return False
        return all(
            same_shape(child, right.children[key]) for key, child in left.children.items()
        )
    if isinstance(left, ArrayNode) and isinstance(right, ArrayNode):
        return _covers(left.children, right.children) and _covers(
            right.children, left.children
        )
    return False


def _covers(shapes: list[ShapeNode], others: list[ShapeNode]) -> bool:
    return all(any(same_shape(shape, other) for shape in shapes) for other in others)


def add_shape(shapes: list[ShapeNode], node: ShapeNode) -> None:
    """Append ``node`` to ``shapes`` unless an equal shape is already there."""
    if not any(same_shape(existing, node) for existing in shapes):
        shapes.append(node)
