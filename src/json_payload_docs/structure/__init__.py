"""structure subpackage - deduplicated shape outlines of JSON documents.

Re-exports the public API for the structure module:
- ScalarNode, ObjectNode, ArrayNode: shape tree nodes
- same_shape: structural equality used to dedupe array element shapes
- Structure, StructureSummarizer: build and render outlines
- create_structure_model: template model for a raw payload
"""

from json_payload_docs.structure.nodes import ArrayNode, ObjectNode, ScalarNode, same_shape
from json_payload_docs.structure.summarizer import (
    Structure,
    StructureSummarizer,
    create_structure_model,
)

__all__ = [
    "ArrayNode",
    "ObjectNode",
    "ScalarNode",
    "Structure",
    "StructureSummarizer",
    "create_structure_model",
    "same_shape",
]
