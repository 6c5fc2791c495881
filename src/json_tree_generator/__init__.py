"""json-tree-generator - build in-memory JSON trees from structural write events."""

from __future__ import annotations

from json_tree_generator.alphabet import (
    MIME,
    MIME_NO_LINEFEEDS,
    MODIFIED_FOR_URL,
    PEM,
    Base64Variant,
    BinaryAlphabet,
    get_variant,
)
from json_tree_generator.builder import (
    JsonArrayBuilder,
    JsonObjectBuilder,
    json_array,
    json_object,
)
from json_tree_generator.config import GeneratorConfig
from json_tree_generator.errors import TreeGenerationError, UnsupportedWriteError
from json_tree_generator.generator import GeneratorState, TreeGenerator
from json_tree_generator.nodes import JsonArray, JsonObject, NodeType, node_type_of
from json_tree_generator.walker import emit, to_tree

__version__: str = "0.1.0"
__all__: list[str] = [
    "MIME",
    "MIME_NO_LINEFEEDS",
    "MODIFIED_FOR_URL",
    "PEM",
    "Base64Variant",
    "BinaryAlphabet",
    "GeneratorConfig",
    "GeneratorState",
    "JsonArray",
    "JsonArrayBuilder",
    "JsonObject",
    "JsonObjectBuilder",
    "NodeType",
    "TreeGenerationError",
    "TreeGenerator",
    "UnsupportedWriteError",
    "emit",
    "get_variant",
    "json_array",
    "json_object",
    "node_type_of",
    "to_tree",
]
