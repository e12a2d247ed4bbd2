"""AST serialization — JSON round-trip for enlaces AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for caching
parsed documents, shipping link graphs to other tools, and debugging.

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from enlaces import parse
    from enlaces.serialization import to_json, from_json

    doc = parse("See [[Home]]")
    restored = from_json(to_json(doc))
    assert doc == restored

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from enlaces.location import SourceLocation
from enlaces.nodes import Document, Node, SoftBreak, Text, WikiLink

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "Text": Text,
    "SoftBreak": SoftBreak,
    "WikiLink": WikiLink,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any enlaces AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            **{f.name: getattr(value, f.name) for f in fields(value)},
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(**{k: v for k, v in value.items() if k != "_type"})
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
