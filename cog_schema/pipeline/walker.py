"""
Generic JSON tree traversal.

Every composition pass is expressed as a visitor over the raw JSON
structure produced by ``json.load``: dicts, lists and scalars.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

# (value, parent container, key or index under which value was reached) -> stop
Visitor = Callable[[Any, Any, Any], bool]


class NodeKind(Enum):
    """Structural kind of a JSON value."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def node_kind(value: Any) -> NodeKind:
    """Classify a JSON value.

    Raises:
        TypeError: If value is not something ``json.load`` can produce
    """
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, list):
        return NodeKind.ARRAY
    if isinstance(value, str):
        return NodeKind.STRING
    # bool must be tested before int, it is a subclass
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if value is None:
        return NodeKind.NULL
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_object(value: Any) -> bool:
    return node_kind(value) is NodeKind.OBJECT


def walk_json(
    node: Any,
    visitor: Visitor,
    parent: dict | list | None = None,
    key: str | int | None = None,
) -> bool:
    """
    Walk a JSON tree in pre-order.

    The visitor is called with each node, its parent container and the key
    (or list index) it was reached by. Returning True from the visitor skips
    the children of that node; the True is also returned to the caller, which
    stops iterating the remaining siblings at every enclosing level.

    Dict keys are snapshotted before descending so a visitor may add keys to
    the node it is looking at.

    Args:
        node: Root of the (sub)tree to walk
        visitor: Function called for every node
        parent: Container holding ``node`` (None for the root)
        key: Key or index of ``node`` inside ``parent`` (None for the root)

    Returns:
        True if the walk was stopped by the visitor
    """
    done = visitor(node, parent, key)
    if done:
        return True

    kind = node_kind(node)
    if kind is NodeKind.ARRAY:
        for index, value in enumerate(node):
            if walk_json(value, visitor, node, index):
                return True
    elif kind is NodeKind.OBJECT:
        for name in list(node.keys()):
            if name not in node:
                continue
            if walk_json(node[name], visitor, node, name):
                return True
    return False
