"""
Namespacing of internal references.

Each source schema was written as if it owned the document root, so its
``#/definitions/X`` pointers must move under ``#/definitions/<Type>/definitions/X``
once all types share one definitions map.
"""

from __future__ import annotations

from typing import Any

from ...utils import DEFINITIONS_PREFIX
from ..walker import is_object, walk_json


def namespaced_prefix(type_name: str) -> str:
    return f"{DEFINITIONS_PREFIX}{type_name}/definitions/"


def namespace_reference(ref: str, type_name: str) -> str:
    """
    Rewrite one fragment reference into the namespace of ``type_name``.

    References outside ``#/definitions/`` and references already inside the
    type's namespace are returned unchanged.

    Examples:
        ("#/definitions/Item", "Foo") -> "#/definitions/Foo/definitions/Item"
        ("#/definitions/Foo/definitions/Item", "Foo") -> unchanged
        ("#/properties/x", "Foo") -> unchanged
    """
    if not ref.startswith(DEFINITIONS_PREFIX):
        return ref
    prefix = namespaced_prefix(type_name)
    if ref.startswith(prefix):
        return ref
    return prefix + ref[len(DEFINITIONS_PREFIX) :]


def fix_definition_references(definitions: dict[str, Any]) -> None:
    """Namespace every internal ``$ref`` of every type under that type."""
    for type_name, schema in definitions.items():

        def visit(value: Any, parent: Any, key: Any, type_name: str = type_name) -> bool:
            if is_object(value) and isinstance(value.get("$ref"), str):
                value["$ref"] = namespace_reference(value["$ref"], type_name)
            return False

        walk_json(schema, visit)
