"""
Expansion of ``$type`` references.

``{"$type": "Foo"}`` names another component type; once Foo is known to be
part of the merge it becomes ``{"$ref": "#/definitions/Foo"}``. Values under
instance keywords (``default``, ``examples``...) are data, not schemas, and
keep their ``$type``.
"""

from __future__ import annotations

from typing import Any

from ...reporter import Diagnostics
from ...utils import TYPE_KEY, definition_ref
from ..walker import is_object, walk_json

INSTANCE_KEYWORDS = frozenset({"const", "default", "enum", "examples"})

# Keywords whose value maps arbitrary names to schemas
SCHEMA_MAP_KEYWORDS = frozenset({"definitions", "dependencies", "patternProperties", "properties"})


def expand_types(definitions: dict[str, Any], diagnostics: Diagnostics) -> None:
    """
    Replace every ``$type`` reference by a ``$ref`` into the definitions map.

    Names that were never loaded are reported once through ``diagnostics.missing``
    and left in place.
    """
    schema_maps: set[int] = {id(definitions)}
    instance_data: set[int] = set()

    def visit(value: Any, parent: Any, key: Any) -> bool:
        if id(parent) in instance_data or (
            is_object(parent) and key in INSTANCE_KEYWORDS and id(parent) not in schema_maps
        ):
            if isinstance(value, (dict, list)):
                instance_data.add(id(value))
            return False
        if not is_object(value):
            return False
        if key in SCHEMA_MAP_KEYWORDS and id(parent) not in schema_maps:
            schema_maps.add(id(value))

        if isinstance(value.get(TYPE_KEY), str):
            type_name = value[TYPE_KEY]
            if type_name in definitions:
                del value[TYPE_KEY]
                value["$ref"] = definition_ref(type_name)
            else:
                diagnostics.missing(type_name)
        return False

    walk_json(definitions, visit)
