"""
Standard properties shared by every component type.

Every non-union type becomes a closed object whose first properties are
``$type`` (pinned to the type's own name), ``$copy`` and ``$id``. A type
with required properties can be written either in full or as a ``$copy``
reference to another instance.
"""

from __future__ import annotations

import copy
from typing import Any

from ...utils import COPY_KEY, ID_KEY, TYPE_KEY, is_union_type

EXTENSION_PATTERN = "^\\$"


def standard_properties(type_name: str, meta_schema: dict[str, Any]) -> dict[str, Any]:
    """The reserved properties, in order, for ``type_name``."""
    meta_definitions = meta_schema["definitions"]
    type_property = copy.deepcopy(meta_definitions["type"])
    type_property["const"] = type_name
    return {
        TYPE_KEY: type_property,
        COPY_KEY: copy.deepcopy(meta_definitions["copy"]),
        ID_KEY: copy.deepcopy(meta_definitions["id"]),
    }


def add_standard_properties(definitions: dict[str, Any], meta_schema: dict[str, Any]) -> None:
    """
    Normalize the property set of every non-union type.

    A declared property named like a reserved one replaces the reserved value
    but keeps the reserved position at the front.

    Args:
        definitions: Type name -> root schema, mutated in place
        meta_schema: Umbrella meta-schema providing the type, copy and id definitions
    """
    for type_name, definition in definitions.items():
        if is_union_type(definition):
            continue

        properties = standard_properties(type_name, meta_schema)
        properties.update(definition.get("properties") or {})
        definition["properties"] = properties
        definition["additionalProperties"] = False
        definition["patternProperties"] = {EXTENSION_PATTERN: {"type": "string"}}

        required = definition.get("required")
        definition["required"] = [TYPE_KEY]
        if required:
            definition["anyOf"] = [
                {"title": "Reference", "required": [COPY_KEY]},
                {"title": "Type", "required": required},
            ]
