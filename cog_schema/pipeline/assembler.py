"""
Assembly of the composite schema document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils import definition_ref, is_union_type

TITLE = "Component types"
DESCRIPTION = "These are all of the types that can be created by the loader."


def assemble(definitions: dict[str, Any], meta_schema: dict[str, Any], output: str) -> dict[str, Any]:
    """
    Build the composite schema.

    The root is a oneOf over every non-union type; ``definitions`` holds every
    type. Both are in alphabetical order of type name.

    Args:
        definitions: Type name -> fully composed schema
        meta_schema: Umbrella meta-schema, its $id becomes the $schema
        output: Output path, its base name becomes the $id

    Returns:
        The composite schema document
    """
    names = sorted(definitions)
    return {
        "$schema": meta_schema.get("$id"),
        "$id": Path(output).name,
        "type": "object",
        "title": TITLE,
        "description": DESCRIPTION,
        "oneOf": [
            {
                "title": name,
                "description": definitions[name].get("description", ""),
                "$ref": definition_ref(name),
            }
            for name in names
            if not is_union_type(definitions[name])
        ],
        "definitions": {name: definitions[name] for name in names},
    }
