"""
Display titles for oneOf branches.
"""

from __future__ import annotations

from typing import Any

from ..walker import NodeKind, is_object, node_kind, walk_json


def add_type_titles(definitions: dict[str, Any]) -> None:
    """Give every untitled oneOf branch that has a structural type ``title = type``."""

    def visit(value: Any, parent: Any, key: Any) -> bool:
        if is_object(value) and node_kind(value.get("oneOf")) is NodeKind.ARRAY:
            for branch in value["oneOf"]:
                if is_object(branch) and isinstance(branch.get("type"), str) and "title" not in branch:
                    branch["title"] = branch["type"]
        return False

    walk_json(definitions, visit)
