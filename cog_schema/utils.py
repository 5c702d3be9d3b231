"""
Utility functions shared by the composition passes and the CLI.
"""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Any

DEFINITIONS_PREFIX = "#/definitions/"

ROLE_KEY = "$role"
TYPE_KEY = "$type"
COPY_KEY = "$copy"
ID_KEY = "$id"

UNION_TYPE_ROLE = "unionType"


def definition_ref(type_name: str) -> str:
    """Fragment reference to a type in the composite definitions map.

    Examples:
        "Foo" -> "#/definitions/Foo"
    """
    return DEFINITIONS_PREFIX + type_name


def type_name_from_path(path: str | Path) -> str:
    """Type name of an input file: its base name without the last extension.

    Examples:
        "schemas/Foo.schema" -> "Foo"
        "a/b/Microsoft.Test.schema" -> "Microsoft.Test"
    """
    name = Path(path).name
    if "." not in name:
        return name
    return name[: name.rindex(".")]


def roles_of(node: dict) -> list[str]:
    """Role names on a node; $role may be a single name or a list."""
    role = node.get(ROLE_KEY)
    if isinstance(role, str):
        return [role]
    if isinstance(role, list):
        return [r for r in role if isinstance(r, str)]
    return []


def is_union_type(schema: Any) -> bool:
    """Check if a definition is a union container (bare unionType role)."""
    return isinstance(schema, dict) and UNION_TYPE_ROLE in roles_of(schema)


def expand_patterns(patterns: list[str] | tuple[str, ...]) -> list[str]:
    """
    Expand glob patterns into file paths.

    Matches of each pattern are sorted; patterns are expanded in the order
    given and a path matched by several patterns is kept once.

    Args:
        patterns: Glob patterns (``**`` is recursive)

    Returns:
        Matching file paths in discovery order
    """
    paths: list[str] = []
    seen: set[str] = set()
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)):
            if Path(match).is_dir() or match in seen:
                continue
            seen.add(match)
            paths.append(match)
    return paths
