"""
Deterministic ordering of union members.
"""

from __future__ import annotations

from typing import Any

from ...utils import is_union_type


def title_sort_key(entry: dict[str, Any]) -> tuple[str, str]:
    """
    Case-insensitive title order; a lowercase title comes before the same
    title in uppercase.

    Examples:
        ["b", "B", "a", "A", "Zed"] -> ["a", "A", "b", "B", "Zed"]
    """
    title = entry.get("title", "")
    return title.casefold(), title.swapcase()


def sort_unions(definitions: dict[str, Any]) -> None:
    """Sort the oneOf list of every union container by title."""
    for definition in definitions.values():
        if is_union_type(definition) and definition.get("oneOf"):
            definition["oneOf"] = sorted(definition["oneOf"], key=title_sort_key)
