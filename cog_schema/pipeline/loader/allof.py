"""
Flattening of ``allOf``.

Every ``allOf`` list is merged into the schema that holds it, so later passes
see one object with all properties, required names and constraints. Merging
is bottom-up: nested ``allOf`` are flattened before their parent.
"""

from __future__ import annotations

import copy
from typing import Any

from ...errors import SchemaLoadError
from ...utils import ROLE_KEY

# Keywords whose value maps names to subschemas
SCHEMA_MAPS = {"properties", "definitions", "$defs", "patternProperties"}

# Keywords where the first schema's value is kept
ANNOTATIONS = {"title", "description", "$comment", "default", "examples"}

LOWER_BOUNDS = {"minimum", "exclusiveMinimum", "minLength", "minItems", "minProperties"}
UPPER_BOUNDS = {"maximum", "exclusiveMaximum", "maxLength", "maxItems", "maxProperties"}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def _ordered_union(first: list[Any], second: list[Any]) -> list[Any]:
    result = list(first)
    for item in second:
        if item not in result:
            result.append(item)
    return result


def _intersection(keyword: str, first: Any, second: Any) -> Any:
    values = [v for v in _as_list(first) if v in _as_list(second)]
    if not values:
        raise SchemaLoadError(f"Cannot merge allOf: no common value for '{keyword}'.")
    if keyword == "type" and len(values) == 1:
        return values[0]
    return values


def merge_schema(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``source`` into ``target`` in place.

    Args:
        target: Schema receiving the keywords
        source: Schema whose keywords are added

    Returns:
        ``target``

    Raises:
        SchemaLoadError: If both schemas constrain a keyword incompatibly
    """
    for keyword, value in source.items():
        if keyword not in target:
            target[keyword] = copy.deepcopy(value)
            continue

        existing = target[keyword]
        if existing == value or keyword in ANNOTATIONS:
            continue
        if keyword in SCHEMA_MAPS and isinstance(existing, dict) and isinstance(value, dict):
            for name, subschema in value.items():
                if name in existing and isinstance(existing[name], dict) and isinstance(subschema, dict):
                    merge_schema(existing[name], subschema)
                elif name not in existing:
                    existing[name] = copy.deepcopy(subschema)
        elif keyword == "required" or keyword == ROLE_KEY:
            merged = _ordered_union(_as_list(existing), _as_list(value))
            target[keyword] = merged if keyword == "required" or len(merged) > 1 else merged[0]
        elif keyword in ("type", "enum"):
            target[keyword] = _intersection(keyword, existing, value)
        elif keyword in LOWER_BOUNDS:
            target[keyword] = max(existing, value)
        elif keyword in UPPER_BOUNDS:
            target[keyword] = min(existing, value)
        else:
            raise SchemaLoadError(f"Cannot merge allOf: conflicting values for '{keyword}'.")
    return target


def merge_all_of(node: Any) -> Any:
    """
    Return ``node`` with every ``allOf`` merged into its parent schema.

    Raises:
        SchemaLoadError: If an allOf branch is not a schema object or cannot be merged
    """
    if isinstance(node, list):
        return [merge_all_of(value) for value in node]
    if not isinstance(node, dict):
        return node

    merged = {k: merge_all_of(v) for k, v in node.items() if k != "allOf"}
    branches = node.get("allOf")
    if not isinstance(branches, list):
        if "allOf" in node:
            merged["allOf"] = merge_all_of(branches)
        return merged

    for branch in branches:
        if branch is True:
            continue
        if not isinstance(branch, dict):
            raise SchemaLoadError("Cannot merge allOf: every branch must be a schema object.")
        merge_schema(merged, merge_all_of(branch))
    return merged
