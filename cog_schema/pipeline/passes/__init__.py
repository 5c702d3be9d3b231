"""
Composition passes, in the order they must run:

1. fix_definition_references: namespace internal $ref per type
2. process_roles: apply $role (lg, unionType, unionType(X))
3. add_type_titles: title untitled oneOf branches from their type
4. expand_types: turn $type names into $ref
5. add_standard_properties: $type/$copy/$id, closed objects, copy duality
6. sort_unions: order union members by title
"""

from __future__ import annotations

from .properties import add_standard_properties
from .references import fix_definition_references
from .roles import RoleProcessor, process_roles
from .titles import add_type_titles
from .types import expand_types
from .unions import sort_unions

__all__ = [
    "fix_definition_references",
    "process_roles",
    "RoleProcessor",
    "add_type_titles",
    "expand_types",
    "add_standard_properties",
    "sort_unions",
]
