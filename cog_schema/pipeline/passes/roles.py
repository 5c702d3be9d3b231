"""
Interpretation of the ``$role`` extension keyword.

Recognized roles:

- ``lg``: the property holds a language generation template. The canonical
  ``lg`` definition of the meta-schema is copied onto the property.
- ``unionType``: the type is a union container. Only legal at the root.
- ``unionType(X)``: the type is a member of union ``X`` and is appended to
  ``X.oneOf``.

``$role`` may hold one name or a list of names; each name is processed on
its own against the same node.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ...reporter import Diagnostics
from ...utils import UNION_TYPE_ROLE, definition_ref, is_union_type, roles_of
from ..walker import is_object, walk_json

LG_ROLE = "lg"
UNION_MEMBER_PREFIX = f"{UNION_TYPE_ROLE}("
UNION_MEMBER_SUFFIX = ")"


class RoleKind(Enum):
    LG = "lg"
    UNION_TYPE = "unionType"
    UNION_MEMBER = "unionMember"


@dataclass
class Role:
    """A parsed role name."""

    kind: RoleKind
    union_name: str = ""  # Union type a UNION_MEMBER role opts into


def parse_role(name: str) -> Role | None:
    """
    Parse a role name.

    Examples:
        "lg" -> Role(LG)
        "unionType" -> Role(UNION_TYPE)
        "unionType(Microsoft.IRecognizer)" -> Role(UNION_MEMBER, "Microsoft.IRecognizer")
        "other" -> None
    """
    if name == LG_ROLE:
        return Role(RoleKind.LG)
    if name == UNION_TYPE_ROLE:
        return Role(RoleKind.UNION_TYPE)
    if name.startswith(UNION_MEMBER_PREFIX) and name.endswith(UNION_MEMBER_SUFFIX):
        union_name = name[len(UNION_MEMBER_PREFIX) : -len(UNION_MEMBER_SUFFIX)]
        if union_name:
            return Role(RoleKind.UNION_MEMBER, union_name)
    return None


class RoleProcessor:
    """Applies the roles found in every type definition."""

    def __init__(self, definitions: dict[str, Any], meta_schema: dict[str, Any], diagnostics: Diagnostics):
        """
        Args:
            definitions: Type name -> root schema, mutated in place
            meta_schema: Umbrella meta-schema holding the canonical lg definition
            diagnostics: Where role misuse is recorded
        """
        self.definitions = definitions
        self.meta_schema = meta_schema
        self.diagnostics = diagnostics

    def process(self) -> None:
        for type_name in list(self.definitions):

            def visit(value: Any, parent: Any, key: Any, type_name: str = type_name) -> bool:
                if is_object(value):
                    for name in roles_of(value):
                        self.process_role(name, value, type_name, key)
                return False

            walk_json(self.definitions[type_name], visit)

    def process_role(self, name: str, node: dict[str, Any], type_name: str, key: str | int | None = None) -> None:
        """
        Apply one role name to a node.

        Args:
            name: Role name as written in $role
            node: Schema node carrying the role
            type_name: Type whose tree contains the node
            key: Key the node was reached by (None at the root of the type)
        """
        role = parse_role(name)
        if role is None:
            return
        if role.kind is RoleKind.LG:
            self._apply_lg(node, type_name, key)
        elif role.kind is RoleKind.UNION_TYPE:
            if key is not None:
                self.diagnostics.role_error(
                    type_name, "unionType $role can only be defined at the top of the schema definition."
                )
        elif role.kind is RoleKind.UNION_MEMBER:
            self._add_union_member(role.union_name, type_name)

    def _apply_lg(self, node: dict[str, Any], type_name: str, key: str | int | None) -> None:
        if not isinstance(key, str):
            self.diagnostics.role_error(type_name, "lg $role must be in a property definition.")
        if "type" in node:
            self.diagnostics.role_error(type_name, "$role:lg should not have a type.")
        lg_definition = self.meta_schema.get("definitions", {}).get(LG_ROLE, {})
        for prop, value in lg_definition.items():
            node[prop] = copy.deepcopy(value)

    def _add_union_member(self, union_name: str, type_name: str) -> None:
        union_definition = self.definitions.get(union_name)
        if union_definition is None:
            self.diagnostics.role_error(type_name, f"union type {union_name} is not defined.")
            return
        if not is_union_type(union_definition):
            self.diagnostics.role_error(union_name, "is missing $role of unionType.")
            return
        definition = self.definitions[type_name]
        union_definition.setdefault("oneOf", []).append(
            {
                "title": type_name,
                "description": definition.get("description", ""),
                "$ref": definition_ref(type_name),
            }
        )


def process_roles(definitions: dict[str, Any], meta_schema: dict[str, Any], diagnostics: Diagnostics) -> None:
    """Apply every $role of every type definition."""
    RoleProcessor(definitions, meta_schema, diagnostics).process()
