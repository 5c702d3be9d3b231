"""
Pipeline - merges component JSON schemas into one composite schema.

1. Loader: inline $ref and flatten allOf per input file
2. Validation: check each schema against the umbrella meta-schema
3. ReferenceRewriter: namespace internal #/definitions references per type
4. RoleProcessor: apply $role (lg, unionType, unionType(X))
5. TitleAnnotator: title untitled oneOf branches from their type
6. TypeExpander: turn $type names into $ref
7. PropertyInjector: $type/$copy/$id, closed objects, reference-or-full required
8. UnionSorter: order union members by title
9. Assembler: root oneOf over concrete types + alphabetical definitions
"""

from __future__ import annotations

from .assembler import assemble
from .atomic_writer import AtomicWriter
from .composer import MergeResult, SchemaComposer, compose_definitions
from .config import MergeConfig
from .loader import SchemaLoader
from .meta_schema import get_meta_schema
from .validation import MetaSchemaValidator
from .walker import NodeKind, node_kind, walk_json

__all__ = [
    "SchemaComposer",
    "MergeResult",
    "MergeConfig",
    "SchemaLoader",
    "MetaSchemaValidator",
    "AtomicWriter",
    "assemble",
    "compose_definitions",
    "get_meta_schema",
    "walk_json",
    "node_kind",
    "NodeKind",
]
