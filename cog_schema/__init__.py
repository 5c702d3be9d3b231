"""Cog Schema

Merges independently authored component JSON schemas into a single
composite schema, resolving union membership declared through $role
and namespacing each component's internal references.
"""

__version__ = "1.0.1"

from .errors import CogSchemaError, MetaSchemaError, SchemaLoadError
from .pipeline import MergeConfig, MergeResult, SchemaComposer
from .reporter import Diagnostic, DiagnosticKind, Diagnostics, Reporter

__all__ = [
    "SchemaComposer",
    "MergeConfig",
    "MergeResult",
    "Reporter",
    "Diagnostics",
    "Diagnostic",
    "DiagnosticKind",
    "CogSchemaError",
    "SchemaLoadError",
    "MetaSchemaError",
]
