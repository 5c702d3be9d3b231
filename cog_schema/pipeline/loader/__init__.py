"""
Input loading: $ref dereferencing and allOf flattening.
"""

from __future__ import annotations

from .allof import merge_all_of, merge_schema
from .dereference import Dereferencer, resolve_pointer, split_ref
from .loader import SchemaLoader

__all__ = [
    "SchemaLoader",
    "Dereferencer",
    "merge_all_of",
    "merge_schema",
    "resolve_pointer",
    "split_ref",
]
