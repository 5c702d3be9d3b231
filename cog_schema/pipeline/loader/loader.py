"""
Loading of one component schema file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...errors import SchemaLoadError
from .allof import merge_all_of
from .dereference import Dereferencer


class SchemaLoader:
    """Loads input schemas with $ref inlined and allOf flattened."""

    def __init__(self, dereferencer: Dereferencer | None = None):
        self.dereferencer = dereferencer or Dereferencer()

    def load(self, path: str | Path) -> dict[str, Any]:
        """
        Load one schema file.

        Args:
            path: Schema file

        Returns:
            The flattened schema tree

        Raises:
            SchemaLoadError: If the file cannot be loaded or is not a schema object
        """
        schema = merge_all_of(self.dereferencer.dereference(path))
        if not isinstance(schema, dict):
            raise SchemaLoadError(f"{path} does not contain a schema object.")
        return schema
