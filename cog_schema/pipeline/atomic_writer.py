"""
Atomic file writer for the merged schema and the meta-schema cache.

Ensures that file writes are atomic so an interrupted run never leaves a
truncated schema behind.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from ..errors import CogSchemaError


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Check that the content is a JSON object
    3. Atomically replace the target file
    """

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: JSON text to write

        Raises:
            CogSchemaError: If content is not a JSON object
            OSError: If file operations fail
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.write("\n")

            self._validate_json(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _validate_json(self, content: str) -> None:
        """
        Raises:
            CogSchemaError: If content does not parse as a JSON object
        """
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise CogSchemaError(f"Generated schema is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise CogSchemaError("Generated schema is not a JSON object")
