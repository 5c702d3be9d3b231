"""
Configuration for the schema merge pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

DEFAULT_OUTPUT = "app.schema"
DEFAULT_META_SCHEMA = SCHEMAS_DIR / "cogSchema.schema"
DEFAULT_BASE_META_SCHEMA = SCHEMAS_DIR / "baseCogSchema.schema"


@dataclass
class MergeConfig:
    """Configuration options for merging component schemas."""

    # Path of the composite schema to write
    output: str = DEFAULT_OUTPUT

    # Flat (True) or hierarchical (False) template naming, None = keep what the output uses
    flat: bool | None = None

    # Cached umbrella meta-schema, generated from base_meta_schema_path when missing
    meta_schema_path: str = str(DEFAULT_META_SCHEMA)

    # Template overlaid on the fetched standard meta-schema
    base_meta_schema_path: str = str(DEFAULT_BASE_META_SCHEMA)

    # Indentation of written JSON files
    indent: int = 4

    # Seconds to wait when fetching the standard meta-schema
    fetch_timeout: float = 30.0

    # Extra glob patterns merged with the ones given on the command line
    patterns: list[str] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict) -> MergeConfig:
        """Create a config from a dictionary."""
        config = MergeConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "output": self.output,
            "flat": self.flat,
            "meta_schema_path": self.meta_schema_path,
            "base_meta_schema_path": self.base_meta_schema_path,
            "indent": self.indent,
            "fetch_timeout": self.fetch_timeout,
            "patterns": self.patterns,
        }
