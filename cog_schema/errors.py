"""
Exceptions raised by cog_schema.
"""

from __future__ import annotations


class CogSchemaError(Exception):
    """Base class for cog_schema errors."""

    pass


class SchemaLoadError(CogSchemaError):
    """Raised when an input schema cannot be read, dereferenced or flattened.

    This can happen when:
    - The file is not valid JSON
    - A $ref points at a missing file or a missing JSON pointer
    - allOf branches declare incompatible values for the same keyword
    """

    pass


class MetaSchemaError(CogSchemaError):
    """Raised when the umbrella meta-schema cannot be loaded or generated."""

    pass
