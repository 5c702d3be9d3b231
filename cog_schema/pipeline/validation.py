"""
Validation gate: checks each loaded schema against the umbrella meta-schema.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator
from jsonschema import exceptions as js_exceptions
from jsonschema.validators import validator_for

from ..errors import MetaSchemaError


def data_path(error: js_exceptions.ValidationError) -> str:
    """
    Location of a validation error inside the validated document.

    Examples:
        ["properties", "x", "type"] -> ".properties.x.type"
        ["oneOf", 0] -> ".oneOf[0]"
    """
    parts = []
    for part in error.absolute_path:
        parts.append(f"[{part}]" if isinstance(part, int) else f".{part}")
    return "".join(parts)


class MetaSchemaValidator:
    """Validates component schemas with the validator class the meta-schema asks for."""

    def __init__(self, meta_schema: dict[str, Any]):
        """
        Raises:
            MetaSchemaError: If the meta-schema is itself not a valid schema
        """
        cls = validator_for(meta_schema, default=Draft7Validator)
        try:
            cls.check_schema(meta_schema)
        except js_exceptions.SchemaError as e:
            raise MetaSchemaError(f"Invalid meta-schema: {e.message}") from e
        self._validator = cls(meta_schema)

    def errors(self, schema: Any) -> list[tuple[str, str]]:
        """
        Validate one schema.

        Returns:
            (data path, message) pairs ordered by location; empty when valid
        """
        errors = sorted(self._validator.iter_errors(schema), key=lambda e: [str(p) for p in e.absolute_path])
        return [(data_path(error), error.message) for error in errors]
