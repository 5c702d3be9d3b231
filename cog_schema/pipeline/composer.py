"""
Schema composition driver.

Loads every input schema, validates it against the umbrella meta-schema,
runs the composition passes in order and writes the composite schema when
no diagnostic was recorded.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import SchemaLoadError
from ..reporter import Diagnostics, Reporter
from ..utils import ID_KEY, is_union_type, type_name_from_path
from .assembler import assemble
from .atomic_writer import AtomicWriter
from .config import MergeConfig
from .loader import SchemaLoader
from .meta_schema import get_meta_schema
from .passes import (
    add_standard_properties,
    add_type_titles,
    expand_types,
    fix_definition_references,
    process_roles,
    sort_unions,
)
from .validation import MetaSchemaValidator

# Called with the written output path and the config once the schema is on disk
AfterWrite = Callable[[Path, MergeConfig], None]


def compose_definitions(definitions: dict[str, Any], meta_schema: dict[str, Any], diagnostics: Diagnostics) -> None:
    """
    Run the composition passes over loaded definitions, in place.

    The order matters: references are namespaced before union members add
    their own references, titles are added before types are expanded, and
    standard properties are injected after every $type has been expanded.
    """
    fix_definition_references(definitions)
    process_roles(definitions, meta_schema, diagnostics)
    add_type_titles(definitions)
    expand_types(definitions, diagnostics)
    add_standard_properties(definitions, meta_schema)
    sort_unions(definitions)


@dataclass
class MergeResult:
    """Outcome of one merge run."""

    diagnostics: Diagnostics
    definitions: dict[str, Any] = field(default_factory=dict)
    schema: dict[str, Any] | None = None
    written: bool = False

    @property
    def failed(self) -> bool:
        return self.diagnostics.failed


class SchemaComposer:
    """Merges component schema files into one composite schema."""

    def __init__(
        self,
        config: MergeConfig | None = None,
        reporter: Reporter | None = None,
        loader: SchemaLoader | None = None,
        meta_schema: dict[str, Any] | None = None,
    ):
        """
        Args:
            config: Merge options, defaults to MergeConfig()
            reporter: Console output, defaults to stdout
            loader: Input schema loader
            meta_schema: Umbrella meta-schema; read or generated from config when None
        """
        self.config = config or MergeConfig()
        self.reporter = reporter or Reporter()
        self.loader = loader or SchemaLoader()
        self._meta_schema = meta_schema

    @property
    def meta_schema(self) -> dict[str, Any]:
        if self._meta_schema is None:
            self._meta_schema = get_meta_schema(self.config, self.reporter)
        return self._meta_schema

    def load_definitions(self, paths: list[str], diagnostics: Diagnostics) -> dict[str, Any]:
        """
        Load, validate and register every input schema.

        A file that cannot be loaded is reported and skipped. A file whose root
        declares $id is skipped with a warning.

        Args:
            paths: Input files in discovery order
            diagnostics: Receives load and validation errors

        Returns:
            Type name -> schema, in discovery order
        """
        validator = MetaSchemaValidator(self.meta_schema)
        definitions: dict[str, Any] = {}
        sources: dict[str, str] = {}
        for path in paths:
            self.reporter.progress(f"Parsing {path}")
            type_name = type_name_from_path(path)
            try:
                schema = self.loader.load(path)
            except SchemaLoadError as e:
                diagnostics.thrown(e, type_name)
                continue

            if ID_KEY in schema:
                self.reporter.warning(f"  Skipping because of top-level $id:{schema[ID_KEY]}.")
                continue

            schema.pop("$schema", None)
            for location, message in validator.errors(schema):
                diagnostics.schema_error(location, message, type_name)

            if "type" not in schema and not is_union_type(schema):
                schema["type"] = "object"

            if type_name in definitions:
                self.reporter.warning(f"  {type_name} from {path} replaces the definition from {sources[type_name]}.")
            definitions[type_name] = schema
            sources[type_name] = path
        return definitions

    def compose(self, paths: list[str]) -> MergeResult:
        """
        Build the composite schema without writing it.

        Args:
            paths: Input files in discovery order

        Returns:
            MergeResult with the composed schema and every diagnostic
        """
        diagnostics = Diagnostics(self.reporter)
        definitions = self.load_definitions(paths, diagnostics)
        compose_definitions(definitions, self.meta_schema, diagnostics)
        schema = assemble(definitions, self.meta_schema, self.config.output)
        return MergeResult(diagnostics=diagnostics, definitions=definitions, schema=schema)

    def run(self, paths: list[str], after_write: AfterWrite | None = None) -> MergeResult:
        """
        Compose and write the composite schema.

        Nothing is written when any diagnostic was recorded.

        Args:
            paths: Input files in discovery order
            after_write: Optional step run on the written file, e.g. merging
                companion template files with ``config.flat`` naming

        Returns:
            MergeResult, ``written`` tells whether the output file was produced
        """
        result = self.compose(paths)
        if result.failed:
            self.reporter.error("Could not merge schemas")
            return result

        output = Path(self.config.output)
        self.reporter.result(f"Writing {output}")
        AtomicWriter().write(output, json.dumps(result.schema, indent=self.config.indent, ensure_ascii=False))
        result.written = True
        if after_write is not None:
            after_write(output, self.config)
        return result
