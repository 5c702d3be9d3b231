"""
The umbrella meta-schema every component schema is validated against.

The meta-schema is a standard JSON Schema meta-schema extended with the
cog_schema keywords ($role, $type, $copy and the lg definition). It is
cached in a local file; when that file is missing it is generated once by
fetching the standard meta-schema named by the base template's ``$schema``
and overlaying the template on it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import requests

from ..errors import MetaSchemaError
from ..reporter import Reporter
from .atomic_writer import AtomicWriter
from .config import MergeConfig

GENERATED_COMMENT = "This file is generated by running the cog_schema tool when there is not a cogSchema.schema file."


def fetch_json(url: str, timeout: float) -> dict[str, Any]:
    """
    Fetch a JSON document over HTTP(S).

    Raises:
        MetaSchemaError: On network errors, HTTP errors or a non-JSON body
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise MetaSchemaError(f"Cannot fetch meta-schema {url}: {e}") from e
    except ValueError as e:
        raise MetaSchemaError(f"Meta-schema {url} is not valid JSON: {e}") from e


def overlay(meta_schema: dict[str, Any], template: dict[str, Any]) -> dict[str, Any]:
    """
    Overlay a base template on a fetched meta-schema, in place.

    String values of the template replace the meta-schema's value. Mapping
    values are copied key by key into the meta-schema's mapping of the same
    name.
    """
    for prop, value in template.items():
        if isinstance(value, dict):
            target = meta_schema.get(prop)
            if not isinstance(target, dict):
                target = meta_schema[prop] = {}
            for sub_prop, sub_value in value.items():
                target[sub_prop] = sub_value
        else:
            meta_schema[prop] = value
    return meta_schema


def read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MetaSchemaError(f"Cannot read {path}: {e}") from e


def generate_meta_schema(config: MergeConfig) -> dict[str, Any]:
    """Build the meta-schema from the base template and the fetched standard meta-schema."""
    template = read_json(Path(config.base_meta_schema_path))
    url = template.get("$schema")
    if not isinstance(url, str):
        raise MetaSchemaError(f"{config.base_meta_schema_path} has no $schema to extend.")
    meta_schema = overlay(fetch_json(url, config.fetch_timeout), template)
    meta_schema["$comment"] = GENERATED_COMMENT
    return meta_schema


def get_meta_schema(config: MergeConfig, reporter: Reporter) -> dict[str, Any]:
    """
    Return the umbrella meta-schema, generating and caching it if needed.

    Args:
        config: Provides the cache and base template paths
        reporter: Receives the generating/loading progress line

    Raises:
        MetaSchemaError: If the meta-schema can be neither read nor generated
    """
    path = Path(config.meta_schema_path)
    if not path.exists():
        reporter.progress(f"Generating {path.name}")
        meta_schema = generate_meta_schema(config)
        AtomicWriter().write(path, json.dumps(meta_schema, indent=config.indent, ensure_ascii=False))
        return meta_schema

    reporter.progress(f"Loading {path.name}")
    return read_json(path)
