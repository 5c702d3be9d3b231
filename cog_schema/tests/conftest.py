import json

import pytest

from cog_schema.pipeline.config import DEFAULT_META_SCHEMA


@pytest.fixture
def meta_schema():
    """The shipped umbrella meta-schema."""
    with open(DEFAULT_META_SCHEMA) as f:
        return json.load(f)


@pytest.fixture
def write_schema(tmp_path):
    """Write a JSON document under tmp_path and return its path as a string."""

    def _write(name, document):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=4), encoding="utf-8")
        return str(path)

    return _write
