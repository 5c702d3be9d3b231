"""
End-to-end tests for merging component schema files.
"""

from __future__ import annotations

import json

import pytest

from cog_schema.pipeline import MergeConfig, SchemaComposer
from cog_schema.reporter import DiagnosticKind

FOO = {
    "$role": "unionType(Bar)",
    "type": "object",
    "properties": {"x": {"type": "string"}},
    "required": ["x"],
}
BAR = {"$role": "unionType"}


@pytest.fixture
def output(tmp_path):
    return str(tmp_path / "out" / "app.schema")


@pytest.fixture
def composer(output, meta_schema):
    return SchemaComposer(MergeConfig(output=output), meta_schema=meta_schema)


class TestCompose:
    def test_union_and_member(self, composer, write_schema):
        paths = [write_schema("Foo.schema", FOO), write_schema("Bar.schema", BAR)]
        result = composer.compose(paths)

        assert not result.failed
        schema = result.schema
        assert schema["definitions"]["Bar"]["oneOf"] == [
            {"title": "Foo", "description": "", "$ref": "#/definitions/Foo"}
        ]
        assert [entry["title"] for entry in schema["oneOf"]] == ["Foo"]
        assert list(schema["definitions"]) == ["Bar", "Foo"]

        foo = schema["definitions"]["Foo"]
        assert foo["required"] == ["$type"]
        assert foo["anyOf"] == [
            {"title": "Reference", "required": ["$copy"]},
            {"title": "Type", "required": ["x"]},
        ]
        assert list(foo["properties"]) == ["$type", "$copy", "$id", "x"]
        assert foo["properties"]["$type"]["const"] == "Foo"

    def test_definitions_are_sorted_type_names(self, composer, write_schema):
        paths = [
            write_schema("c/Zeta.schema", {"type": "object"}),
            write_schema("a/Alpha.schema", {"type": "object"}),
            write_schema("b/Mid.schema", {"type": "object"}),
        ]
        result = composer.compose(paths)
        assert list(result.schema["definitions"]) == ["Alpha", "Mid", "Zeta"]
        assert [entry["title"] for entry in result.schema["oneOf"]] == ["Alpha", "Mid", "Zeta"]

    def test_union_members_sorted_regardless_of_discovery_order(self, composer, write_schema):
        paths = [
            write_schema("B.schema", {"$role": "unionType(U)"}),
            write_schema("A.schema", {"$role": "unionType(U)"}),
            write_schema("U.schema", {"$role": "unionType"}),
        ]
        result = composer.compose(paths)
        assert [entry["title"] for entry in result.schema["definitions"]["U"]["oneOf"]] == ["A", "B"]

    def test_type_reference_and_namespaced_definitions(self, composer, write_schema):
        paths = [
            write_schema(
                "List.schema",
                {
                    "type": "object",
                    "definitions": {
                        "node": {"type": "object", "properties": {"next": {"$ref": "#/definitions/node"}}},
                    },
                    "properties": {
                        "head": {"$ref": "#/definitions/node"},
                        "item": {"$type": "Item"},
                    },
                },
            ),
            write_schema("Item.schema", {"type": "object"}),
        ]
        result = composer.compose(paths)

        assert not result.failed
        properties = result.schema["definitions"]["List"]["properties"]
        assert properties["item"] == {"$ref": "#/definitions/Item"}
        assert properties["head"]["properties"]["next"] == {"$ref": "#/definitions/List/definitions/node"}

    def test_missing_type_reported_once(self, composer, write_schema):
        path = write_schema(
            "A.schema",
            {
                "properties": {
                    "a": {"$type": "Zed"},
                    "b": {"$type": "Zed"},
                    "c": {"type": "array", "items": {"$type": "Zed"}},
                }
            },
        )
        result = composer.compose([path])

        assert result.failed
        assert [d.type_name for d in result.diagnostics.of_kind(DiagnosticKind.MISSING_TYPE)] == ["Zed"]

    def test_top_level_id_is_skipped(self, composer, write_schema, capsys):
        paths = [write_schema("Done.schema", {"$id": "app.schema", "type": "object"}), write_schema("A.schema", {})]
        result = composer.compose(paths)

        assert not result.failed
        assert list(result.schema["definitions"]) == ["A"]
        assert "Skipping because of top-level $id:app.schema." in capsys.readouterr().out

    def test_missing_type_defaults_to_object(self, composer, write_schema):
        result = composer.compose([write_schema("A.schema", {"properties": {"x": {"type": "string"}}})])
        assert result.schema["definitions"]["A"]["type"] == "object"

    def test_schema_keyword_is_dropped(self, composer, write_schema):
        path = write_schema("A.schema", {"$schema": "http://json-schema.org/draft-07/schema#", "type": "object"})
        result = composer.compose([path])
        assert "$schema" not in result.schema["definitions"]["A"]

    def test_lg_property(self, composer, write_schema, meta_schema):
        path = write_schema("A.schema", {"type": "object", "properties": {"prompt": {"$role": "lg"}}})
        result = composer.compose([path])

        assert not result.failed
        prompt = result.schema["definitions"]["A"]["properties"]["prompt"]
        assert prompt["type"] == meta_schema["definitions"]["lg"]["type"]

    def test_validation_errors_are_recorded(self, composer, write_schema):
        path = write_schema("A.schema", {"type": "object", "properties": {"x": {"type": "strin"}}})
        result = composer.compose([path])

        [diagnostic] = result.diagnostics.of_kind(DiagnosticKind.SCHEMA_VALIDATION)
        assert diagnostic.type_name == "A"
        assert diagnostic.message.startswith(".properties.x.type ")
        assert "A" in result.schema["definitions"]

    def test_load_error_skips_only_that_file(self, composer, write_schema, tmp_path):
        broken = tmp_path / "Broken.schema"
        broken.write_text("{", encoding="utf-8")
        result = composer.compose([str(broken), write_schema("A.schema", {"type": "object"})])

        assert [d.kind for d in result.diagnostics.records] == [DiagnosticKind.PARSE]
        assert list(result.schema["definitions"]) == ["A"]

    def test_recursion_through_another_file_is_a_load_error(self, composer, write_schema):
        write_schema("common/tree.json", {"definitions": {"node": {"type": "array", "items": {"$ref": "#/definitions/node"}}}})
        path = write_schema("A.schema", {"properties": {"root": {"$ref": "common/tree.json#/definitions/node"}}})
        result = composer.compose([path])

        assert [d.kind for d in result.diagnostics.records] == [DiagnosticKind.PARSE]
        assert result.failed

    def test_recursive_definition_reference_is_namespaced(self, composer, write_schema):
        path = write_schema(
            "A.schema",
            {
                "definitions": {"node": {"type": "array", "items": {"$ref": "#/definitions/node"}}},
                "properties": {"root": {"$ref": "#/definitions/node"}},
            },
        )
        result = composer.compose([path])

        assert not result.failed
        a = result.schema["definitions"]["A"]
        assert a["properties"]["root"]["items"] == {"$ref": "#/definitions/A/definitions/node"}
        assert "node" in a["definitions"]

    def test_role_errors_do_not_stop_other_passes(self, composer, write_schema):
        paths = [
            write_schema("A.schema", {"$role": "unionType(Nope)", "properties": {"b": {"$type": "B"}}}),
            write_schema("B.schema", {"type": "object"}),
        ]
        result = composer.compose(paths)

        assert [d.kind for d in result.diagnostics.records] == [DiagnosticKind.ROLE_USAGE]
        assert result.schema["definitions"]["A"]["properties"]["b"] == {"$ref": "#/definitions/B"}


class TestRun:
    def test_writes_output(self, composer, write_schema, output, capsys):
        paths = [write_schema("Foo.schema", FOO), write_schema("Bar.schema", BAR)]
        result = composer.run(paths)

        assert result.written
        with open(output) as f:
            text = f.read()
        assert json.loads(text) == result.schema
        assert '\n    "$schema"' in text
        assert result.schema["$id"] == "app.schema"
        assert "Writing" in capsys.readouterr().out

    def test_nothing_written_on_failure(self, composer, write_schema, output, capsys):
        result = composer.run([write_schema("A.schema", {"properties": {"a": {"$type": "Zed"}}})])

        assert not result.written
        with pytest.raises(FileNotFoundError):
            open(output)
        out = capsys.readouterr().out
        assert "Missing Zed schema file from merge." in out
        assert "Could not merge schemas" in out

    def test_after_write_receives_output_and_config(self, composer, write_schema, output):
        composer.config.flat = False
        calls = []
        composer.run([write_schema("A.schema", {"type": "object"})], after_write=lambda path, config: calls.append((str(path), config.flat)))
        assert calls == [(output, False)]

    def test_after_write_not_called_on_failure(self, composer, write_schema):
        calls = []
        composer.run([write_schema("A.schema", {"$type": "Zed"})], after_write=lambda path, config: calls.append(path))
        assert calls == []
