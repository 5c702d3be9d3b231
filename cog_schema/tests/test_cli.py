#!/usr/bin/env python3

import json

from click.testing import CliRunner

from cog_schema import __version__
from cog_schema.cog_schema import cog_schema, parse_bool


def write(path, document):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")


class TestCli:
    """Test cases for the command line"""

    def test_merge_with_glob(self, tmp_path):
        write(tmp_path / "schemas" / "Foo.schema", {"$role": "unionType(Bar)", "type": "object"})
        write(tmp_path / "schemas" / "nested" / "Bar.schema", {"$role": "unionType"})
        output = tmp_path / "app.schema"

        result = CliRunner().invoke(cog_schema, ["-o", str(output), str(tmp_path / "schemas" / "**" / "*.schema")])

        assert result.exit_code == 0, result.output
        with open(output) as f:
            schema = json.load(f)
        assert list(schema["definitions"]) == ["Bar", "Foo"]
        assert "Parsing" in result.output

    def test_failed_merge_exits_with_error(self, tmp_path):
        write(tmp_path / "A.schema", {"$type": "Nope"})
        output = tmp_path / "app.schema"

        result = CliRunner().invoke(cog_schema, ["--output", str(output), str(tmp_path / "*.schema")])

        assert result.exit_code == 1
        assert not output.exists()
        assert "Could not merge schemas" in result.output

    def test_no_matching_files_prints_help(self, tmp_path):
        result = CliRunner().invoke(cog_schema, [str(tmp_path / "*.schema")])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_unknown_option(self):
        result = CliRunner().invoke(cog_schema, ["--bogus"])
        assert result.exit_code != 0
        assert "No such option" in result.output

    def test_version(self):
        result = CliRunner().invoke(cog_schema, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_file(self, tmp_path):
        write(tmp_path / "A.schema", {"type": "object"})
        output = tmp_path / "from_config.schema"
        config = tmp_path / "config.json"
        write(config, {"output": str(output), "patterns": [str(tmp_path / "*.schema")]})

        result = CliRunner().invoke(cog_schema, ["-c", str(config)])

        assert result.exit_code == 0, result.output
        with open(output) as f:
            assert json.load(f)["$id"] == "from_config.schema"

    def test_flat_value(self, tmp_path):
        write(tmp_path / "A.schema", {"type": "object"})
        output = tmp_path / "app.schema"

        result = CliRunner().invoke(cog_schema, ["-f", "false", "-o", str(output), str(tmp_path / "*.schema")])
        assert result.exit_code == 0, result.output

    def test_parse_bool(self):
        assert parse_bool(None, None, "true") is True
        assert parse_bool(None, None, "false") is False
        assert parse_bool(None, None, "yes") is False
        assert parse_bool(None, None, None) is None
