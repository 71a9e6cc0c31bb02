import json

import pytest
from click.testing import CliRunner

from json_schema_toolkit.cli import json_schema_toolkit

PERSON = {
    "type": "object",
    "properties": {
        "lastName": {"type": "string", "minLength": 1},
        "age": {"type": "integer", "minimum": 0},
    },
    "required": ["lastName"],
}


@pytest.fixture
def runner():
    return CliRunner()


def write_json(path, value):
    path.write_text(json.dumps(value))
    return str(path)


class TestValidate:
    def test_valid_instance(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        instance = write_json(tmp_path / "ada.json", {"lastName": "Lovelace", "age": 36})
        result = runner.invoke(json_schema_toolkit, ["validate", schema, instance])
        assert result.exit_code == 0, result.output
        assert "ada.json: valid" in result.output

    def test_invalid_instance_exits_with_one(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        instance = write_json(tmp_path / "bad.json", {"age": -1})
        result = runner.invoke(json_schema_toolkit, ["validate", schema, instance])
        assert result.exit_code == 1
        assert "bad.json: 2 errors" in result.output
        assert "/: is missing required property 'lastName'" in result.output
        assert "/age: must be >= 0" in result.output

    def test_report_header_names_the_command(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        instance = write_json(tmp_path / "ada.json", {"lastName": "Lovelace"})
        result = runner.invoke(json_schema_toolkit, ["validate", schema, instance])
        header = result.output.splitlines()[0]
        assert header.startswith("# ")
        assert "validate person.json ada.json" in header

    def test_strict_refs_flag(self, runner, tmp_path):
        schema = write_json(tmp_path / "ref.json", {"$ref": "#/definitions/missing"})
        instance = write_json(tmp_path / "value.json", 3)
        assert runner.invoke(json_schema_toolkit, ["validate", schema, instance]).exit_code == 0
        result = runner.invoke(json_schema_toolkit, ["validate", "--strict-refs", schema, instance])
        assert result.exit_code == 1
        assert "Unresolved reference" in result.output

    def test_circular_reference_is_reported(self, runner, tmp_path):
        schema = write_json(tmp_path / "loop.json", {"$ref": "#/definitions/a", "definitions": {"a": {"$ref": "#/definitions/a"}}})
        instance = write_json(tmp_path / "value.json", 3)
        result = runner.invoke(json_schema_toolkit, ["validate", schema, instance])
        assert result.exit_code == 1
        assert "/: Circular reference '#/definitions/a'" in result.output

    def test_strict_refs_from_config_file(self, runner, tmp_path):
        config = write_json(tmp_path / "config.json", {"validator": {"strict_refs": True}})
        schema = write_json(tmp_path / "ref.json", {"$ref": "#/definitions/missing"})
        instance = write_json(tmp_path / "value.json", 3)
        result = runner.invoke(json_schema_toolkit, ["--config", config, "validate", schema, instance])
        assert result.exit_code == 1

    def test_output_file(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        instance = write_json(tmp_path / "ada.json", {"lastName": "Lovelace"})
        report = tmp_path / "report.txt"
        result = runner.invoke(json_schema_toolkit, ["validate", "-o", str(report), schema, instance])
        assert result.exit_code == 0
        assert result.output == ""
        assert "ada.json: valid" in report.read_text()

    def test_malformed_instance(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        instance = tmp_path / "broken.json"
        instance.write_text("{")
        result = runner.invoke(json_schema_toolkit, ["validate", schema, str(instance)])
        assert result.exit_code == 1
        assert "is not valid JSON" in result.output


class TestGenerate:
    def test_generates_valid_lines(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        result = runner.invoke(json_schema_toolkit, ["generate", "--count", "5", "--seed", "3", schema])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert 1 <= len(lines) <= 5
        for line in lines:
            value = json.loads(line)
            assert isinstance(value["lastName"], str)
            assert len(value["lastName"]) >= 1

    def test_seed_is_reproducible(self, runner, tmp_path):
        schema = write_json(tmp_path / "int.json", {"type": "integer", "minimum": 0, "maximum": 1000})
        args = ["generate", "-n", "4", "--seed", "11", schema]
        assert runner.invoke(json_schema_toolkit, args).output == runner.invoke(json_schema_toolkit, args).output

    def test_unsupported_schema(self, runner, tmp_path):
        schema = write_json(tmp_path / "one_of.json", {"oneOf": [{"type": "integer"}]})
        result = runner.invoke(json_schema_toolkit, ["generate", schema])
        assert result.exit_code == 1
        assert "Cannot generate values for one_of.json" in result.output

    def test_count_must_be_positive(self, runner, tmp_path):
        schema = write_json(tmp_path / "int.json", {"type": "integer"})
        result = runner.invoke(json_schema_toolkit, ["generate", "-n", "0", schema])
        assert result.exit_code == 2


class TestNormalize:
    def test_normalize_to_stdout(self, runner, tmp_path):
        raw = {"required": [], "properties": {}, "type": "object", "title": "Empty"}
        schema = write_json(tmp_path / "empty.json", raw)
        result = runner.invoke(json_schema_toolkit, ["normalize", schema])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"type": "object", "title": "Empty", "properties": {}}

    def test_normalize_to_file(self, runner, tmp_path):
        schema = write_json(tmp_path / "person.json", PERSON)
        output = tmp_path / "out.json"
        result = runner.invoke(json_schema_toolkit, ["normalize", "--indent", "4", schema, str(output)])
        assert result.exit_code == 0
        assert json.loads(output.read_text()) == PERSON
