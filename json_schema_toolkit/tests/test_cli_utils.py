#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from json_schema_toolkit.cli import json_schema_toolkit, validate_command
from json_schema_toolkit.cli_utils import load_config, load_json, reconstruct_command_line


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the program name is returned"""
        assert reconstruct_command_line(validate_command) == "json_schema_toolkit"

    def test_reconstruct_command_line_inside_command(self, tmp_path):
        seen = []

        @click.command()
        @click.option("--flag", is_flag=True, default=False)
        @click.option("--level", default=1, type=int)
        @click.argument("path", type=click.Path(exists=True, resolve_path=True))
        def probe(flag, level, path):
            seen.append(reconstruct_command_line(probe))

        target = tmp_path / "doc.json"
        target.write_text("{}")
        result = CliRunner().invoke(probe, [str(target), "--flag", "--level", "1"], prog_name="probe")
        assert result.exit_code == 0, result.output
        # Defaults are dropped and paths are shown by name
        assert seen == ["probe doc.json --flag"]

    def test_load_json_rejects_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{nope")
        with pytest.raises(click.ClickException):
            load_json(path)

    def test_load_config_defaults(self):
        assert load_config(None).validator.strict_refs is False

    def test_load_config_requires_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(click.ClickException):
            load_config(path)

    def test_group_is_a_click_group(self):
        assert isinstance(json_schema_toolkit, click.Group)


if __name__ == "__main__":
    pytest.main([__file__])
