"""
CLI utilities for command line reconstruction and file loading.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from .config import ToolkitConfig

PROG_NAME = "json_schema_toolkit"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the invoked command line from the current Click context.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string, or the program name when no
        command is running
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROG_NAME

    cmd_parts = [ctx.command_path or PROG_NAME]
    cli_args = ctx.params
    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if value is None or value is False:
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)
    return " ".join(cmd_parts)


def load_json(path: str | Path) -> Any:
    """Read a JSON document, turning parse failures into a CLI error."""
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{path} is not valid JSON: {e}") from e


def load_config(path: str | Path | None) -> ToolkitConfig:
    """Load a `--config` file, or the defaults when no file is given."""
    if path is None:
        return ToolkitConfig()
    config = load_json(path)
    if not isinstance(config, dict):
        raise click.ClickException(f"{path} must contain a JSON object")
    return ToolkitConfig.from_dict(config)
