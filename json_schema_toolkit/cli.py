import json
import logging
from pathlib import Path

import click

from .cli_utils import load_config, load_json, reconstruct_command_line
from .codec import decode_value, encode
from .errors import UnsupportedSchemaError
from .fuzz import draw_samples
from .report import render_report
from .validator import validate


@click.group()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr")
@click.pass_context
def json_schema_toolkit(ctx, config, verbose):
    """Validate, generate and normalize JSON Schema documents."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = load_config(config)


@json_schema_toolkit.command(name="validate")
@click.option("--strict-refs", is_flag=True, default=False, help="Report references to missing definitions")
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write the report to a file")
@click.argument("schema_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("instance_path", type=click.Path(exists=True, resolve_path=True))
@click.pass_obj
def validate_command(config, strict_refs, output, schema_path, instance_path):
    """Validate INSTANCE_PATH against SCHEMA_PATH."""
    schema = decode_value(load_json(schema_path))
    instance = load_json(instance_path)

    # CLI flag overrides the config file
    if strict_refs:
        config.validator.strict_refs = True

    errors = validate(schema, instance, config.validator)
    report = render_report(
        errors,
        source=Path(instance_path).name,
        command=reconstruct_command_line(validate_command),
    )
    if output is not None:
        with open(output, "w") as f:
            f.write(report)
    else:
        click.echo(report, nl=False)

    if errors:
        click.get_current_context().exit(1)


@json_schema_toolkit.command(name="generate")
@click.option("--count", "-n", default=10, type=click.IntRange(min=1), help="Number of values to draw")
@click.option("--seed", default=None, type=int, help="Seed for reproducible output")
@click.argument("schema_path", type=click.Path(exists=True, resolve_path=True))
@click.pass_obj
def generate_command(config, count, seed, schema_path):
    """Print values drawn from SCHEMA_PATH, one JSON document per line."""
    schema = decode_value(load_json(schema_path))
    try:
        samples = draw_samples(schema, count, seed=seed, config=config.fuzz)
    except UnsupportedSchemaError as e:
        raise click.ClickException(f"Cannot generate values for {Path(schema_path).name}: {e}") from e
    for sample in samples:
        click.echo(json.dumps(sample))


@json_schema_toolkit.command(name="normalize")
@click.option("--indent", default=2, type=int)
@click.argument("schema_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def normalize_command(indent, schema_path, output):
    """Decode SCHEMA_PATH and encode it again, to OUTPUT or stdout."""
    out = encode(decode_value(load_json(schema_path)), indent=indent)
    if output is not None:
        with open(output, "w") as f:
            f.write(out + "\n")
    else:
        click.echo(out)
