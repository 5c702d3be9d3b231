import json

import click

from . import __version__
from .errors import CogSchemaError
from .pipeline import MergeConfig, SchemaComposer
from .reporter import Reporter
from .utils import expand_patterns


def parse_bool(ctx, param, value):
    if value is None:
        return None
    return value == "true"


@click.command(
    help=(
        "Take JSON Schema files and merge them into a single schema file where $ref are included "
        "and allOf are merged. Will also use $role to define union types."
    )
)
@click.version_option(__version__, "--version", "-v")
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Output path and filename for the unified schema (default app.schema).",
)
@click.option(
    "--flat",
    "-f",
    default=None,
    is_flag=False,
    flag_value="true",
    callback=parse_bool,
    help="Use flat (true) or hierarchical (false) naming for templates, true if given without a value.",
)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("patterns", nargs=-1)
@click.pass_context
def cog_schema(ctx, output, flat, config, patterns):
    if config is not None:
        with open(config) as f:
            config = MergeConfig.from_dict(json.load(f))
    else:
        config = MergeConfig()

    # CLI flags override the config file
    if output is not None:
        config.output = output
    if flat is not None:
        config.flat = flat

    paths = expand_patterns(list(patterns) + list(config.patterns))
    if not paths:
        click.echo(ctx.get_help())
        ctx.exit(0)

    reporter = Reporter()
    try:
        result = SchemaComposer(config, reporter).run(paths)
    except CogSchemaError as e:
        reporter.error(str(e))
        ctx.exit(1)

    if result.failed:
        ctx.exit(1)
