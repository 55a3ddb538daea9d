"""Command-line interface for jsontree: validate and re-format JSON files."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .core.accessor import get_path
from .core.engine import parse
from .core.serializer import dumps
from .security.exceptions import ParseError
from .utils.config import ParseConfig, ParseLimits

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.version_option(version=__version__)
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--validate", "-v", is_flag=True, help="Validate only (no output)")
@click.option("--pretty", "-p", is_flag=True, help="Pretty-print JSON (the default)")
@click.option("--compact", "-c", is_flag=True, help="Compact JSON (minified)")
@click.option(
    "--indent", default=2, show_default=True, type=click.IntRange(min=0),
    help="Spaces per level when pretty-printing",
)
@click.option(
    "--max-depth", default=128, show_default=True, type=click.IntRange(min=1),
    help="Maximum nesting of arrays and objects",
)
@click.option(
    "--get", "paths", multiple=True, metavar="PATH",
    help="Print only the value at a dotted path such as 'items.0.name' (repeatable)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(
    input_file: Path,
    validate: bool,
    pretty: bool,
    compact: bool,
    indent: int,
    max_depth: int,
    paths: tuple[str, ...],
    verbose: bool,
) -> None:
    """Validate INPUT_FILE against the JSON grammar and print it back.

    Exits with status 0 when the file is valid JSON and 1 when it is not or
    cannot be read.
    """
    if pretty and compact:
        raise click.UsageError("--pretty and --compact are mutually exclusive")
    mode = "compact" if compact else "pretty"
    _configure_logging(verbose)

    try:
        data = input_file.read_bytes()
    except OSError as e:
        click.echo(f"Error: Cannot open file: {input_file} ({e.strerror})", err=True)
        sys.exit(1)

    if not data:
        click.echo(f"Error: File is empty: {input_file}", err=True)
        sys.exit(1)

    logger.debug("Parsing %s (%d bytes)", input_file, len(data))
    config = ParseConfig(limits=ParseLimits(max_nesting_depth=max_depth))
    try:
        document = parse(data, config)
    except ParseError as e:
        if validate:
            click.echo(f"Invalid JSON: {e}", err=True)
        else:
            click.echo(f"JSON parse error: {e.describe()}", err=True)
        sys.exit(1)

    if validate:
        click.echo("Valid JSON")
        return

    if not paths:
        click.echo(dumps(document, mode, indent=indent))
        return

    missing = False
    for path in paths:
        selected = get_path(document, path)
        if selected is None:
            click.echo(f"No value at path '{path}'", err=True)
            missing = True
            continue
        click.echo(dumps(selected, mode, indent=indent))
    if missing:
        sys.exit(1)


if __name__ == "__main__":
    main()
