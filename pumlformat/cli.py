"""
Reformats PlantUML diagram sources.
Reads a file (or stdin) and writes the formatted diagram to stdout or to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from .config import build_config
from .exceptions import ConfigError, SourceError
from .filesystem import get_max_file_size, read_source, write_output
from .formatter import format_text

__all__ = ["cli"]

STDIO_PATH = "-"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int) -> None:
    """Send library log records to stderr when verbose output is requested.

    Args:
        verbosity: ``0`` keeps logging silent, ``1`` shows INFO, ``2`` or more
            shows the per-line DEBUG trace.
    """
    if verbosity <= 0:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("pumlformat")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(logging.INFO if verbosity == 1 else logging.DEBUG)


def _read_input(input_path: str, max_file_size: int) -> str:
    if input_path == STDIO_PATH:
        content = click.get_text_stream("stdin").read()
        if len(content.encode("UTF-8")) > max_file_size:
            raise SourceError(
                f"Standard input exceeds the maximum allowed size of {max_file_size} bytes."
            )
        return content
    return read_source(Path(input_path), max_file_size)


@click.command()
@click.version_option()
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="Output file (default: stdout)",
)
@click.option(
    "-i", "--indent", "indent_width", type=int, help="Number of spaces per nesting level (default: 4)"
)
@click.option("--check", is_flag=True, help="Exit with status 1 if the input is not formatted")
@click.option("-v", "--verbose", count=True, help="Log block tracking to stderr (-vv for every line)")
@click.argument(
    "input_path",
    required=False,
    default=STDIO_PATH,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
def cli(
    input_path: str,
    output_path: str | None = None,
    indent_width: int | None = None,
    check: bool = False,
    verbose: int = 0,
):
    """
    Format a PlantUML diagram with consistent indentation and spacing.

    Args:
        input_path: PlantUML file to format, or ``-`` for stdin.
        output_path: Destination file; stdout when omitted or ``-``.
        indent_width: Override for the number of spaces per nesting level.
        check: Report whether the input needs formatting instead of writing it.
        verbose: Logging verbosity.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration or `--indent` value is invalid.
        click.ClickException: If the input cannot be read or the output cannot
            be written. Nothing is written in that case.

    Examples:
        pumlformat sequence.puml --indent 2 -o sequence.puml
        cat sequence.puml | pumlformat --check
    """
    configure_logging(verbose)

    reads_stdin = input_path == STDIO_PATH
    search_path = Path.cwd() if reads_stdin else Path(input_path).resolve().parent
    try:
        config = build_config(search_path, indent_width=indent_width)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        content = _read_input(input_path, max_file_size)
    except SourceError as error:
        raise click.ClickException(str(error)) from error

    formatted = format_text(content, config.indent_width)

    if check:
        if formatted != content:
            source_name = "<stdin>" if reads_stdin else input_path
            click.echo(f"{source_name} would be reformatted", err=True)
            sys.exit(1)
        return

    if output_path is None or output_path == STDIO_PATH:
        click.echo(formatted, nl=False)
        return

    try:
        write_output(Path(output_path), formatted)
    except SourceError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
