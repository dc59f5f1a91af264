"""
Converts a directory of course outlines into HTML fragments.
Files starting with "content" become flat lists; files starting with "section"
become nested section trees.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import ConfigError, apply_overrides, build_config
from .dispatcher import run_batch
from .filesystem import get_max_file_size

__all__ = ["cli"]


def _warn(message: str) -> None:
    click.secho(message, fg="yellow", err=True)


@click.command()
@click.version_option()
@click.option("--log-file", help="Name of the error log written in the output directory")
@click.option(
    "--title-keyword",
    "title_keywords",
    multiple=True,
    help="Prefix marking a section title (repeatable)",
)
@click.option("--separator", help="Text placed between emitted fragments")
@click.option(
    "--strict-titles/--lenient-titles",
    default=None,
    help="Report section lines that are neither items nor titled sections",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every file processed")
@click.argument("input_dir", required=False, type=click.Path(file_okay=False))
@click.argument("output_dir", required=False, type=click.Path(file_okay=False))
def cli(
    input_dir: str | None = None,
    output_dir: str | None = None,
    log_file: str | None = None,
    title_keywords: tuple[str, ...] = (),
    separator: str | None = None,
    strict_titles: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a directory of course outlines.

    Args:
        input_dir: Directory holding the outline files (default: ``files``).
        output_dir: Directory receiving the converted files (default: ``out``).
        log_file: Override for the error log name.
        title_keywords: Overrides for the title keywords.
        separator: Override for the text placed between fragments.
        strict_titles: Whether untitled section lines are reported as errors.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If the size limit environment override is
            invalid, or the input directory cannot be read.

    Examples:
        course-outline files out --title-keyword Module --separator "\\n"
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = build_config(
            Path.cwd(),
            input_dir=input_dir,
            output_dir=output_dir,
            log_file=log_file,
            title_keywords=title_keywords,
            separator=separator,
            strict_titles=strict_titles,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    config = apply_overrides(config, max_file_size=max_file_size)

    click.echo("Courses parser started!")

    try:
        result = run_batch(
            Path(config.input_dir),
            Path(config.output_dir),
            config,
            warn=_warn,
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if result.created_output_dir:
        click.echo("Created output folder.")
    click.echo(f'{len(result.written)} file(s) written to "{config.output_dir}".')

    # Per-file errors are reported but never fail the run
    if len(result.errors):
        click.secho(
            f"{len(result.errors)} error(s) occurred. "
            f"Check {result.log_path} for more information.",
            fg="red",
            err=True,
        )

    click.echo("Script completed!")


if __name__ == "__main__":
    cli()
