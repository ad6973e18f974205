#!/usr/bin/env python3
"""
badavi.cli.cli

Typer-based CLI converting a folder of Markdown documents into a static
HTML site.

Examples
--------
Convert ``docs/`` into ``./badavi-output``:

    badavi docs

Convert with an explicit configuration and output folder:

    badavi docs site --config badavi-config.json
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from badavi import __version__
from badavi.application.results import RunSummary
from badavi.errors import BadaviError

DEFAULT_OUTPUT = "badavi-output"
PARTIAL_FAILURE_EXIT_CODE = 2

app = typer.Typer(
    name="badavi",
    help="Converts a collection of Markdown files into a static website.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route package log records to stderr at the requested level."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", force=True)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised during the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _report(summary: RunSummary) -> int:
    """Print the run summary and return the exit code."""
    for outcome in summary.outcomes:
        if outcome.reason:
            typer.echo(f"✗ {outcome.relative_path}: {outcome.reason}", err=True)
    typer.echo(
        f"Processed {len(summary.outcomes)} file(s): {summary.succeeded} succeeded, "
        f"{summary.failed} failed, {summary.skipped} skipped."
    )
    if summary.ok:
        return 0
    return PARTIAL_FAILURE_EXIT_CODE


@app.command()
def main(
    input_folder: Path = typer.Argument(
        ...,
        help="Path to the input folder containing Markdown files.",
    ),
    output_folder: Path = typer.Argument(
        Path(DEFAULT_OUTPUT),
        help=f"Path to the output folder (defaults to ./{DEFAULT_OUTPUT}).",
        show_default=False,
    ),
    config: Path | None = typer.Option(
        None, "-c", "--config", help="Path to the badavi-config.json file."
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop after the first file that fails."
    ),
    workers: int = typer.Option(
        1, "--workers", min=1, help="Number of files converted concurrently."
    ),
    timeout: float = typer.Option(
        120.0, "--timeout", min=1.0, help="Seconds allowed per pandoc run."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
    quiet: bool = typer.Option(False, "--quiet", help="Only show warnings and errors."),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Output the current version.",
    ),
) -> None:
    """Convert INPUT_FOLDER into a mirrored tree of standalone HTML files.

    Parameters
    ----------
    input_folder : Path
        Folder holding Markdown documents and assets.
    output_folder : Path
        Destination folder for the generated site.
    config : Path | None, default=None
        Explicit configuration file; defaults to ``badavi-config.json`` in
        the input folder.

    Notes
    -----
    - Exit code 0 means every file succeeded, 2 that some files failed or
      were skipped, 1 a fatal error before processing.
    """
    del version
    _configure_logging(verbose, quiet)

    resolved_input = input_folder.resolve()
    resolved_output = output_folder.resolve()
    typer.echo(f"Input Folder: {resolved_input}")
    typer.echo(f"Output Folder: {resolved_output}")

    try:
        from badavi.api import convert_directory

        summary = convert_directory(
            resolved_input,
            resolved_output,
            config_path=config.resolve() if config is not None else None,
            fail_fast=fail_fast,
            workers=workers,
            engine_timeout=timeout,
        )
    except BadaviError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    code = _report(summary)
    if code:
        raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
