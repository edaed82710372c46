"""Typer application and CLI entry point for dtsgen.

Commands:

* ``dtsgen generate [SOURCE_DIR]`` -- convert every descriptor under the
  source directory into a sibling ``.d.ts`` file.
* ``dtsgen render DESCRIPTOR`` -- print the generated content for one
  descriptor to stdout without writing anything.

:func:`main` is the ``dtsgen`` console script. An exception that is not a
:class:`~dtsgen.exceptions.DtsgenError` leaves a traceback in
``<data dir>/logs``.

See Also:
    :mod:`dtsgen.config`: Configuration precedence for ``generate``.
    :mod:`dtsgen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from dtsgen import __version__
from dtsgen.exceptions import DtsgenError
from dtsgen.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED, EXIT_PARTIAL_FAILURE
from dtsgen.models import FileStatus
from dtsgen.output import (
    OutputFormat,
    error,
    get_output,
    info,
    print_data,
    print_json,
    print_table,
    success,
)


app = typer.Typer(
    name="dtsgen",
    help="Generate TypeScript declaration files from Java class descriptors.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Handle ``--version``."""
    if value:
        typer.echo(f"dtsgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the dtsgen version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print the run report as JSON on stdout."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never use colour or Rich markup."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only report warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log each descriptor as it is processed."
    ),
) -> None:
    """Runs before any command.

    Installs the global :class:`~dtsgen.output.OutputManager` built from the
    output flags.
    """
    from dtsgen.output import OutputManager, set_output

    set_output(
        OutputManager(
            format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


@app.command("generate")
def generate_command(
    source_dir: Optional[str] = typer.Argument(
        None, help="Root directory of descriptor files (default: from config)."
    ),
    suffix: Optional[str] = typer.Option(
        None, "--suffix", help="Descriptor file suffix (default: .json)."
    ),
    out_suffix: Optional[str] = typer.Option(
        None, "--out-suffix", help="Generated file suffix (default: .d.ts)."
    ),
    fail_fast: Optional[bool] = typer.Option(
        None,
        "--fail-fast/--no-fail-fast",
        help="Stop at the first failing descriptor instead of logging and continuing "
        "(default: from config).",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Render everything but write nothing."
    ),
) -> None:
    """Generate a .d.ts file next to every descriptor in SOURCE_DIR.

    Example::

        dtsgen generate JvTypeGen/output/json
        dtsgen --json generate ./descriptors --dry-run
    """
    from dtsgen.config import resolve_config
    from dtsgen.driver import generate

    try:
        config = resolve_config(
            cli_source_dir=source_dir,
            cli_descriptor_suffix=suffix,
            cli_declaration_suffix=out_suffix,
            cli_fail_fast=fail_fast,
        )
        info(f"Generating declarations under {config.source_dir}")
        report = generate(config, dry_run=dry_run)
    except DtsgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = get_output()
    if output.format == OutputFormat.JSON:
        print_json(report.model_dump(mode="json"))
    elif report.failed:
        print_table(
            ["Descriptor", "Error"],
            [[f.source, f.error or ""] for f in report.failed],
            title=f"Failed descriptors ({len(report.failed)})",
        )

    counts = ", ".join(
        f"{report.count(status)} {status.value}"
        for status in FileStatus
        if report.count(status)
    )
    summary = f"Processed {len(report.files)} descriptor(s)" + (f": {counts}" if counts else "")

    if not report.ok:
        error(summary)
        raise typer.Exit(code=EXIT_PARTIAL_FAILURE)
    success(summary)


@app.command("render")
def render_command(
    descriptor: str = typer.Argument(..., help="Path to a single descriptor file."),
) -> None:
    """Print the generated declaration file for DESCRIPTOR to stdout."""
    from dtsgen.generator import render_file
    from dtsgen.parser import load_descriptor

    try:
        content = render_file(load_descriptor(descriptor))
    except DtsgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(content)


def _cancel() -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _setup_signal_handlers() -> None:
    """Make Ctrl-C print "Cancelled." instead of a traceback."""
    signal.signal(signal.SIGINT, lambda signum, frame: _cancel())


def _write_crash_log(exc: Exception) -> Path:
    """Save the traceback of *exc* under ``<data dir>/logs`` and return its path."""
    from dtsgen.config import get_data_dir

    log_path = get_data_dir() / "logs" / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return log_path


def main() -> None:
    """Run the CLI; always ends in ``SystemExit``.

    A :class:`~dtsgen.exceptions.DtsgenError` that escapes a command exits
    with its ``exit_code``. Anything else is logged with
    :func:`_write_crash_log` and exits with ``EXIT_GENERIC_FAILURE``.
    """
    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        _cancel()
    except DtsgenError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
