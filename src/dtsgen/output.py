"""Terminal output for dtsgen.

Generated content, JSON reports and failure tables go to **stdout** so they
can be piped. Everything else (progress, warnings, errors, the run summary)
goes to **stderr**.

Colour is used only when stdout is a terminal and neither ``NO_COLOR`` nor
``TERM=dumb`` nor ``--no-color`` turns it off (see https://no-color.org/).

Commands do not pass an :class:`OutputManager` around. The root callback in
:mod:`dtsgen.app` installs one with :func:`set_output`, and the rest of the
package calls the module-level shortcuts (:func:`warning`, :func:`debug`,
...).
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` picks RICH or PLAIN at startup."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` becomes ``RICH`` on a colour
            terminal and ``PLAIN`` otherwise.
        no_color: Never emit colour or markup.
        quiet: Drop info, success and progress messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich_stdout = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_stdout)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unchanged; no trailing newline is added."""
        sys.stdout.write(text)
        sys.stdout.flush()

    def print_json(self, data: Any) -> None:
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as JSON records, tab-separated lines or a Rich table."""
        if self._format == OutputFormat.JSON:
            self.print_json([dict(zip(headers, row)) for row in rows])
            return

        if self._format == OutputFormat.PLAIN:
            lines = [headers, *rows]
            self.print_data("".join("\t".join(line) + "\n" for line in lines))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*map(escape, row))
        self._stdout.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, "[green]{}[/green]")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._emit_labelled("Warning", "yellow", message)

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._emit_labelled("Error", "bold red", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", "[dim]{}[/dim]")

    def progress(self, message: str) -> None:
        """Per-file progress; only written when stdout is a terminal."""
        if not self._quiet and _is_tty():
            self._emit(message, "[dim]{}[/dim]")

    def _emit_labelled(self, label: str, style: str, message: str) -> None:
        if self._no_color:
            self._emit(f"{label}: {message}")
        else:
            self._emit(message, f"[{style}]{label}:[/{style}] {{}}")

    def _emit(self, message: str, markup: str = "{}") -> None:
        # Paths and Java names may contain "[...]", which Rich would read as markup.
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(escape(message)))


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- process-wide manager ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, installing a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call builds a fresh one.

    Tests need this because a manager holds the ``sys.stdout`` and
    ``sys.stderr`` objects that were current when it was built.
    """
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_json(data: Any) -> None:
    get_output().print_json(data)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)


def progress(message: str) -> None:
    get_output().progress(message)
