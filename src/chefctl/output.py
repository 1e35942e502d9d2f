"""Output formatting with strict stdout/stderr discipline.

* **stdout** -- data only: resolved settings, the client command line,
  merged JSON attributes, a rendered ``client.rb``. Cron wrappers and
  whatever launches the client read this stream.
* **stderr** -- diagnostics: status lines, warnings, errors, debug traces.
  The Rich log handler installed by :func:`chefctl.app.main_callback`
  shares the same stderr console.
* **Formats** -- ``json`` for machines, ``plain`` (tab separated) for pipes,
  ``rich`` for an interactive terminal. ``auto`` picks between the last two.
* **Colour** -- disabled by ``--no-color``, ``NO_COLOR`` or ``TERM=dumb``.

One :class:`OutputManager` is installed per process with :func:`set_output`
and handed to plugin hooks as their output handle. The module-level helpers
(:func:`info`, :func:`error`, ...) delegate to it.
"""

from __future__ import annotations

import json
import os
import shlex
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Supported output formats.

    ``AUTO`` becomes ``RICH`` on an interactive terminal with colour enabled,
    ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# Diagnostic levels: (plain prefix, Rich markup, shown when quiet).
_LEVELS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "{}", False),
    "notice": ("", "{}", True),
    "success": ("", "[green]{}[/green]", False),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}", True),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}", True),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]", True),
}


class OutputManager:
    """Routes chefctl data to stdout and diagnostics to stderr.

    Args:
        format: Desired output format; ``AUTO`` is resolved immediately.
        no_color: Disable colour and Rich markup.
        quiet: Drop ``info`` and ``success`` messages.
        verbose: Show ``debug`` messages.
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
        self._format = _resolve_format(format, self._no_color)

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def stderr_console(self) -> Console:
        """The Rich console bound to stderr, shared with the log handler."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout, unformatted."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Print a settings mapping or attributes document.

        JSON mode prints indented JSON, plain mode prints ``key<TAB>value``
        lines (nested values as compact JSON), Rich mode highlights the JSON.
        """
        if self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        self.print_source(text, "json")

    def print_command(self, argv: list[str]) -> None:
        """Print a client command line: a JSON array, or shell-quoted text."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(argv))
        else:
            self.print_data(shlex.join(argv))

    def print_source(self, text: str, lexer: str) -> None:
        """Print a generated document, highlighted with *lexer* in Rich mode."""
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, lexer, theme="monokai", word_wrap=True))
        else:
            self.print_data(text.rstrip("\n"))

    def print_table(
        self,
        records: list[dict[str, str]],
        columns: list[str],
        title: Optional[str] = None,
    ) -> None:
        """Print *records* as a table with *columns*.

        JSON mode prints the records themselves, plain mode prints a header
        line followed by one tab-separated line per record.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return
        rows = [[str(record.get(column, "")) for column in columns] for record in records]
        if self._format == OutputFormat.PLAIN:
            for row in [[c.title() for c in columns], *rows]:
                self.print_data("\t".join(row))
            return
        table = Table(title=title, header_style="bold cyan")
        for column in columns:
            table.add_column(column.title())
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        self._emit("info", message)

    def notice(self, message: str) -> None:
        """Like :meth:`info`, but shown even with ``--quiet``."""
        self._emit("notice", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit("debug", message)

    def _emit(self, level: str, message: str) -> None:
        prefix, markup, always = _LEVELS[level]
        if self._quiet and not always:
            return
        if self._no_color:
            print(prefix + message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(message))


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested != OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _plain_lines(data: Any) -> list[str]:
    if isinstance(data, dict):
        return [f"{key}\t{_plain_value(value)}" for key, value in data.items()]
    if isinstance(data, list):
        return [_plain_value(item) for item in data]
    return [str(data)]


def _plain_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager. Used by the test suite between tests."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    records: list[dict[str, str]], columns: list[str], title: Optional[str] = None
) -> None:
    get_output().print_table(records, columns, title)


def info(message: str) -> None:
    get_output().info(message)


def notice(message: str) -> None:
    get_output().notice(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
