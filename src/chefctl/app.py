"""Typer application and CLI entry point for chefctl.

This module wires together the top-level Typer application and registers
the built-in sub-commands (``config``, ``plugins``, ``prepare``,
``merge-json``, ``client-config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log.

See Also:
    :mod:`chefctl.config`: Run configuration resolution.
    :mod:`chefctl.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import tempfile
import traceback
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer
from rich.logging import RichHandler

from chefctl import __version__
from chefctl.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED

if TYPE_CHECKING:
    from chefctl.output import OutputFormat, OutputManager


app = typer.Typer(
    name="chefctl",
    help="Resolve chef-client run configuration, hooks and bootstrap settings.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"chefctl {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-C", help="Path to the chefctl config document."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~chefctl.output.OutputManager`, configures
    logging, and stores shared options in ``ctx.obj``.
    """
    from chefctl.output import OutputManager, set_output

    output = OutputManager(
        format=_requested_format(json_output, plain_output),
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _configure_logging(output, verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def _requested_format(json_output: bool, plain_output: bool) -> OutputFormat:
    from chefctl.output import OutputFormat

    if json_output and plain_output:
        raise typer.BadParameter("--json and --plain are mutually exclusive")
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


def _configure_logging(output: OutputManager, verbose: bool) -> None:
    """Route ``chefctl`` loggers to stderr through Rich."""
    handler = RichHandler(
        console=output.stderr_console,
        show_path=False,
        show_time=False,
        markup=False,
    )
    logger = logging.getLogger("chefctl")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _register_commands() -> None:
    from chefctl.commands.attributes import merge_json_command
    from chefctl.commands.client import client_config_command
    from chefctl.commands.config import config_app
    from chefctl.commands.plugins import plugins_app
    from chefctl.commands.prepare import prepare_command

    app.add_typer(config_app, name="config", help="Run configuration management.")
    app.add_typer(plugins_app, name="plugins", help="Plugin inspection.")
    app.command("prepare")(prepare_command)
    app.command("merge-json")(merge_json_command)
    app.command("client-config")(client_config_command)


_register_commands()


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write a crash traceback to disk and return the log file path."""
    logs_dir = Path(tempfile.gettempdir()) / "chefctl"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``chefctl`` console script.

    :class:`~chefctl.exceptions.ChefctlError` instances escaping a command
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.
    """
    from chefctl.exceptions import ChefctlError
    from chefctl.output import error

    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except ChefctlError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
