"""Built-in CLI sub-commands for chefctl.

* :mod:`~chefctl.commands.config` -- show the resolved settings, write a
  default config document.
* :mod:`~chefctl.commands.plugins` -- list the loaded plugins.
* :mod:`~chefctl.commands.prepare` -- run the pre-run hooks and print the
  client command line.
* :mod:`~chefctl.commands.attributes` -- print the merged JSON attributes.
* :mod:`~chefctl.commands.client` -- print the client bootstrap settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``config``) or a plain callback function
registered directly on the root app.
"""

from __future__ import annotations

from typing import Any, NoReturn, Optional

import typer

from chefctl.exceptions import ChefctlError
from chefctl.models import ChefctlConfig
from chefctl.output import error


def config_path_from(ctx: Optional[typer.Context]) -> Optional[str]:
    """The ``-C/--config`` value stored by the root callback, if any."""
    if ctx is None or not ctx.obj:
        return None
    return ctx.obj.get("config_path")


def load_run_config(ctx: Optional[typer.Context], **overrides: Any) -> ChefctlConfig:
    """Resolve the run configuration for a command.

    Root-level ``--verbose``/``--quiet`` flags are applied as overrides
    beneath any command-specific *overrides*.

    Raises:
        typer.Exit: With the error's exit code if the config is invalid.
    """
    from chefctl.config import resolve_config

    merged: dict[str, Any] = {}
    if ctx is not None and ctx.obj:
        if ctx.obj.get("verbose"):
            merged["verbose"] = True
        if ctx.obj.get("quiet"):
            merged["quiet"] = True
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return resolve_config(config_path_from(ctx), **merged)
    except ChefctlError as exc:
        fail(exc)


def fail(exc: ChefctlError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)
