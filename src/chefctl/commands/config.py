"""Config commands -- inspect and initialise the run configuration document.

Provides the ``chefctl config`` sub-command group:

* ``show`` -- print the effective settings after defaults, the document and
  flags have been layered.
* ``path`` -- print which document would be loaded.
* ``init`` -- write a commented default document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chefctl.commands import config_path_from, fail, load_run_config
from chefctl.exceptions import ChefctlError, InvalidUsageError
from chefctl.output import format_response, info, print_data, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective run configuration.

    Example::

        chefctl config show
        chefctl --json config show
    """
    from chefctl.config import resolve_config_path

    path, _ = resolve_config_path(config_path_from(ctx))
    config = load_run_config(ctx)
    info(f"Config file: {path}{'' if path.is_file() else ' (not found, using defaults)'}")
    data = config.model_dump(mode="json")
    data["effective_splay"] = config.effective_splay
    format_response(data)


@config_app.command("path")
def config_path(ctx: typer.Context) -> None:
    """Print the path of the config document that would be loaded."""
    from chefctl.config import resolve_config_path

    path, _ = resolve_config_path(config_path_from(ctx))
    print_data(str(path))


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        help="Where to write the document (defaults to the resolved config path).",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Write a commented default config document.

    Example::

        chefctl config init
        chefctl config init --path ./chefctl-config.py --force
    """
    from chefctl.config import resolve_config_path, write_default_config

    target = path or resolve_config_path(config_path_from(ctx))[0]
    if target.suffix.lower() != ".py":
        fail(InvalidUsageError(f"config init writes a Python document, not {target.name}"))
    try:
        written = write_default_config(target, force=force)
    except ChefctlError as exc:
        fail(exc)
    except OSError as exc:
        fail(ChefctlError(f"Cannot write {target}: {exc}"))
    success(f"Wrote default config to {written}")
