"""Plugin commands -- list the plugins a run would use."""

from __future__ import annotations

import typer

from chefctl.commands import fail, load_run_config
from chefctl.exceptions import ChefctlError
from chefctl.output import info, print_table


plugins_app = typer.Typer(no_args_is_help=True)


@plugins_app.command("list")
def plugins_list(ctx: typer.Context) -> None:
    """List loaded plugins in the order their hooks run.

    Example::

        chefctl plugins list
        chefctl --json plugins list
    """
    from chefctl.plugins import PluginManager

    config = load_run_config(ctx)
    manager = PluginManager()
    try:
        manager.load_all(config)
    except ChefctlError as exc:
        fail(exc)

    plugins = manager.list_plugins()
    if not plugins:
        info("No plugins loaded.")
    print_table(plugins, ["name", "version", "description"], title="Plugins")
    manager.cleanup()
