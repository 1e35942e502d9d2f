"""Prepare command -- run the pre-run hooks and print the client invocation.

``chefctl prepare`` resolves the run configuration, loads every plugin,
runs their ``pre_run`` hooks against a fresh run context, and prints the
resulting client command line. Files created by the hooks (for example the
merged JSON attributes passed with ``-j``) are left on disk for whatever
launches the client, unless ``--cleanup`` is given.
"""

from __future__ import annotations

from typing import Optional

import typer

from chefctl.commands import fail, load_run_config
from chefctl.exceptions import ChefctlError
from chefctl.output import OutputFormat, debug, get_output, info


def prepare_command(
    ctx: typer.Context,
    debug_run: Optional[bool] = typer.Option(
        None, "--debug", "-d", help="Ask chef-client for debug output."
    ),
    whyrun: Optional[bool] = typer.Option(
        None, "--whyrun", "-w", help="Run chef-client in why-run mode."
    ),
    human: Optional[bool] = typer.Option(
        None, "--human", "-H", help="Human-readable chef-client output."
    ),
    immediate: Optional[bool] = typer.Option(
        None, "--immediate", "-i", help="Skip the splay and lock wait."
    ),
    color: Optional[bool] = typer.Option(
        None, "--chef-color/--no-chef-color", help="Allow colored chef-client output."
    ),
    cleanup: bool = typer.Option(
        False, "--cleanup", help="Remove hook-created files after printing."
    ),
) -> None:
    """Run pre-run hooks and print the chef-client command line.

    In JSON mode the full invocation (argv, PATH, effective splay, temp
    files) is printed as one object; otherwise the shell-quoted command is
    printed on stdout and the rest goes to stderr.

    Example::

        chefctl prepare
        chefctl prepare --immediate --whyrun
        chefctl --json prepare
    """
    from chefctl.plugins import PluginManager
    from chefctl.runner import prepare_run

    config = load_run_config(
        ctx,
        debug=debug_run,
        whyrun=whyrun,
        human=human,
        immediate=immediate,
        color=color,
    )
    output = get_output()
    manager = PluginManager()
    try:
        manager.load_all(config)
        run_ctx = prepare_run(config, manager, output)
    except ChefctlError as exc:
        manager.cleanup()
        fail(exc)

    argv = run_ctx.invocation.argv()
    temp_files = [str(p) for p in run_ctx.temp_files]
    if output.format == OutputFormat.JSON:
        output.format_response(
            {
                "argv": argv,
                "path": run_ctx.invocation.path_value(),
                "effective_splay": config.effective_splay,
                "temp_files": temp_files,
            }
        )
    else:
        output.print_command(argv)
        info(f"PATH={run_ctx.invocation.path_value()}")
        info(f"Splay: {config.effective_splay}s")
        for path in temp_files:
            debug(f"Temp file: {path}")

    if cleanup:
        run_ctx.cleanup()
    manager.cleanup()
