"""Drive the pre-run / post-run lifecycle around a client run.

The process supervisor that actually launches the client calls
:func:`prepare_run`, executes ``ctx.invocation.argv()`` with
``ctx.invocation.environment()``, and then hands the exit status to
:func:`finish_run`, which runs the ``post_run`` hooks and removes the temp
files the hooks registered.
"""

from __future__ import annotations

import logging

from chefctl.models import ChefctlConfig
from chefctl.output import OutputManager
from chefctl.plugins import PluginManager, RunContext

logger = logging.getLogger(__name__)


def prepare_run(
    config: ChefctlConfig, manager: PluginManager, output: OutputManager
) -> RunContext:
    """Build the client invocation and run every ``pre_run`` hook.

    If a hook fails, temp files registered by earlier hooks are removed
    before the :class:`~chefctl.exceptions.PluginError` propagates.
    """
    ctx = RunContext.from_config(config)
    if config.immediate:
        logger.debug("Immediate run: splay and lock wait are skipped")
    try:
        manager.get_hook_runner().run_pre_run(ctx, output)
    except Exception:
        ctx.cleanup()
        raise
    return ctx


def finish_run(
    ctx: RunContext, manager: PluginManager, output: OutputManager, exit_code: int
) -> RunContext:
    """Record *exit_code*, run every ``post_run`` hook, then remove temp files."""
    ctx.exit_code = exit_code
    try:
        manager.get_hook_runner().run_post_run(ctx, output)
    finally:
        for path in ctx.cleanup():
            logger.debug("Removed %s", path)
    return ctx
