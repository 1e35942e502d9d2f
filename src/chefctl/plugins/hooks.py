"""Run context and hook runner for the plugin lifecycle.

This module provides two core components:

* :class:`RunContext` -- the mutable per-run state threaded through every
  hook: the resolved config, the :class:`~chefctl.invocation.ClientInvocation`
  being built, temp files awaiting cleanup, and the client exit code.
* :class:`HookRunner` -- executes ``pre_run`` and ``post_run`` across the
  loaded plugins in registration order.

Hooks fail loudly: the first exception stops the chain and is re-raised as
a :class:`~chefctl.exceptions.PluginError` naming the plugin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from chefctl.exceptions import ChefctlError, PluginError
from chefctl.invocation import ClientInvocation
from chefctl.models import ChefctlConfig
from chefctl.plugins.base import Plugin

if TYPE_CHECKING:
    from chefctl.output import OutputManager

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Mutable context object threaded through the plugin hook chain.

    Attributes:
        config: The resolved run configuration.
        invocation: The client command line and environment being built.
        temp_files: Files created for this run that must be removed once
            the client has exited.
        exit_code: The client's exit status, set before ``post_run``.
    """

    config: ChefctlConfig
    invocation: ClientInvocation
    temp_files: list[Path] = field(default_factory=list)
    exit_code: Optional[int] = None

    @classmethod
    def from_config(cls, config: ChefctlConfig) -> RunContext:
        return cls(config=config, invocation=ClientInvocation.from_config(config))

    def cleanup(self) -> list[Path]:
        """Remove every registered temp file and return the ones removed."""
        removed: list[Path] = []
        for path in self.temp_files:
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            removed.append(path)
        self.temp_files.clear()
        return removed


class HookRunner:
    """Executes plugin hooks across all loaded plugins in registration order.

    The runner holds a snapshot of the plugin list taken at creation. If new
    plugins are loaded, a new runner must be obtained from the manager.
    """

    def __init__(self, plugins: list[Plugin]) -> None:
        self._plugins = list(plugins)

    @property
    def plugins(self) -> list[Plugin]:
        return list(self._plugins)

    def run_pre_run(self, ctx: RunContext, output: OutputManager) -> RunContext:
        """Execute ``pre_run`` hooks across all plugins.

        Raises:
            PluginError: If any hook raises.
        """
        return self._run("pre_run", lambda p: p.pre_run(ctx, output), ctx)

    def run_post_run(self, ctx: RunContext, output: OutputManager) -> RunContext:
        """Execute ``post_run`` hooks across all plugins.

        Raises:
            PluginError: If any hook raises.
        """
        return self._run("post_run", lambda p: p.post_run(ctx, output), ctx)

    def _run(
        self, hook: str, call: Callable[[Plugin], None], ctx: RunContext
    ) -> RunContext:
        for plugin in self._plugins:
            logger.debug("Running %s hook of plugin '%s'", hook, plugin.name)
            try:
                call(plugin)
            except PluginError:
                raise
            except ChefctlError as exc:
                raise PluginError(
                    f"{hook} hook of plugin '{plugin.name}' failed: {exc}",
                    exit_code=exc.exit_code,
                ) from exc
            except Exception as exc:
                raise PluginError(
                    f"{hook} hook of plugin '{plugin.name}' failed: {exc}"
                ) from exc
        return ctx
