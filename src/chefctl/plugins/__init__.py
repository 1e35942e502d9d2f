"""Plugin system for chefctl -- discovery, loading, and lifecycle hooks.

Plugins shape each client run. They are discovered from the
``chefctl.plugins`` entry-point group and from the hooks file named by the
``plugin_path`` option; :class:`PluginManager` owns the ordered registry and
:class:`HookRunner` calls ``pre_run`` / ``post_run`` on each plugin in turn.

Key classes:

* :class:`Plugin` -- Abstract base class that all plugins must extend.
* :class:`PluginManager` -- Discovers, loads, and manages plugin lifecycle.
* :class:`HookRunner` -- Executes hooks across loaded plugins in order.
* :class:`RunContext` -- Mutable dataclass carrying the client invocation
  through the hook chain.

Example:
    Typical usage::

        from chefctl.plugins import PluginManager, RunContext

        manager = PluginManager()
        manager.load_all(config)
        ctx = RunContext.from_config(config)
        manager.get_hook_runner().run_pre_run(ctx, output)
        print(ctx.invocation.argv())
"""

from chefctl.plugins.base import Plugin
from chefctl.plugins.hooks import HookRunner, RunContext
from chefctl.plugins.manager import PluginManager

__all__ = ["Plugin", "HookRunner", "PluginManager", "RunContext"]
