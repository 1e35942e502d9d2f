"""Plugin manager -- discovery, loading, and lifecycle management.

This module contains :class:`PluginManager`, the owner of the ordered plugin
registry. Plugins are loaded from two sources, in this order:

1. Entry points in the ``chefctl.plugins`` group, sorted by name and
   filtered through ``config.plugins.enabled`` / ``config.plugins.disabled``.
   Third-party packages register plugins in their ``pyproject.toml``::

       [project.entry-points."chefctl.plugins"]
       my-plugin = "my_package.plugin:MyPlugin"

2. The hooks file at ``config.plugin_path``. Every concrete
   :class:`~chefctl.plugins.base.Plugin` subclass defined in that file is
   instantiated and registered in definition order.
"""

from __future__ import annotations

import importlib.metadata
import importlib.util
import inspect
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from chefctl.exceptions import PluginError
from chefctl.models import ChefctlConfig
from chefctl.plugins.base import Plugin
from chefctl.plugins.hooks import HookRunner

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "chefctl.plugins"
"""The entry-point group name used for plugin discovery."""

_HOOKS_MODULE_NAME = "chefctl_hooks"


class PluginManager:
    """Discovers, loads, and manages the lifecycle of chefctl plugins.

    Example:
        Typical usage::

            manager = PluginManager()
            manager.load_all(config)
            runner = manager.get_hook_runner()
            runner.run_pre_run(ctx, output)
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._hook_runner: Optional[HookRunner] = None

    def load_all(self, config: ChefctlConfig) -> list[str]:
        """Load entry-point plugins, then the hooks file.

        Returns:
            The names of every plugin loaded, in registration order.
        """
        loaded = self.discover(config)
        loaded.extend(self.load_hooks_file(Path(config.plugin_path), config))
        return loaded

    def discover(self, config: ChefctlConfig) -> list[str]:
        """Discover and load plugins registered as entry points.

        Args:
            config: The run configuration whose ``plugins.enabled`` and
                ``plugins.disabled`` lists control which plugins are loaded.

        Returns:
            The names of the plugins that were loaded. Entry points that
            fail to import or instantiate are logged and skipped.
        """
        names: list[str] = []
        for entry in _selected_entry_points(config):
            try:
                self.load_plugin(entry.name, entry.load()(), config)
            except Exception as exc:
                logger.warning("Skipping plugin '%s': %s", entry.name, exc)
                continue
            names.append(entry.name)
        return names

    def load_hooks_file(self, path: Path, config: ChefctlConfig) -> list[str]:
        """Load every plugin class defined in the hooks file at *path*.

        A missing file is not an error; there are simply no hooks to load.

        Raises:
            PluginError: If the file cannot be imported or a plugin in it
                fails to initialise.
        """
        if not path.is_file():
            logger.debug("No hooks file at %s", path)
            return []

        names: list[str] = []
        for cls in _plugin_classes(_import_hooks_file(path)):
            try:
                plugin = cls()
            except Exception as exc:
                raise PluginError(f"Cannot instantiate {cls.__name__} from {path}: {exc}") from exc
            self.load_plugin(plugin.name, plugin, config)
            names.append(plugin.name)
        if not names:
            logger.warning("Hooks file %s defines no plugins", path)
        return names

    def load_plugin(self, name: str, plugin: Plugin, config: ChefctlConfig) -> None:
        """Initialise *plugin* and append it to the registry under *name*.

        Raises:
            PluginError: If a plugin with the same *name* is already loaded,
                or the plugin's ``on_init`` raises.
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' is already loaded")

        try:
            plugin.on_init(config)
        except Exception as exc:
            raise PluginError(f"Plugin '{name}' failed to initialise: {exc}") from exc
        self._plugins[name] = plugin
        self._hook_runner = None
        logger.info("Loaded plugin '%s' v%s", name, plugin.version)

    def list_plugins(self) -> list[dict[str, str]]:
        """List loaded plugins (registration order) with their metadata."""
        return [
            {
                "name": name,
                "version": plugin.version,
                "description": plugin.description,
            }
            for name, plugin in self._plugins.items()
        ]

    def get_hook_runner(self) -> HookRunner:
        """Return a cached :class:`HookRunner` over the loaded plugins.

        The cache is invalidated whenever :meth:`load_plugin` registers a
        new plugin.
        """
        if self._hook_runner is None:
            self._hook_runner = HookRunner(list(self._plugins.values()))
        return self._hook_runner

    def cleanup(self) -> None:
        """Call ``cleanup`` on every plugin and reset the registry.

        Exceptions from individual plugins are logged so that one plugin's
        failure does not prevent the others from cleaning up.
        """
        for name, plugin in self._plugins.items():
            try:
                plugin.cleanup()
            except Exception as exc:
                logger.warning("Error cleaning up plugin '%s': %s", name, exc)
        self._plugins.clear()
        self._hook_runner = None


def _import_hooks_file(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(_HOOKS_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise PluginError(f"Cannot load hooks file {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise PluginError(f"Error loading hooks file {path}: {exc}") from exc
    return module


def _plugin_classes(module: ModuleType) -> list[type[Plugin]]:
    """Concrete Plugin subclasses defined (not imported) in *module*, in definition order."""
    return [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj)
        and issubclass(obj, Plugin)
        and obj.__module__ == module.__name__
        and not inspect.isabstract(obj)
    ]


def _selected_entry_points(config: ChefctlConfig) -> list[importlib.metadata.EntryPoint]:
    """Entry points in :data:`ENTRY_POINT_GROUP` that the run config allows, by name."""
    enabled = set(config.plugins.enabled)
    disabled = set(config.plugins.disabled)
    selected = []
    for entry in sorted(
        importlib.metadata.entry_points(group=ENTRY_POINT_GROUP), key=lambda e: e.name
    ):
        if (enabled and entry.name not in enabled) or entry.name in disabled:
            logger.debug("Plugin '%s' filtered out by run config", entry.name)
            continue
        selected.append(entry)
    return selected
