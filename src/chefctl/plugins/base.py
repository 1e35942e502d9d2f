"""Abstract base class for chefctl plugins.

Every plugin must subclass :class:`Plugin` and implement the :attr:`name`
property. The lifecycle hooks (``on_init``, ``pre_run``, ``post_run``,
``cleanup``) are optional -- default implementations are no-ops so plugins
only override what they need.

Plugins come from two places, both handled by
:class:`~chefctl.plugins.manager.PluginManager`: entry points in the
``chefctl.plugins`` group, and the hooks file named by the ``plugin_path``
option.

Example:
    A hooks file that pins an extra client argument::

        from chefctl.plugins import Plugin

        class ExtraArgs(Plugin):
            @property
            def name(self) -> str:
                return "extra-args"

            def pre_run(self, ctx, output):
                ctx.invocation.add_options("--minimal-ohai")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from chefctl.models import ChefctlConfig

if TYPE_CHECKING:
    from chefctl.output import OutputManager
    from chefctl.plugins.hooks import RunContext


class Plugin(ABC):
    """Base class for all chefctl plugins.

    The plugin lifecycle is:

    1. Instantiation -- the :class:`PluginManager` calls the no-arg constructor.
    2. :meth:`on_init` -- called once with the resolved run configuration.
    3. :meth:`pre_run` -- called before each client run.
    4. :meth:`post_run` -- called after each client run.
    5. :meth:`cleanup` -- called once during shutdown.

    See Also:
        :class:`~chefctl.plugins.hooks.HookRunner` for how hooks are
        ordered across plugins.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for registration and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    def on_init(self, config: ChefctlConfig) -> None:
        """Called once when the plugin is loaded by the :class:`PluginManager`.

        Args:
            config: The resolved run configuration.
        """

    def pre_run(self, ctx: RunContext, output: OutputManager) -> None:
        """Called immediately before the client is launched.

        Plugins extend the client command line through
        ``ctx.invocation`` and register any files they create in
        ``ctx.temp_files`` so the orchestrator can remove them afterwards.

        Args:
            ctx: The run context, shared by reference across all plugins.
            output: The output handle for diagnostics.
        """

    def post_run(self, ctx: RunContext, output: OutputManager) -> None:
        """Called after the client has exited.

        ``ctx.exit_code`` holds the client's exit status.

        Args:
            ctx: The run context, shared by reference across all plugins.
            output: The output handle for diagnostics.
        """

    def cleanup(self) -> None:
        """Called once during shutdown to release plugin resources."""
