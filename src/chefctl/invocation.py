"""Builder for the Chef client command line and environment.

A :class:`ClientInvocation` is created from a :class:`~chefctl.models.ChefctlConfig`
and handed, by reference inside a :class:`~chefctl.plugins.hooks.RunContext`,
to every lifecycle hook. Hooks extend it through :meth:`ClientInvocation.add_options`
instead of mutating shared global state; whoever launches the client reads
:meth:`ClientInvocation.argv` and :meth:`ClientInvocation.environment` once
the pre-run hooks have finished.
"""

from __future__ import annotations

import os
import shlex
from typing import Mapping, Optional

from chefctl import platform_defaults
from chefctl.models import ChefctlConfig


class ClientInvocation:
    """Mutable description of a single client process invocation.

    Args:
        chef_client: Path to the client executable.
        options: Initial client arguments. The list is copied.
        path: ``PATH`` entries for the client process.
        whyrun: Add ``--why-run``.
        debug: Add ``-l debug``.
        human: Add ``-F doc`` for human-readable formatter output.
        color: When false, add ``--no-color``.
    """

    def __init__(
        self,
        chef_client: str,
        options: Optional[list[str]] = None,
        path: Optional[list[str]] = None,
        whyrun: bool = False,
        debug: bool = False,
        human: bool = False,
        color: bool = False,
    ) -> None:
        self.chef_client = chef_client
        self.options: list[str] = list(options or [])
        self.path: list[str] = list(path or [])
        self.whyrun = whyrun
        self.debug = debug
        self.human = human
        self.color = color

    @classmethod
    def from_config(cls, config: ChefctlConfig) -> ClientInvocation:
        """Build an invocation from the resolved run configuration."""
        return cls(
            chef_client=config.chef_client,
            options=config.chef_options,
            path=config.path,
            whyrun=config.whyrun,
            debug=config.debug,
            human=config.human,
            color=config.color,
        )

    def add_options(self, *args: str) -> None:
        """Append *args* to the pending client arguments, in order."""
        self.options.extend(str(arg) for arg in args)

    def mode_flags(self) -> list[str]:
        """Flags derived from the run mode switches."""
        flags: list[str] = []
        if self.whyrun:
            flags.append("--why-run")
        if self.debug:
            flags.extend(["-l", "debug"])
        if self.human:
            flags.extend(["-F", "doc"])
        if not self.color:
            flags.append("--no-color")
        return flags

    def argv(self) -> list[str]:
        """The full client command line: executable, options, then mode flags."""
        return [self.chef_client, *self.options, *self.mode_flags()]

    def command_line(self) -> str:
        """:meth:`argv` quoted for a POSIX shell."""
        return shlex.join(self.argv())

    def path_value(self) -> str:
        """The ``PATH`` value handed to the client."""
        return platform_defaults.path_separator().join(self.path)

    def environment(self, base: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Return the client environment: *base* (default ``os.environ``) with ``PATH`` replaced."""
        env = dict(os.environ if base is None else base)
        if self.path:
            env["PATH"] = self.path_value()
        return env

    def __repr__(self) -> str:
        return f"ClientInvocation({self.argv()!r})"
