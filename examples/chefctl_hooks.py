"""Example chefctl hooks file.

Install as /etc/chef/chefctl_hooks.py (or point `plugin_path` at it). Every
Plugin subclass defined here is registered, in definition order, after the
entry-point plugins.
"""

from __future__ import annotations

import os
import shlex
import time

from chefctl.plugins import Plugin

EXTRA_OPTIONS_ENV = "CHEFCTL_EXTRA_OPTIONS"


class ExtraOptionsPlugin(Plugin):
    """Appends client arguments taken from $CHEFCTL_EXTRA_OPTIONS."""

    @property
    def name(self) -> str:
        return "extra-options"

    @property
    def description(self) -> str:
        return f"Append chef-client options from ${EXTRA_OPTIONS_ENV}"

    def pre_run(self, ctx, output):
        extra = os.environ.get(EXTRA_OPTIONS_ENV, "")
        if extra.strip():
            ctx.invocation.add_options(*shlex.split(extra))
            output.debug(f"Added options from ${EXTRA_OPTIONS_ENV}: {extra}")


class RunReportPlugin(Plugin):
    """Reports how long the client ran and how it exited."""

    def __init__(self) -> None:
        self.started: float | None = None

    @property
    def name(self) -> str:
        return "run-report"

    def pre_run(self, ctx, output):
        self.started = time.monotonic()

    def post_run(self, ctx, output):
        elapsed = time.monotonic() - (self.started or time.monotonic())
        status = "succeeded" if ctx.exit_code == 0 else f"failed ({ctx.exit_code})"
        output.info(f"chef-client {status} after {elapsed:.1f}s")
