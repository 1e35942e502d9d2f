"""Pre-run hook that feeds the merged JSON attributes to the client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from chefctl.plugins.base import Plugin
from chefctl.plugins.json_config.attributes import (
    base_exists,
    load_merged_attributes,
    write_attributes,
)

if TYPE_CHECKING:
    from chefctl.output import OutputManager
    from chefctl.plugins.hooks import RunContext

logger = logging.getLogger(__name__)


class JsonConfigPlugin(Plugin):
    """Merge ``config.json`` with ``config.json.d/*.json`` and pass it via ``-j``.

    The merged document is written to a temp file registered in
    ``ctx.temp_files``; the orchestrator removes it after the run. When the
    base document is absent the hook does nothing.
    """

    @property
    def name(self) -> str:
        return "json-config"

    @property
    def description(self) -> str:
        return "Merge config.json fragments and pass them to chef-client with -j"

    def pre_run(self, ctx: RunContext, output: OutputManager) -> None:
        config = ctx.config
        if not base_exists(config.config_json):
            logger.warning("Base JSON attributes %s not found, skipping -j", config.config_json)
            return

        attributes = load_merged_attributes(
            config.config_json,
            Path(config.config_json_d),
            config.config_json_glob,
            config.json_array_merge,
        )
        path = write_attributes(attributes)
        ctx.temp_files.append(path)
        ctx.invocation.add_options("-j", str(path))
        output.debug(f"Merged JSON attributes written to {path}")
