"""Merge-json command -- print the merged JSON attributes document."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chefctl.commands import fail, load_run_config
from chefctl.exceptions import ChefctlError
from chefctl.output import format_response


def merge_json_command(
    ctx: typer.Context,
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Base JSON document (path, URL or '-' for stdin)."
    ),
    fragments: Optional[Path] = typer.Option(
        None, "--fragments", help="Directory of JSON fragments."
    ),
    pattern: Optional[str] = typer.Option(
        None, "--glob", help="Glob selecting fragment files."
    ),
) -> None:
    """Print the base JSON attributes with every fragment merged over it.

    Defaults come from the ``config_json``, ``config_json_d`` and
    ``config_json_glob`` options.

    Example::

        chefctl merge-json
        chefctl merge-json --base ./config.json --fragments ./config.json.d
    """
    from chefctl.plugins.json_config import load_merged_attributes

    config = load_run_config(ctx)
    try:
        merged = load_merged_attributes(
            base or config.config_json,
            fragments or Path(config.config_json_d),
            pattern or config.config_json_glob,
            config.json_array_merge,
        )
    except ChefctlError as exc:
        fail(exc)
    format_response(merged)
