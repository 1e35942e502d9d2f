"""Client-config command -- print the client bootstrap settings."""

from __future__ import annotations

import enum

import typer

from chefctl.commands import fail
from chefctl.exceptions import ChefctlError
from chefctl.output import OutputFormat, get_output, notice


class ClientFormat(str, enum.Enum):
    RB = "rb"
    JSON = "json"


def client_config_command(
    fmt: ClientFormat = typer.Option(
        ClientFormat.RB, "--format", "-F", help="Render as client.rb or JSON."
    ),
) -> None:
    """Resolve the Chef repo and print the client settings.

    The repository root is taken from ``$CHEF_REPO`` and falls back to the
    platform default. Every directory under ``<repo>/cookbooks`` becomes a
    cookbook path.

    Example::

        chefctl client-config > /etc/chef/client.rb
        CHEF_REPO=~/repo chefctl client-config --format json
    """
    from chefctl.client_config import (
        build_client_config,
        render_client_json,
        render_client_rb,
    )

    try:
        client = build_client_config()
    except ChefctlError as exc:
        fail(exc)

    notice(f"Chef repo: {client.chef_repo}")
    output = get_output()
    if fmt == ClientFormat.JSON or output.format == OutputFormat.JSON:
        output.print_source(render_client_json(client), "json")
    else:
        output.print_source(render_client_rb(client), "ruby")
