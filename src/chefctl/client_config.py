"""Client bootstrap: resolve the Chef repo layout into client settings.

The Chef client, running in local mode against an embedded ephemeral
server, needs to know where the cookbooks live. They are laid out as one
directory per cookbook family under ``<repo>/cookbooks``; each family
directory becomes one entry of ``cookbook_path``.

The repository root comes from ``$CHEF_REPO`` when that variable is present
(even if empty) and falls back to a platform default otherwise.
"""

from __future__ import annotations

import json
import logging
import os
import posixpath
from typing import Mapping, Optional

from chefctl import __version__, platform_defaults
from chefctl.exceptions import RepositoryError
from chefctl.models import ClientConfig
from chefctl.rendering import render_template

logger = logging.getLogger(__name__)

REPO_ENV_VAR = "CHEF_REPO"


def resolve_repo_root(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the Chef repository root from *environ* (default ``os.environ``)."""
    env = os.environ if environ is None else environ
    if REPO_ENV_VAR in env:
        return env[REPO_ENV_VAR]
    return platform_defaults.default_chef_repo()


def find_cookbook_paths(repo_root: str) -> list[str]:
    """Return one path per cookbook family directory under ``<repo_root>/cookbooks``.

    Entries that are not directories are skipped, as are ``.`` and ``..``.
    Order follows directory enumeration and is not guaranteed stable.

    Raises:
        RepositoryError: If the cookbook root cannot be listed.
    """
    cookbook_root = posixpath.join(repo_root, "cookbooks")
    try:
        entries = os.listdir(cookbook_root)
    except OSError as exc:
        raise RepositoryError(f"Cannot list cookbooks in {cookbook_root}: {exc}") from exc

    paths = [posixpath.join(cookbook_root, family) for family in entries]
    return [
        path
        for path in paths
        if os.path.isdir(path) and os.path.basename(path) not in (".", "..")
    ]


def build_client_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Compute the client settings for the repository named by *environ*."""
    repo_root = resolve_repo_root(environ)
    logger.info("Chef repo: %s", repo_root)
    cookbook_paths = find_cookbook_paths(repo_root)
    logger.debug("Cookbook paths: %s", cookbook_paths)
    return ClientConfig(
        chef_repo=repo_root,
        cookbook_path=cookbook_paths,
        node_path=posixpath.join(repo_root, "nodes"),
    )


def render_client_rb(config: ClientConfig) -> str:
    """Render *config* as a ``client.rb`` the Chef client can load."""
    return render_template("client.rb.j2", config=config, version=__version__)


def render_client_json(config: ClientConfig) -> str:
    return json.dumps(config.model_dump(mode="json"), indent=2)
