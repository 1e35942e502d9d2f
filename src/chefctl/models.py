"""Canonical Pydantic models shared across all chefctl modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Run configuration** -- the settings registry read from the run
configuration document:
    :class:`ArrayMergePolicy`, :class:`PluginsConfig` and
    :class:`ChefctlConfig`.

**Client bootstrap** -- settings computed for the Chef client itself:
    :class:`ClientConfig`.

Defaults that depend on the platform are produced by factories in
:mod:`chefctl.platform_defaults`, evaluated when a model is instantiated.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from chefctl import platform_defaults


class ArrayMergePolicy(str, enum.Enum):
    """How lists are combined when a JSON fragment is merged over a base document.

    ``UNION`` keeps the base elements in order and appends fragment elements
    that are not already present. ``REPLACE`` lets the fragment list win
    outright. ``CONCAT`` appends every fragment element, duplicates included.
    """

    UNION = "union"
    REPLACE = "replace"
    CONCAT = "concat"


class PluginsConfig(BaseModel):
    """Allow/deny lists applied to plugins discovered via entry points.

    When ``enabled`` is non-empty only those plugins are loaded; otherwise
    every discovered plugin not listed in ``disabled`` is loaded. Plugins
    defined in the hooks file at ``plugin_path`` are always loaded.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: list[str] = Field(
        default_factory=list, description="Explicit allowlist of plugin names"
    )
    disabled: list[str] = Field(
        default_factory=list, description="Plugin names to skip"
    )


class ChefctlConfig(BaseModel):
    """The settings registry for a chefctl run.

    Populated from the run configuration document (see
    :func:`chefctl.config.load_config`); any key the document does not set
    falls back to the defaults declared here. Field descriptions double as
    the comments rendered into a fresh document by ``chefctl config init``.

    Example::

        ChefctlConfig(
            chef_options=["--no-fork", "-c", "/etc/chef/client.rb", "-z"],
            immediate=True,
        )
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    color: bool = Field(
        default=False, description="Allow the chef run to provide colored output."
    )
    verbose: bool = Field(
        default=False, description="Whether or not chefctl should provide verbose output."
    )
    debug: bool = Field(
        default=False,
        description="Whether or not chef-client should provide debug output.",
    )
    human: bool = Field(
        default=False, description="Whether or not to provide human-readable output."
    )
    quiet: bool = Field(
        default=False, description="If set, will not copy chef log to stdout."
    )
    whyrun: bool = Field(
        default=False, description="Whether or not to run chef in whyrun mode."
    )
    immediate: bool = Field(
        default=False,
        description="If set, ignore the splay and stop pending chefctl processes "
        "before running. Intended for interactive runs started by a human.",
    )
    chef_client: str = Field(
        default_factory=platform_defaults.detect_chef_client,
        description="The chef-client executable to use.",
    )
    chef_options: list[str] = Field(
        default_factory=lambda: ["--no-fork"],
        description="Default options to pass to chef-client.",
    )
    lock_file: str = Field(
        default_factory=platform_defaults.default_lock_file,
        description="The lock file to use for chefctl.",
    )
    lock_time: int = Field(
        default=1800,
        ge=0,
        description="How long to wait for the lock to become available, in seconds.",
    )
    log_dir: str = Field(
        default_factory=platform_defaults.default_log_dir,
        description="Directory where per-run chef logs should be placed.",
    )
    splay: int = Field(
        default=870,
        ge=0,
        description="The default splay to use, in seconds. Ignored if `immediate` is set.",
    )
    max_retries: int = Field(
        default=1,
        ge=0,
        description="How many chef-client retries to attempt before failing.",
    )
    testing_timestamp: str = Field(
        default_factory=platform_defaults.default_testing_timestamp,
        description="The testing timestamp file.",
    )
    plugin_path: str = Field(
        default_factory=platform_defaults.default_plugin_path,
        description="The location of the chefctl hooks file.",
    )
    path: list[str] = Field(
        default_factory=platform_defaults.default_path,
        description="The PATH environment entries to use for chef-client.",
    )
    symlink_output: bool = Field(
        default=True,
        description="Whether or not to symlink output files for chef.cur.out "
        "and chef.last.out.",
    )
    config_json: str = Field(
        default_factory=platform_defaults.default_config_json,
        description="Base JSON attributes document (file path or HTTP(S) URL).",
    )
    config_json_d: str = Field(
        default_factory=platform_defaults.default_config_json_d,
        description="Directory of JSON fragments merged over the base document.",
    )
    config_json_glob: str = Field(
        default="*.json",
        description="Glob selecting fragment files inside `config_json_d`.",
    )
    json_array_merge: ArrayMergePolicy = Field(
        default=ArrayMergePolicy.UNION,
        description="How lists are merged: union, replace or concat.",
    )
    plugins: PluginsConfig = Field(
        default_factory=PluginsConfig,
        description="Entry-point plugin allow/deny lists.",
    )

    @property
    def effective_splay(self) -> int:
        """Splay in seconds after honouring ``immediate``."""
        return 0 if self.immediate else self.splay


class ClientConfig(BaseModel):
    """Settings the Chef client computes for itself at bootstrap.

    Produced by :func:`chefctl.client_config.build_client_config` and
    rendered to ``client.rb`` or JSON.
    """

    chef_repo: str = Field(description="Resolved Chef repository root")
    cookbook_path: list[str] = Field(
        default_factory=list, description="Cookbook search path"
    )
    node_path: str = Field(description="Directory holding node data")
    file_cache_path: str = Field(
        default_factory=platform_defaults.default_file_cache_path,
        description="Client file cache directory",
    )
    local_mode: bool = Field(default=True, description="Run in local mode")
    chef_zero_enabled: bool = Field(
        default=True, description="Run an embedded ephemeral Chef server"
    )
