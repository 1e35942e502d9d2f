"""Shared test fixtures for chefctl.

Provides fixtures for isolating the run configuration from the host,
managing output and logging state, stubbing entry-point discovery, and
running CLI commands. These fixtures are automatically discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from chefctl.models import ChefctlConfig
from chefctl.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_chefctl_logger() -> None:
    """Drop the Rich handler the root callback installs on the ``chefctl`` logger.

    The handler is bound to the CliRunner's stderr, which is closed once the
    invocation returns. Restoring propagation lets ``caplog`` see records.
    """
    yield
    logger = logging.getLogger("chefctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears ``CHEFCTL_CONFIG`` and ``CHEF_REPO``, points the default config
    document path into *tmp_path*, disables colour so diagnostics are
    printed verbatim, and changes the working directory to *tmp_path*.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["CHEFCTL_CONFIG", "CHEF_REPO", "CHEFCTL_EXTRA_OPTIONS"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(
        "chefctl.platform_defaults.default_config_path",
        lambda: str(tmp_path / "chefctl-config.py"),
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def attributes_dir(tmp_path: Path) -> Path:
    """A base ``config.json`` and a ``config.json.d`` with two fragments."""
    root = tmp_path / "chef"
    fragments = root / "config.json.d"
    fragments.mkdir(parents=True)
    (root / "config.json").write_text(
        json.dumps({"run_list": ["role[base]"], "fb": {"tier": "web", "debug": False}})
    )
    (fragments / "10-web.json").write_text(
        json.dumps({"run_list": ["recipe[nginx]"], "fb": {"debug": True}})
    )
    (fragments / "20-local.json").write_text(json.dumps({"fb": {"tier": "canary"}}))
    return root


@pytest.fixture
def run_config(tmp_path: Path, attributes_dir: Path) -> ChefctlConfig:
    """A run configuration whose paths all live under *tmp_path*."""
    return ChefctlConfig(
        chef_client="/opt/chef/bin/chef-client",
        chef_options=["--no-fork", "-z"],
        path=["/usr/sbin", "/usr/bin"],
        plugin_path=str(tmp_path / "chefctl_hooks.py"),
        config_json=str(attributes_dir / "config.json"),
        config_json_d=str(attributes_dir / "config.json.d"),
    )


@pytest.fixture
def write_config():
    """Return a helper writing a settings mapping as a Python config document."""

    def _write(path: Path, settings: dict[str, Any]) -> Path:
        lines = [f"{name} = {value!r}" for name, value in settings.items()]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


# ---------------------------------------------------------------------------
# Plugin discovery
# ---------------------------------------------------------------------------


class FakeEntryPoint:
    """Stand-in for :class:`importlib.metadata.EntryPoint`."""

    def __init__(self, name: str, target: Any) -> None:
        self.name = name
        self._target = target

    def load(self) -> Any:
        return self._target


@pytest.fixture
def builtin_entry_points():
    """Make discovery see only the built-in ``json-config`` entry point.

    Keeps tests independent of whether the package is installed and of
    third-party plugins present in the environment.
    """
    from chefctl.plugins.json_config import JsonConfigPlugin

    eps = [FakeEntryPoint("json-config", JsonConfigPlugin)]
    with patch(
        "chefctl.plugins.manager.importlib.metadata.entry_points", return_value=eps
    ) as mocked:
        yield mocked


@pytest.fixture
def no_entry_points():
    """Make discovery find no entry-point plugins."""
    with patch(
        "chefctl.plugins.manager.importlib.metadata.entry_points", return_value=[]
    ) as mocked:
        yield mocked


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
