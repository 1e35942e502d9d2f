"""Tests for platform-derived default paths."""

from __future__ import annotations

import ntpath

import pytest

from chefctl import platform_defaults


@pytest.fixture
def windows(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("chefctl.platform_defaults.is_windows", lambda: True)


@pytest.fixture
def posix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("chefctl.platform_defaults.is_windows", lambda: False)


class TestIsWindows:
    @pytest.mark.parametrize("platform", ["win32", "cygwin", "msys"])
    def test_windows_like(self, monkeypatch: pytest.MonkeyPatch, platform: str) -> None:
        monkeypatch.setattr("chefctl.platform_defaults.sys.platform", platform)
        assert platform_defaults.is_windows() is True

    @pytest.mark.parametrize("platform", ["linux", "darwin", "freebsd13"])
    def test_posix(self, monkeypatch: pytest.MonkeyPatch, platform: str) -> None:
        monkeypatch.setattr("chefctl.platform_defaults.sys.platform", platform)
        assert platform_defaults.is_windows() is False


class TestPosixDefaults:
    """Defaults on a POSIX host."""

    def test_paths(self, posix: None) -> None:
        assert platform_defaults.chef_root() == "/opt/chef"
        assert platform_defaults.default_config_path() == "/etc/chefctl-config.py"
        assert platform_defaults.default_lock_file() == "/var/lock/subsys/chefctl"
        assert platform_defaults.default_log_dir() == "/var/chef/outputs"
        assert platform_defaults.default_plugin_path() == "/etc/chef/chefctl_hooks.py"
        assert platform_defaults.default_testing_timestamp() == "/etc/chef/test_timestamp"
        assert platform_defaults.default_config_json() == "/etc/chef/config.json"
        assert platform_defaults.default_config_json_d() == "/etc/chef/config.json.d"
        assert platform_defaults.default_file_cache_path() == "/var/cache/chef"
        assert platform_defaults.default_chef_repo() == "/etc/chef/repo"

    def test_path_entries(self, posix: None) -> None:
        assert platform_defaults.default_path() == ["/usr/sbin", "/usr/bin"]
        assert platform_defaults.path_separator() == ":"


class TestWindowsDefaults:
    """Defaults on a Windows-like host."""

    def test_paths(self, windows: None) -> None:
        assert platform_defaults.chef_root() == "C:/opscode/chef"
        assert platform_defaults.default_config_path() == "C:/chef/chefctl-config.py"
        assert platform_defaults.default_lock_file() == "C:/chef/chefctl.lock"
        assert platform_defaults.default_log_dir() == "C:/chef/outputs"
        assert platform_defaults.default_plugin_path() == "C:/chef/chefctl_hooks.py"
        assert platform_defaults.default_testing_timestamp() == "C:/chef/test_timestamp"
        assert platform_defaults.default_config_json() == "C:/chef/config.json"
        assert platform_defaults.default_config_json_d() == "C:/chef/config.json.d"
        assert platform_defaults.default_file_cache_path() == "C:/chef/cache"
        assert platform_defaults.default_chef_repo() == "C:/chef/repo"

    def test_path_entries(self, windows: None) -> None:
        assert platform_defaults.default_path() == ["C:/Windows/System32"]
        assert platform_defaults.path_separator() == ";"


class TestDetectChefClient:
    """The client executable prefers the client root, then the ChefDK root."""

    def _isdir(self, monkeypatch: pytest.MonkeyPatch, existing: set[str]) -> None:
        monkeypatch.setattr(
            "chefctl.platform_defaults.os.path.isdir", lambda p: p in existing
        )

    def test_client_root(self, posix: None, monkeypatch: pytest.MonkeyPatch) -> None:
        self._isdir(monkeypatch, {"/opt/chef", "/opt/chefdk"})
        assert platform_defaults.detect_chef_client() == "/opt/chef/bin/chef-client"

    def test_chefdk_root(self, posix: None, monkeypatch: pytest.MonkeyPatch) -> None:
        self._isdir(monkeypatch, {"/opt/chefdk"})
        assert platform_defaults.detect_chef_client() == "/opt/chefdk/bin/chef-client"

    def test_neither_assumes_client_root(
        self, posix: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        self._isdir(monkeypatch, set())
        assert platform_defaults.detect_chef_client() == "/opt/chef/bin/chef-client"

    @pytest.mark.parametrize(
        ("existing", "expected"),
        [
            ({"C:/opscode/chef"}, "C:/opscode/chef/bin/chef-client"),
            ({"C:/opscode/chefdk"}, "C:/opscode/chefdk/bin/chef-client"),
            (set(), "C:/opscode/chef/bin/chef-client"),
        ],
    )
    def test_windows_paths_use_forward_slashes(
        self,
        windows: None,
        monkeypatch: pytest.MonkeyPatch,
        existing: set[str],
        expected: str,
    ) -> None:
        monkeypatch.setattr("chefctl.platform_defaults.os.path", ntpath)
        monkeypatch.setattr(ntpath, "isdir", lambda p: p in existing)
        assert platform_defaults.detect_chef_client() == expected
