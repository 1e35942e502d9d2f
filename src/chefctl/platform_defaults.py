"""Platform-derived default paths.

Every default that differs between a Windows-like host and a POSIX host is
computed here so that the choice is made in exactly one place. The
conditional logic only picks literal path strings; nothing is validated or
created on disk.

All factories call :func:`is_windows` at call time, so tests (and config
documents) can flip the platform by patching that single function. Derived
paths are joined with ``/`` on every platform, so Windows values keep the
``C:/...`` form.
"""

from __future__ import annotations

import os
import posixpath
import sys


def is_windows() -> bool:
    """Return True when running on a Windows-like platform."""
    return sys.platform.startswith(("win", "cygwin", "msys"))


def _pick(windows: str, posix: str) -> str:
    return windows if is_windows() else posix


def chef_root() -> str:
    """Return the omnibus Chef installation root for this platform."""
    return _pick("C:/opscode/chef", "/opt/chef")


def detect_chef_client() -> str:
    """Return the path to the ``chef-client`` executable.

    Prefers the Chef client omnibus root, then the ChefDK root (the same path
    with a ``dk`` suffix). When neither exists the client root is assumed.
    """
    root = chef_root()
    if os.path.isdir(root):
        return posixpath.join(root, "bin", "chef-client")
    if os.path.isdir(root + "dk"):
        return posixpath.join(root + "dk", "bin", "chef-client")
    return posixpath.join(root, "bin", "chef-client")


def default_config_path() -> str:
    """Default location of the run configuration document."""
    return _pick("C:/chef/chefctl-config.py", "/etc/chefctl-config.py")


def default_lock_file() -> str:
    return _pick("C:/chef/chefctl.lock", "/var/lock/subsys/chefctl")


def default_log_dir() -> str:
    return _pick("C:/chef/outputs", "/var/chef/outputs")


def default_plugin_path() -> str:
    return _pick("C:/chef/chefctl_hooks.py", "/etc/chef/chefctl_hooks.py")


def default_testing_timestamp() -> str:
    return _pick("C:/chef/test_timestamp", "/etc/chef/test_timestamp")


def default_config_json() -> str:
    return _pick("C:/chef/config.json", "/etc/chef/config.json")


def default_config_json_d() -> str:
    return _pick("C:/chef/config.json.d", "/etc/chef/config.json.d")


def default_file_cache_path() -> str:
    return _pick("C:/chef/cache", "/var/cache/chef")


def default_chef_repo() -> str:
    return _pick("C:/chef/repo", "/etc/chef/repo")


def default_path() -> list[str]:
    """Default ``PATH`` entries handed to the client process."""
    if is_windows():
        return ["C:/Windows/System32"]
    return ["/usr/sbin", "/usr/bin"]


def path_separator() -> str:
    """Separator used to join ``PATH`` entries on this platform."""
    return ";" if is_windows() else ":"
