"""Run configuration document: location, loading, overrides and writing.

This module handles everything between a document on disk and a validated
:class:`~chefctl.models.ChefctlConfig`:

* **Location** -- :func:`resolve_config_path` picks the document using the
  precedence ``-C/--config`` > ``$CHEFCTL_CONFIG`` > platform default.
* **Loading** -- :func:`load_config` reads Python (``.py``), JSON or YAML
  documents. A Python document is executed and its module-level assignments
  to option names become settings, so the last assignment to a name wins.
* **Overrides** -- :func:`apply_overrides` layers CLI flags on top.
* **Writing** -- :func:`write_default_config` renders a commented default
  document and writes it atomically (temp file then rename).
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from chefctl import __version__, platform_defaults
from chefctl.exceptions import ConfigError, JsonConfigError
from chefctl.loader import load_document
from chefctl.models import ChefctlConfig
from chefctl.rendering import render_template

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHEFCTL_CONFIG"
"""Environment variable naming the run configuration document."""

_PYTHON_SUFFIXES = (".py",)
_DATA_SUFFIXES = (".json", ".yaml", ".yml")


# --- Location ---


def resolve_config_path(cli_path: Optional[str] = None) -> tuple[Path, bool]:
    """Pick the run configuration document.

    Precedence (high to low):
        1. ``cli_path`` (the ``-C/--config`` flag)
        2. ``$CHEFCTL_CONFIG``
        3. :func:`~chefctl.platform_defaults.default_config_path`

    Returns:
        A tuple of ``(path, explicit)`` where *explicit* is ``True`` when the
        path came from the CLI or the environment. An explicit path must
        exist; the default may be absent.
    """
    if cli_path:
        return Path(cli_path), True
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return Path(platform_defaults.default_config_path()), False


# --- Loading ---


def read_settings(path: Path) -> dict[str, Any]:
    """Read the raw settings mapping from a document without validating it.

    Raises:
        ConfigError: If the file is missing, has an unsupported suffix,
            fails to execute, or does not contain an object.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in _PYTHON_SUFFIXES:
        return _exec_python_document(path)
    if suffix in _DATA_SUFFIXES:
        try:
            return load_document(str(path))
        except JsonConfigError as exc:
            raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    raise ConfigError(
        f"Unsupported config format '{suffix or path.name}' at {path} "
        "(expected .py, .json, .yaml or .yml)"
    )


def _exec_python_document(path: Path) -> dict[str, Any]:
    """Execute a Python config document and collect the option assignments."""
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    namespace: dict[str, Any] = {
        "__file__": str(path),
        "__name__": "chefctl_config",
        "is_windows": platform_defaults.is_windows,
    }
    try:
        code = compile(source, str(path), "exec")
        exec(code, namespace)
    except SyntaxError as exc:
        raise ConfigError(f"Syntax error in {path}, line {exc.lineno}: {exc.msg}") from exc
    except Exception as exc:
        raise ConfigError(f"Error executing config file {path}: {exc}") from exc

    options = ChefctlConfig.model_fields
    settings = {}
    for name, value in namespace.items():
        if name in options:
            settings[name] = value
        elif not name.startswith("_") and not callable(value):
            logger.debug("Ignoring non-option name '%s' in %s", name, path)
    return settings


def load_config(path: Path) -> ChefctlConfig:
    """Load and validate a run configuration document.

    Args:
        path: The document to load (``.py``, ``.json``, ``.yaml``/``.yml``).

    Returns:
        The validated settings, with defaults for every key the document
        does not set.

    Raises:
        ConfigError: If the document cannot be read or fails validation.
    """
    logger.debug("Loading config from %s", path)
    logger.debug("Environment: %r", dict(os.environ))
    settings = read_settings(path)
    try:
        return ChefctlConfig.model_validate(settings)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def apply_overrides(config: ChefctlConfig, **overrides: Any) -> ChefctlConfig:
    """Return a copy of *config* with every non-``None`` override applied.

    Raises:
        ConfigError: If an override names an unknown option or has the
            wrong type.
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    unknown = sorted(set(updates) - set(ChefctlConfig.model_fields))
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(unknown)}")
    if not updates:
        return config
    data = config.model_dump()
    data.update(updates)
    try:
        return ChefctlConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid override: {exc}") from exc


def resolve_config(cli_path: Optional[str] = None, **overrides: Any) -> ChefctlConfig:
    """Resolve the effective run configuration.

    Precedence (high to low):
        1. Non-``None`` *overrides* (CLI flags)
        2. The run configuration document (see :func:`resolve_config_path`)
        3. Built-in defaults

    Raises:
        ConfigError: If an explicitly named document does not exist, or any
            document or override is invalid.
    """
    path, explicit = resolve_config_path(cli_path)
    if path.is_file():
        config = load_config(path)
    elif explicit:
        raise ConfigError(f"Config file not found: {path}")
    else:
        logger.debug("No config at %s, using defaults", path)
        config = ChefctlConfig()
    return apply_overrides(config, **overrides)


# --- Writing ---


def render_default_config(location: Optional[str] = None) -> str:
    """Render a commented default run configuration document.

    Every option is listed, commented out, with its description and the
    default for the current platform.
    """
    defaults = ChefctlConfig().model_dump(mode="json")
    fields = [
        {
            "name": name,
            "description": info.description or "",
            "default": repr(defaults[name]),
        }
        for name, info in ChefctlConfig.model_fields.items()
    ]
    return render_template(
        "chefctl-config.py.j2",
        location=location or platform_defaults.default_config_path(),
        fields=fields,
        version=__version__,
    )


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write the default document to *path*.

    Raises:
        ConfigError: If *path* exists and *force* is not set.
    """
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists (use --force to overwrite)")
    _atomic_write(path, render_default_config(str(path)))
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
