"""Exception hierarchy for chefctl.

All exceptions inherit from :class:`ChefctlError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`chefctl.exit_codes`.
The top-level error handler in :func:`chefctl.app.main` catches
``ChefctlError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ChefctlError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigError         (exit 3)
    +-- JsonConfigError     (exit 4)
    +-- RepositoryError     (exit 5)
    +-- PluginError         (exit 10)
"""

from chefctl.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_JSON_CONFIG_ERROR,
    EXIT_PLUGIN_ERROR,
    EXIT_REPOSITORY_ERROR,
)


class ChefctlError(Exception):
    """Base exception for all chefctl errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`chefctl.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ChefctlError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(ChefctlError):
    """Raised when the run configuration document cannot be found, executed or validated."""

    exit_code = EXIT_CONFIG_ERROR


class JsonConfigError(ChefctlError):
    """Raised when the base JSON attributes or a fragment cannot be read, parsed or merged."""

    exit_code = EXIT_JSON_CONFIG_ERROR


class RepositoryError(ChefctlError):
    """Raised when the Chef repository's cookbook root cannot be enumerated."""

    exit_code = EXIT_REPOSITORY_ERROR


class PluginError(ChefctlError):
    """Raised when a plugin fails to load or a lifecycle hook raises."""

    exit_code = EXIT_PLUGIN_ERROR
