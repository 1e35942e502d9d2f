"""Numeric process exit codes.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~chefctl.exceptions.ChefctlError` subclass. Cron
wrappers and fleet tooling can inspect the exit code to tell a broken config
document from a broken hook without parsing stderr.

Example::

    $ chefctl prepare
    $ echo $?
    4   # EXIT_JSON_CONFIG_ERROR -- a config.json.d fragment is not valid JSON
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""The run configuration document is missing, unreadable or invalid."""

EXIT_JSON_CONFIG_ERROR = 4
"""The base JSON attributes document or one of its fragments could not be merged."""

EXIT_REPOSITORY_ERROR = 5
"""The Chef repository layout (cookbook root) could not be resolved."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load or one of its lifecycle hooks raised."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C (128 + SIGINT)."""
