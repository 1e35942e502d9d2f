"""Built-in JSON attributes plugin.

Registered under the ``json-config`` entry point. Disable it with
``plugins = {"disabled": ["json-config"]}`` in the run configuration.

Exports:
    JsonConfigPlugin: The pre-run hook.
    load_merged_attributes: Base + fragments merge, for programmatic use.
"""

from chefctl.plugins.json_config.attributes import load_merged_attributes
from chefctl.plugins.json_config.plugin import JsonConfigPlugin

__all__ = ["JsonConfigPlugin", "load_merged_attributes"]
