"""Jinja2 rendering for the documents chefctl writes out.

Templates live in ``chefctl/templates/``: the commented default run
configuration document and the client bootstrap ``client.rb``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``chefctl/templates/``)."""


def _environment() -> Environment:
    # Output is Python and Ruby source, never HTML.
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["ruby"] = ruby_literal
    return env


def render_template(name: str, **context: Any) -> str:
    """Render the template *name* with *context*."""
    return _environment().get_template(name).render(**context)


def ruby_literal(value: Any) -> str:
    """Format a JSON-compatible value as a Ruby literal."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "nil"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(ruby_literal(v) for v in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(
            f"{ruby_literal(str(k))} => {ruby_literal(v)}" for k, v in value.items()
        )
        return "{" + items + "}"
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
