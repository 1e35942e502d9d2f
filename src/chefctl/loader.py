"""Load JSON/YAML documents from files, HTTP(S) URLs or stdin.

Used for the base JSON attributes document and its fragments (always JSON)
and for run configuration documents written as JSON or YAML.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from chefctl.exceptions import JsonConfigError


def is_url(source: str) -> bool:
    """Return True if *source* names an HTTP(S) resource."""
    return source.startswith(("http://", "https://"))


def load_document(source: str, hint: str = "", timeout: float = 30.0) -> dict[str, Any]:
    """Load a JSON or YAML object from a URL, file path, or stdin (``-``).

    Args:
        source: A URL (http/https), file path, or ``-`` for stdin.
        hint: ``"json"`` to parse strictly as JSON, ``"yaml"`` to parse as
            YAML, or empty to detect from the extension/content type.
        timeout: Seconds to wait for a URL fetch.

    Returns:
        The parsed document.

    Raises:
        JsonConfigError: If the source cannot be read or does not contain an
            object.
    """
    if source == "-":
        return _load_from_stdin(hint)
    if is_url(source):
        return _load_from_url(source, hint, timeout)
    return _load_from_file(Path(source), hint)


def _load_from_stdin(hint: str) -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise JsonConfigError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise JsonConfigError("No input received from stdin")

    return parse_content(content, hint=hint, origin="<stdin>")


def _load_from_url(url: str, hint: str, timeout: float) -> dict[str, Any]:
    """Fetch a document over HTTP(S)."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise JsonConfigError(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise JsonConfigError(f"Failed to fetch {url}: {exc}") from exc

    if not hint:
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            hint = "json"
        elif "yaml" in content_type or "yml" in content_type:
            hint = "yaml"

    return parse_content(response.text, hint=hint, origin=url)


def _load_from_file(path: Path, hint: str) -> dict[str, Any]:
    if not path.is_file():
        raise JsonConfigError(f"Document not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise JsonConfigError(f"Failed to read {path}: {exc}") from exc

    if not hint:
        suffix = path.suffix.lower()
        if suffix == ".json":
            hint = "json"
        elif suffix in (".yaml", ".yml"):
            hint = "yaml"

    return parse_content(content, hint=hint, origin=str(path))


def parse_content(content: str, hint: str = "", origin: str = "<string>") -> dict[str, Any]:
    """Parse *content* as a JSON or YAML object.

    JSON is tried first unless *hint* is ``"yaml"``; with a ``"json"`` hint a
    JSON syntax error is final. An empty document parses to ``{}``.

    Raises:
        JsonConfigError: If the content is not a JSON/YAML object.
    """
    if not content.strip():
        return {}

    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_object(json.loads(content), origin)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise JsonConfigError(f"Invalid JSON in {origin}: {exc}") from exc
            json_error = exc

    try:
        return _require_object(yaml.safe_load(content), origin)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {origin} as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise JsonConfigError(msg) from exc


def _require_object(value: Any, origin: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise JsonConfigError(
            f"{origin} must contain an object (got {type(value).__name__})"
        )
    return value
