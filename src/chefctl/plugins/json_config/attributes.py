"""Build the merged JSON attributes document handed to the client with ``-j``.

The base document (``config_json``) is read first; every fragment in
``config_json_d`` matching ``config_json_glob`` is then merged over it, in
file-name order, with :func:`chefctl.merge.merge_all`. A later fragment
therefore wins over an earlier one, and every fragment wins over the base.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from chefctl.exceptions import JsonConfigError
from chefctl.loader import is_url, load_document
from chefctl.merge import merge_all
from chefctl.models import ArrayMergePolicy

logger = logging.getLogger(__name__)


def base_exists(source: str) -> bool:
    """Whether the base document is present. URLs are assumed to be."""
    return is_url(source) or Path(source).is_file()


def fragment_paths(fragment_dir: Path, pattern: str = "*.json") -> list[Path]:
    """Return the fragment files in *fragment_dir* matching *pattern*, sorted by name.

    A missing *fragment_dir* (or one that is not a directory) has no
    fragments.

    Raises:
        JsonConfigError: If the directory cannot be listed.
    """
    if not fragment_dir.is_dir():
        return []
    try:
        return sorted(p for p in fragment_dir.glob(pattern) if p.is_file())
    except OSError as exc:
        raise JsonConfigError(f"Cannot list fragments in {fragment_dir}: {exc}") from exc


def load_merged_attributes(
    base: str,
    fragment_dir: Path,
    pattern: str = "*.json",
    array_policy: ArrayMergePolicy = ArrayMergePolicy.UNION,
) -> dict[str, Any]:
    """Load the base document and merge every fragment over it.

    Args:
        base: Path or HTTP(S) URL of the base JSON document.
        fragment_dir: Directory holding the fragments.
        pattern: Glob selecting fragment files.
        array_policy: How lists under the same key are combined.

    Raises:
        JsonConfigError: If any document is missing, unreadable, not valid
            JSON, or not a JSON object.
    """
    documents = [load_document(base, hint="json")]
    for path in fragment_paths(fragment_dir, pattern):
        logger.debug("Merging JSON fragment %s", path)
        documents.append(load_document(str(path), hint="json"))
    return merge_all(documents, array_policy)


def write_attributes(data: dict[str, Any], directory: str | None = None) -> Path:
    """Write *data* as pretty-printed JSON to a new temporary file.

    The file is not deleted on close; the caller owns it.

    Returns:
        The path of the written file.
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        prefix="chefctl-attributes-",
        suffix=".json",
        dir=directory,
        delete=False,
        encoding="utf-8",
    ) as fh:
        json.dump(data, fh, indent=2)
        fh.write("\n")
        fh.flush()
    return Path(fh.name)
