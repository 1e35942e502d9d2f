"""Recursive deep merge for JSON attribute documents.

The rules, applied key by key when an *overlay* is merged over a *base*:

* both values are mappings -- merge recursively;
* both values are lists -- combine according to :class:`ArrayMergePolicy`;
* the overlay value is ``None`` -- the base value is kept;
* anything else -- the overlay value replaces the base value.

Keys present only in one side are carried over unchanged. Neither input is
mutated; the result shares no containers with them.
"""

from __future__ import annotations

import copy
from typing import Any

from chefctl.models import ArrayMergePolicy


def deep_merge(
    base: dict[str, Any],
    overlay: dict[str, Any],
    array_policy: ArrayMergePolicy = ArrayMergePolicy.UNION,
) -> dict[str, Any]:
    """Return a new mapping with *overlay* merged over *base*.

    Args:
        base: The document being extended.
        overlay: The document whose values win on conflict.
        array_policy: How two lists under the same key are combined.

    Example::

        >>> deep_merge({"a": {"x": 1}}, {"a": {"y": 2}})
        {'a': {'x': 1, 'y': 2}}
    """
    return _merge_value(copy.deepcopy(base), copy.deepcopy(overlay), array_policy)


def merge_all(
    documents: list[dict[str, Any]],
    array_policy: ArrayMergePolicy = ArrayMergePolicy.UNION,
) -> dict[str, Any]:
    """Fold :func:`deep_merge` over *documents*, later documents winning."""
    result: dict[str, Any] = {}
    for document in documents:
        result = deep_merge(result, document, array_policy)
    return result


def _merge_value(base: Any, overlay: Any, policy: ArrayMergePolicy) -> Any:
    if overlay is None:
        return base
    if isinstance(base, dict) and isinstance(overlay, dict):
        for key, value in overlay.items():
            if key in base:
                base[key] = _merge_value(base[key], value, policy)
            else:
                base[key] = value
        return base
    if isinstance(base, list) and isinstance(overlay, list):
        return _merge_lists(base, overlay, policy)
    return overlay


def _merge_lists(base: list[Any], overlay: list[Any], policy: ArrayMergePolicy) -> list[Any]:
    if policy is ArrayMergePolicy.REPLACE:
        return overlay
    if policy is ArrayMergePolicy.CONCAT:
        return base + overlay
    # JSON values may be unhashable (dicts, lists), so membership is by equality.
    merged: list[Any] = []
    for item in base + overlay:
        if item not in merged:
            merged.append(item)
    return merged
