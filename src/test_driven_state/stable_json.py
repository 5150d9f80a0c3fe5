"""Canonical JSON used for deep equality of handler outputs.

Keys are ordered by a single sorted list collected from the whole structure, so
two values compare equal regardless of the insertion order of their mappings.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic_core import to_jsonable_python


def _normalize(value: Any) -> Any:
    return to_jsonable_python(value, fallback=repr)


def _walk_keys(value: Any, into: set[str]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            into.add(str(key))
            _walk_keys(item, into)
    elif isinstance(value, list):
        for item in value:
            _walk_keys(item, into)


def collect_keys(*values: Any) -> list[str]:
    """Return every mapping key found anywhere in ``values``, sorted."""

    keys: set[str] = set()
    for value in values:
        _walk_keys(_normalize(value), keys)
    return sorted(keys)


def _reorder(value: Any, rank: dict[str, int]) -> Any:
    if isinstance(value, dict):
        items = [(str(k), v) for k, v in value.items()]
        items.sort(key=lambda kv: (rank.get(kv[0], len(rank)), kv[0]))
        return {k: _reorder(v, rank) for k, v in items}
    if isinstance(value, list):
        return [_reorder(item, rank) for item in value]
    if isinstance(value, float) and value.is_integer():
        # Integral floats serialize as ints.
        return int(value)
    return value


def stable_stringify(value: Any, keys: Iterable[str] | None = None) -> str:
    """Serialize ``value`` to compact JSON with globally ordered keys.

    ``keys`` may supply a shared ordering (see ``collect_keys``); by default it
    is collected from ``value`` itself.
    """

    normalized = _normalize(value)
    order = list(keys) if keys is not None else collect_keys(normalized)
    rank = {key: i for i, key in enumerate(order)}
    return json.dumps(_reorder(normalized, rank), separators=(",", ":"), ensure_ascii=False)


def stable_equal(left: Any, right: Any) -> bool:
    keys = collect_keys(left, right)
    return stable_stringify(left, keys) == stable_stringify(right, keys)
