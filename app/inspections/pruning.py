"""Recursive pruning of empty optional structure in JSON-like payloads."""

from __future__ import annotations

from typing import Any


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, dict) and not value)


def prune_empty(value: Any) -> Any:
    """Recursively drop empty values from a JSON-like payload.

    Empty means ``None``, the empty string, and lists or mappings that have
    nothing left after pruning; those collapse to ``None``. ``False`` and ``0``
    are meaningful and kept. The input is never mutated.
    """
    if isinstance(value, str):
        return None if value == "" else value

    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for key, item in value.items():
            pruned = prune_empty(item)
            if _is_empty(pruned):
                continue
            out[key] = pruned
        return out or None

    if isinstance(value, (list, tuple)):
        items = [prune_empty(item) for item in value]
        kept = [item for item in items if not _is_empty(item)]
        return kept or None

    return value
