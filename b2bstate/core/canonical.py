"""
Stable JSON encoding of actions and state.

The journal hashes, state hashes and saved carts are all computed from
this encoding, so equal values always give equal bytes.
"""

import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Reduce a value to plain JSON data with a fixed key order.

    Dataclasses with to_dict() (CartItem, RootState, Action ...) are
    expanded, tuples become lists, sets become sorted lists.
    """
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return canonicalize(to_dict())
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj, key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted(canonicalize(x) for x in obj)
    return obj


def canonical_json_str(obj: Any) -> str:
    """Compact, key-sorted, UTF-8 preserving JSON text."""
    return json.dumps(canonicalize(obj), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json_bytes(obj: Any) -> bytes:
    return canonical_json_str(obj).encode("utf-8")
