"""
Core state container primitives.

This module provides:
- Action: Immutable, timestamped transition requests
- State: Frozen slice states and the combined RootState
- SliceReducer: Registry of pure per-tag handlers
- Memoize: Reference-stable selector caches
- Canonical: Deterministic serialization
- Clock: Timestamp helpers and a deterministic clock
"""

from .actions import Action, to_payload
from .state import (
    ApprovalsState,
    CartB2BState,
    CartItem,
    CartTotals,
    CompanyState,
    Pagination,
    QuotesState,
    RootState,
    SpendingValidation,
)
from .reducer import SliceReducer
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .clock import DeterministicClock, utc_now, utc_now_iso
from .errors import (
    ActionLogError,
    B2BStateError,
    IntegrityError,
    SnapshotError,
    UnknownActionError,
)

__all__ = [
    "Action",
    "to_payload",
    "ApprovalsState",
    "CartB2BState",
    "CartItem",
    "CartTotals",
    "CompanyState",
    "Pagination",
    "QuotesState",
    "RootState",
    "SpendingValidation",
    "SliceReducer",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "DeterministicClock",
    "utc_now",
    "utc_now_iso",
    "ActionLogError",
    "B2BStateError",
    "IntegrityError",
    "SnapshotError",
    "UnknownActionError",
]
