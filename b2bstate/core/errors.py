"""
Exception types for the state container.

Reducers and selectors never raise; these belong to the journal, replay,
snapshot and CLI edges.
"""


class B2BStateError(Exception):
    """Base class for all b2bstate errors."""
    pass


class UnknownActionError(B2BStateError):
    """Raised when a decoded action carries a tag outside the vocabulary."""
    pass


class IntegrityError(B2BStateError):
    """Raised when action journal hash chain verification fails."""
    pass


class ActionLogError(B2BStateError):
    """Raised when action journal operations fail."""
    pass


class SnapshotError(B2BStateError):
    """Raised when a persisted cart snapshot cannot be read or validated."""
    pass
