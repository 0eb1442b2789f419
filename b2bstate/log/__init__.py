"""
Action journal and integrity verification.

This module provides:
- ActionLog: Abstract interface for action persistence
- FileActionLog: File-based append-only storage (JSONL)
- Integrity: Hash chain construction and verification
"""

from .store import ActionLog, AppendResult, JournalEntry
from .file_store import FileActionLog
from .integrity import ZERO_HASH, chain_record, hash_action, verify_chain

__all__ = [
    "ActionLog",
    "AppendResult",
    "JournalEntry",
    "FileActionLog",
    "ZERO_HASH",
    "chain_record",
    "hash_action",
    "verify_chain",
]
