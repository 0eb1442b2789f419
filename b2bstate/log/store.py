"""
ActionLog abstract interface.

Defines the contract for action journal implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from ..core.actions import Action


@dataclass(frozen=True)
class AppendResult:
    """Where an appended action landed in the chain."""

    action: Action
    seq: int
    action_hash: str
    prev_hash: str


@dataclass(frozen=True)
class JournalEntry:
    seq: int
    action: Action
    action_hash: str
    prev_hash: str


class ActionLog(ABC):
    """
    Abstract action journal.

    All implementations must guarantee:
    - Append-only (no updates, no deletes)
    - Sequential ordering (seq starts at 0 and has no gaps)
    - Durability (fsync or equivalent)
    """

    @abstractmethod
    def append(self, action: Action) -> AppendResult:
        """
        Append action to the journal; seq is assigned by the log.

        Raises:
            ActionLogError: If append fails
        """
        ...

    @abstractmethod
    def records(self) -> Iterator[Dict[str, Any]]:
        """Yield raw chain records in sequence order."""
        ...

    def entries(self, from_seq: int = 0) -> Iterator[JournalEntry]:
        for rec in self.records():
            data = rec["action"]
            if data["seq"] < from_seq:
                continue
            yield JournalEntry(
                seq=data["seq"],
                action=Action(type=data["type"], payload=data.get("payload") or {}, ts=data["ts"]),
                action_hash=rec["action_hash"],
                prev_hash=rec["prev_hash"],
            )

    def read(self, from_seq: int = 0) -> Iterator[Action]:
        """
        Read actions from the journal.

        Args:
            from_seq: Start from this sequence number (inclusive)
        """
        for entry in self.entries(from_seq=from_seq):
            yield entry.action

    def get_last_hash(self) -> Optional[str]:
        """
        Return last action hash if available.

        Implementations may override. Default returns None.
        """
        return None
