"""
Action model for state transitions.

Actions are immutable records describing a requested transition. Each
action is stamped with its creation time so reducers never read the
system clock: replaying the same actions yields the same state.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict

from .clock import utc_now_iso


@dataclass(frozen=True)
class Action:
    """
    Immutable action record.

    Fields:
        type: Tag string (e.g., "cartB2B/addItem")
        payload: JSON-compatible action data
        ts: ISO-8601 UTC timestamp of creation
    """
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    ts: str = field(default_factory=utc_now_iso)

    def at(self, ts: str) -> "Action":
        """Return a copy stamped with ts."""
        return replace(self, ts=ts)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "payload": dict(self.payload), "ts": self.ts}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Action":
        if "ts" in data and data["ts"] is not None:
            return Action(type=data["type"], payload=dict(data.get("payload") or {}), ts=data["ts"])
        return Action(type=data["type"], payload=dict(data.get("payload") or {}))


def to_payload(value: Any) -> Any:
    """Convert dataclass values (anything with to_dict) into plain payload data."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value
