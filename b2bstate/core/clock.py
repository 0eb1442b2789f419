"""
Clock helpers.

Reducers never read the system clock: every Action carries the ISO-8601
timestamp it was created at. DeterministicClock produces reproducible
timestamps for tests and replays.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format as ISO-8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso(utc_now())


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC. Returns None for None or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_before(value: Optional[str], reference: Optional[str]) -> bool:
    """True when both timestamps parse and value < reference."""
    a = parse_iso(value)
    b = parse_iso(reference)
    if a is None or b is None:
        return False
    return a < b


@dataclass(frozen=True)
class DeterministicClock:
    """
    Deterministic time source.

    tick() returns a new clock; the instance itself never changes, so a
    replay that starts from the same clock produces identical timestamps.
    """
    current: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc)
    )

    def now(self) -> datetime:
        """Get current timestamp without advancing."""
        return self.current

    def now_iso(self) -> str:
        return to_iso(self.current)

    def tick(self, seconds: float = 1.0) -> "DeterministicClock":
        """Advance clock by seconds and return new clock instance."""
        return DeterministicClock(self.current + timedelta(seconds=seconds))
