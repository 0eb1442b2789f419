"""
Replay runner: reconstruct state from the action journal.

Replay is pure: applies the reducer to each action in sequence order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..actions import ALL_ACTION_TYPES
from ..core.actions import Action
from ..core.errors import UnknownActionError
from ..core.state import RootState
from ..log.store import ActionLog
from ..reducers.root import root_reducer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying actions
        applied: Number of actions applied
    """
    state: RootState
    applied: int


def replay(
    log: ActionLog,
    reducer: Callable[[Optional[RootState], Action], RootState] = root_reducer,
    to_seq: Optional[int] = None,
) -> ReplayResult:
    """
    Replay journaled actions to reconstruct state.

    Same journal always produces the same state: actions carry their own
    timestamps, so nothing depends on when the replay runs.

    Args:
        log: Action journal to read from
        reducer: Root-level reducer
        to_seq: Stop at this sequence (inclusive, None = all)

    Raises:
        UnknownActionError: If a journaled tag is not part of the vocabulary
    """
    st = RootState.initial()
    count = 0

    for entry in log.entries(from_seq=0):
        if to_seq is not None and entry.seq > to_seq:
            break
        if entry.action.type not in ALL_ACTION_TYPES:
            raise UnknownActionError(f"unknown action type at seq {entry.seq}: {entry.action.type}")
        st = reducer(st, entry.action)
        count += 1

    logger.info("Replay finished", extra={"applied": count, "to_seq": to_seq})
    return ReplayResult(state=st, applied=count)
