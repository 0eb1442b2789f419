"""
Store: the single serializing dispatch point around the root reducer.

Transitions are applied one at a time under a lock. With a journal
attached, every accepted action is appended before it is applied, so
replaying the journal rebuilds the same state.
"""

import logging
import threading
from typing import Callable, List, Optional

from .actions import ALL_ACTION_TYPES
from .core.actions import Action
from .core.errors import UnknownActionError
from .core.state import RootState
from .log.store import ActionLog
from .reducers.root import root_reducer

logger = logging.getLogger(__name__)

Listener = Callable[[RootState], None]


class Store:
    def __init__(
        self,
        reducer: Callable[[Optional[RootState], Action], RootState] = root_reducer,
        state: Optional[RootState] = None,
        journal: Optional[ActionLog] = None,
    ) -> None:
        self._reducer = reducer
        self._state = state if state is not None else RootState.initial()
        self._journal = journal
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    def get_state(self) -> RootState:
        return self._state

    def dispatch(self, action: Action) -> RootState:
        """
        Apply one action and return the resulting state.

        Listeners run only when the state object changed. With a journal,
        tags outside the vocabulary are rejected so the journal stays
        replayable.

        Raises:
            UnknownActionError: Unknown tag while journaling
            ActionLogError: The journal append failed; state is unchanged

        A reducer that raises leaves both the state and the journal untouched.
        """
        with self._lock:
            if self._journal is not None and action.type not in ALL_ACTION_TYPES:
                raise UnknownActionError(f"unknown action type: {action.type}")

            # Only actions the reducer accepted reach the journal
            previous = self._state
            current = self._reducer(previous, action)

            if self._journal is not None:
                result = self._journal.append(action)
                logger.debug("Dispatching action", extra={"action_type": action.type, "seq": result.seq})

            self._state = current
            if current is previous:
                return previous
            listeners = list(self._listeners)

        for listener in listeners:
            listener(current)
        return current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; the returned callable removes it again."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
