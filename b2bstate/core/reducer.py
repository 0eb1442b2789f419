"""
SliceReducer: registry of pure per-tag transition handlers.

A slice reducer must be:
- Pure (no side effects, no I/O, no clock reads)
- Deterministic (same state + action -> same output)
- Total (unknown tags return the input state object unchanged)
"""

from typing import Any, Callable, Dict, Optional

from .actions import Action

# Handler signature: (current_slice_state, action) -> new_slice_state
Handler = Callable[[Any, Action], Any]


class SliceReducer:
    """
    Registry of action handlers for one state slice.

    Usage:
        reducer = SliceReducer("cart", CartB2BState.initial)
        reducer.register("cartB2B/addItem", on_add_item)
        new_state = reducer(state, action)
    """

    def __init__(self, name: str, initial: Callable[[], Any]) -> None:
        self.name = name
        self._initial = initial
        self._handlers: Dict[str, Handler] = {}

    def register(self, action_type: str, handler: Handler) -> None:
        """
        Register action handler.

        Args:
            action_type: Action tag string
            handler: Pure function (current_slice_state, action) -> new_slice_state
        """
        self._handlers[action_type] = handler

    def handles(self, action_type: str) -> bool:
        return action_type in self._handlers

    def initial(self) -> Any:
        return self._initial()

    def apply(self, state: Optional[Any], action: Action) -> Any:
        """
        Apply action to slice state using the registered handler.

        Args:
            state: Current slice state (None means the initial state)
            action: Action to apply

        Returns:
            New slice state, or state itself when the tag is not handled
        """
        if state is None:
            state = self._initial()
        handler = self._handlers.get(action.type)
        if handler is None:
            return state
        return handler(state, action)

    __call__ = apply
