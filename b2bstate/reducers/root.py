"""
Root reducer: one transition over the combined RootState.

Every action is offered to all four slice reducers. When none of them
changed its slice the input RootState object is returned as is, so
consumers can detect "nothing happened" with an identity check.
"""

from typing import Optional

from ..core.actions import Action
from ..core.state import RootState
from .approvals import approvals_reducer
from .cart import cart_reducer
from .company import company_reducer
from .quotes import quotes_reducer

SLICE_REDUCERS = {
    "company": company_reducer,
    "quotes": quotes_reducer,
    "approvals": approvals_reducer,
    "cart": cart_reducer,
}


def root_reducer(state: Optional[RootState], action: Action) -> RootState:
    if state is None:
        state = RootState.initial()

    company = company_reducer(state.company, action)
    quotes = quotes_reducer(state.quotes, action)
    approvals = approvals_reducer(state.approvals, action)
    cart = cart_reducer(state.cart, action)

    if (
        company is state.company
        and quotes is state.quotes
        and approvals is state.approvals
        and cart is state.cart
    ):
        return state

    return RootState(company=company, quotes=quotes, approvals=approvals, cart=cart)
