"""
Slice reducers and the root reducer.

Each slice reducer is a SliceReducer registry populated by its module's
register_handlers(); root_reducer composes them.
"""

from .approvals import approvals_reducer
from .cart import cart_reducer
from .company import company_reducer
from .quotes import quotes_reducer
from .root import SLICE_REDUCERS, root_reducer

__all__ = [
    "approvals_reducer",
    "cart_reducer",
    "company_reducer",
    "quotes_reducer",
    "SLICE_REDUCERS",
    "root_reducer",
]
