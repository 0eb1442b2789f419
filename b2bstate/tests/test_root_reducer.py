"""
Tests for the root reducer and action vocabulary.
"""

from b2bstate.actions import ALL_ACTION_TYPES
from b2bstate.actions import approvals, cart, company, quotes
from b2bstate.core.actions import Action
from b2bstate.core.canonical import canonical_json_str
from b2bstate.core.state import RootState
from b2bstate.reducers import SLICE_REDUCERS, root_reducer

TS = "2024-06-01T12:00:00.000Z"


def test_none_state_means_initial():
    st = root_reducer(None, Action(type="unknown/tag"))
    assert st == RootState.initial()


def test_unhandled_action_returns_same_object():
    st = RootState.initial()
    assert root_reducer(st, Action(type="unknown/tag")) is st


def test_only_targeted_slice_changes():
    st = RootState.initial()
    nxt = root_reducer(st, cart.set_cart_notes("urgent"))

    assert nxt is not st
    assert nxt.cart.notes == "urgent"
    assert nxt.company is st.company
    assert nxt.quotes is st.quotes
    assert nxt.approvals is st.approvals


def test_every_tag_has_exactly_one_slice_handler():
    for tag in ALL_ACTION_TYPES:
        owners = [name for name, reducer in SLICE_REDUCERS.items() if reducer.handles(tag)]
        assert len(owners) == 1, tag


def test_tag_prefixes_name_their_slice():
    assert all(t.startswith("company/") for t in company.ACTION_TYPES)
    assert all(t.startswith("quotes/") for t in quotes.ACTION_TYPES)
    assert all(t.startswith("approvals/") for t in approvals.ACTION_TYPES)
    assert all(t.startswith("cartB2B/") for t in cart.ACTION_TYPES)


def test_same_actions_same_state():
    """Applying the same timestamped actions twice yields identical state."""
    acts = [
        company.fetch_company_success({"id": "c1", "status": "active"}, {"id": "e1"}).at(TS),
        cart.add_item({"product_id": "p1", "unit_price": 5.0, "quantity": 2, "max_order_quantity": 10}).at(TS),
        cart.set_shipping_address("addr-1").at(TS),
        quotes.set_quote_search("acme").at(TS),
        approvals.update_pending_count(3).at(TS),
    ]

    def fold():
        st = None
        for a in acts:
            st = root_reducer(st, a)
        return st

    assert canonical_json_str(fold()) == canonical_json_str(fold())
