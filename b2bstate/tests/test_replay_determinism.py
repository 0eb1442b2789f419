"""
Tests for replay determinism.

Critical: replaying a journal must rebuild exactly the state the store
reached while the actions were dispatched.
"""

import os
import tempfile

import pytest

from b2bstate.actions import approvals as approval_actions
from b2bstate.actions import cart as cart_actions
from b2bstate.actions import company as company_actions
from b2bstate.core.actions import Action
from b2bstate.core.clock import DeterministicClock
from b2bstate.core.errors import UnknownActionError
from b2bstate.log import FileActionLog
from b2bstate.replay import replay
from b2bstate.snapshot import compute_state_hash
from b2bstate.store import Store


def scripted_actions():
    clk = DeterministicClock()
    acts = [
        company_actions.fetch_company_success({"id": "c1", "status": "active"}, {"id": "e1"}),
        cart_actions.add_item({"product_id": "p1", "unit_price": 12.5, "quantity": 4, "max_order_quantity": 50}),
        cart_actions.add_item({"product_id": "p2", "unit_price": 3.0, "quantity": 10, "max_order_quantity": 50}),
        cart_actions.update_item_quantity("p1", 6),
        cart_actions.set_shipping_address("addr-1"),
        approval_actions.update_pending_count(2),
    ]
    stamped = []
    for a in acts:
        clk = clk.tick()
        stamped.append(a.at(clk.now_iso()))
    return stamped


def test_replay_matches_live_state():
    with tempfile.TemporaryDirectory() as tmpdir:
        journal = FileActionLog(os.path.join(tmpdir, "actions.log"))
        store = Store(journal=journal)
        for a in scripted_actions():
            store.dispatch(a)

        result = replay(journal)

        assert result.applied == 6
        assert result.state == store.get_state()
        assert compute_state_hash(result.state) == compute_state_hash(store.get_state())


def test_replay_twice_same_hash():
    with tempfile.TemporaryDirectory() as tmpdir:
        journal = FileActionLog(os.path.join(tmpdir, "actions.log"))
        for a in scripted_actions():
            journal.append(a)

        h1 = compute_state_hash(replay(journal).state)
        h2 = compute_state_hash(replay(journal).state)
        assert h1 == h2


def test_replay_until_seq():
    with tempfile.TemporaryDirectory() as tmpdir:
        journal = FileActionLog(os.path.join(tmpdir, "actions.log"))
        for a in scripted_actions():
            journal.append(a)

        partial = replay(journal, to_seq=1)
        assert partial.applied == 2
        assert [i.product_id for i in partial.state.cart.items] == ["p1"]
        assert partial.state.cart.shipping_address_id is None


def test_unknown_tag_in_journal_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        journal = FileActionLog(os.path.join(tmpdir, "actions.log"))
        journal.append(Action(type="legacy/removed", ts="2024-01-01T00:00:00.000Z"))

        with pytest.raises(UnknownActionError):
            replay(journal)
