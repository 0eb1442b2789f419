"""
Tests for cart snapshots and state hashing.
"""

import json
import os
import tempfile

import pytest

from b2bstate.actions import cart as cart_actions
from b2bstate.actions.cart import HYDRATE_CART
from b2bstate.core.errors import SnapshotError
from b2bstate.core.state import RootState
from b2bstate.reducers import root_reducer
from b2bstate.snapshot import (
    compute_state_hash,
    load_cart_snapshot,
    save_cart_snapshot,
    serialize_state,
    snapshot_cart,
)

TS = "2024-06-01T12:00:00.000Z"


def filled_state():
    st = None
    for a in (
        cart_actions.add_item(
            {"product_id": "p1", "product_sku": "SKU-1", "unit_price": 4.5, "quantity": 2, "max_order_quantity": 20}
        ),
        cart_actions.update_item_notes("p1", "blue"),
        cart_actions.set_shipping_address("addr-3"),
        cart_actions.set_purchase_order_number("PO-77"),
        cart_actions.set_cart_notes("deliver before noon"),
    ):
        st = root_reducer(st, a.at(TS))
    return st


def test_state_hash_is_stable_and_sensitive():
    st = filled_state()
    assert compute_state_hash(st) == compute_state_hash(filled_state())
    assert compute_state_hash(st) != compute_state_hash(RootState.initial())
    assert json.loads(serialize_state(st))["cart"]["purchase_order_number"] == "PO-77"


def test_snapshot_holds_only_persisted_fields():
    snap = snapshot_cart(filled_state())
    payload = snap.to_payload()
    assert set(payload) == {"version", "items", "shipping_address_id", "purchase_order_number", "notes"}
    assert payload["items"][0]["notes"] == "blue"
    assert "specifications" not in payload["items"][0]


def test_save_then_load_restores_cart():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "nested", "cart.json")
        original = filled_state()
        save_cart_snapshot(original, path)

        action = load_cart_snapshot(path)
        assert action.type == HYDRATE_CART

        restored = root_reducer(None, action.at(TS))
        assert restored.cart.items == original.cart.items
        assert restored.cart.shipping_address_id == "addr-3"
        assert restored.cart.purchase_order_number == "PO-77"
        assert restored.cart.notes == "deliver before noon"
        assert restored.cart.can_checkout is True


def test_missing_file_raises():
    with pytest.raises(SnapshotError):
        load_cart_snapshot("/nonexistent/cart.json")


def test_invalid_json_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "cart.json")
        with open(path, "w") as f:
            f.write("{oops")
        with pytest.raises(SnapshotError):
            load_cart_snapshot(path)


def test_invalid_shape_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "cart.json")
        with open(path, "w") as f:
            json.dump({"version": 1, "items": [{"product_id": "p1", "quantity": -3}]}, f)
        with pytest.raises(SnapshotError):
            load_cart_snapshot(path)


def test_unsupported_version_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "cart.json")
        with open(path, "w") as f:
            json.dump({"version": 99}, f)
        with pytest.raises(SnapshotError):
            load_cart_snapshot(path)


def test_duplicate_products_raise():
    """A cart holds one line per product; a saved cart may not say otherwise."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "cart.json")
        line = {"product_id": "p1", "quantity": 1, "max_order_quantity": 5}
        with open(path, "w") as f:
            json.dump({"version": 1, "items": [line, dict(line, quantity=2)]}, f)
        with pytest.raises(SnapshotError, match="duplicate product_id"):
            load_cart_snapshot(path)
