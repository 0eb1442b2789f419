"""
State hashing and cart persistence.

A saved cart holds exactly what select_cart_for_persistence exposes:
items, shipping address, PO number and notes. Loading a file yields a
hydrate action; dispatching it is the only way a saved cart re-enters
the state.
"""

import hashlib
import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .actions.cart import hydrate_cart
from .core.actions import Action
from .core.canonical import canonical_json_bytes, canonical_json_str
from .core.errors import SnapshotError
from .core.state import RootState
from .selectors.cart import select_cart_for_persistence

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def serialize_state(state: RootState) -> bytes:
    """Canonical JSON bytes of the whole state tree."""
    return canonical_json_bytes(state)


def compute_state_hash(state: RootState) -> str:
    """SHA-256 hex digest of serialize_state(state)."""
    return hashlib.sha256(serialize_state(state)).hexdigest()


class CartItemModel(BaseModel):
    product_id: str
    product_sku: str = ""
    product_name: str = ""
    product_image: str = ""
    unit_price: float = 0
    quantity: int = Field(ge=0)
    min_order_quantity: int = 1
    max_order_quantity: int
    line_total: float = 0
    notes: Optional[str] = None
    specifications: Optional[Dict[str, str]] = None


class CartSnapshot(BaseModel):
    version: int = SNAPSHOT_VERSION
    items: List[CartItemModel] = Field(default_factory=list)
    shipping_address_id: Optional[str] = None
    purchase_order_number: str = ""
    notes: str = ""

    @field_validator("items")
    @classmethod
    def unique_products(cls, items: List[CartItemModel]) -> List[CartItemModel]:
        seen = set()
        for item in items:
            if item.product_id in seen:
                raise ValueError(f"duplicate product_id: {item.product_id}")
            seen.add(item.product_id)
        return items

    def to_payload(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "items": [item.model_dump(exclude_none=True) for item in self.items],
            "shipping_address_id": self.shipping_address_id,
            "purchase_order_number": self.purchase_order_number,
            "notes": self.notes,
        }

    def to_action(self) -> Action:
        payload = self.to_payload()
        return hydrate_cart(
            payload["items"],
            payload["shipping_address_id"],
            payload["purchase_order_number"],
            payload["notes"],
        )


def snapshot_cart(state: RootState) -> CartSnapshot:
    saved = select_cart_for_persistence(state)
    return CartSnapshot(
        items=[CartItemModel(**item.to_dict()) for item in saved["items"]],
        shipping_address_id=saved["shipping_address_id"],
        purchase_order_number=saved["purchase_order_number"],
        notes=saved["notes"],
    )


def save_cart_snapshot(state: RootState, path: str) -> CartSnapshot:
    """
    Write the persistable part of the cart to path as canonical JSON.

    Raises:
        SnapshotError: If the file cannot be written
    """
    snapshot = snapshot_cart(state)
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(canonical_json_str(snapshot.to_payload()))
    except OSError as ex:
        raise SnapshotError(f"cannot write snapshot {path}: {ex}") from ex
    logger.info("Saved cart snapshot", extra={"path": path, "items": len(snapshot.items)})
    return snapshot


def read_cart_snapshot(path: str) -> CartSnapshot:
    """
    Parse and validate a saved cart.

    Raises:
        SnapshotError: If the file is missing, not JSON or fails validation
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as ex:
        raise SnapshotError(f"cannot read snapshot {path}: {ex}") from ex
    except ValueError as ex:
        raise SnapshotError(f"snapshot {path} is not valid JSON: {ex}") from ex

    try:
        snapshot = CartSnapshot.model_validate(data)
    except ValidationError as ex:
        raise SnapshotError(f"snapshot {path} failed validation: {ex}") from ex

    if snapshot.version != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version: {snapshot.version}")
    return snapshot


def load_cart_snapshot(path: str) -> Action:
    """Read a saved cart and return the hydrate action that restores it."""
    return read_cart_snapshot(path).to_action()
