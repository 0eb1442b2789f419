"""
B2B cart action tags and creators.

Creators accept CartItem / CartTotals / SpendingValidation instances or
their dict forms and always emit plain dict payloads, so actions can be
journaled as JSON and replayed.
"""

from typing import Any, Dict, Iterable, Optional

from ..core.actions import Action, to_payload

ADD_ITEM = "cartB2B/addItem"
UPDATE_ITEM_QUANTITY = "cartB2B/updateItemQuantity"
REMOVE_ITEM = "cartB2B/removeItem"
UPDATE_ITEM_NOTES = "cartB2B/updateItemNotes"
CLEAR_CART = "cartB2B/clear"
ADD_ITEMS_BULK = "cartB2B/addItemsBulk"
SET_SHIPPING_ADDRESS = "cartB2B/setShippingAddress"
SET_PURCHASE_ORDER_NUMBER = "cartB2B/setPurchaseOrderNumber"
SET_NOTES = "cartB2B/setNotes"
UPDATE_TOTALS = "cartB2B/updateTotals"
UPDATE_SPENDING_VALIDATION = "cartB2B/updateSpendingValidation"
CART_LOADING_START = "cartB2B/loadingStart"
CART_LOADING_SUCCESS = "cartB2B/loadingSuccess"
CART_LOADING_FAILURE = "cartB2B/loadingFailure"
HYDRATE_CART = "cartB2B/hydrate"
RESET_CART_STATE = "cartB2B/reset"
CLEAR_CART_ERROR = "cartB2B/clearError"

ACTION_TYPES = frozenset(
    {
        ADD_ITEM,
        UPDATE_ITEM_QUANTITY,
        REMOVE_ITEM,
        UPDATE_ITEM_NOTES,
        CLEAR_CART,
        ADD_ITEMS_BULK,
        SET_SHIPPING_ADDRESS,
        SET_PURCHASE_ORDER_NUMBER,
        SET_NOTES,
        UPDATE_TOTALS,
        UPDATE_SPENDING_VALIDATION,
        CART_LOADING_START,
        CART_LOADING_SUCCESS,
        CART_LOADING_FAILURE,
        HYDRATE_CART,
        RESET_CART_STATE,
        CLEAR_CART_ERROR,
    }
)


def add_item(item: Any) -> Action:
    """Add one line; merges with an existing line for the same product."""
    return Action(type=ADD_ITEM, payload={"item": to_payload(item)})


def update_item_quantity(product_id: str, quantity: int) -> Action:
    return Action(
        type=UPDATE_ITEM_QUANTITY, payload={"product_id": product_id, "quantity": quantity}
    )


def remove_item(product_id: str) -> Action:
    return Action(type=REMOVE_ITEM, payload={"product_id": product_id})


def update_item_notes(product_id: str, notes: str) -> Action:
    return Action(type=UPDATE_ITEM_NOTES, payload={"product_id": product_id, "notes": notes})


def clear_cart() -> Action:
    return Action(type=CLEAR_CART)


def add_items_bulk(items: Iterable[Any]) -> Action:
    """Quick-order / CSV import entry point."""
    return Action(type=ADD_ITEMS_BULK, payload={"items": to_payload(list(items))})


def set_shipping_address(address_id: Optional[str]) -> Action:
    return Action(type=SET_SHIPPING_ADDRESS, payload={"address_id": address_id})


def set_purchase_order_number(po_number: str) -> Action:
    return Action(type=SET_PURCHASE_ORDER_NUMBER, payload={"po_number": po_number})


def set_cart_notes(notes: str) -> Action:
    return Action(type=SET_NOTES, payload={"notes": notes})


def update_totals(totals: Any) -> Action:
    """Server-computed totals replace the local ones verbatim."""
    return Action(type=UPDATE_TOTALS, payload={"totals": to_payload(totals)})


def update_spending_validation(validation: Any, limits: Iterable[Dict[str, Any]]) -> Action:
    """
    Spending-limit check result from the server.

    Args:
        validation: SpendingValidation or its dict form
        limits: Spending limit records that applied to the check
    """
    return Action(
        type=UPDATE_SPENDING_VALIDATION,
        payload={"validation": to_payload(validation), "limits": list(limits)},
    )


def cart_loading_start() -> Action:
    return Action(type=CART_LOADING_START)


def cart_loading_success() -> Action:
    return Action(type=CART_LOADING_SUCCESS)


def cart_loading_failure(error: str) -> Action:
    return Action(type=CART_LOADING_FAILURE, payload={"error": error})


def hydrate_cart(
    items: Iterable[Any],
    shipping_address_id: Optional[str],
    purchase_order_number: str,
    notes: str,
) -> Action:
    """
    Restore a persisted cart (session resume).

    Example:
        saved = select_cart_for_persistence(old_state)
        store.dispatch(hydrate_cart(saved["items"], saved["shipping_address_id"],
                                    saved["purchase_order_number"], saved["notes"]))
    """
    return Action(
        type=HYDRATE_CART,
        payload={
            "items": to_payload(list(items)),
            "shipping_address_id": shipping_address_id,
            "purchase_order_number": purchase_order_number,
            "notes": notes,
        },
    )


def reset_cart_state() -> Action:
    return Action(type=RESET_CART_STATE)


def clear_cart_error() -> Action:
    return Action(type=CLEAR_CART_ERROR)
