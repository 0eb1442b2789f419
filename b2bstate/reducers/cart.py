"""
B2B cart slice reducer.

Every structural change recomputes item_count, the optimistic local
totals and checkout eligibility, and stamps last_updated_at with the
action time. Authoritative totals arrive via updateTotals.
"""

from dataclasses import replace
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..actions import cart as types
from ..core.actions import Action
from ..core.reducer import SliceReducer
from ..core.state import (
    FAILED,
    LOADING,
    SUCCEEDED,
    CartB2BState,
    CartItem,
    CartTotals,
    SpendingValidation,
)

CART_EMPTY = "Cart is empty"
EXCEEDS_SPENDING_LIMITS = "Order exceeds spending limits"
SHIPPING_ADDRESS_REQUIRED = "Shipping address required"
INVALID_QUANTITIES = "Some items have invalid quantities"


def calculate_totals(items: Sequence[CartItem], current: CartTotals) -> CartTotals:
    """
    Local totals estimate.

    Discounts are carried over from current rather than recomputed, so
    they can lag behind the item set until the next updateTotals.
    """
    subtotal = sum(item.line_total for item in items)
    total_discount = current.tier_discount + current.volume_discount
    total = subtotal - total_discount + current.shipping_estimate + current.tax
    return replace(current, subtotal=subtotal, total_discount=total_discount, total=max(0, total))


def calculate_item_count(items: Iterable[CartItem]) -> int:
    return sum(item.quantity for item in items)


def determine_checkout_status(
    items: Sequence[CartItem], is_within_limits: bool, shipping_address_id: Optional[str]
) -> Tuple[bool, Optional[str]]:
    """Checks run in priority order; the first failing one is reported."""
    if not items:
        return False, CART_EMPTY
    if not is_within_limits:
        return False, EXCEEDS_SPENDING_LIMITS
    if shipping_address_id is None:
        return False, SHIPPING_ADDRESS_REQUIRED
    if any(not item.has_valid_quantity for item in items):
        return False, INVALID_QUANTITIES
    return True, None


def _with_items(state: CartB2BState, items: Tuple[CartItem, ...], ts: str) -> CartB2BState:
    can_checkout, reason = determine_checkout_status(
        items, state.spending_validation.is_within_limits, state.shipping_address_id
    )
    return replace(
        state,
        items=items,
        item_count=calculate_item_count(items),
        totals=calculate_totals(items, state.totals),
        can_checkout=can_checkout,
        checkout_blocked_reason=reason,
        last_updated_at=ts,
    )


def _replace_at(items: Tuple[CartItem, ...], idx: int, item: CartItem) -> Tuple[CartItem, ...]:
    return items[:idx] + (item,) + items[idx + 1 :]


def on_add_item(state: CartB2BState, action: Action) -> CartB2BState:
    incoming = CartItem.coerce((action.payload or {})["item"])
    idx = state.find_index(incoming.product_id)
    if idx >= 0:
        existing = state.items[idx]
        quantity = min(existing.quantity + incoming.quantity, incoming.max_order_quantity)
        items = _replace_at(state.items, idx, existing.with_quantity(quantity))
    else:
        items = state.items + (incoming.with_quantity(incoming.quantity),)
    return _with_items(state, items, action.ts)


def on_update_item_quantity(state: CartB2BState, action: Action) -> CartB2BState:
    payload = action.payload or {}
    idx = state.find_index(payload.get("product_id"))
    if idx < 0:
        return state
    item = state.items[idx]
    quantity = item.clamp_quantity(payload.get("quantity", item.quantity))
    return _with_items(state, _replace_at(state.items, idx, item.with_quantity(quantity)), action.ts)


def on_remove_item(state: CartB2BState, action: Action) -> CartB2BState:
    product_id = (action.payload or {}).get("product_id")
    if state.find_index(product_id) < 0:
        return state
    items = tuple(item for item in state.items if item.product_id != product_id)
    return _with_items(state, items, action.ts)


def on_update_item_notes(state: CartB2BState, action: Action) -> CartB2BState:
    payload = action.payload or {}
    idx = state.find_index(payload.get("product_id"))
    if idx < 0:
        return state
    item = replace(state.items[idx], notes=payload.get("notes"))
    return replace(state, items=_replace_at(state.items, idx, item), last_updated_at=action.ts)


def on_clear_cart(state: CartB2BState, action: Action) -> CartB2BState:
    # Shipping context survives a clear
    return replace(
        CartB2BState.initial(),
        shipping_address_id=state.shipping_address_id,
        last_updated_at=action.ts,
    )


def on_add_items_bulk(state: CartB2BState, action: Action) -> CartB2BState:
    merged: Dict[str, CartItem] = {item.product_id: item for item in state.items}
    for raw in (action.payload or {}).get("items") or ():
        incoming = CartItem.coerce(raw)
        existing = merged.get(incoming.product_id)
        if existing is not None:
            quantity = min(existing.quantity + incoming.quantity, incoming.max_order_quantity)
            merged[incoming.product_id] = existing.with_quantity(quantity)
        else:
            merged[incoming.product_id] = incoming.with_quantity(incoming.quantity)
    return _with_items(state, tuple(merged.values()), action.ts)


def on_set_shipping_address(state: CartB2BState, action: Action) -> CartB2BState:
    address_id = (action.payload or {}).get("address_id")
    can_checkout, reason = determine_checkout_status(
        state.items, state.spending_validation.is_within_limits, address_id
    )
    return replace(
        state,
        shipping_address_id=address_id,
        can_checkout=can_checkout,
        checkout_blocked_reason=reason,
        last_updated_at=action.ts,
    )


def on_set_purchase_order_number(state: CartB2BState, action: Action) -> CartB2BState:
    po_number = (action.payload or {}).get("po_number") or ""
    return replace(state, purchase_order_number=po_number, last_updated_at=action.ts)


def on_set_notes(state: CartB2BState, action: Action) -> CartB2BState:
    notes = (action.payload or {}).get("notes") or ""
    return replace(state, notes=notes, last_updated_at=action.ts)


def on_update_totals(state: CartB2BState, action: Action) -> CartB2BState:
    totals = CartTotals.coerce((action.payload or {}).get("totals") or {})
    return replace(state, totals=totals, last_updated_at=action.ts)


def on_update_spending_validation(state: CartB2BState, action: Action) -> CartB2BState:
    payload = action.payload or {}
    validation = SpendingValidation.coerce(payload.get("validation") or {})
    validation = replace(validation, applicable_limits=tuple(payload.get("limits") or ()))
    can_checkout, reason = determine_checkout_status(
        state.items, validation.is_within_limits, state.shipping_address_id
    )
    return replace(
        state,
        spending_validation=validation,
        can_checkout=can_checkout,
        checkout_blocked_reason=reason,
        last_updated_at=action.ts,
    )


def on_loading_start(state: CartB2BState, action: Action) -> CartB2BState:
    return replace(state, status=LOADING, error=None)


def on_loading_success(state: CartB2BState, action: Action) -> CartB2BState:
    return replace(state, status=SUCCEEDED, error=None)


def on_loading_failure(state: CartB2BState, action: Action) -> CartB2BState:
    return replace(state, status=FAILED, error=(action.payload or {}).get("error"))


def on_hydrate(state: CartB2BState, action: Action) -> CartB2BState:
    payload = action.payload or {}
    items = tuple(CartItem.coerce(i) for i in payload.get("items") or ())
    shipping_address_id = payload.get("shipping_address_id")
    can_checkout, reason = determine_checkout_status(
        items, SpendingValidation.initial().is_within_limits, shipping_address_id
    )
    return replace(
        state,
        items=items,
        item_count=calculate_item_count(items),
        totals=calculate_totals(items, CartTotals.initial()),
        shipping_address_id=shipping_address_id,
        purchase_order_number=payload.get("purchase_order_number") or "",
        notes=payload.get("notes") or "",
        can_checkout=can_checkout,
        checkout_blocked_reason=reason,
        status=SUCCEEDED,
        error=None,
        last_updated_at=action.ts,
    )


def on_reset(state: CartB2BState, action: Action) -> CartB2BState:
    return CartB2BState.initial()


def on_clear_error(state: CartB2BState, action: Action) -> CartB2BState:
    return replace(state, error=None)


def register_handlers(reducer: SliceReducer) -> None:
    reducer.register(types.ADD_ITEM, on_add_item)
    reducer.register(types.UPDATE_ITEM_QUANTITY, on_update_item_quantity)
    reducer.register(types.REMOVE_ITEM, on_remove_item)
    reducer.register(types.UPDATE_ITEM_NOTES, on_update_item_notes)
    reducer.register(types.CLEAR_CART, on_clear_cart)
    reducer.register(types.ADD_ITEMS_BULK, on_add_items_bulk)
    reducer.register(types.SET_SHIPPING_ADDRESS, on_set_shipping_address)
    reducer.register(types.SET_PURCHASE_ORDER_NUMBER, on_set_purchase_order_number)
    reducer.register(types.SET_NOTES, on_set_notes)
    reducer.register(types.UPDATE_TOTALS, on_update_totals)
    reducer.register(types.UPDATE_SPENDING_VALIDATION, on_update_spending_validation)
    reducer.register(types.CART_LOADING_START, on_loading_start)
    reducer.register(types.CART_LOADING_SUCCESS, on_loading_success)
    reducer.register(types.CART_LOADING_FAILURE, on_loading_failure)
    reducer.register(types.HYDRATE_CART, on_hydrate)
    reducer.register(types.RESET_CART_STATE, on_reset)
    reducer.register(types.CLEAR_CART_ERROR, on_clear_error)


cart_reducer = SliceReducer("cart", CartB2BState.initial)
register_handlers(cart_reducer)
