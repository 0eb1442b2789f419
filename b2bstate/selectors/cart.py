"""
B2B cart selectors.

select_cart_for_persistence defines what a saved cart holds, and
select_checkout_summary is the flat read model a checkout view needs.
Both return the same dict object until one of their inputs changes.
"""

from typing import Optional

from ..core.memoize import (
    create_derived_selector,
    create_derived_shallow_selector,
    create_parameterized_selector,
)
from ..core.state import LOADING, RootState


# Base accessors

def select_cart_state(state: RootState):
    return state.cart


def select_cart_items(state: RootState):
    return state.cart.items


def select_cart_item_count(state: RootState) -> int:
    return state.cart.item_count


def select_cart_totals(state: RootState):
    return state.cart.totals


def select_cart_total(state: RootState) -> float:
    return state.cart.totals.total


def select_spending_validation(state: RootState):
    return state.cart.spending_validation


def select_can_checkout(state: RootState) -> bool:
    return state.cart.can_checkout


def select_checkout_blocked_reason(state: RootState) -> Optional[str]:
    return state.cart.checkout_blocked_reason


def select_cart_status(state: RootState) -> str:
    return state.cart.status


def select_is_cart_loading(state: RootState) -> bool:
    return state.cart.status == LOADING


def select_cart_error(state: RootState) -> Optional[str]:
    return state.cart.error


def select_cart_last_updated(state: RootState) -> Optional[str]:
    return state.cart.last_updated_at


def select_cart_shipping_address_id(state: RootState) -> Optional[str]:
    return state.cart.shipping_address_id


def select_cart_purchase_order_number(state: RootState) -> str:
    return state.cart.purchase_order_number


def select_cart_notes(state: RootState) -> str:
    return state.cart.notes


# Items

select_cart_item_by_product_id = create_parameterized_selector(
    lambda state, product_id: next(
        (item for item in state.cart.items if item.product_id == product_id), None
    )
)

select_cart_item_quantity = create_parameterized_selector(
    lambda state, product_id: next(
        (item.quantity for item in state.cart.items if item.product_id == product_id), 0
    )
)

select_is_product_in_cart = create_parameterized_selector(
    lambda state, product_id: any(item.product_id == product_id for item in state.cart.items)
)


def select_cart_unique_item_count(state: RootState) -> int:
    return len(state.cart.items)


# Totals

def select_cart_subtotal(state: RootState) -> float:
    return state.cart.totals.subtotal


def select_cart_tier_discount(state: RootState) -> float:
    return state.cart.totals.tier_discount


def select_cart_volume_discount(state: RootState) -> float:
    return state.cart.totals.volume_discount


def select_cart_total_discount(state: RootState) -> float:
    return state.cart.totals.total_discount


def select_cart_shipping_estimate(state: RootState) -> float:
    return state.cart.totals.shipping_estimate


def select_cart_tax(state: RootState) -> float:
    return state.cart.totals.tax


def select_cart_currency(state: RootState) -> str:
    return state.cart.totals.currency


# Spending validation

def select_is_within_spending_limits(state: RootState) -> bool:
    return state.cart.spending_validation.is_within_limits


def select_requires_approval(state: RootState) -> bool:
    return state.cart.spending_validation.requires_approval


def select_approval_reason(state: RootState) -> Optional[str]:
    return state.cart.spending_validation.approval_reason


def select_applicable_spending_limits(state: RootState):
    return state.cart.spending_validation.applicable_limits


def select_spending_warnings(state: RootState):
    return state.cart.spending_validation.warnings


def select_has_spending_warnings(state: RootState) -> bool:
    return len(state.cart.spending_validation.warnings) > 0


# Derived

def select_is_cart_empty(state: RootState) -> bool:
    return len(state.cart.items) == 0


select_invalid_quantity_items = create_derived_selector(
    [select_cart_items],
    lambda items: tuple(item for item in items if not item.has_valid_quantity),
)


def select_all_quantities_valid(state: RootState) -> bool:
    return all(item.has_valid_quantity for item in state.cart.items)


def select_cart_total_quantity(state: RootState) -> int:
    return sum(item.quantity for item in state.cart.items)


def select_average_item_price(state: RootState) -> float:
    """Unweighted mean of unit prices; 0 for an empty cart."""
    items = state.cart.items
    if not items:
        return 0
    return sum(item.unit_price for item in items) / len(items)


select_cart_for_persistence = create_derived_shallow_selector(
    [
        select_cart_items,
        select_cart_shipping_address_id,
        select_cart_purchase_order_number,
        select_cart_notes,
    ],
    lambda items, shipping_address_id, purchase_order_number, notes: {
        "items": items,
        "shipping_address_id": shipping_address_id,
        "purchase_order_number": purchase_order_number,
        "notes": notes,
    },
)


def _checkout_summary(item_count, items, totals, spending_validation, can_checkout, blocked_reason):
    return {
        "item_count": item_count,
        "unique_items": len(items),
        "subtotal": totals.subtotal,
        "discount": totals.total_discount,
        "shipping": totals.shipping_estimate,
        "tax": totals.tax,
        "total": totals.total,
        "currency": totals.currency,
        "requires_approval": spending_validation.requires_approval,
        "can_checkout": can_checkout,
        "blocked_reason": blocked_reason,
    }


select_checkout_summary = create_derived_shallow_selector(
    [
        select_cart_item_count,
        select_cart_items,
        select_cart_totals,
        select_spending_validation,
        select_can_checkout,
        select_checkout_blocked_reason,
    ],
    _checkout_summary,
)
