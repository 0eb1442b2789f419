"""
Tests for the company, quotes, approvals and cart selectors.
"""

from datetime import datetime, timezone

from b2bstate.actions import cart as cart_actions
from b2bstate.core import clock
from b2bstate.core.state import ApprovalsState, CompanyState, QuotesState, RootState
from b2bstate.reducers import root_reducer
from b2bstate.selectors import approvals as sa
from b2bstate.selectors import cart as sc
from b2bstate.selectors import company as sco
from b2bstate.selectors import quotes as sq

TS = "2024-06-01T12:00:00.000Z"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def company_state(**employee_overrides):
    employee = {
        "id": "e1",
        "full_name": "Jane Doe",
        "role": "buyer",
        "permissions": ["orders.create"],
        "is_approver": False,
        "spending_limit_per_order": 5000,
        "current_daily_spending": 120,
    }
    employee.update(employee_overrides)
    company = {
        "id": "c1",
        "name": "Acme",
        "tier": "gold",
        "status": "active",
        "credit_limit": 3000,
        "credit_used": 1000,
        "settings": {"require_order_approval": True},
    }
    return RootState(
        company=CompanyState(
            current_company=company,
            current_employee=employee,
            employees=(employee, {"id": "e2", "is_approver": True}),
            is_b2b_active=True,
        )
    )


def cart_state(*items, shipping="addr-1"):
    st = None
    for it in items:
        st = root_reducer(st, cart_actions.add_item(it).at(TS))
    if shipping:
        st = root_reducer(st, cart_actions.set_shipping_address(shipping).at(TS))
    return st


def line(product_id, unit_price, quantity, max_qty=100, min_qty=1):
    return {
        "product_id": product_id,
        "unit_price": unit_price,
        "quantity": quantity,
        "min_order_quantity": min_qty,
        "max_order_quantity": max_qty,
    }


# Company

def test_company_fields_and_credit_usage():
    st = company_state()
    assert sco.select_company_name(st) == "Acme"
    assert sco.select_company_credit_limit(st) == 3000
    # 1000 / 3000 = 33.3%
    assert sco.select_company_credit_usage_percent(st) == 33
    assert sco.select_requires_order_approval(st) is True


def test_credit_usage_without_limit_is_zero():
    assert sco.select_company_credit_usage_percent(RootState.initial()) == 0


def test_has_permission_and_admin_override():
    st = company_state()
    assert sco.select_has_permission(st, "orders.create") is True
    assert sco.select_has_permission(st, "quotes.create") is False

    admin = company_state(permissions=["admin.full_access"])
    assert sco.select_has_permission(admin, "quotes.create") is True
    assert sco.select_has_permission(RootState.initial(), "orders.create") is False


def test_capabilities():
    st = company_state()
    assert sco.select_can_create_orders(st) is True
    assert sco.select_can_create_quotes(st) is False
    assert sco.select_can_approve_orders(st) is False

    approver = company_state(is_approver=True, permissions=["approvals.approve"])
    assert sco.select_can_approve_orders(approver) is True


def test_spending_limits_stable_for_unchanged_employee():
    st = company_state()
    first = sco.select_employee_spending_limits(st)
    assert first["per_order"] == 5000
    assert first["monthly"] is None
    assert sco.select_employee_spending_limits(RootState(company=st.company)) is first
    assert sco.select_employee_current_spending(st)["daily"] == 120


def test_employee_lookups():
    st = company_state()
    assert sco.select_employee_by_id(st, "e2")["id"] == "e2"
    assert sco.select_employee_by_id(st, "zz") is None
    assert [e["id"] for e in sco.select_approver_employees(st)] == ["e2"]
    assert sco.select_employee_count(st) == 2


# Quotes

def quotes_root(quotes, **fields):
    return RootState(quotes=QuotesState(quotes=tuple(quotes), **fields))


QUOTES = (
    {"id": "q1", "quote_number": "Q-001", "company_name": "Acme", "status": "draft", "total": 100.0},
    {"id": "q2", "quote_number": "Q-002", "company_name": "Globex", "status": "responded",
     "total": 250.0, "has_unread_messages": True},
    {"id": "q3", "quote_number": "Q-003", "company_name": "acme west", "status": "responded", "total": 50.0},
)


def test_filtered_quotes_by_status_and_search():
    st = quotes_root(QUOTES, active_status_filter="responded", search_query="ACME")
    assert [q["id"] for q in sq.select_filtered_quotes(st)] == ["q3"]

    blank = quotes_root(QUOTES, search_query="   ")
    assert len(sq.select_filtered_quotes(blank)) == 3


def test_quote_aggregates():
    st = quotes_root(QUOTES)
    assert sq.select_quotes_total_value(st) == 400.0
    assert sq.select_unread_quotes_count(st) == 1
    assert [q["id"] for q in sq.select_quotes_with_unread_messages(st)] == ["q2"]
    assert sq.select_quote_count_by_status(st, "responded") == 2
    assert sq.select_quote_by_id(st, "q1")["status"] == "draft"
    assert sq.select_has_quotes(st) is True


def test_expiring_quotes(monkeypatch):
    monkeypatch.setattr(clock, "utc_now", lambda: NOW)
    sq.select_expiring_quotes.cache_clear()
    quotes = (
        {"id": "soon", "status": "responded", "valid_until": "2024-06-05T00:00:00Z"},
        {"id": "later", "status": "responded", "valid_until": "2024-06-20T00:00:00Z"},
        {"id": "past", "status": "responded", "valid_until": "2024-05-20T00:00:00Z"},
        {"id": "done", "status": "accepted", "valid_until": "2024-06-03T00:00:00Z"},
    )
    assert [q["id"] for q in sq.select_expiring_quotes(quotes_root(quotes))] == ["soon"]


def test_selected_quote_permissions():
    st = quotes_root((), selected_quote={"id": "q2", "status": "negotiating", "items": [1, 2]})
    assert sq.select_selected_quote_id(st) == "q2"
    assert sq.select_can_accept_selected_quote(st) is True
    assert sq.select_can_edit_selected_quote(st) is False
    assert sq.select_selected_quote_items(st) == [1, 2]
    assert sq.select_selected_quote_items(RootState.initial()) == []


# Approvals

PENDING = (
    {"id": "a1", "entity_type": "order", "status": "pending", "priority": "urgent",
     "is_overdue": True, "entity_amount": 1000.0},
    {"id": "a2", "entity_type": "quote", "status": "pending", "priority": "normal", "is_overdue": False},
)


def test_pending_views():
    st = RootState(approvals=ApprovalsState(pending_approvals=PENDING, pending_count=2))
    assert [a["id"] for a in sa.select_pending_order_approvals(st)] == ["a1"]
    assert [a["id"] for a in sa.select_pending_quote_approvals(st)] == ["a2"]
    assert [a["id"] for a in sa.select_high_priority_approvals(st)] == ["a1"]
    assert sa.select_overdue_approval_count(st) == 1
    assert sa.select_pending_approvals_total_value(st) == 1000.0
    assert sa.select_has_pending_approvals(st) is True
    assert sa.select_approval_count(st) == 2


def test_counts_by_status_include_every_status():
    st = RootState(approvals=ApprovalsState(all_approvals=PENDING + ({"id": "a3", "status": "approved"},)))
    counts = sa.select_approval_counts_by_status(st)
    assert counts["pending"] == 2
    assert counts["approved"] == 1
    assert counts["cancelled"] == 0
    assert len(counts) == 8


def test_selected_approval(monkeypatch):
    monkeypatch.setattr(clock, "utc_now", lambda: NOW)
    selected = {"id": "a1", "status": "in_review", "due_at": "2024-05-30T00:00:00Z", "steps": [{"level": 1}]}
    st = RootState(approvals=ApprovalsState(selected_approval=selected))
    assert sa.select_can_action_selected_approval(st) is True
    assert sa.select_is_selected_approval_overdue(st) is True
    assert sa.select_selected_approval_steps(st) == [{"level": 1}]
    assert sa.select_selected_approval_current_level(st) == 0
    assert sa.select_is_selected_approval_overdue(RootState.initial()) is False


# Cart

def test_cart_item_lookups():
    st = cart_state(line("p1", 10.0, 3), line("p2", 20.0, 1))
    assert sc.select_cart_item_quantity(st, "p1") == 3
    assert sc.select_cart_item_quantity(st, "zz") == 0
    assert sc.select_is_product_in_cart(st, "p2") is True
    assert sc.select_cart_unique_item_count(st) == 2
    assert sc.select_cart_total_quantity(st) == 4
    assert sc.select_average_item_price(st) == 15.0


def test_invalid_quantity_items():
    st = RootState.initial()
    st = root_reducer(st, cart_actions.hydrate_cart([line("p1", 1.0, 50, max_qty=10)], None, "", "").at(TS))
    assert [i.product_id for i in sc.select_invalid_quantity_items(st)] == ["p1"]
    assert sc.select_all_quantities_valid(st) is False
    assert sc.select_average_item_price(RootState.initial()) == 0


def test_checkout_summary_shape_and_stability():
    st = cart_state(line("p1", 10.0, 3))
    summary = sc.select_checkout_summary(st)
    assert summary == {
        "item_count": 3,
        "unique_items": 1,
        "subtotal": 30.0,
        "discount": 0,
        "shipping": 0,
        "tax": 0,
        "total": 30.0,
        "currency": "EUR",
        "requires_approval": False,
        "can_checkout": True,
        "blocked_reason": None,
    }

    # A transition that does not touch checkout inputs keeps the same object
    after = root_reducer(st, cart_actions.set_purchase_order_number("PO-1").at(TS))
    assert sc.select_checkout_summary(after) is summary


def test_cart_for_persistence_tracks_persisted_fields():
    st = cart_state(line("p1", 10.0, 1))
    saved = sc.select_cart_for_persistence(st)
    assert saved["shipping_address_id"] == "addr-1"
    assert saved["items"] is st.cart.items

    loading = root_reducer(st, cart_actions.cart_loading_start().at(TS))
    assert sc.select_cart_for_persistence(loading) is saved

    noted = root_reducer(st, cart_actions.set_cart_notes("x").at(TS))
    assert sc.select_cart_for_persistence(noted) is not saved
