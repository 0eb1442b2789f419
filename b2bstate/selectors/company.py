"""
Company and employee selectors.
"""

import math
from typing import Any, Dict, List, Optional

from ..core.memoize import (
    create_derived_selector,
    create_derived_shallow_selector,
    create_parameterized_selector,
)
from ..core.state import LOADING, RootState

ADMIN_FULL_ACCESS = "admin.full_access"


def _company(state: RootState) -> Dict[str, Any]:
    return state.company.current_company or {}


def _employee(state: RootState) -> Dict[str, Any]:
    return state.company.current_employee or {}


# Base accessors

def select_company_state(state: RootState):
    return state.company


def select_current_company(state: RootState) -> Optional[Dict[str, Any]]:
    return state.company.current_company


def select_current_employee(state: RootState) -> Optional[Dict[str, Any]]:
    return state.company.current_employee


def select_employees(state: RootState):
    return state.company.employees


def select_is_b2b_active(state: RootState) -> bool:
    return state.company.is_b2b_active


def select_company_status(state: RootState) -> str:
    return state.company.status


def select_is_company_loading(state: RootState) -> bool:
    return state.company.status == LOADING


def select_company_error(state: RootState) -> Optional[str]:
    return state.company.error


def select_company_last_refreshed(state: RootState) -> Optional[str]:
    return state.company.last_refreshed_at


# Company fields

def select_company_id(state: RootState) -> Optional[str]:
    return _company(state).get("id")


def select_company_name(state: RootState) -> Optional[str]:
    return _company(state).get("name")


def select_company_tier(state: RootState) -> Optional[str]:
    return _company(state).get("tier")


def select_company_credit_available(state: RootState) -> float:
    return _company(state).get("credit_available") or 0


def select_company_credit_limit(state: RootState) -> float:
    return _company(state).get("credit_limit") or 0


def select_company_credit_usage_percent(state: RootState) -> int:
    """Credit used as a rounded percentage of the limit; 0 without a limit."""
    company = state.company.current_company
    if company is None or not company.get("credit_limit"):
        return 0
    # Half-up rounding
    return int(math.floor(company.get("credit_used", 0) / company["credit_limit"] * 100 + 0.5))


def select_company_payment_terms(state: RootState) -> Optional[Dict[str, Any]]:
    return _company(state).get("payment_terms")


def select_company_addresses(state: RootState) -> List[Dict[str, Any]]:
    return _company(state).get("addresses") or []


def select_default_shipping_address_id(state: RootState) -> Optional[str]:
    return _company(state).get("default_shipping_address_id")


def select_default_billing_address_id(state: RootState) -> Optional[str]:
    return _company(state).get("default_billing_address_id")


# Employee fields

def select_employee_id(state: RootState) -> Optional[str]:
    return _employee(state).get("id")


def select_employee_full_name(state: RootState) -> Optional[str]:
    return _employee(state).get("full_name")


def select_employee_role(state: RootState) -> Optional[str]:
    return _employee(state).get("role")


def select_employee_permissions(state: RootState) -> List[str]:
    return _employee(state).get("permissions") or []


def select_has_permission(state: RootState, permission: str) -> bool:
    """admin.full_access grants every permission."""
    employee = state.company.current_employee
    if employee is None:
        return False
    permissions = employee.get("permissions") or ()
    if ADMIN_FULL_ACCESS in permissions:
        return True
    return permission in permissions


def select_is_approver(state: RootState) -> bool:
    return bool(_employee(state).get("is_approver", False))


def select_employee_approval_limit(state: RootState) -> Optional[float]:
    """None means unlimited."""
    return _employee(state).get("approval_limit")


select_employee_spending_limits = create_derived_shallow_selector(
    [select_current_employee],
    lambda employee: {
        "per_order": (employee or {}).get("spending_limit_per_order"),
        "daily": (employee or {}).get("spending_limit_daily"),
        "weekly": (employee or {}).get("spending_limit_weekly"),
        "monthly": (employee or {}).get("spending_limit_monthly"),
    },
)

select_employee_current_spending = create_derived_shallow_selector(
    [select_current_employee],
    lambda employee: {
        "daily": (employee or {}).get("current_daily_spending") or 0,
        "weekly": (employee or {}).get("current_weekly_spending") or 0,
        "monthly": (employee or {}).get("current_monthly_spending") or 0,
    },
)


# Employee list

select_employee_by_id = create_parameterized_selector(
    lambda state, employee_id: next(
        (e for e in state.company.employees if e.get("id") == employee_id), None
    )
)

select_approver_employees = create_derived_selector(
    [select_employees],
    lambda employees: tuple(e for e in employees if e.get("is_approver")),
)


def select_employee_count(state: RootState) -> int:
    return len(state.company.employees)


# Capabilities

def _can_create(state: RootState, permission: str) -> bool:
    company = state.company.current_company
    if company is None or state.company.current_employee is None:
        return False
    if company.get("status") != "active":
        return False
    return select_has_permission(state, permission)


def select_can_create_orders(state: RootState) -> bool:
    return _can_create(state, "orders.create")


def select_can_create_quotes(state: RootState) -> bool:
    return _can_create(state, "quotes.create")


def select_can_approve_orders(state: RootState) -> bool:
    employee = state.company.current_employee
    if employee is None:
        return False
    return bool(employee.get("is_approver")) and select_has_permission(state, "approvals.approve")


def select_requires_order_approval(state: RootState) -> bool:
    settings = _company(state).get("settings") or {}
    return bool(settings.get("require_order_approval", False))
