"""
Approval workflow selectors.
"""

from typing import Any, Dict, Optional

from ..actions.approvals import APPROVAL_STATUSES
from ..core import clock
from ..core.memoize import (
    create_derived_selector,
    create_derived_shallow_selector,
    create_parameterized_selector,
)
from ..core.state import LOADING, RootState

HIGH_PRIORITIES = ("high", "urgent")


# Base accessors

def select_approvals_state(state: RootState):
    return state.approvals


def select_pending_approvals(state: RootState):
    return state.approvals.pending_approvals


def select_all_approvals(state: RootState):
    return state.approvals.all_approvals


def select_selected_approval(state: RootState) -> Optional[Dict[str, Any]]:
    return state.approvals.selected_approval


def select_pending_approval_count(state: RootState) -> int:
    return state.approvals.pending_count


# Kept for callers that badge on the pending counter
select_approval_count = select_pending_approval_count


def select_approval_filters(state: RootState) -> Dict[str, Any]:
    return state.approvals.filters


def select_approval_status_filter(state: RootState) -> str:
    return state.approvals.active_status_filter


def select_approvals_list_status(state: RootState) -> str:
    return state.approvals.list_status


def select_is_approvals_loading(state: RootState) -> bool:
    return state.approvals.list_status == LOADING


def select_approval_detail_status(state: RootState) -> str:
    return state.approvals.detail_status


def select_is_approval_detail_loading(state: RootState) -> bool:
    return state.approvals.detail_status == LOADING


def select_approvals_error(state: RootState) -> Optional[str]:
    return state.approvals.error


def select_approvals_pagination(state: RootState):
    return state.approvals.pagination


def select_approvals_current_page(state: RootState) -> int:
    return state.approvals.pagination.current_page


def select_approvals_total_count(state: RootState) -> int:
    return state.approvals.pagination.total_items


# Lookups and derived views

select_approval_by_id = create_parameterized_selector(
    lambda state, approval_id: next(
        (a for a in state.approvals.all_approvals if a.get("id") == approval_id), None
    )
)

select_approvals_by_status = create_parameterized_selector(
    lambda state, status: tuple(a for a in state.approvals.all_approvals if a.get("status") == status)
)

select_approvals_by_entity_type = create_parameterized_selector(
    lambda state, entity_type: tuple(
        a for a in state.approvals.all_approvals if a.get("entity_type") == entity_type
    )
)

select_pending_order_approvals = create_derived_selector(
    [select_pending_approvals],
    lambda pending: tuple(a for a in pending if a.get("entity_type") == "order"),
)

select_pending_quote_approvals = create_derived_selector(
    [select_pending_approvals],
    lambda pending: tuple(a for a in pending if a.get("entity_type") == "quote"),
)

select_overdue_approvals = create_derived_selector(
    [select_pending_approvals],
    lambda pending: tuple(a for a in pending if a.get("is_overdue")),
)


def select_overdue_approval_count(state: RootState) -> int:
    return sum(1 for a in state.approvals.pending_approvals if a.get("is_overdue"))


select_high_priority_approvals = create_derived_selector(
    [select_pending_approvals],
    lambda pending: tuple(a for a in pending if a.get("priority") in HIGH_PRIORITIES),
)


def select_has_pending_approvals(state: RootState) -> bool:
    return state.approvals.pending_count > 0


def select_pending_approvals_total_value(state: RootState) -> float:
    return sum(a.get("entity_amount") or 0 for a in state.approvals.pending_approvals)


def _count_by_status(approvals) -> Dict[str, int]:
    counts = dict.fromkeys(APPROVAL_STATUSES, 0)
    for approval in approvals:
        status = approval.get("status")
        counts[status] = counts.get(status, 0) + 1
    return counts


select_approval_counts_by_status = create_derived_shallow_selector(
    [select_all_approvals], _count_by_status
)


# Selected approval

def select_selected_approval_id(state: RootState) -> Optional[str]:
    return (state.approvals.selected_approval or {}).get("id")


def select_selected_approval_status(state: RootState) -> Optional[str]:
    return (state.approvals.selected_approval or {}).get("status")


def select_selected_approval_steps(state: RootState):
    return (state.approvals.selected_approval or {}).get("steps") or []


def select_selected_approval_current_level(state: RootState) -> int:
    return (state.approvals.selected_approval or {}).get("current_level") or 0


def select_can_action_selected_approval(state: RootState) -> bool:
    return select_selected_approval_status(state) in ("pending", "in_review")


def select_is_selected_approval_overdue(state: RootState) -> bool:
    approval = state.approvals.selected_approval
    if approval is None or approval.get("due_at") is None:
        return False
    return clock.is_before(approval["due_at"], clock.utc_now_iso())
