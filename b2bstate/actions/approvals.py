"""
Approval action tags and creators.
"""

from typing import Any, Dict, Iterable

from ..core.actions import Action, to_payload

FETCH_APPROVALS_START = "approvals/fetchListStart"
FETCH_APPROVALS_SUCCESS = "approvals/fetchListSuccess"
FETCH_APPROVALS_FAILURE = "approvals/fetchListFailure"
FETCH_PENDING_START = "approvals/fetchPendingStart"
FETCH_PENDING_SUCCESS = "approvals/fetchPendingSuccess"
FETCH_PENDING_FAILURE = "approvals/fetchPendingFailure"
FETCH_APPROVAL_DETAIL_START = "approvals/fetchDetailStart"
FETCH_APPROVAL_DETAIL_SUCCESS = "approvals/fetchDetailSuccess"
FETCH_APPROVAL_DETAIL_FAILURE = "approvals/fetchDetailFailure"
SELECT_APPROVAL = "approvals/select"
CLEAR_SELECTED_APPROVAL = "approvals/clearSelected"
SET_APPROVAL_FILTERS = "approvals/setFilters"
SET_APPROVAL_STATUS_FILTER = "approvals/setStatusFilter"
CLEAR_APPROVAL_FILTERS = "approvals/clearFilters"
SET_APPROVALS_PAGINATION = "approvals/setPagination"
SET_APPROVALS_PAGE = "approvals/setPage"
APPROVAL_ACTION_SUCCESS = "approvals/actionSuccess"
UPDATE_PENDING_COUNT = "approvals/updatePendingCount"
RESET_APPROVALS_STATE = "approvals/reset"
CLEAR_APPROVALS_ERROR = "approvals/clearError"

ACTION_TYPES = frozenset(
    {
        FETCH_APPROVALS_START,
        FETCH_APPROVALS_SUCCESS,
        FETCH_APPROVALS_FAILURE,
        FETCH_PENDING_START,
        FETCH_PENDING_SUCCESS,
        FETCH_PENDING_FAILURE,
        FETCH_APPROVAL_DETAIL_START,
        FETCH_APPROVAL_DETAIL_SUCCESS,
        FETCH_APPROVAL_DETAIL_FAILURE,
        SELECT_APPROVAL,
        CLEAR_SELECTED_APPROVAL,
        SET_APPROVAL_FILTERS,
        SET_APPROVAL_STATUS_FILTER,
        CLEAR_APPROVAL_FILTERS,
        SET_APPROVALS_PAGINATION,
        SET_APPROVALS_PAGE,
        APPROVAL_ACTION_SUCCESS,
        UPDATE_PENDING_COUNT,
        RESET_APPROVALS_STATE,
        CLEAR_APPROVALS_ERROR,
    }
)

# Workflow decisions an approver can take
APPROVE = "approve"
REJECT = "reject"
ESCALATE = "escalate"
DELEGATE = "delegate"
REQUEST_INFO = "request_info"

APPROVAL_DECISIONS = (APPROVE, REJECT, ESCALATE, DELEGATE, REQUEST_INFO)

APPROVAL_STATUSES = (
    "pending",
    "in_review",
    "approved",
    "rejected",
    "escalated",
    "delegated",
    "expired",
    "cancelled",
)


def fetch_approvals_start() -> Action:
    return Action(type=FETCH_APPROVALS_START)


def fetch_approvals_success(approvals: Iterable[Dict[str, Any]], pagination: Any) -> Action:
    return Action(
        type=FETCH_APPROVALS_SUCCESS,
        payload={"approvals": list(approvals), "pagination": to_payload(pagination)},
    )


def fetch_approvals_failure(error: str) -> Action:
    return Action(type=FETCH_APPROVALS_FAILURE, payload={"error": error})


def fetch_pending_start() -> Action:
    return Action(type=FETCH_PENDING_START)


def fetch_pending_success(approvals: Iterable[Dict[str, Any]], count: int) -> Action:
    """
    Pending approvals for the current approver loaded.

    Args:
        approvals: Pending approval summaries
        count: Server-side total of pending approvals
    """
    return Action(type=FETCH_PENDING_SUCCESS, payload={"approvals": list(approvals), "count": count})


def fetch_pending_failure(error: str) -> Action:
    return Action(type=FETCH_PENDING_FAILURE, payload={"error": error})


def fetch_approval_detail_start() -> Action:
    return Action(type=FETCH_APPROVAL_DETAIL_START)


def fetch_approval_detail_success(approval: Dict[str, Any]) -> Action:
    return Action(type=FETCH_APPROVAL_DETAIL_SUCCESS, payload={"approval": approval})


def fetch_approval_detail_failure(error: str) -> Action:
    return Action(type=FETCH_APPROVAL_DETAIL_FAILURE, payload={"error": error})


def select_approval(approval_id: str) -> Action:
    return Action(type=SELECT_APPROVAL, payload={"approval_id": approval_id})


def clear_selected_approval() -> Action:
    return Action(type=CLEAR_SELECTED_APPROVAL)


def set_approval_filters(filters: Dict[str, Any]) -> Action:
    return Action(type=SET_APPROVAL_FILTERS, payload={"filters": dict(filters)})


def set_approval_status_filter(status: str) -> Action:
    return Action(type=SET_APPROVAL_STATUS_FILTER, payload={"status": status})


def clear_approval_filters() -> Action:
    return Action(type=CLEAR_APPROVAL_FILTERS)


def set_approvals_pagination(pagination: Any) -> Action:
    return Action(type=SET_APPROVALS_PAGINATION, payload={"pagination": to_payload(pagination)})


def set_approvals_page(page: int) -> Action:
    return Action(type=SET_APPROVALS_PAGE, payload={"page": page})


def approval_action_success(
    approval_id: str, action: str, updated_approval: Dict[str, Any]
) -> Action:
    """
    An approver decision was accepted by the server.

    Args:
        approval_id: Approval request id
        action: One of APPROVAL_DECISIONS
        updated_approval: Full approval record after the decision
    """
    return Action(
        type=APPROVAL_ACTION_SUCCESS,
        payload={
            "approval_id": approval_id,
            "action": action,
            "updated_approval": updated_approval,
        },
    )


def update_pending_count(count: int) -> Action:
    return Action(type=UPDATE_PENDING_COUNT, payload={"count": count})


def reset_approvals_state() -> Action:
    return Action(type=RESET_APPROVALS_STATE)


def clear_approvals_error() -> Action:
    return Action(type=CLEAR_APPROVALS_ERROR)
