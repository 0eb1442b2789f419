"""
Approvals slice reducer.

The action-success transition keeps three representations consistent from
one server response: the full selected record, the summary in
all_approvals, and the pending subset with its counter.
"""

from dataclasses import replace
from typing import Any, Dict

from ..actions import approvals as types
from ..core.actions import Action
from ..core.clock import is_before
from ..core.reducer import SliceReducer
from ..core.state import FAILED, IDLE, LOADING, STATUS_ALL, SUCCEEDED, ApprovalsState, Pagination
from ._lists import first_page, replace_by_id, with_status_filter

PENDING = "pending"

_OPTIONAL_SUMMARY_FIELDS = ("entity_amount", "entity_currency", "due_at")


def approval_summary(approval: Dict[str, Any], now: str) -> Dict[str, Any]:
    """
    Build the list-entry summary from a full approval record.

    is_overdue is True when due_at is set and earlier than now.
    """
    due_at = approval.get("due_at")
    summary = {
        "id": approval.get("id"),
        "request_number": approval.get("request_number"),
        "entity_type": approval.get("entity_type"),
        "entity_reference": approval.get("entity_reference"),
        "entity_summary": approval.get("entity_summary"),
        "requester_name": approval.get("requester_name"),
        "status": approval.get("status"),
        "current_level": approval.get("current_level"),
        "total_levels": approval.get("total_levels"),
        "priority": approval.get("priority"),
        "created_at": approval.get("created_at"),
        "is_overdue": due_at is not None and is_before(due_at, now),
    }
    for key in _OPTIONAL_SUMMARY_FIELDS:
        if approval.get(key) is not None:
            summary[key] = approval[key]
    return summary


def on_fetch_list_start(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, list_status=LOADING, error=None)


def on_fetch_list_success(state: ApprovalsState, action: Action) -> ApprovalsState:
    payload = action.payload or {}
    return replace(
        state,
        all_approvals=tuple(payload.get("approvals") or ()),
        pagination=Pagination.coerce(payload.get("pagination") or {}),
        list_status=SUCCEEDED,
        error=None,
    )


def on_fetch_failure(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, list_status=FAILED, error=(action.payload or {}).get("error"))


def on_fetch_pending_success(state: ApprovalsState, action: Action) -> ApprovalsState:
    payload = action.payload or {}
    return replace(
        state,
        pending_approvals=tuple(payload.get("approvals") or ()),
        pending_count=payload.get("count", 0),
        list_status=SUCCEEDED,
        error=None,
    )


def on_fetch_detail_start(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, detail_status=LOADING, error=None)


def on_fetch_detail_success(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(
        state,
        selected_approval=(action.payload or {}).get("approval"),
        detail_status=SUCCEEDED,
        error=None,
    )


def on_fetch_detail_failure(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, detail_status=FAILED, error=(action.payload or {}).get("error"))


def on_select(state: ApprovalsState, action: Action) -> ApprovalsState:
    return state


def on_clear_selected(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, selected_approval=None, detail_status=IDLE)


def on_set_filters(state: ApprovalsState, action: Action) -> ApprovalsState:
    filters = (action.payload or {}).get("filters") or {}
    return replace(state, filters=dict(filters), pagination=first_page(state.pagination))


def on_set_status_filter(state: ApprovalsState, action: Action) -> ApprovalsState:
    status = (action.payload or {}).get("status", STATUS_ALL)
    return replace(
        state,
        active_status_filter=status,
        filters=with_status_filter(state.filters, status),
        pagination=first_page(state.pagination),
    )


def on_clear_filters(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(
        state,
        filters={},
        active_status_filter=STATUS_ALL,
        pagination=first_page(state.pagination),
    )


def on_set_pagination(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, pagination=Pagination.coerce((action.payload or {}).get("pagination") or {}))


def on_set_page(state: ApprovalsState, action: Action) -> ApprovalsState:
    page = (action.payload or {}).get("page", 1)
    return replace(state, pagination=state.pagination.at_page(page))


def on_action_success(state: ApprovalsState, action: Action) -> ApprovalsState:
    payload = action.payload or {}
    approval_id = payload.get("approval_id")
    updated = payload.get("updated_approval") or {}
    summary = approval_summary(updated, action.ts)

    if updated.get("status") == PENDING:
        pending = replace_by_id(state.pending_approvals, approval_id, summary)
        pending_count = state.pending_count
    else:
        pending = tuple(a for a in state.pending_approvals if a.get("id") != approval_id)
        pending_count = max(0, state.pending_count - 1)

    selected = state.selected_approval
    if selected is not None and selected.get("id") == approval_id:
        selected = updated

    return replace(
        state,
        all_approvals=replace_by_id(state.all_approvals, approval_id, summary),
        pending_approvals=pending,
        pending_count=pending_count,
        selected_approval=selected,
    )


def on_update_pending_count(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, pending_count=(action.payload or {}).get("count", 0))


def on_reset(state: ApprovalsState, action: Action) -> ApprovalsState:
    return ApprovalsState.initial()


def on_clear_error(state: ApprovalsState, action: Action) -> ApprovalsState:
    return replace(state, error=None)


def register_handlers(reducer: SliceReducer) -> None:
    reducer.register(types.FETCH_APPROVALS_START, on_fetch_list_start)
    reducer.register(types.FETCH_APPROVALS_SUCCESS, on_fetch_list_success)
    reducer.register(types.FETCH_APPROVALS_FAILURE, on_fetch_failure)
    # Pending fetches share the list lifecycle
    reducer.register(types.FETCH_PENDING_START, on_fetch_list_start)
    reducer.register(types.FETCH_PENDING_SUCCESS, on_fetch_pending_success)
    reducer.register(types.FETCH_PENDING_FAILURE, on_fetch_failure)
    reducer.register(types.FETCH_APPROVAL_DETAIL_START, on_fetch_detail_start)
    reducer.register(types.FETCH_APPROVAL_DETAIL_SUCCESS, on_fetch_detail_success)
    reducer.register(types.FETCH_APPROVAL_DETAIL_FAILURE, on_fetch_detail_failure)
    reducer.register(types.SELECT_APPROVAL, on_select)
    reducer.register(types.CLEAR_SELECTED_APPROVAL, on_clear_selected)
    reducer.register(types.SET_APPROVAL_FILTERS, on_set_filters)
    reducer.register(types.SET_APPROVAL_STATUS_FILTER, on_set_status_filter)
    reducer.register(types.CLEAR_APPROVAL_FILTERS, on_clear_filters)
    reducer.register(types.SET_APPROVALS_PAGINATION, on_set_pagination)
    reducer.register(types.SET_APPROVALS_PAGE, on_set_page)
    reducer.register(types.APPROVAL_ACTION_SUCCESS, on_action_success)
    reducer.register(types.UPDATE_PENDING_COUNT, on_update_pending_count)
    reducer.register(types.RESET_APPROVALS_STATE, on_reset)
    reducer.register(types.CLEAR_APPROVALS_ERROR, on_clear_error)


approvals_reducer = SliceReducer("approvals", ApprovalsState.initial)
register_handlers(approvals_reducer)
