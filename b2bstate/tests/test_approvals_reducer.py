"""
Tests for the approvals reducer.

Critical: one action-success update must keep the selected record, the
list summary and the pending subset consistent.
"""

from b2bstate.actions import approvals as actions
from b2bstate.core.state import FAILED, LOADING, STATUS_ALL, SUCCEEDED, ApprovalsState, Pagination
from b2bstate.reducers.approvals import approval_summary, approvals_reducer

TS = "2024-06-01T12:00:00.000Z"


def approval(approval_id, status="pending", **extra):
    data = {
        "id": approval_id,
        "request_number": f"AR-{approval_id}",
        "entity_type": "order",
        "entity_reference": f"ORD-{approval_id}",
        "entity_summary": "Order",
        "requester_name": "Jane Doe",
        "status": status,
        "current_level": 1,
        "total_levels": 2,
        "priority": "normal",
        "created_at": "2024-05-01T00:00:00.000Z",
    }
    data.update(extra)
    return data


def run(*acts, state=None):
    for a in acts:
        state = approvals_reducer(state, a.at(TS))
    return state


def loaded():
    return run(
        actions.fetch_approvals_success(
            [approval("a1"), approval("a2"), approval("a3", status="approved")],
            Pagination.calculate(1, 20, 3),
        ),
        actions.fetch_pending_success([approval("a1"), approval("a2")], 2),
        actions.fetch_approval_detail_success(approval("a1", steps=[{"level": 1}])),
    )


def test_list_and_pending_fetch():
    st = run(actions.fetch_approvals_start())
    assert st.list_status == LOADING

    st = loaded()
    assert st.list_status == SUCCEEDED
    assert len(st.all_approvals) == 3
    assert len(st.pending_approvals) == 2
    assert st.pending_count == 2
    assert st.selected_approval["id"] == "a1"


def test_pending_failure_sets_list_failed():
    st = run(actions.fetch_pending_failure("down"), state=loaded())
    assert st.list_status == FAILED
    assert st.error == "down"
    assert len(st.pending_approvals) == 2


def test_action_success_approved_leaves_pending():
    base = loaded()
    updated = approval("a1", status="approved", current_level=2)

    st = run(actions.approval_action_success("a1", actions.APPROVE, updated), state=base)

    assert [a["id"] for a in st.pending_approvals] == ["a2"]
    assert st.pending_count == 1
    assert st.all_approvals[0]["status"] == "approved"
    assert st.all_approvals[0]["current_level"] == 2
    assert st.selected_approval == updated


def test_action_success_still_pending_updates_in_place():
    base = loaded()
    updated = approval("a1", status="pending", current_level=2)

    st = run(actions.approval_action_success("a1", actions.REQUEST_INFO, updated), state=base)

    assert [a["id"] for a in st.pending_approvals] == ["a1", "a2"]
    assert st.pending_approvals[0]["current_level"] == 2
    assert st.pending_count == 2


def test_pending_count_never_negative():
    st = run(actions.approval_action_success("x", actions.REJECT, approval("x", status="rejected")))
    assert st.pending_count == 0


def test_selected_untouched_for_other_id():
    base = loaded()
    st = run(actions.approval_action_success("a2", actions.APPROVE, approval("a2", status="approved")), state=base)
    assert st.selected_approval is base.selected_approval


def test_summary_overdue_uses_action_time():
    overdue = approval_summary(approval("a1", due_at="2024-05-31T00:00:00.000Z"), TS)
    assert overdue["is_overdue"] is True

    on_time = approval_summary(approval("a1", due_at="2024-06-02T00:00:00.000Z"), TS)
    assert on_time["is_overdue"] is False

    no_due = approval_summary(approval("a1"), TS)
    assert no_due["is_overdue"] is False
    assert "due_at" not in no_due


def test_summary_carries_optional_amount():
    s = approval_summary(approval("a1", entity_amount=1200.0, entity_currency="EUR"), TS)
    assert s["entity_amount"] == 1200.0
    assert s["entity_currency"] == "EUR"


def test_status_filter_and_clear():
    st = run(actions.set_approval_filters({"entity_type": "order"}), actions.set_approval_status_filter("pending"))
    assert st.filters == {"entity_type": "order", "status": "pending"}

    st = run(actions.set_approval_status_filter(STATUS_ALL), state=st)
    assert st.filters == {"entity_type": "order"}

    st = run(actions.clear_approval_filters(), state=st)
    assert st.filters == {}
    assert st.active_status_filter == STATUS_ALL


def test_pagination_actions():
    st = run(actions.set_approvals_pagination(Pagination.calculate(1, 10, 35)), actions.set_approvals_page(4))
    assert st.pagination.total_pages == 4
    assert st.pagination.current_page == 4
    assert st.pagination.has_next_page is False


def test_update_pending_count_and_reset():
    st = run(actions.update_pending_count(7))
    assert st.pending_count == 7

    st = run(actions.reset_approvals_state(), state=loaded())
    assert st == ApprovalsState.initial()


def test_clear_selected():
    st = run(actions.clear_selected_approval(), state=loaded())
    assert st.selected_approval is None
