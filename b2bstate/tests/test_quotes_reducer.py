"""
Tests for the quotes reducer: fetch lifecycles, filters and pagination.
"""

from b2bstate.actions import quotes as actions
from b2bstate.core.state import FAILED, IDLE, LOADING, STATUS_ALL, SUCCEEDED, Pagination, QuotesState
from b2bstate.reducers.quotes import quote_summary, quotes_reducer

TS = "2024-06-01T12:00:00.000Z"


def summary(quote_id, status="submitted", **extra):
    data = {
        "id": quote_id,
        "quote_number": f"Q-{quote_id}",
        "company_name": "Acme",
        "status": status,
        "total": 100.0,
        "has_unread_messages": False,
    }
    data.update(extra)
    return data


def full_quote(quote_id, status="responded", unread=0):
    return {
        "id": quote_id,
        "quote_number": f"Q-{quote_id}",
        "company_id": "c1",
        "company_name": "Acme",
        "status": status,
        "priority": "normal",
        "items": [{"product_id": "p1"}, {"product_id": "p2"}],
        "totals": {"total": 250.0, "currency": "EUR"},
        "valid_until": "2024-07-01T00:00:00.000Z",
        "created_at": "2024-05-01T00:00:00.000Z",
        "updated_at": "2024-05-02T00:00:00.000Z",
        "unread_message_count": unread,
    }


def run(*acts, state=None):
    for a in acts:
        state = quotes_reducer(state, a.at(TS))
    return state


def loaded(total_items=45, page=2):
    return run(
        actions.fetch_quotes_success(
            [summary("1"), summary("2")],
            Pagination.calculate(page, 20, total_items),
        )
    )


def test_fetch_lifecycle():
    st = run(actions.fetch_quotes_start())
    assert st.list_status == LOADING

    st = run(actions.fetch_quotes_success([summary("1")], Pagination.calculate(1, 20, 1)), state=st)
    assert st.list_status == SUCCEEDED
    assert st.quotes[0]["id"] == "1"
    assert st.pagination.total_pages == 1


def test_fetch_failure_keeps_loaded_quotes():
    st = run(actions.fetch_quotes_failure("timeout"), state=loaded())
    assert st.list_status == FAILED
    assert st.error == "timeout"
    assert len(st.quotes) == 2


def test_detail_lifecycle_is_independent():
    st = run(actions.fetch_quotes_start(), actions.fetch_quote_detail_success(full_quote("1")))
    assert st.list_status == LOADING
    assert st.detail_status == SUCCEEDED
    assert st.selected_quote["id"] == "1"

    st = run(actions.clear_selected_quote(), state=st)
    assert st.selected_quote is None
    assert st.detail_status == IDLE


def test_status_filter_all_removes_status_key():
    st = run(actions.set_quote_status_filter("draft"), state=loaded())
    assert st.filters == {"status": "draft"}
    assert st.active_status_filter == "draft"

    st = run(actions.set_quote_status_filter(STATUS_ALL), state=st)
    assert "status" not in st.filters
    assert st.active_status_filter == STATUS_ALL


def test_filter_change_resets_to_first_page():
    st = run(actions.set_quote_status_filter("draft"), state=loaded(total_items=45, page=2))
    assert st.pagination.current_page == 1
    assert st.pagination.has_previous_page is False
    assert st.pagination.has_next_page is True


def test_search_keeps_filters_in_sync():
    st = run(actions.set_quote_search("acme"))
    assert st.search_query == "acme"
    assert st.filters == {"search": "acme"}

    st = run(actions.set_quote_search(""), state=st)
    assert st.search_query == ""
    assert "search" not in st.filters


def test_clear_filters():
    st = run(
        actions.set_quote_filters({"priority": "high"}),
        actions.set_quote_status_filter("draft"),
        actions.set_quote_search("x"),
        actions.clear_quote_filters(),
    )
    assert st.filters == {}
    assert st.active_status_filter == STATUS_ALL
    assert st.search_query == ""


def test_set_page_recomputes_flags():
    st = run(actions.set_quotes_page(3), state=loaded(total_items=45, page=1))
    assert st.pagination.current_page == 3
    assert st.pagination.total_pages == 3
    assert st.pagination.has_next_page is False
    assert st.pagination.has_previous_page is True


def test_create_success_prepends_and_counts():
    st = run(actions.create_quote_success(summary("new", status="draft")), state=loaded(total_items=40))
    assert st.quotes[0]["id"] == "new"
    assert st.pagination.total_items == 41
    assert st.pagination.total_pages == 3


def test_update_success_rebuilds_summary_and_selected():
    base = run(actions.fetch_quote_detail_success(full_quote("1", status="submitted")), state=loaded())
    updated = full_quote("1", status="negotiating", unread=2)

    st = run(actions.update_quote_success(updated), state=base)
    entry = st.quotes[0]
    assert entry["status"] == "negotiating"
    assert entry["item_count"] == 2
    assert entry["total"] == 250.0
    assert entry["has_unread_messages"] is True
    assert st.selected_quote == updated
    assert st.quotes[1] is base.quotes[1]


def test_quote_summary_without_unread_messages():
    assert quote_summary(full_quote("1"))["has_unread_messages"] is False


def test_reset_and_clear_error():
    st = run(actions.fetch_quotes_failure("x"), actions.clear_quotes_error())
    assert st.error is None
    st = run(actions.reset_quotes_state(), state=loaded())
    assert st == QuotesState.initial()
