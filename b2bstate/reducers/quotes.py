"""
Quotes slice reducer.

List and detail loads have independent lifecycles. Failures only flip the
status and store the message; already loaded data is kept.
"""

import math
from dataclasses import replace
from typing import Any, Dict

from ..actions import quotes as types
from ..core.actions import Action
from ..core.reducer import SliceReducer
from ..core.state import FAILED, IDLE, LOADING, STATUS_ALL, SUCCEEDED, Pagination, QuotesState
from ._lists import first_page, replace_by_id, with_status_filter, without_key


def quote_summary(quote: Dict[str, Any]) -> Dict[str, Any]:
    """Build the list-entry summary from a full quote record."""
    totals = quote.get("totals") or {}
    return {
        "id": quote.get("id"),
        "quote_number": quote.get("quote_number"),
        "company_id": quote.get("company_id"),
        "company_name": quote.get("company_name"),
        "status": quote.get("status"),
        "priority": quote.get("priority"),
        "item_count": len(quote.get("items") or ()),
        "total": totals.get("total", 0),
        "currency": totals.get("currency"),
        "valid_until": quote.get("valid_until"),
        "created_at": quote.get("created_at"),
        "updated_at": quote.get("updated_at"),
        "has_unread_messages": (quote.get("unread_message_count") or 0) > 0,
    }


def on_fetch_list_start(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, list_status=LOADING, error=None)


def on_fetch_list_success(state: QuotesState, action: Action) -> QuotesState:
    payload = action.payload or {}
    return replace(
        state,
        quotes=tuple(payload.get("quotes") or ()),
        pagination=Pagination.coerce(payload.get("pagination") or {}),
        list_status=SUCCEEDED,
        error=None,
    )


def on_fetch_list_failure(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, list_status=FAILED, error=(action.payload or {}).get("error"))


def on_fetch_detail_start(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, detail_status=LOADING, error=None)


def on_fetch_detail_success(state: QuotesState, action: Action) -> QuotesState:
    return replace(
        state,
        selected_quote=(action.payload or {}).get("quote"),
        detail_status=SUCCEEDED,
        error=None,
    )


def on_fetch_detail_failure(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, detail_status=FAILED, error=(action.payload or {}).get("error"))


def on_select(state: QuotesState, action: Action) -> QuotesState:
    # Selection is driven by the detail fetch; nothing to store here.
    return state


def on_clear_selected(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, selected_quote=None, detail_status=IDLE)


def on_set_filters(state: QuotesState, action: Action) -> QuotesState:
    filters = (action.payload or {}).get("filters") or {}
    return replace(state, filters=dict(filters), pagination=first_page(state.pagination))


def on_set_status_filter(state: QuotesState, action: Action) -> QuotesState:
    status = (action.payload or {}).get("status", STATUS_ALL)
    return replace(
        state,
        active_status_filter=status,
        filters=with_status_filter(state.filters, status),
        pagination=first_page(state.pagination),
    )


def on_set_search(state: QuotesState, action: Action) -> QuotesState:
    query = (action.payload or {}).get("query") or ""
    filters = without_key(state.filters, "search")
    if query:
        filters["search"] = query
    return replace(
        state,
        search_query=query,
        filters=filters,
        pagination=first_page(state.pagination),
    )


def on_clear_filters(state: QuotesState, action: Action) -> QuotesState:
    return replace(
        state,
        filters={},
        active_status_filter=STATUS_ALL,
        search_query="",
        pagination=first_page(state.pagination),
    )


def on_set_pagination(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, pagination=Pagination.coerce((action.payload or {}).get("pagination") or {}))


def on_set_page(state: QuotesState, action: Action) -> QuotesState:
    page = (action.payload or {}).get("page", 1)
    return replace(state, pagination=state.pagination.at_page(page))


def on_create_success(state: QuotesState, action: Action) -> QuotesState:
    quote = (action.payload or {}).get("quote")
    pagination = state.pagination
    total_items = pagination.total_items + 1
    total_pages = math.ceil(total_items / pagination.page_size) if pagination.page_size > 0 else 0
    return replace(
        state,
        quotes=(quote,) + state.quotes,
        pagination=replace(pagination, total_items=total_items, total_pages=total_pages),
    )


def on_update_success(state: QuotesState, action: Action) -> QuotesState:
    quote = (action.payload or {}).get("quote") or {}
    quote_id = quote.get("id")
    selected = state.selected_quote
    return replace(
        state,
        quotes=replace_by_id(state.quotes, quote_id, quote_summary(quote)),
        selected_quote=quote if selected is not None and selected.get("id") == quote_id else selected,
    )


def on_reset(state: QuotesState, action: Action) -> QuotesState:
    return QuotesState.initial()


def on_clear_error(state: QuotesState, action: Action) -> QuotesState:
    return replace(state, error=None)


def register_handlers(reducer: SliceReducer) -> None:
    reducer.register(types.FETCH_QUOTES_START, on_fetch_list_start)
    reducer.register(types.FETCH_QUOTES_SUCCESS, on_fetch_list_success)
    reducer.register(types.FETCH_QUOTES_FAILURE, on_fetch_list_failure)
    reducer.register(types.FETCH_QUOTE_DETAIL_START, on_fetch_detail_start)
    reducer.register(types.FETCH_QUOTE_DETAIL_SUCCESS, on_fetch_detail_success)
    reducer.register(types.FETCH_QUOTE_DETAIL_FAILURE, on_fetch_detail_failure)
    reducer.register(types.SELECT_QUOTE, on_select)
    reducer.register(types.CLEAR_SELECTED_QUOTE, on_clear_selected)
    reducer.register(types.SET_QUOTE_FILTERS, on_set_filters)
    reducer.register(types.SET_QUOTE_STATUS_FILTER, on_set_status_filter)
    reducer.register(types.SET_QUOTE_SEARCH, on_set_search)
    reducer.register(types.CLEAR_QUOTE_FILTERS, on_clear_filters)
    reducer.register(types.SET_QUOTES_PAGINATION, on_set_pagination)
    reducer.register(types.SET_QUOTES_PAGE, on_set_page)
    reducer.register(types.CREATE_QUOTE_SUCCESS, on_create_success)
    reducer.register(types.UPDATE_QUOTE_SUCCESS, on_update_success)
    reducer.register(types.RESET_QUOTES_STATE, on_reset)
    reducer.register(types.CLEAR_QUOTES_ERROR, on_clear_error)


quotes_reducer = SliceReducer("quotes", QuotesState.initial)
register_handlers(quotes_reducer)
