"""
Quote selectors.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from ..actions.quotes import FINALIZED_QUOTE_STATUSES
from ..core import clock
from ..core.memoize import create_derived_selector, create_parameterized_selector
from ..core.state import LOADING, STATUS_ALL, RootState

EXPIRY_WINDOW = timedelta(days=7)


# Base accessors

def select_quotes_state(state: RootState):
    return state.quotes


def select_quotes(state: RootState):
    return state.quotes.quotes


def select_selected_quote(state: RootState) -> Optional[Dict[str, Any]]:
    return state.quotes.selected_quote


def select_quote_filters(state: RootState) -> Dict[str, Any]:
    return state.quotes.filters


def select_active_status_filter(state: RootState) -> str:
    return state.quotes.active_status_filter


def select_quote_search_query(state: RootState) -> str:
    return state.quotes.search_query


def select_quotes_list_status(state: RootState) -> str:
    return state.quotes.list_status


def select_is_quotes_loading(state: RootState) -> bool:
    return state.quotes.list_status == LOADING


def select_quote_detail_status(state: RootState) -> str:
    return state.quotes.detail_status


def select_is_quote_detail_loading(state: RootState) -> bool:
    return state.quotes.detail_status == LOADING


def select_quotes_error(state: RootState) -> Optional[str]:
    return state.quotes.error


# Pagination

def select_quotes_pagination(state: RootState):
    return state.quotes.pagination


def select_quotes_current_page(state: RootState) -> int:
    return state.quotes.pagination.current_page


def select_quotes_total_count(state: RootState) -> int:
    return state.quotes.pagination.total_items


def select_quotes_has_next_page(state: RootState) -> bool:
    return state.quotes.pagination.has_next_page


def select_quotes_has_previous_page(state: RootState) -> bool:
    return state.quotes.pagination.has_previous_page


# Lookups and derived views

select_quote_by_id = create_parameterized_selector(
    lambda state, quote_id: next((q for q in state.quotes.quotes if q.get("id") == quote_id), None)
)

select_quotes_by_status = create_parameterized_selector(
    lambda state, status: tuple(q for q in state.quotes.quotes if q.get("status") == status)
)

select_quote_count_by_status = create_parameterized_selector(
    lambda state, status: sum(1 for q in state.quotes.quotes if q.get("status") == status)
)


def _filter_quotes(quotes, status_filter: str, search_query: str):
    filtered = quotes
    if status_filter != STATUS_ALL:
        filtered = tuple(q for q in filtered if q.get("status") == status_filter)
    if search_query.strip():
        needle = search_query.lower()
        filtered = tuple(
            q
            for q in filtered
            if needle in (q.get("quote_number") or "").lower()
            or needle in (q.get("company_name") or "").lower()
        )
    return filtered


select_filtered_quotes = create_derived_selector(
    [select_quotes, select_active_status_filter, select_quote_search_query],
    _filter_quotes,
)

select_quotes_with_unread_messages = create_derived_selector(
    [select_quotes],
    lambda quotes: tuple(q for q in quotes if q.get("has_unread_messages")),
)


def select_unread_quotes_count(state: RootState) -> int:
    return sum(1 for q in state.quotes.quotes if q.get("has_unread_messages"))


def _expiring(quotes):
    # Evaluated against the clock when the quote list changes
    now = clock.utc_now()
    horizon = now + EXPIRY_WINDOW
    expiring = []
    for q in quotes:
        valid_until = clock.parse_iso(q.get("valid_until"))
        if valid_until is None:
            continue
        if now < valid_until <= horizon and q.get("status") not in FINALIZED_QUOTE_STATUSES:
            expiring.append(q)
    return tuple(expiring)


select_expiring_quotes = create_derived_selector([select_quotes], _expiring)


def select_has_quotes(state: RootState) -> bool:
    return len(state.quotes.quotes) > 0


def select_quotes_total_value(state: RootState) -> float:
    return sum(q.get("total") or 0 for q in state.quotes.quotes)


# Selected quote

def select_selected_quote_id(state: RootState) -> Optional[str]:
    return (state.quotes.selected_quote or {}).get("id")


def select_selected_quote_status(state: RootState) -> Optional[str]:
    return (state.quotes.selected_quote or {}).get("status")


def select_selected_quote_items(state: RootState):
    return (state.quotes.selected_quote or {}).get("items") or []


def select_selected_quote_totals(state: RootState) -> Optional[Dict[str, Any]]:
    return (state.quotes.selected_quote or {}).get("totals")


def select_can_accept_selected_quote(state: RootState) -> bool:
    return select_selected_quote_status(state) in ("responded", "negotiating")


def select_can_edit_selected_quote(state: RootState) -> bool:
    return select_selected_quote_status(state) == "draft"
