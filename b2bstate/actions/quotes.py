"""
Quote action tags and creators.

Quote summaries and full quote records are server-supplied dicts and are
passed through untouched.
"""

from typing import Any, Dict, Iterable

from ..core.actions import Action, to_payload

FETCH_QUOTES_START = "quotes/fetchListStart"
FETCH_QUOTES_SUCCESS = "quotes/fetchListSuccess"
FETCH_QUOTES_FAILURE = "quotes/fetchListFailure"
FETCH_QUOTE_DETAIL_START = "quotes/fetchDetailStart"
FETCH_QUOTE_DETAIL_SUCCESS = "quotes/fetchDetailSuccess"
FETCH_QUOTE_DETAIL_FAILURE = "quotes/fetchDetailFailure"
SELECT_QUOTE = "quotes/select"
CLEAR_SELECTED_QUOTE = "quotes/clearSelected"
SET_QUOTE_FILTERS = "quotes/setFilters"
SET_QUOTE_STATUS_FILTER = "quotes/setStatusFilter"
SET_QUOTE_SEARCH = "quotes/setSearch"
CLEAR_QUOTE_FILTERS = "quotes/clearFilters"
SET_QUOTES_PAGINATION = "quotes/setPagination"
SET_QUOTES_PAGE = "quotes/setPage"
CREATE_QUOTE_SUCCESS = "quotes/createSuccess"
UPDATE_QUOTE_SUCCESS = "quotes/updateSuccess"
RESET_QUOTES_STATE = "quotes/reset"
CLEAR_QUOTES_ERROR = "quotes/clearError"

ACTION_TYPES = frozenset(
    {
        FETCH_QUOTES_START,
        FETCH_QUOTES_SUCCESS,
        FETCH_QUOTES_FAILURE,
        FETCH_QUOTE_DETAIL_START,
        FETCH_QUOTE_DETAIL_SUCCESS,
        FETCH_QUOTE_DETAIL_FAILURE,
        SELECT_QUOTE,
        CLEAR_SELECTED_QUOTE,
        SET_QUOTE_FILTERS,
        SET_QUOTE_STATUS_FILTER,
        SET_QUOTE_SEARCH,
        CLEAR_QUOTE_FILTERS,
        SET_QUOTES_PAGINATION,
        SET_QUOTES_PAGE,
        CREATE_QUOTE_SUCCESS,
        UPDATE_QUOTE_SUCCESS,
        RESET_QUOTES_STATE,
        CLEAR_QUOTES_ERROR,
    }
)

# Statuses a quote can no longer move out of
FINALIZED_QUOTE_STATUSES = ("accepted", "rejected", "expired", "converted", "cancelled")


def fetch_quotes_start() -> Action:
    return Action(type=FETCH_QUOTES_START)


def fetch_quotes_success(quotes: Iterable[Dict[str, Any]], pagination: Any) -> Action:
    """
    Quote list page loaded.

    Args:
        quotes: Quote summaries for the page
        pagination: Pagination or its dict form
    """
    return Action(
        type=FETCH_QUOTES_SUCCESS,
        payload={"quotes": list(quotes), "pagination": to_payload(pagination)},
    )


def fetch_quotes_failure(error: str) -> Action:
    return Action(type=FETCH_QUOTES_FAILURE, payload={"error": error})


def fetch_quote_detail_start() -> Action:
    return Action(type=FETCH_QUOTE_DETAIL_START)


def fetch_quote_detail_success(quote: Dict[str, Any]) -> Action:
    return Action(type=FETCH_QUOTE_DETAIL_SUCCESS, payload={"quote": quote})


def fetch_quote_detail_failure(error: str) -> Action:
    return Action(type=FETCH_QUOTE_DETAIL_FAILURE, payload={"error": error})


def select_quote(quote_id: str) -> Action:
    return Action(type=SELECT_QUOTE, payload={"quote_id": quote_id})


def clear_selected_quote() -> Action:
    return Action(type=CLEAR_SELECTED_QUOTE)


def set_quote_filters(filters: Dict[str, Any]) -> Action:
    return Action(type=SET_QUOTE_FILTERS, payload={"filters": dict(filters)})


def set_quote_status_filter(status: str) -> Action:
    """status is a quote status or "all" to drop the status filter."""
    return Action(type=SET_QUOTE_STATUS_FILTER, payload={"status": status})


def set_quote_search(query: str) -> Action:
    return Action(type=SET_QUOTE_SEARCH, payload={"query": query})


def clear_quote_filters() -> Action:
    return Action(type=CLEAR_QUOTE_FILTERS)


def set_quotes_pagination(pagination: Any) -> Action:
    return Action(type=SET_QUOTES_PAGINATION, payload={"pagination": to_payload(pagination)})


def set_quotes_page(page: int) -> Action:
    return Action(type=SET_QUOTES_PAGE, payload={"page": page})


def create_quote_success(quote: Dict[str, Any]) -> Action:
    """quote is the summary of the newly created quote."""
    return Action(type=CREATE_QUOTE_SUCCESS, payload={"quote": quote})


def update_quote_success(quote: Dict[str, Any]) -> Action:
    """quote is the full updated quote record."""
    return Action(type=UPDATE_QUOTE_SUCCESS, payload={"quote": quote})


def reset_quotes_state() -> Action:
    return Action(type=RESET_QUOTES_STATE)


def clear_quotes_error() -> Action:
    return Action(type=CLEAR_QUOTES_ERROR)
