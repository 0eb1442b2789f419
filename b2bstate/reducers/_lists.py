"""
Helpers shared by the quotes and approvals reducers.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, Tuple

from ..core.state import STATUS_ALL, Pagination, Record


def first_page(pagination: Pagination) -> Pagination:
    """Back to page 1 after a filter change; page flags follow."""
    return replace(
        pagination,
        current_page=1,
        has_next_page=1 < pagination.total_pages,
        has_previous_page=False,
    )


def without_key(filters: Dict[str, Any], key: str) -> Dict[str, Any]:
    return {k: v for k, v in filters.items() if k != key}


def with_status_filter(filters: Dict[str, Any], status: str) -> Dict[str, Any]:
    """The "all" sentinel removes the status key instead of storing it."""
    rest = without_key(filters, "status")
    if status == STATUS_ALL:
        return rest
    rest["status"] = status
    return rest


def replace_by_id(records: Iterable[Record], record_id: Any, new: Record) -> Tuple[Record, ...]:
    return tuple(new if r.get("id") == record_id else r for r in records)
