"""
Action vocabulary and creators, one module per slice.

Tag strings are the inbound contract; creators only build Action records.
"""

from . import approvals, cart, company, quotes

ALL_ACTION_TYPES = frozenset(
    company.ACTION_TYPES | quotes.ACTION_TYPES | approvals.ACTION_TYPES | cart.ACTION_TYPES
)

__all__ = [
    "ALL_ACTION_TYPES",
    "approvals",
    "cart",
    "company",
    "quotes",
]
