"""
Read-side views over RootState, one module per slice.

Accessors are plain functions. Lookups and aggregates are memoized with
the primitives in b2bstate.core.memoize.
"""

from . import approvals, cart, company, quotes

__all__ = ["approvals", "cart", "company", "quotes"]
