"""
B2B Commerce State Container

Pure reducers, memoized selectors and action creators for company,
quotes, approvals and B2B cart state.
"""

__version__ = "0.1.0"
