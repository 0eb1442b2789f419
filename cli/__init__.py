"""
b2bstate CLI - B2B commerce state container tools

Commands:
- b2bstate replay - Rebuild state from the action journal
- b2bstate log tail/inspect/verify - Action journal operations
- b2bstate cart show - Inspect a saved cart
- b2bstate version - Version information
"""

from b2bstate import __version__

__all__ = ["__version__"]
