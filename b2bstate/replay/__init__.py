"""
Replay runner for deterministic state reconstruction.
"""

from .runner import ReplayResult, replay

__all__ = ["ReplayResult", "replay"]
