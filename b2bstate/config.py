"""
Runtime settings read from the environment.

Environment Variables:
    B2BSTATE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL - default: INFO
    B2BSTATE_LOG_FORMAT: json, text - default: json
    B2BSTATE_JOURNAL_PATH: action journal file - default: /tmp/b2bstate/actions.log
    B2BSTATE_SNAPSHOT_PATH: saved cart file - default: /tmp/b2bstate/cart.json
"""

from __future__ import annotations

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"
DEFAULT_JOURNAL_PATH = "/tmp/b2bstate/actions.log"
DEFAULT_SNAPSHOT_PATH = "/tmp/b2bstate/cart.json"


def _read_choice(name: str, default: str, choices, transform) -> str:
    value = transform(os.getenv(name, default).strip())
    return value if value in choices else default


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT
    journal_path: str = DEFAULT_JOURNAL_PATH
    snapshot_path: str = DEFAULT_SNAPSHOT_PATH

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=_read_choice("B2BSTATE_LOG_LEVEL", DEFAULT_LOG_LEVEL, LOG_LEVELS, str.upper),
            log_format=_read_choice("B2BSTATE_LOG_FORMAT", DEFAULT_LOG_FORMAT, LOG_FORMATS, str.lower),
            journal_path=os.getenv("B2BSTATE_JOURNAL_PATH") or DEFAULT_JOURNAL_PATH,
            snapshot_path=os.getenv("B2BSTATE_SNAPSHOT_PATH") or DEFAULT_SNAPSHOT_PATH,
        )
