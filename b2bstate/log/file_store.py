"""
File-based action journal using append-only JSONL format.

Each line is a hash chain record with prev_hash, action_hash and action data.
"""

import json
import logging
import os
from typing import Any, Dict, Iterator, Optional, Tuple

from ..core.actions import Action
from ..core.canonical import canonical_json_str
from ..core.errors import ActionLogError
from .integrity import ZERO_HASH, chain_record
from .store import ActionLog, AppendResult

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None

logger = logging.getLogger(__name__)


class FileActionLog(ActionLog):
    """
    File-based append-only action journal.

    Storage format: JSONL (newline-delimited JSON)
    Each line: {"prev_hash": "...", "action_hash": "...", "action": {...}}

    Guarantees:
    - Append-only (no mutations)
    - Fsync after each append (durability)
    - Exclusive flock while appending, so concurrent writers still chain
    """

    def __init__(self, path: str) -> None:
        self.path = path

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        if not os.path.exists(path):
            with open(path, "wb") as f:
                f.write(b"")

    def _parse(self, line: bytes, lineno: int) -> Dict[str, Any]:
        try:
            return json.loads(line)
        except ValueError as ex:
            raise ActionLogError(f"{self.path}:{lineno}: invalid JSON record") from ex

    def _last_seq_and_hash(self, f) -> Tuple[int, str]:
        """
        Read last sequence number and hash from the journal.

        Returns (-1, ZERO_HASH) if the journal is empty.
        """
        last_seq = -1
        last_hash = ZERO_HASH
        f.seek(0)
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            rec = self._parse(line, lineno)
            last_seq = rec["action"]["seq"]
            last_hash = rec["action_hash"]
        return last_seq, last_hash

    def append(self, action: Action) -> AppendResult:
        """
        Append action with hash chain.

        Raises:
            ActionLogError: If the file cannot be written
        """
        try:
            with open(self.path, "a+b") as f:
                if fcntl:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    last_seq, last_hash = self._last_seq_and_hash(f)
                    seq = last_seq + 1
                    rec = chain_record(last_hash, seq, action)
                    line = canonical_json_str(rec) + "\n"

                    f.seek(0, os.SEEK_END)
                    f.write(line.encode("utf-8"))
                    f.flush()
                    os.fsync(f.fileno())
                finally:
                    if fcntl:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as ex:
            raise ActionLogError(str(ex)) from ex

        logger.debug("Journaled action", extra={"seq": seq, "action_type": action.type})
        return AppendResult(
            action=action,
            seq=seq,
            action_hash=rec["action_hash"],
            prev_hash=last_hash,
        )

    def records(self) -> Iterator[Dict[str, Any]]:
        try:
            with open(self.path, "rb") as f:
                for lineno, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    yield self._parse(line, lineno)
        except OSError as ex:
            raise ActionLogError(str(ex)) from ex

    def get_last_hash(self) -> Optional[str]:
        with open(self.path, "rb") as f:
            _, last_hash = self._last_seq_and_hash(f)
        return last_hash
