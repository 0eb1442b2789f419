"""
Hash chain integrity for the action journal.

Each record carries the hash of the previous record, so editing, removing
or reordering a line breaks every later link.
"""

import hashlib
from typing import Any, Dict, Iterable

from ..core.actions import Action
from ..core.canonical import canonical_json_bytes
from ..core.errors import IntegrityError

ZERO_HASH = "0" * 64


def action_dict_for_hash(seq: int, action: Action) -> Dict[str, Any]:
    return {
        "seq": seq,
        "type": action.type,
        "ts": action.ts,
        "payload": action.payload,
    }


def hash_action(prev_hash: str, seq: int, action: Action) -> str:
    """
    Compute hash of action chained to previous hash.

    Hash input: prev_hash + canonical_json(action_data)
    """
    b = prev_hash.encode("utf-8") + canonical_json_bytes(action_dict_for_hash(seq, action))
    return hashlib.sha256(b).hexdigest()


def chain_record(prev_hash: str, seq: int, action: Action) -> Dict[str, Any]:
    """
    Create hash chain record for storage.

    Record: {"prev_hash": ..., "action_hash": ..., "action": {seq, type, ts, payload}}
    """
    return {
        "prev_hash": prev_hash,
        "action_hash": hash_action(prev_hash, seq, action),
        "action": action_dict_for_hash(seq, action),
    }


def verify_chain(records: Iterable[Dict[str, Any]]) -> int:
    """
    Walk records in order and check every link.

    Returns the number of verified records.

    Raises:
        IntegrityError: On a broken prev_hash link, a hash mismatch or a
            sequence gap.
    """
    expected_prev = ZERO_HASH
    count = 0
    for rec in records:
        try:
            data = rec["action"]
            seq = data["seq"]
            action = Action(type=data["type"], payload=data.get("payload") or {}, ts=data["ts"])
            prev_hash = rec["prev_hash"]
            action_hash = rec["action_hash"]
        except (KeyError, TypeError) as ex:
            raise IntegrityError(f"malformed record at position {count}: {ex}") from ex

        if seq != count:
            raise IntegrityError(f"sequence gap: expected seq {count}, found {seq}")
        if prev_hash != expected_prev:
            raise IntegrityError(
                f"broken link at seq {seq}: prev_hash {prev_hash[:16]} != {expected_prev[:16]}"
            )
        recomputed = hash_action(prev_hash, seq, action)
        if recomputed != action_hash:
            raise IntegrityError(f"hash mismatch at seq {seq}")

        expected_prev = action_hash
        count += 1
    return count
