"""
Tests for action journal hash chain integrity.

Critical: the hash chain must detect any tampering.
"""

import json
import os
import tempfile

import pytest

from b2bstate.actions import cart as cart_actions
from b2bstate.core.actions import Action
from b2bstate.core.errors import ActionLogError, IntegrityError
from b2bstate.log import FileActionLog, ZERO_HASH, hash_action, verify_chain

TS = "2024-06-01T12:00:00.000Z"


def fill(log, n=5):
    for i in range(n):
        log.append(cart_actions.set_cart_notes(f"note {i}").at(TS))


def test_genesis_action_has_zero_hash():
    """First action must chain to ZERO_HASH."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "actions.log")
        log = FileActionLog(log_path)

        result = log.append(Action(type="cartB2B/clear", ts=TS))

        with open(log_path, "r") as f:
            rec = json.loads(f.readline())

        assert rec["prev_hash"] == ZERO_HASH
        assert rec["action"]["seq"] == 0
        assert result.seq == 0
        assert result.action_hash == rec["action_hash"]


def test_hash_chain_links():
    """Each record must chain to the previous record hash."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "actions.log")
        log = FileActionLog(log_path)
        fill(log)

        records = list(log.records())
        assert [r["action"]["seq"] for r in records] == [0, 1, 2, 3, 4]
        for prev, curr in zip(records, records[1:]):
            assert curr["prev_hash"] == prev["action_hash"]
        assert verify_chain(records) == 5
        assert log.get_last_hash() == records[-1]["action_hash"]


def test_hash_determinism():
    a = Action(type="cartB2B/setNotes", payload={"notes": "x"}, ts=TS)
    h1 = hash_action(ZERO_HASH, 0, a)
    h2 = hash_action(ZERO_HASH, 0, a)
    assert h1 == h2
    assert len(h1) == 64


def test_payload_key_order_does_not_change_hash():
    a1 = Action(type="T", payload={"a": 1, "b": 2}, ts=TS)
    a2 = Action(type="T", payload={"b": 2, "a": 1}, ts=TS)
    assert hash_action(ZERO_HASH, 0, a1) == hash_action(ZERO_HASH, 0, a2)


def test_modified_payload_is_detected():
    with tempfile.TemporaryDirectory() as tmpdir:
        log = FileActionLog(os.path.join(tmpdir, "actions.log"))
        fill(log, 3)

        records = list(log.records())
        records[1]["action"]["payload"]["notes"] = "tampered"

        with pytest.raises(IntegrityError):
            verify_chain(records)


def test_removed_record_is_detected():
    with tempfile.TemporaryDirectory() as tmpdir:
        log = FileActionLog(os.path.join(tmpdir, "actions.log"))
        fill(log, 3)

        records = list(log.records())
        del records[1]

        with pytest.raises(IntegrityError):
            verify_chain(records)


def test_read_yields_actions_from_seq():
    with tempfile.TemporaryDirectory() as tmpdir:
        log = FileActionLog(os.path.join(tmpdir, "actions.log"))
        fill(log, 4)

        notes = [a.payload["notes"] for a in log.read(from_seq=2)]
        assert notes == ["note 2", "note 3"]
        assert all(a.ts == TS for a in log.read())


def test_corrupt_line_raises_action_log_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "actions.log")
        log = FileActionLog(log_path)
        fill(log, 1)
        with open(log_path, "a") as f:
            f.write("{not json\n")

        with pytest.raises(ActionLogError):
            list(log.records())
