from __future__ import annotations

import pytest

from kvlock.core.models import LockRecord, ReleaseOutcome, lock_key


def test_lock_key_is_namespaced():
    assert lock_key("beers_on_the_wall") == "lock:beers_on_the_wall"


def test_encode_matches_wire_format():
    assert LockRecord(expires_at=1700000061, holder="4242").encode() == "1700000061-4242"


@pytest.mark.parametrize(
    ("raw", "expires_at", "holder"),
    [
        ("1700000061-4242", 1700000061, "4242"),
        ("1700000061-host-a:4242", 1700000061, "host-a:4242"),
        ("1700000061", 1700000061, ""),
        ("soon-4242", 0, "4242"),
        ("", 0, ""),
    ],
)
def test_parse(raw, expires_at, holder):
    record = LockRecord.parse(raw)
    assert record.expires_at == expires_at
    assert record.holder == holder


def test_expiry_boundaries():
    record = LockRecord(expires_at=100, holder="a")
    assert record.is_expired(101) and not record.is_valid(101)
    assert not record.is_expired(100) and not record.is_valid(100)
    assert not record.is_expired(99) and record.is_valid(99)


def test_release_outcome_ok():
    assert ReleaseOutcome.RELEASED.ok
    assert ReleaseOutcome.ALREADY_UNLOCKED.ok
    assert not ReleaseOutcome.NOT_OWNER.ok
    assert not ReleaseOutcome.EXPIRED.ok
