"""Lock record encoding and result types."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

KEY_PREFIX = "lock:"


def lock_key(resource_key: str) -> str:
    """Return the store key guarding ``resource_key``."""
    return f"{KEY_PREFIX}{resource_key}"


class LockRecord(BaseModel):
    """Value stored under a lock key: ``<expires_at>-<holder>``."""

    expires_at: int
    holder: str

    def encode(self) -> str:
        return f"{self.expires_at}-{self.holder}"

    @classmethod
    def parse(cls, raw: str) -> "LockRecord":
        """Decode a stored value.

        Only the first ``-`` separates the fields. An unreadable expiration
        prefix decodes as ``0`` so the record counts as expired.
        """
        prefix, _, holder = raw.partition("-")
        try:
            expires_at = int(prefix)
        except ValueError:
            expires_at = 0
        return cls(expires_at=expires_at, holder=holder)

    def is_expired(self, now: int) -> bool:
        return self.expires_at < now

    def is_valid(self, now: int) -> bool:
        return self.expires_at > now


class ReleaseOutcome(str, Enum):
    """What a release attempt found under the lock key."""

    RELEASED = "released"
    ALREADY_UNLOCKED = "already_unlocked"
    NOT_OWNER = "not_owner"
    EXPIRED = "expired"

    @property
    def ok(self) -> bool:
        return self in (ReleaseOutcome.RELEASED, ReleaseOutcome.ALREADY_UNLOCKED)


class AcquireResult(BaseModel):
    """Outcome of an acquisition loop."""

    resource_key: str
    acquired: bool
    attempts: int
    record: Optional[LockRecord] = None
