"""Lock acquisition and release protocol over a shared key-value store."""

from __future__ import annotations

import contextlib
import logging
import time
from typing import Callable, Iterator, Optional, TypeVar

from kvlock.core.clock import SystemClock
from kvlock.core.errors import AcquisitionFailed
from kvlock.core.identity import PidIdentity
from kvlock.core.interfaces import Clock, KeyValueStore, ProcessIdentity
from kvlock.core.models import AcquireResult, LockRecord, ReleaseOutcome, lock_key
from kvlock.utils.logging import get_logger

T = TypeVar("T")

DEFAULT_TIMEOUT = 60
DEFAULT_MAX_ATTEMPTS = 100
DEFAULT_RETRY_INTERVAL = 1.0


class LockManager:
    """Acquire and release named locks stored as ``lock:<resource>`` keys.

    A lock value is ``<expires_at>-<holder>``. Contenders race with
    set-if-absent; an expired value is taken over with an atomic swap that
    only counts when the swap hands back the exact value that was read.
    The store carries no TTL, so stale records stay until the next takeover.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Optional[Clock] = None,
        identity: Optional[ProcessIdentity] = None,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        default_timeout: int = DEFAULT_TIMEOUT,
        default_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if retry_interval < 0:
            raise ValueError("retry_interval must not be negative")
        _require_positive("default_timeout", default_timeout)
        _require_positive("default_max_attempts", default_max_attempts)
        self.store = store
        self.clock = clock or SystemClock()
        self.identity = identity or PidIdentity()
        self.retry_interval = retry_interval
        self.default_timeout = default_timeout
        self.default_max_attempts = default_max_attempts
        self._sleep = sleep
        self.logger = logger or get_logger("LockManager")

    def try_acquire(
        self,
        resource_key: str,
        timeout: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> AcquireResult:
        """Run the acquisition loop and report the outcome without raising."""
        timeout = self.default_timeout if timeout is None else timeout
        max_attempts = self.default_max_attempts if max_attempts is None else max_attempts
        _require_positive("timeout", timeout)
        _require_positive("max_attempts", max_attempts)

        key = lock_key(resource_key)
        attempts = 0
        while True:
            attempts += 1
            record = self._attempt(key, timeout)
            if record is not None:
                self.logger.info(
                    "Acquired lock %s as %s until %d (attempt %d)",
                    key,
                    record.holder,
                    record.expires_at,
                    attempts,
                )
                return AcquireResult(
                    resource_key=resource_key, acquired=True, attempts=attempts, record=record
                )
            if attempts >= max_attempts:
                self.logger.warning("Gave up on lock %s after %d attempts", key, attempts)
                return AcquireResult(resource_key=resource_key, acquired=False, attempts=attempts)
            self._sleep(self.retry_interval)

    def acquire(
        self,
        resource_key: str,
        timeout: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> AcquireResult:
        """Block until the lock is held or raise :class:`AcquisitionFailed`."""
        result = self.try_acquire(resource_key, timeout, max_attempts)
        if not result.acquired:
            raise AcquisitionFailed(resource_key, result.attempts)
        return result

    def release_status(self, resource_key: str) -> ReleaseOutcome:
        """Delete the lock if this process holds it and it has not expired."""
        key = lock_key(resource_key)
        current = self.store.get(key)
        if current is None:
            return ReleaseOutcome.ALREADY_UNLOCKED

        record = LockRecord.parse(current)
        if not record.is_valid(self.clock.now()):
            return ReleaseOutcome.EXPIRED
        if record.holder != self.identity.current():
            return ReleaseOutcome.NOT_OWNER

        self.store.delete(key)
        self.logger.info("Released lock %s", key)
        return ReleaseOutcome.RELEASED

    def release(self, resource_key: str) -> bool:
        """True when the lock was released or was not held at all."""
        return self.release_status(resource_key).ok

    @contextlib.contextmanager
    def lock(
        self,
        resource_key: str,
        timeout: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> Iterator[AcquireResult]:
        """Hold the lock for the body of a ``with`` block.

        Example::

            with manager.lock("beers_on_the_wall", timeout=20):
                redis.decr("beers_on_the_wall")
        """
        result = self.acquire(resource_key, timeout, max_attempts)
        try:
            yield result
        finally:
            outcome = self.release_status(resource_key)
            if not outcome.ok:
                self.logger.warning(
                    "Lock %s was not released on scope exit: %s", lock_key(resource_key), outcome.value
                )

    def with_lock(
        self,
        resource_key: str,
        action: Callable[[], T],
        timeout: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> T:
        """Run ``action`` while holding the lock and return its result."""
        with self.lock(resource_key, timeout, max_attempts):
            return action()

    def _attempt(self, key: str, timeout: int) -> Optional[LockRecord]:
        now = self.clock.now()
        candidate = LockRecord(expires_at=now + timeout + 1, holder=self.identity.current())
        value = candidate.encode()

        if self.store.set_if_absent(key, value):
            return candidate

        current = self.store.get(key)
        if current is None:
            self.logger.debug("Lock %s vanished between set and read", key)
            return None

        if not LockRecord.parse(current).is_expired(now):
            self.logger.debug("Lock %s is held: %s", key, current)
            return None

        previous = self.store.swap(key, value)
        if previous != current:
            self.logger.debug("Lost takeover race on %s", key)
            return None
        self.logger.debug("Took over expired lock %s (was %s)", key, current)
        return candidate


def _require_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
