"""Core lock protocol and store adapters."""

from .clock import SystemClock
from .errors import AcquisitionFailed, InvalidSettings, LockError
from .identity import HostPidIdentity, PidIdentity, StaticIdentity
from .interfaces import Clock, KeyValueStore, ProcessIdentity
from .manager import LockManager
from .models import AcquireResult, LockRecord, ReleaseOutcome, lock_key
from .settings import LockSettings
from .store_memory import MemoryStore
from .store_redis import RedisStore

__all__ = [
    "AcquireResult",
    "AcquisitionFailed",
    "Clock",
    "HostPidIdentity",
    "InvalidSettings",
    "KeyValueStore",
    "LockError",
    "LockManager",
    "LockRecord",
    "LockSettings",
    "MemoryStore",
    "PidIdentity",
    "ProcessIdentity",
    "RedisStore",
    "StaticIdentity",
    "ReleaseOutcome",
    "SystemClock",
    "lock_key",
]
