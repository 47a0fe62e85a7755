"""Distributed mutual-exclusion locks on top of a shared key-value store."""

from .core import (
    AcquireResult,
    AcquisitionFailed,
    LockError,
    LockManager,
    LockRecord,
    LockSettings,
    MemoryStore,
    RedisStore,
    ReleaseOutcome,
)

__all__ = [
    "__version__",
    "AcquireResult",
    "AcquisitionFailed",
    "LockError",
    "LockManager",
    "LockRecord",
    "LockSettings",
    "MemoryStore",
    "RedisStore",
    "ReleaseOutcome",
]

__version__ = "0.1.0"
