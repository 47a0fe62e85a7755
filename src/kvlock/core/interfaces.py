"""Capability interfaces the lock manager is composed with."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Per-key linearizable store primitives used by the lock protocol."""

    def set_if_absent(self, key: str, value: str) -> bool:
        """Write ``value`` only when ``key`` has none. Return whether it was written."""
        ...

    def get(self, key: str) -> Optional[str]:
        ...

    def swap(self, key: str, value: str) -> Optional[str]:
        """Write ``value`` and return whatever was stored immediately before."""
        ...

    def delete(self, key: str) -> bool:
        ...


class Clock(Protocol):
    def now(self) -> int:
        """Return the current wall-clock time in whole unix seconds."""
        ...


class ProcessIdentity(Protocol):
    def current(self) -> str:
        """Return the identifier recorded as lock holder for this process."""
        ...
