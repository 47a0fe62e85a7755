"""Thread-safe in-process store."""

from __future__ import annotations

import threading
from typing import Dict, Optional


class MemoryStore:
    """Dict-backed store whose primitives are atomic within one process."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def set_if_absent(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def swap(self, key: str, value: str) -> Optional[str]:
        with self._lock:
            previous = self._data.get(key)
            self._data[key] = value
            return previous

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def set(self, key: str, value: str) -> None:
        """Unconditional write, for seeding state."""
        with self._lock:
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
