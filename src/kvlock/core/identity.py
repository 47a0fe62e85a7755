"""Process identity providers recorded as lock holders."""

from __future__ import annotations

import os
import socket


class PidIdentity:
    """Identify the holder by OS process id."""

    def current(self) -> str:
        return str(os.getpid())


class HostPidIdentity:
    """Host-qualified process id, for contenders spread over several machines."""

    def __init__(self, hostname: str | None = None) -> None:
        self._hostname = hostname or socket.gethostname()

    def current(self) -> str:
        return f"{self._hostname}:{os.getpid()}"


class StaticIdentity:
    """Fixed holder id, e.g. taken from configuration."""

    def __init__(self, value: str) -> None:
        if not value:
            raise ValueError("identity must be a non-empty string")
        self._value = value

    def current(self) -> str:
        return self._value
