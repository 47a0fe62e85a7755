"""Lock-layer exceptions."""

from __future__ import annotations


class LockError(Exception):
    """Base class for errors raised by kvlock."""


class AcquisitionFailed(LockError):
    """Raised when a lock could not be obtained within the allowed attempts."""

    def __init__(self, resource_key: str, attempts: int) -> None:
        super().__init__(f"Unable to acquire lock for {resource_key}.")
        self.resource_key = resource_key
        self.attempts = attempts


class InvalidSettings(LockError, ValueError):
    """Raised when a settings file does not validate."""
