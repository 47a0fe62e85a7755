"""Lock settings loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from kvlock.core.errors import InvalidSettings
from kvlock.core.identity import PidIdentity, StaticIdentity
from kvlock.core.interfaces import KeyValueStore
from kvlock.core.manager import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_TIMEOUT,
    LockManager,
)
from kvlock.core.store_redis import DEFAULT_REDIS_URL, RedisStore
from kvlock.utils.env import get_str_env
from kvlock.utils.logging import configure_logger


class LockSettings(BaseModel):
    redis_url: str = DEFAULT_REDIS_URL
    default_timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)
    default_max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, gt=0)
    retry_interval_seconds: float = Field(default=DEFAULT_RETRY_INTERVAL, ge=0)
    identity: Optional[str] = None  # None means the OS pid
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, path: Path) -> "LockSettings":
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise InvalidSettings(f"Unreadable lock settings in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidSettings(f"Lock settings in {path} must be a mapping")
        return cls._validate(data)

    @classmethod
    def from_env(cls) -> "LockSettings":
        env = {
            "redis_url": get_str_env("KVLOCK_REDIS_URL", "REDIS_URL"),
            "default_timeout": get_str_env("KVLOCK_TIMEOUT"),
            "default_max_attempts": get_str_env("KVLOCK_MAX_ATTEMPTS"),
            "retry_interval_seconds": get_str_env("KVLOCK_RETRY_INTERVAL"),
            "identity": get_str_env("KVLOCK_IDENTITY"),
            "log_level": get_str_env("KVLOCK_LOG_LEVEL"),
        }
        return cls._validate({name: value for name, value in env.items() if value is not None})

    @classmethod
    def _validate(cls, data: Dict[str, Any]) -> "LockSettings":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidSettings(f"Invalid lock settings: {exc}") from exc

    def build_manager(self, store: Optional[KeyValueStore] = None, *, rich: bool = True) -> LockManager:
        """Wire a manager from these settings.

        The ``LockManager`` logger is reconfigured with ``log_level`` and the
        requested handler even if an earlier manager already set it up.
        """
        return LockManager(
            store or RedisStore.from_url(self.redis_url),
            identity=StaticIdentity(self.identity) if self.identity else PidIdentity(),
            retry_interval=self.retry_interval_seconds,
            default_timeout=self.default_timeout,
            default_max_attempts=self.default_max_attempts,
            logger=configure_logger("LockManager", self.log_level, rich=rich),
        )
