"""Default clock."""

from __future__ import annotations

import time


class SystemClock:
    """Wall clock truncated to whole seconds."""

    def now(self) -> int:
        return int(time.time())
