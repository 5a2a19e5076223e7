from __future__ import annotations

import time


class Clock:
    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000
