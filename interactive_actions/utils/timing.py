# interactive_actions/utils/timing.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


def now_ms() -> int:
    """Monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


@dataclass
class Stopwatch:
    """Simple stopwatch usable as a context manager."""
    start_ms: Optional[int] = None

    def start(self) -> "Stopwatch":
        self.start_ms = now_ms()
        return self

    def elapsed_ms(self) -> int:
        if self.start_ms is None:
            return 0
        return max(0, now_ms() - self.start_ms)

    def human(self) -> str:
        ms = self.elapsed_ms()
        return f"{ms} ms" if ms < 1000 else f"{ms / 1000:.3f} s"

    def __enter__(self) -> "Stopwatch":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        return None
