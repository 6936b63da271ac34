"""Epoch-millisecond time helpers shared by the scheduler, selector and stats."""

import time
from typing import Callable

DAY_MS = 24 * 60 * 60 * 1000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
