# justlog/core/clock.py
# Injectable wall-clock capability so session timing can be driven by a virtual clock in tests

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


# * Anything that can report the current instant as seconds since epoch
@runtime_checkable
class Clock(Protocol):
    def now(self) -> float: ...


# * Real wall clock; wall time (not monotonic) because instants are persisted across restarts
class SystemClock:
    def now(self) -> float:
        return time.time()
