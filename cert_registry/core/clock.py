"""Time source for issuance timestamps.

Issuance reads the clock once per call: a single certificate gets that
reading as its ``issue_date`` and every certificate in a batch shares it.
Timestamps are integer milliseconds since the Unix epoch.
"""

from __future__ import annotations

import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Wall clock in UTC."""

    def now_ms(self) -> int:
        return int(datetime.datetime.now(datetime.UTC).timestamp() * 1000)


class FixedClock:
    """A clock that returns whatever it was last set to."""

    def __init__(self, now_ms: int) -> None:
        self._now_ms = now_ms

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, ms: int) -> None:
        self._now_ms += ms


system_clock = SystemClock()
