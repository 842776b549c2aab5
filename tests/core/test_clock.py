from __future__ import annotations

import time

from cert_registry.core.clock import Clock, FixedClock, SystemClock, system_clock


def test_system_clock_is_epoch_milliseconds() -> None:
    before = int(time.time() * 1000)
    now = SystemClock().now_ms()
    after = int(time.time() * 1000)
    assert before - 1 <= now <= after + 1


def test_fixed_clock_holds_and_advances() -> None:
    clock = FixedClock(1_000)
    assert clock.now_ms() == 1_000
    assert clock.now_ms() == 1_000
    clock.advance(250)
    assert clock.now_ms() == 1_250


def test_clocks_satisfy_protocol() -> None:
    assert isinstance(system_clock, Clock)
    assert isinstance(FixedClock(0), Clock)
