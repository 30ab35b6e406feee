"""Unit tests for SlidingWindowRateGate.

Tests cover:
- Admission while the window has room
- Waiting exactly until the oldest timestamp leaves the window
- Sliding (not fixed) window semantics
- Reuse across event loops
- Never more than `limit` admissions in any trailing window, including
  under concurrent callers

Architecture:
- Fake monotonic clock; the injected sleep advances it, so no test waits
"""

import asyncio

import pytest

from payrix.domain.value_objects import RateWindow
from payrix.infrastructure.rate_limit import SlidingWindowRateGate
from tests.conftest import FakeClock, SleepRecorder


def _gate(clock: FakeClock, sleep: SleepRecorder, limit: int, window: float):
    return SlidingWindowRateGate(
        window=RateWindow(limit=limit, window_seconds=window),
        clock=clock,
        sleep=sleep,
    )


def _max_in_any_window(times: list[float], window: float) -> int:
    return max(sum(1 for u in times if t - window < u <= t) for t in times)


@pytest.mark.unit
class TestSlidingWindowRateGate:
    """Admission control."""

    async def test_admits_up_to_limit_without_waiting(self):
        clock = FakeClock()
        sleep = SleepRecorder(clock)
        gate = _gate(clock, sleep, limit=3, window=10.0)

        for _ in range(3):
            await gate.acquire()

        assert sleep.calls == []
        assert gate.current_count() == 3

    async def test_waits_until_oldest_expires(self):
        clock = FakeClock(start=100.0)
        sleep = SleepRecorder(clock)
        gate = _gate(clock, sleep, limit=2, window=10.0)

        await gate.acquire()
        clock.advance(4.0)
        await gate.acquire()
        await gate.acquire()

        # Oldest admission at 100.0 leaves the window at 110.0
        assert sleep.calls == [pytest.approx(6.0)]
        assert clock() == pytest.approx(110.0)

    async def test_window_slides(self):
        clock = FakeClock()
        sleep = SleepRecorder(clock)
        gate = _gate(clock, sleep, limit=2, window=10.0)

        await gate.acquire()
        clock.advance(9.0)
        await gate.acquire()
        clock.advance(1.0)

        # First admission has just expired; one slot is free again
        await gate.acquire()

        assert sleep.calls == []
        assert gate.current_count() == 2

    async def test_current_count_evicts_expired(self):
        clock = FakeClock()
        gate = _gate(clock, SleepRecorder(clock), limit=5, window=1.0)

        await gate.acquire()
        await gate.acquire()
        clock.advance(1.5)

        assert gate.current_count() == 0

    async def test_sequential_burst_respects_limit(self):
        clock = FakeClock()
        sleep = SleepRecorder(clock)
        gate = _gate(clock, sleep, limit=3, window=5.0)
        admitted: list[float] = []

        for _ in range(10):
            await gate.acquire()
            admitted.append(clock())

        assert _max_in_any_window(admitted, 5.0) <= 3
        assert len(sleep.calls) > 0

    async def test_concurrent_callers_respect_limit(self):
        clock = FakeClock()
        sleep = SleepRecorder(clock)
        gate = _gate(clock, sleep, limit=4, window=2.0)
        admitted: list[float] = []

        async def call() -> None:
            await gate.acquire()
            admitted.append(clock())

        await asyncio.gather(*(call() for _ in range(20)))

        assert len(admitted) == 20
        assert _max_in_any_window(admitted, 2.0) <= 4

    async def test_real_sleep_defaults(self):
        gate = SlidingWindowRateGate(window=RateWindow(limit=2, window_seconds=0.05))

        await asyncio.wait_for(
            asyncio.gather(*(gate.acquire() for _ in range(3))), timeout=2.0
        )

        assert gate.current_count() <= 2

    def test_exposes_budget(self):
        gate = SlidingWindowRateGate()

        assert gate.limit == 100
        assert gate.window_seconds == 60.0

    def test_serves_successive_event_loops(self):
        """A gate shared across asyncio.run calls keeps working and counting."""
        gate = SlidingWindowRateGate(window=RateWindow(limit=10, window_seconds=60))

        async def contended_acquire() -> None:
            # Queue a caller behind the held lock so it binds to this loop.
            async with gate._loop_lock():
                waiter = asyncio.ensure_future(gate.acquire())
                await asyncio.sleep(0)
            await waiter

        asyncio.run(contended_acquire())
        asyncio.run(contended_acquire())

        assert gate.current_count() == 2
