from __future__ import annotations

from datetime import datetime, timedelta, timezone

from board_service.application.ports.clock import NonDecreasingClock, SystemClock
from tests.conftest import EPOCH


class ScriptedClock:
    def __init__(self, *values: datetime) -> None:
        self._values = list(values)

    def now(self) -> datetime:
        return self._values.pop(0)


def test_system_clock_is_utc():
    assert SystemClock().now().tzinfo == timezone.utc


def test_clock_stepped_back_is_clamped():
    later = EPOCH + timedelta(seconds=5)
    clock = NonDecreasingClock(ScriptedClock(later, EPOCH, later + timedelta(seconds=1)))

    assert clock.now() == later
    assert clock.now() == later
    assert clock.now() == later + timedelta(seconds=1)


def test_default_inner_clock_never_decreases():
    clock = NonDecreasingClock()
    readings = [clock.now() for _ in range(100)]
    assert readings == sorted(readings)
