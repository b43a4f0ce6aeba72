"""Fake Clock implementation for testing."""

from datetime import UTC, datetime

from wpm.core.clock import Clock

DEFAULT_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeClock(Clock):
    """Returns a fixed instant; advance() moves it forward."""

    def __init__(self, now: datetime = DEFAULT_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, now: datetime) -> None:
        self._now = now
