"""Real clock implementation using datetime.now()."""

from datetime import UTC, datetime

from wpm.core.clock.abc import Clock


class RealClock(Clock):
    """Production implementation returning the current UTC time."""

    def now(self) -> datetime:
        return datetime.now(UTC)
