from wpm.core.clock.abc import Clock
from wpm.core.clock.real import RealClock

__all__ = ["Clock", "RealClock"]
