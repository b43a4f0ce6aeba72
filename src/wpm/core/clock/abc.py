"""Clock abstraction so installation timestamps are deterministic in tests."""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Abstract wall-clock access for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...
