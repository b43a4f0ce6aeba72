"""HTTP transport abstraction.

The registry fetch and the archive download are the only network operations
wpm performs. Both go through this interface so tests can serve canned
responses from memory and count calls.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

# (bytes received so far, declared content length or None)
ProgressCallback = Callable[[int, int | None], None]


class TransportError(Exception):
    """Connection-level failure: DNS, refused connection, TLS, timeout."""


@dataclass(frozen=True)
class HttpResponse:
    """A fully-read HTTP response."""

    status_code: int
    content: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient(ABC):
    """Abstract HTTP GET for dependency injection."""

    @abstractmethod
    def get(self, url: str, on_progress: ProgressCallback | None = None) -> HttpResponse:
        """Fetch url and return the whole body.

        Args:
            url: Absolute URL to fetch
            on_progress: Optional callback invoked as body chunks arrive.
                Purely observational; the response is the same either way.

        Returns:
            HttpResponse with status code and body bytes (for any status)

        Raises:
            TransportError: If no response could be obtained
        """
        ...
