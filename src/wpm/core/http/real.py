"""Production HTTP client backed by httpx."""

import logging

import httpx

from wpm.core.http.abc import HttpClient, HttpResponse, ProgressCallback, TransportError

logger = logging.getLogger(__name__)


class RealHttpClient(HttpClient):
    """Streams responses with httpx, following redirects."""

    def __init__(
        self, timeout: float = 60.0, transport: httpx.BaseTransport | None = None
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def get(self, url: str, on_progress: ProgressCallback | None = None) -> HttpResponse:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                follow_redirects=True, timeout=self._timeout, transport=self._transport
            ) as client:
                with client.stream("GET", url) as response:
                    total = _content_length(response)
                    received = 0
                    chunks: list[bytes] = []
                    for chunk in response.iter_bytes():
                        chunks.append(chunk)
                        received += len(chunk)
                        if on_progress is not None:
                            on_progress(received, total)
                    logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, received)
                    return HttpResponse(status_code=response.status_code, content=b"".join(chunks))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e


def _content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("content-length")
    if raw is None or not raw.isdigit():
        return None
    return int(raw)
