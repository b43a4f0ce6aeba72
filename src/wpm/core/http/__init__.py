from wpm.core.http.abc import HttpClient, HttpResponse, ProgressCallback, TransportError
from wpm.core.http.real import RealHttpClient

__all__ = [
    "HttpClient",
    "HttpResponse",
    "ProgressCallback",
    "RealHttpClient",
    "TransportError",
]
