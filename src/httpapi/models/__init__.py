"""httpapi configuration, request and result models."""

from .config import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HttpApiConfig
from .request import Header, HeaderInput, Headers, HttpMethod, HttpRequest, normalize_headers
from .result import SendResult

__all__ = [
    # Config
    "DEFAULT_ACCEPT_LANGUAGE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "HttpApiConfig",
    # Requests
    "Header",
    "HeaderInput",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "normalize_headers",
    # Results
    "SendResult",
]
