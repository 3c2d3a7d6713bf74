"""HTTP client handle and body decoders for httpapi."""

from .client import SessionHttpClient
from .decoders import as_bytes, as_json, as_text, discarding
from .protocols import BodyDecoder, HttpClient, HttpResponse

__all__ = [
    "BodyDecoder",
    "HttpClient",
    "HttpResponse",
    "SessionHttpClient",
    "as_bytes",
    "as_json",
    "as_text",
    "discarding",
]
