"""
httpapi - Pre-configured HTTP requests for talking to RESTful APIs.

Usage:
    from httpapi import HttpApi, as_text

    with HttpApi() as api:
        request = api.plain_request("https://example.com/hello.txt")
        response = api.send_sync(request, as_text)
        if response is not None:
            print(response.body)

    async with HttpApi() as api:
        task = api.send_async(api.json_request("https://api.example.com/items"), as_json)
        response = await task
"""

__version__ = "1.0.0"

from .core.api import HttpApi
from .core.uri import map_to_url_encoded_parameters, parse_target, with_query
from .exceptions import AsyncSubmissionFailure, HttpApiError, InvalidTargetError, TransportFailure
from .http import BodyDecoder, HttpClient, HttpResponse, SessionHttpClient, as_bytes, as_json, as_text, discarding
from .logging_config import setup_logging
from .models import HttpApiConfig, HttpMethod, HttpRequest, SendResult

__all__ = [
    "__version__",
    # Core
    "HttpApi",
    "map_to_url_encoded_parameters",
    "parse_target",
    "with_query",
    # Client
    "BodyDecoder",
    "HttpClient",
    "HttpResponse",
    "SessionHttpClient",
    # Decoders
    "as_bytes",
    "as_json",
    "as_text",
    "discarding",
    # Models
    "HttpApiConfig",
    "HttpMethod",
    "HttpRequest",
    "SendResult",
    # Errors
    "AsyncSubmissionFailure",
    "HttpApiError",
    "InvalidTargetError",
    "TransportFailure",
    # Logging
    "setup_logging",
]
