"""HttpApi: pre-configured request builders and dispatch over a shared client."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Optional, TypeVar

import requests

from ..exceptions import AsyncSubmissionFailure, TransportFailure
from ..http.client import SessionHttpClient
from ..http.protocols import BodyDecoder, HttpClient, HttpResponse
from ..models.config import HttpApiConfig
from ..models.request import Headers, HeaderInput, HttpMethod, HttpRequest, normalize_headers
from ..models.result import SendResult
from .uri import Target, parse_target

T = TypeVar("T")

JSON_HEADERS: Headers = (("Content-Type", "application/json"), ("Accept", "application/json"))
PLAINTEXT_HEADERS: Headers = (("Accept", "text/plain"),)

# Failures of a blocking send that are logged and reported as "no response"
TRANSPORT_ERRORS = (requests.RequestException, OSError, ValueError)

# Failures detected before an async send is scheduled
SUBMISSION_ERRORS = (ValueError, TypeError)


class HttpApi:
    """
    Wrapper for talking to RESTful APIs with fixed default headers.

    Builders return immutable HttpRequest objects carrying the default
    headers (User-Agent, Accept-Language and a content group), the default
    timeout, and any additional headers appended after the defaults.
    Dispatch methods hand them to the shared client.

    Example:
        with HttpApi() as api:
            request = api.plain_request("https://example.com/hello.txt")
            response = api.send_sync(request, as_text)
            if response is not None:
                print(response.body)
    """

    def __init__(
        self,
        client: Optional[HttpClient] = None,
        logger: Optional[logging.Logger] = None,
        config: Optional[HttpApiConfig] = None,
    ) -> None:
        """
        Initialize the API wrapper.

        Args:
            client: Client handle to send through; built from config if None
            logger: Logger for transport failures
            config: Default headers, timeout and client settings
        """
        self.config = config or HttpApiConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.client: HttpClient = client or SessionHttpClient(
            http_version=self.config.http_version,
            follow_redirects=self.config.follow_redirects,
        )

        self._identity_headers: Headers = (
            ("User-Agent", self.config.user_agent),
            ("Accept-Language", self.config.accept_language),
        )

    def __enter__(self) -> HttpApi:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    async def __aenter__(self) -> HttpApi:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    def close(self) -> None:
        self.client.close()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _build(
        self,
        target: Target,
        method: HttpMethod,
        content_headers: Headers,
        additional_headers: Optional[HeaderInput],
        body: Optional[bytes] = None,
    ) -> HttpRequest:
        uri = parse_target(target)
        headers = content_headers + self._identity_headers + normalize_headers(additional_headers)
        return HttpRequest(
            uri=uri,
            method=method,
            headers=headers,
            timeout=self.config.timeout,
            body=body,
        )

    # Builders

    def json_request(self, target: Target, additional_headers: Optional[HeaderInput] = None) -> HttpRequest:
        """
        Create a GET request that sends and accepts JSON.

        Args:
            target: The URL or parsed URI to send the request to
            additional_headers: Headers appended after the defaults

        Returns:
            The HTTP request

        Raises:
            InvalidTargetError: If the target is not a valid http(s) URI
        """
        return self._build(target, HttpMethod.GET, JSON_HEADERS, additional_headers)

    def plain_request(self, target: Target, additional_headers: Optional[HeaderInput] = None) -> HttpRequest:
        """
        Create a GET request that accepts plain text.

        Raises:
            InvalidTargetError: If the target is not a valid http(s) URI
        """
        return self._build(target, HttpMethod.GET, PLAINTEXT_HEADERS, additional_headers)

    def post_plain(self, target: Target, additional_headers: Optional[HeaderInput] = None) -> HttpRequest:
        """Create a POST request with an empty body and plain-text defaults."""
        return self._build(target, HttpMethod.POST, PLAINTEXT_HEADERS, additional_headers, body=b"")

    def post_bytes(
        self,
        target: Target,
        data: bytes,
        additional_headers: Optional[HeaderInput] = None,
    ) -> HttpRequest:
        """
        Create a POST request carrying a binary body.

        Uses the plain-text defaults. No Content-Type is set for the body
        unless ``binary_content_type`` is configured.

        Args:
            target: The URL or parsed URI to send the request to
            data: The bytes to POST, sent unchanged
            additional_headers: Headers appended after the defaults

        Raises:
            InvalidTargetError: If the target is not a valid http(s) URI
            TypeError: If data is not bytes-like
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"POST body must be bytes, got {type(data).__name__}")

        content_headers = PLAINTEXT_HEADERS
        if self.config.binary_content_type:
            content_headers = content_headers + (("Content-Type", self.config.binary_content_type),)
        return self._build(target, HttpMethod.POST, content_headers, additional_headers, body=bytes(data))

    # Dispatch

    def send(self, request: HttpRequest, decoder: BodyDecoder[T]) -> SendResult[T]:
        """
        Send a request on the calling thread and report the outcome.

        Transport failures are logged and returned as a failed result
        instead of being raised.

        Args:
            request: The HTTP request to send
            decoder: Body decoder for the response content

        Returns:
            SendResult holding either the response or a TransportFailure
        """
        try:
            response = self.client.send(request, decoder)
        except TRANSPORT_ERRORS as e:
            self.logger.error("An error occurred while interacting with %s", request.uri, exc_info=e)
            return SendResult.failure(TransportFailure(request.uri, e))
        return SendResult.success(response)

    def send_sync(self, request: HttpRequest, decoder: BodyDecoder[T]) -> Optional[HttpResponse[T]]:
        """
        Send a request on the calling thread (this blocks).

        Only use this when concurrency is handled elsewhere.

        Args:
            request: The HTTP request to send
            decoder: Body decoder for the response content

        Returns:
            The response, or None if the request failed (the failure is logged)
        """
        return self.send(request, decoder).response

    def send_async(
        self,
        request: HttpRequest,
        decoder: BodyDecoder[T],
    ) -> Optional[asyncio.Task[HttpResponse[T]]]:
        """
        Schedule a request on the running event loop.

        Only submission failures are handled here: they are logged and None
        is returned. Anything that goes wrong once the request is scheduled
        is raised when the task is awaited.

        Args:
            request: The HTTP request to send
            decoder: Body decoder for the response content

        Returns:
            A task resolving to the response, or None if submission failed
        """
        try:
            return self.client.send_async(request, decoder)
        except SUBMISSION_ERRORS as e:
            failure = AsyncSubmissionFailure(request.uri, e)
            self.logger.error("An error occurred while interacting with %s", request.uri, exc_info=failure)
            return None
