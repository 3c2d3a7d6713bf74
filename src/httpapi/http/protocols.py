"""Protocol definitions for the HTTP client abstraction."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from ..models.request import HttpRequest

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True)
class HttpResponse(Generic[T]):
    """
    Immutable HTTP response returned by an HttpClient.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        headers: Response headers; repeated names are joined with ", " on both transports
        body: Response body as produced by the body decoder
        url: Final URL after any redirects
        content_type: Content-Type header value
    """

    status_code: int
    headers: dict[str, str]
    body: T
    url: str
    content_type: str = ""


class BodyDecoder(Protocol[T_co]):
    """Turns raw response content into the body handed back to the caller."""

    def __call__(self, content: bytes, content_type: str) -> T_co: ...


class HttpClient(Protocol):
    """
    Protocol for the client handle used by HttpApi.

    This abstraction allows for:
    - Mock implementations in tests
    - Different backends behind the same request descriptors
    """

    def send(self, request: HttpRequest, decoder: BodyDecoder[T]) -> HttpResponse[T]:
        """
        Send a request, blocking the calling thread.

        Raises:
            Exception on transport errors
        """
        ...

    def send_async(self, request: HttpRequest, decoder: BodyDecoder[T]) -> asyncio.Task[HttpResponse[T]]:
        """
        Schedule a request on the running event loop and return its task.

        Raises:
            ValueError, TypeError: If the request cannot be submitted
        """
        ...

    def close(self) -> None: ...

    async def aclose(self) -> None: ...
