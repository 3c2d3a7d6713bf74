"""Client handle: blocking sends over requests, async sends over aiohttp."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from types import TracebackType
from typing import Optional, TypeVar

import aiohttp
import requests
from multidict import CIMultiDict
from yarl import URL

from ..models.request import Header, HttpRequest
from .protocols import BodyDecoder, HttpResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTTP_VERSIONS = {
    "1.0": aiohttp.HttpVersion10,
    "1.1": aiohttp.HttpVersion11,
}


def _combine_headers(headers: Iterable[Header]) -> dict[str, str]:
    """
    Fold repeated header names into one comma-separated value.

    Used for outgoing headers, since requests keeps a single value per name,
    and for aiohttp response headers, so both transports report repeated
    names the same way. The first spelling of a name wins.
    """
    combined: dict[str, str] = {}
    spelling: dict[str, str] = {}
    for name, value in headers:
        key = name.lower()
        if key in spelling:
            combined[spelling[key]] = f"{combined[spelling[key]]}, {value}"
        else:
            spelling[key] = name
            combined[name] = value
    return combined


class SessionHttpClient:
    """
    HTTP client handle shared by every request an HttpApi sends.

    Settings are fixed at construction. Blocking sends go through a
    requests.Session; async sends go through an aiohttp.ClientSession that is
    created on first use inside the running event loop.

    Example:
        client = SessionHttpClient(follow_redirects=False)
        with HttpApi(client=client) as api:
            response = api.send_sync(api.plain_request("https://example.com"), as_text)
    """

    def __init__(
        self,
        http_version: str = "1.1",
        follow_redirects: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client handle.

        Args:
            http_version: "1.0" or "1.1"; applies to the async transport,
                requests always speaks HTTP/1.1
            follow_redirects: Whether redirects are followed automatically
            session: Optional pre-built requests session to send through
        """
        if http_version not in HTTP_VERSIONS:
            raise ValueError(f"Unsupported HTTP version: {http_version!r} (supported: {sorted(HTTP_VERSIONS)})")

        self._http_version = http_version
        self._follow_redirects = follow_redirects
        self._session = session or requests.Session()
        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_loop: Optional[asyncio.AbstractEventLoop] = None
        self._closing: set[asyncio.Task[None]] = set()

    @property
    def http_version(self) -> str:
        return self._http_version

    @property
    def follow_redirects(self) -> bool:
        return self._follow_redirects

    def __enter__(self) -> SessionHttpClient:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    async def __aenter__(self) -> SessionHttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    def close(self) -> None:
        """
        Close the blocking session and any async session left open.

        From async code prefer aclose(), which awaits the async session
        instead of scheduling its shutdown.
        """
        self._discard_async_session()
        self._session.close()

    async def aclose(self) -> None:
        """Close both the async and the blocking session."""
        if self._async_session is not None:
            await self._async_session.close()
            self._async_session = None
            self._async_loop = None
        self.close()

    def send(self, request: HttpRequest, decoder: BodyDecoder[T]) -> HttpResponse[T]:
        """
        Send a request on the calling thread.

        requests applies the request timeout to the connect and to each
        socket read separately, so a slow trickle of data can run past it.
        The async transport applies the same value to the whole exchange.

        Args:
            request: The request to send
            decoder: Body decoder applied to the response content

        Returns:
            HttpResponse carrying the decoded body

        Raises:
            requests.RequestException: On connection, timeout or protocol errors
            OSError, ValueError: On lower-level failures
        """
        response = self._session.request(
            request.method.value,
            request.uri,
            headers=_combine_headers(request.headers),
            data=request.body,
            timeout=request.timeout,
            allow_redirects=self._follow_redirects,
        )
        with response:
            content_type = response.headers.get("Content-Type", "")
            return HttpResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=decoder(response.content, content_type),
                url=response.url,
                content_type=content_type,
            )

    def send_async(self, request: HttpRequest, decoder: BodyDecoder[T]) -> asyncio.Task[HttpResponse[T]]:
        """
        Schedule a request on the running event loop.

        The request is validated before anything is scheduled; failures
        after that surface when the returned task is awaited. The request
        timeout bounds the whole exchange and raises asyncio.TimeoutError.
        The async session is tied to this loop; call aclose() before the
        loop shuts down.

        Args:
            request: The request to send
            decoder: Body decoder applied to the response content

        Returns:
            Task resolving to the HttpResponse

        Raises:
            ValueError: If the URI or headers cannot be used
            TypeError: If the decoder is not callable
            RuntimeError: If there is no running event loop
        """
        if not callable(decoder):
            raise TypeError(f"Body decoder must be callable, got {type(decoder).__name__}")

        url = URL(request.uri)
        if url.host is None:
            raise ValueError(f"URI is not absolute: {request.uri}")
        headers: CIMultiDict[str] = CIMultiDict(request.headers)

        loop = asyncio.get_running_loop()
        session = self._get_async_session(loop)
        return loop.create_task(self._send_async(session, url, request, headers, decoder))

    def _get_async_session(self, loop: asyncio.AbstractEventLoop) -> aiohttp.ClientSession:
        """Return the async session for this loop, creating it if needed."""
        if self._async_session is None or self._async_session.closed or self._async_loop is not loop:
            if self._async_session is not None and not self._async_session.closed:
                logger.debug("Event loop changed, creating a new async session")
            self._discard_async_session()
            self._async_session = aiohttp.ClientSession(version=HTTP_VERSIONS[self._http_version])
            self._async_loop = loop
        return self._async_session

    def _discard_async_session(self) -> None:
        """Close the async session on the loop it was created in, then forget it."""
        session, loop = self._async_session, self._async_loop
        self._async_session = None
        self._async_loop = None
        if session is None or session.closed or loop is None:
            return

        if loop.is_closed():
            logger.warning("Async session outlived its event loop; use aclose() before closing the loop")
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if loop is running:
            task = loop.create_task(session.close())
            self._closing.add(task)
            task.add_done_callback(self._closing.discard)
        elif loop.is_running():
            asyncio.run_coroutine_threadsafe(session.close(), loop)
        elif running is None:
            loop.run_until_complete(session.close())
        else:
            # run_until_complete refuses to nest inside another running loop
            closer = threading.Thread(target=loop.run_until_complete, args=(session.close(),))
            closer.start()
            closer.join()

    async def _send_async(
        self,
        session: aiohttp.ClientSession,
        url: URL,
        request: HttpRequest,
        headers: CIMultiDict[str],
        decoder: BodyDecoder[T],
    ) -> HttpResponse[T]:
        async with session.request(
            request.method.value,
            url,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=request.timeout),
            data=request.body,
            allow_redirects=self._follow_redirects,
        ) as response:
            content = await response.read()
            content_type = response.headers.get("Content-Type", "")
            return HttpResponse(
                status_code=response.status,
                headers=_combine_headers(response.headers.items()),
                body=decoder(content, content_type),
                url=str(response.url),
                content_type=content_type,
            )
