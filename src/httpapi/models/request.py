"""Immutable request descriptor handed to an HttpClient."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

Header = tuple[str, str]
Headers = tuple[Header, ...]

# Caller-supplied headers: a mapping, a sequence of (name, value) pairs,
# or a flat [name, value, name, value, ...] sequence.
HeaderInput = Union[Mapping[str, str], Sequence[Header], Sequence[str]]


class HttpMethod(str, Enum):
    """HTTP methods produced by the request builders."""

    GET = "GET"
    POST = "POST"


def normalize_headers(headers: Optional[HeaderInput]) -> Headers:
    """
    Convert caller-supplied headers into an ordered tuple of pairs.

    Duplicate names are kept in the order given.

    Raises:
        ValueError: If a flat sequence has an odd number of items
        TypeError: If a name or value is not a string
    """
    if not headers:
        return ()

    if isinstance(headers, (str, bytes)):
        raise TypeError("Headers must be a mapping or a sequence, not a string")

    if isinstance(headers, Mapping):
        pairs = list(headers.items())
    elif all(isinstance(item, str) for item in headers):
        flat = list(headers)
        if len(flat) % 2:
            raise ValueError(f"Header list must contain name/value pairs, got {len(flat)} items")
        pairs = list(zip(flat[0::2], flat[1::2]))
    else:
        pairs = [tuple(item) for item in headers]  # type: ignore[misc]

    result: list[Header] = []
    for pair in pairs:
        if len(pair) != 2:
            raise ValueError(f"Header entry must be a (name, value) pair: {pair!r}")
        name, value = pair
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError(f"Header name and value must be strings: {pair!r}")
        result.append((name, value))
    return tuple(result)


@dataclass(frozen=True)
class HttpRequest:
    """
    Immutable HTTP request built by HttpApi.

    Attributes:
        uri: Absolute target URI
        method: HTTP method
        headers: Ordered (name, value) pairs, duplicates allowed
        timeout: Per-request timeout in seconds
        body: Request body, or None for requests without one
    """

    uri: str
    method: HttpMethod
    headers: Headers
    timeout: float
    body: Optional[bytes] = None

    def header_values(self, name: str) -> list[str]:
        """All values sent for a header name (case-insensitive), in order."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]
