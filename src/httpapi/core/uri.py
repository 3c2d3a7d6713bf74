"""Target URI parsing and query-string helpers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Union
from urllib.parse import ParseResult, SplitResult, quote, urlsplit

from ..exceptions import InvalidTargetError

Target = Union[str, SplitResult, ParseResult]

ALLOWED_SCHEMES = frozenset({"http", "https"})

# Characters that may never appear unescaped in a URI (RFC 3986 section 2)
_ILLEGAL_CHARS = re.compile(r"[\x00-\x20\x7f<>\"{}|\\^`]")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_target(target: Target) -> str:
    """
    Validate a request target and return it as a URI string.

    Args:
        target: A URL string or an already parsed URI

    Returns:
        The target as an absolute URI string

    Raises:
        InvalidTargetError: If the target is not an absolute http(s) URI
        TypeError: If the target is neither a string nor a parsed URI
    """
    if isinstance(target, (SplitResult, ParseResult)):
        uri = target.geturl()
    elif isinstance(target, str):
        uri = target
    else:
        raise TypeError(f"Request target must be a str or a parsed URI, got {type(target).__name__}")

    if not uri:
        raise InvalidTargetError(target, "empty URI")

    match = _ILLEGAL_CHARS.search(uri)
    if match:
        raise InvalidTargetError(target, f"illegal character {match.group()!r} at index {match.start()}")

    if _BAD_PERCENT.search(uri):
        raise InvalidTargetError(target, "malformed percent-escape")

    try:
        parsed = urlsplit(uri)
        # Accessing port validates it
        parsed.port
    except ValueError as e:
        raise InvalidTargetError(target, str(e)) from e

    if not parsed.scheme:
        raise InvalidTargetError(target, "missing scheme")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidTargetError(target, f"scheme '{parsed.scheme}' not supported (allowed: {sorted(ALLOWED_SCHEMES)})")

    if not parsed.hostname:
        raise InvalidTargetError(target, "URI has no host")

    return uri


def map_to_url_encoded_parameters(parameters: Mapping[str, str]) -> str:
    """
    Encode a mapping as an ``&``-joined query-string fragment.

    Keys are used as given; values are percent-encoded with no safe
    characters. Pairs follow the mapping's iteration order.

    Example:
        >>> map_to_url_encoded_parameters({"a": "1 2", "b": "x&y"})
        'a=1%202&b=x%26y'
    """
    return "&".join(f"{key}={quote(value, safe='')}" for key, value in parameters.items())


def with_query(target: Target, parameters: Mapping[str, str]) -> str:
    """
    Append encoded parameters to a target URI.

    Uses ``?`` when the target has no query yet and ``&`` otherwise. Any
    fragment is kept at the end.

    Raises:
        InvalidTargetError: If the target is not a valid URI
    """
    uri = parse_target(target)
    encoded = map_to_url_encoded_parameters(parameters)
    if not encoded:
        return uri

    base, sep, fragment = uri.partition("#")
    if "?" not in base:
        joined = f"{base}?{encoded}"
    elif base.endswith(("?", "&")):
        joined = f"{base}{encoded}"
    else:
        joined = f"{base}&{encoded}"
    return f"{joined}{sep}{fragment}"
