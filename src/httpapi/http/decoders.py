"""Body decoders: turn raw response content into the value handed to callers."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from charset_normalizer import from_bytes as detect_encoding

logger = logging.getLogger(__name__)


def _charset_from_content_type(content_type: str) -> Optional[str]:
    if not content_type:
        return None
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            return part.split("=", 1)[1].strip().strip("\"'")
    return None


def as_text(content: bytes, content_type: str = "") -> str:
    """
    Decode content with encoding detection.

    Fallback chain:
    1. Content-Type header charset
    2. Strict UTF-8
    3. charset-normalizer detection
    4. UTF-8 with replacement

    Args:
        content: Raw bytes content
        content_type: Content-Type header value

    Returns:
        Decoded string
    """
    if not content:
        return ""

    encoding = _charset_from_content_type(content_type)
    if encoding:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with declared encoding: {encoding}")

    # Plain ASCII/UTF-8 is by far the common case
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best_match = detect_encoding(content).best()
    if best_match is not None:
        logger.debug(f"Detected encoding: {best_match.encoding}")
        return str(best_match)

    return content.decode("utf-8", errors="replace")


def as_bytes(content: bytes, content_type: str = "") -> bytes:
    """Return the raw content unchanged."""
    return content


def as_json(content: bytes, content_type: str = "") -> Any:
    """
    Decode content as text, then parse it as JSON.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON
    """
    return json.loads(as_text(content, content_type))


def discarding(content: bytes, content_type: str = "") -> None:
    """Drop the body."""
    return None
