"""Tests for body decoders."""

import json
from unittest.mock import patch

import pytest
from httpapi import as_bytes, as_json, as_text, discarding


class TestAsText:
    """Tests for as_text."""

    def test_utf8_without_charset(self):
        assert as_text("héllo".encode()) == "héllo"

    def test_utf8_tried_before_detection(self):
        """Test that valid UTF-8 never reaches charset detection."""
        with patch("httpapi.http.decoders.detect_encoding") as detect:
            assert as_text("naïve résumé".encode()) == "naïve résumé"
        detect.assert_not_called()

    def test_declared_charset_wins(self):
        """Test decoding with the Content-Type charset."""
        content = "café".encode("latin-1")
        assert as_text(content, "text/plain; charset=ISO-8859-1") == "café"

    def test_quoted_charset(self):
        content = "café".encode("latin-1")
        assert as_text(content, 'text/html; charset="latin-1"') == "café"

    def test_unknown_charset_falls_back(self):
        """Test that a bogus charset does not break decoding."""
        assert as_text(b"plain ascii", "text/plain; charset=not-a-codec") == "plain ascii"

    def test_undeclared_non_utf8_is_detected(self):
        """Test detection for content that is not UTF-8."""
        content = "Grüße aus München, schöne Grüße".encode("cp1252")
        result = as_text(content)

        assert isinstance(result, str)
        assert "M" in result

    def test_empty(self):
        assert as_text(b"") == ""


class TestOtherDecoders:
    """Tests for as_bytes, as_json and discarding."""

    def test_as_bytes_is_identity(self):
        data = b"\x00\x01\xff"
        assert as_bytes(data, "application/octet-stream") is data

    def test_as_json(self):
        assert as_json(b'{"a": [1, 2]}', "application/json") == {"a": [1, 2]}

    def test_as_json_invalid(self):
        with pytest.raises(json.JSONDecodeError):
            as_json(b"HELLO WORLD", "text/plain")

    def test_discarding(self):
        assert discarding(b"anything", "text/plain") is None
