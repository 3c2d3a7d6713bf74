"""Tests for SendResult."""

import pytest
from httpapi import HttpResponse, SendResult, TransportFailure


@pytest.fixture
def response():
    return HttpResponse(status_code=200, headers={}, body="ok", url="https://example.com/")


def test_success(response):
    result = SendResult.success(response)

    assert result.ok
    assert result.unwrap() is response


def test_failure_unwrap_raises_error():
    error = TransportFailure("https://example.com/", ConnectionError("refused"))
    result = SendResult.failure(error)

    assert not result.ok
    with pytest.raises(TransportFailure) as excinfo:
        result.unwrap()
    assert excinfo.value is error


def test_empty_result_rejected():
    with pytest.raises(ValueError):
        SendResult()


def test_response_and_error_together_rejected(response):
    error = TransportFailure("https://example.com/", ConnectionError("refused"))
    with pytest.raises(ValueError):
        SendResult(response=response, error=error)
