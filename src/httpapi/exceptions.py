"""Exception types raised or reported by httpapi."""

from __future__ import annotations


class HttpApiError(Exception):
    """Base class for all httpapi errors."""


class InvalidTargetError(HttpApiError, ValueError):
    """
    A request target could not be parsed as an absolute HTTP(S) URI.

    Raised immediately by the request builders; never swallowed.

    Attributes:
        target: The offending target as given by the caller
        reason: Short description of why it was rejected
    """

    def __init__(self, target: object, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid request target {target!r}: {reason}")


class TransportFailure(HttpApiError):
    """
    A blocking send failed before a response was obtained.

    Only ever returned inside a SendResult; send() and send_sync() do not raise it.

    Attributes:
        uri: Target URI of the failed request
        cause: The exception raised by the underlying client
    """

    def __init__(self, uri: str, cause: BaseException) -> None:
        self.uri = uri
        self.cause = cause
        super().__init__(f"Request to {uri} failed: {cause!r}")
        self.__cause__ = cause


class AsyncSubmissionFailure(HttpApiError):
    """An asynchronous send was rejected before it could be scheduled."""

    def __init__(self, uri: str, cause: BaseException) -> None:
        self.uri = uri
        self.cause = cause
        super().__init__(f"Could not submit request to {uri}: {cause!r}")
        self.__cause__ = cause
