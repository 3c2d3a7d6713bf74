"""Discriminated outcome of a blocking send."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from ..exceptions import TransportFailure

if TYPE_CHECKING:
    from ..http.protocols import HttpResponse

T = TypeVar("T")


@dataclass(frozen=True)
class SendResult(Generic[T]):
    """
    Either a response or the transport failure that prevented one.

    Example:
        result = api.send(api.plain_request(url), as_text)
        if result.ok:
            print(result.response.body)
        else:
            print(f"Failed: {result.error}")
    """

    response: Optional[HttpResponse[T]] = None
    error: Optional[TransportFailure] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("SendResult needs exactly one of response or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def success(response: HttpResponse[T]) -> SendResult[T]:
        """Create a successful result."""
        return SendResult(response=response)

    @staticmethod
    def failure(error: TransportFailure) -> SendResult[T]:
        """Create a failed result."""
        return SendResult(error=error)

    def unwrap(self) -> HttpResponse[T]:
        """Return the response, raising the transport failure if there is none."""
        if self.error is not None:
            raise self.error
        if self.response is None:
            raise ValueError("SendResult has neither a response nor an error")
        return self.response
