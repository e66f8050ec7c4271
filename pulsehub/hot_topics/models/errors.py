from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional


class FetchErrorKind(str, enum.Enum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP = "http"
    RETRY_EXHAUSTED = "retry-exhausted"
    UNKNOWN = "unknown"


class FetchError(Exception):
    """Classified upstream failure.

    ``retryable`` is decided once, from the kind: timeouts, transport failures
    and HTTP 5xx may be re-attempted, everything else is terminal. Callers may
    pin the flag explicitly, which the aggregation cycle does for its
    all-platforms-failed error so the outer retry can run the cycle again.
    """

    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        status: Optional[int] = None,
        retryable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.retryable = _default_retryable(kind, status) if retryable is None else retryable

    @classmethod
    def timeout(cls, message: str = "Request timed out. Please try again.") -> "FetchError":
        return cls(FetchErrorKind.TIMEOUT, message)

    @classmethod
    def network(cls, message: str) -> "FetchError":
        return cls(FetchErrorKind.NETWORK, message)

    @classmethod
    def http(cls, status: int) -> "FetchError":
        return cls(FetchErrorKind.HTTP, f"HTTP error! status: {status}", status=status)

    @classmethod
    def retry_exhausted(cls, message: str = "Failed after maximum retry attempts") -> "FetchError":
        return cls(FetchErrorKind.RETRY_EXHAUSTED, message)

    @classmethod
    def unknown(cls, message: str = "Unknown error occurred") -> "FetchError":
        return cls(FetchErrorKind.UNKNOWN, message)

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind.value!r}, message={self.message!r}, retryable={self.retryable})"


def _default_retryable(kind: FetchErrorKind, status: Optional[int]) -> bool:
    if kind in (FetchErrorKind.TIMEOUT, FetchErrorKind.NETWORK):
        return True
    if kind is FetchErrorKind.HTTP:
        return status is not None and status >= 500
    return False


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    message: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "type": self.type}


def describe_error(error: BaseException) -> ErrorInfo:
    """Message a platform slot shows for its failure."""
    if not isinstance(error, FetchError):
        return ErrorInfo(message="Unexpected error occurred", type=FetchErrorKind.UNKNOWN.value)
    if error.kind in (FetchErrorKind.TIMEOUT, FetchErrorKind.RETRY_EXHAUSTED):
        return ErrorInfo(
            message="Request timed out or failed after retries. Please retry.",
            type=error.kind.value,
        )
    if error.kind is FetchErrorKind.NETWORK:
        return ErrorInfo(
            message="Network connection failed. Please check and try again.",
            type=error.kind.value,
        )
    return ErrorInfo(message=error.message, type=error.kind.value)
