r"""Exception types for classified remote call failures."""

from __future__ import annotations

__all__ = ["ClassifiedError", "ErrorKind"]

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container

    import httpx


class ErrorKind(Enum):
    """Stable kinds used to classify remote call failures.

    Attributes:
        NETWORK: Connectivity failure or timeout before any response.
        SERVER: The remote service answered with a 5xx status.
        CLIENT: The remote service answered with a 4xx status other than
            401, 403 and 404.
        AUTH: The remote service rejected the credentials (401 or 403).
        NOT_FOUND: The requested resource does not exist (404).
        UNKNOWN: The failure could not be classified.
    """

    NETWORK = "network"
    SERVER = "server"
    CLIENT = "client"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ClassifiedError(RuntimeError):
    r"""Normalized failure of a remote call.

    The kind is always set. The status code is only set when the
    failure originated from an HTTP response.

    Args:
        message: A descriptive error message.
        kind: The classified kind of the failure.
        status_code: The HTTP status code, if a response was received.
        cause: The underlying exception, if any.
        response: The HTTP response, if one was received.

    Example:
        ```pycon
        >>> from erpsync.exceptions import ClassifiedError, ErrorKind
        >>> err = ClassifiedError("HTTP error 503", kind=ErrorKind.SERVER, status_code=503)
        >>> err.kind
        <ErrorKind.SERVER: 'server'>
        >>> err.status_code
        503
        >>> str(err)
        'HTTP error 503'

        ```
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int | None = None,
        cause: BaseException | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.cause = cause
        self.response = response

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(message={self.message!r}, kind={self.kind.name}, "
            f"status_code={self.status_code})"
        )

    def is_retryable_in(self, kinds: Container[ErrorKind]) -> bool:
        """Indicate whether the error kind belongs to the given kinds.

        Args:
            kinds: The retryable kinds.

        Returns:
            ``True`` if this error may be retried, otherwise ``False``.
        """
        return self.kind in kinds
