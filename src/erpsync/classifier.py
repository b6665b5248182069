r"""Classification of raw remote call failures.

This module turns any failure raised or returned while calling the
remote service into a ``ClassifiedError`` with a stable kind. The
classification is a pure function and never raises.
"""

from __future__ import annotations

__all__ = ["classify", "kind_from_status"]

import logging

import httpx

from erpsync.exceptions import ClassifiedError, ErrorKind
from erpsync.utils.response import extract_error_message

logger: logging.Logger = logging.getLogger(__name__)


def kind_from_status(status_code: int | None) -> ErrorKind:
    """Map an HTTP status code to an error kind.

    Args:
        status_code: The HTTP status code, or ``None`` if no response
            was received.

    Returns:
        The error kind.

    Example:
        ```pycon
        >>> from erpsync.classifier import kind_from_status
        >>> kind_from_status(404)
        <ErrorKind.NOT_FOUND: 'not_found'>
        >>> kind_from_status(403)
        <ErrorKind.AUTH: 'auth'>
        >>> kind_from_status(503)
        <ErrorKind.SERVER: 'server'>
        >>> kind_from_status(None)
        <ErrorKind.NETWORK: 'network'>

        ```
    """
    if status_code is None:
        return ErrorKind.NETWORK
    if status_code in (401, 403):
        return ErrorKind.AUTH
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if 500 <= status_code <= 599:
        return ErrorKind.SERVER
    if 400 <= status_code <= 499:
        return ErrorKind.CLIENT
    return ErrorKind.UNKNOWN


def _classify_response(response: httpx.Response, cause: BaseException | None) -> ClassifiedError:
    return ClassifiedError(
        extract_error_message(response),
        kind=kind_from_status(response.status_code),
        status_code=response.status_code,
        cause=cause,
        response=response,
    )


def _exception_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def classify(raw_failure: object) -> ClassifiedError:
    r"""Classify a raw failure of a remote call.

    Supported inputs:

    - ``ClassifiedError``: returned unchanged
    - ``httpx.Response`` with a status outside [200, 299]: classified
      from its status code
    - ``httpx.HTTPStatusError``: classified from its response
    - ``httpx.TransportError`` (connection errors, timeouts, ...):
      classified as ``NETWORK`` without status code
    - anything else: classified as ``UNKNOWN``

    Args:
        raw_failure: The failure to classify.

    Returns:
        The classified error. This function never raises.

    Example:
        ```pycon
        >>> import httpx
        >>> from erpsync.classifier import classify
        >>> err = classify(httpx.Response(404, json={"message": "no such product"}))
        >>> err.kind, err.status_code, err.message
        (<ErrorKind.NOT_FOUND: 'not_found'>, 404, 'no such product')
        >>> err = classify(httpx.ConnectError("connection refused"))
        >>> err.kind, err.status_code, err.message
        (<ErrorKind.NETWORK: 'network'>, None, 'connection refused')

        ```
    """
    try:
        if isinstance(raw_failure, ClassifiedError):
            return raw_failure
        if isinstance(raw_failure, httpx.Response):
            if 200 <= raw_failure.status_code <= 299:
                return ClassifiedError(
                    f"Unexpected successful response with status {raw_failure.status_code}",
                    kind=ErrorKind.UNKNOWN,
                    status_code=raw_failure.status_code,
                    response=raw_failure,
                )
            return _classify_response(raw_failure, cause=None)
        if isinstance(raw_failure, httpx.HTTPStatusError):
            return _classify_response(raw_failure.response, cause=raw_failure)
        if isinstance(raw_failure, httpx.TransportError):
            return ClassifiedError(
                _exception_message(raw_failure), kind=ErrorKind.NETWORK, cause=raw_failure
            )
        if isinstance(raw_failure, BaseException):
            return ClassifiedError(
                _exception_message(raw_failure), kind=ErrorKind.UNKNOWN, cause=raw_failure
            )
        return ClassifiedError(f"Unrecognized failure: {raw_failure!r}", kind=ErrorKind.UNKNOWN)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Failed to classify {type(raw_failure).__name__}: {exc}")
        cause = raw_failure if isinstance(raw_failure, BaseException) else exc
        return ClassifiedError("Unclassifiable failure", kind=ErrorKind.UNKNOWN, cause=cause)
