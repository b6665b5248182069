r"""Helpers to read HTTP response bodies without raising."""

from __future__ import annotations

__all__ = ["ERROR_MESSAGE_FIELDS", "extract_error_message", "parse_payload"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger(__name__)

# Fields checked, in order, for a structured error message.
# ``opr_desc_app`` and ``opr_desc`` are the ERP's own error descriptions.
ERROR_MESSAGE_FIELDS = ("message", "error", "opr_desc_app", "opr_desc")


def _message_from_mapping(data: Mapping[str, Any]) -> str | None:
    for key in ERROR_MESSAGE_FIELDS:
        value = data.get(key)
        if isinstance(value, dict):
            value = value.get("message")
        if isinstance(value, str) and value.strip():
            return value
    return None


def extract_error_message(response: httpx.Response) -> str:
    """Extract a human readable error message from a failed response.

    The message is looked up in this order: a structured message field
    of the JSON body, the raw body text, and finally a generic
    ``"HTTP error <code>"`` message. This function never raises.

    Args:
        response: The failed HTTP response.

    Returns:
        The error message.

    Example:
        ```pycon
        >>> import httpx
        >>> from erpsync.utils.response import extract_error_message
        >>> extract_error_message(httpx.Response(400, json={"message": "bad sku"}))
        'bad sku'
        >>> extract_error_message(httpx.Response(502, text="upstream down"))
        'upstream down'
        >>> extract_error_message(httpx.Response(500))
        'HTTP error 500'

        ```
    """
    generic = f"HTTP error {response.status_code}"
    try:
        text = response.text
    except (httpx.HTTPError, RuntimeError, UnicodeDecodeError) as exc:
        logger.debug(f"Could not read response body: {exc}")
        return generic

    if not text or not text.strip():
        return generic
    try:
        data = response.json()
    except ValueError:
        return text
    if isinstance(data, dict):
        message = _message_from_mapping(data)
        if message is not None:
            return message
    return text


def parse_payload(response: httpx.Response) -> Any:
    """Parse the payload of a successful response.

    Args:
        response: The successful HTTP response.

    Returns:
        The decoded JSON payload, the raw text if the body is not JSON,
        or ``None`` for an empty body.

    Example:
        ```pycon
        >>> import httpx
        >>> from erpsync.utils.response import parse_payload
        >>> parse_payload(httpx.Response(200, json={"mk_id": "42"}))
        {'mk_id': '42'}
        >>> parse_payload(httpx.Response(204)) is None
        True

        ```
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
