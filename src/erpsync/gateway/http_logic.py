r"""Request preparation and response handling shared by the sync and
async gateways."""

from __future__ import annotations

__all__ = ["PreparedCall", "outcome_from_response", "prepare_call"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from erpsync.classifier import classify
from erpsync.core.config import MUTATING_METHODS
from erpsync.retry.outcome import Failure, Success
from erpsync.utils.response import parse_payload

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from erpsync.gateway.credentials import Credentials
    from erpsync.retry.outcome import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedCall:
    """Arguments of one HTTP request to the remote service."""

    method: str
    url: str
    params: dict[str, Any]
    json: Any = None
    has_body: bool = False

    def request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"params": self.params}
        if self.has_body:
            kwargs["json"] = self.json
        return kwargs


def prepare_call(
    credentials: Credentials,
    method: str,
    endpoint: str,
    params: Mapping[str, Any] | None = None,
    body: Any = None,
) -> PreparedCall:
    """Prepare the HTTP request of a remote call.

    The authentication parameters are appended to the query parameters
    and take precedence over caller parameters with the same name.
    Mutating methods (POST, PUT, PATCH) carry ``body`` as JSON, or an
    empty object if ``body`` is ``None``. Other methods carry no body.

    Args:
        credentials: The credentials of the caller.
        method: The HTTP method.
        endpoint: The endpoint path relative to the API endpoint.
        params: Optional query parameters.
        body: Optional payload for mutating methods.

    Returns:
        The prepared call.

    Example:
        ```pycon
        >>> from erpsync.gateway import Credentials
        >>> from erpsync.gateway.http_logic import prepare_call
        >>> credentials = Credentials(secret_key="key", company_id="42")
        >>> call = prepare_call(credentials, "post", "product_add", body={"name": "Mat"})
        >>> call.method, call.params, call.json
        ('POST', {'secret_key': 'key', 'company_id': '42'}, {'name': 'Mat'})
        >>> prepare_call(credentials, "GET", "product_list", body={"x": 1}).has_body
        False

        ```
    """
    method = method.upper()
    query = {**(params or {}), **credentials.auth_params()}
    has_body = method in MUTATING_METHODS
    return PreparedCall(
        method=method,
        url=credentials.url_for(endpoint),
        params=query,
        json=(body if body is not None else {}) if has_body else None,
        has_body=has_body,
    )


def outcome_from_response(response: httpx.Response) -> AttemptOutcome[Any]:
    """Convert a received response into an attempt outcome.

    Args:
        response: The HTTP response.

    Returns:
        ``Success`` with the parsed payload for a 2xx status, otherwise
        ``Failure`` with the classified error and its status code.
    """
    if 200 <= response.status_code <= 299:
        return Success(parse_payload(response))
    error = classify(response)
    logger.debug(
        f"{response.request.method} {response.request.url.path} failed with status "
        f"{response.status_code} ({error.kind.name})"
    )
    return Failure(error)
