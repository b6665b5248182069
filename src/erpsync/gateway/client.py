r"""Synchronous remote call gateway.

The gateway performs exactly one HTTP call per invocation and reports
the result as an attempt outcome. It never retries; compose it with the
retry orchestrator (see ``ResilientGateway``) to get retries.
"""

from __future__ import annotations

__all__ = ["RemoteCallGateway"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from erpsync.classifier import classify
from erpsync.core.config import DEFAULT_TIMEOUT
from erpsync.core.validation import validate_timeout
from erpsync.gateway.http_logic import outcome_from_response, prepare_call
from erpsync.retry.outcome import Failure

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from erpsync.gateway.credentials import Credentials
    from erpsync.retry.outcome import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)


class RemoteCallGateway:
    r"""Single-attempt gateway to the remote ERP REST API.

    Every call carries the fixed authentication query parameters.

    If no ``httpx.Client`` is given, the gateway creates one and closes
    it when the context manager exits or ``close`` is called. A client
    passed by the caller is never closed by the gateway.

    Args:
        credentials: The credentials appended to every call.
        client: Optional httpx.Client instance to use for requests.
        timeout: Timeout in seconds of the client created by the
            gateway. Ignored if ``client`` is given.

    Example:
        ```pycon
        >>> from erpsync.gateway import Credentials, RemoteCallGateway
        >>> credentials = Credentials(secret_key="key", company_id="42")
        >>> with RemoteCallGateway(credentials) as gateway:  # doctest: +SKIP
        ...     outcome = gateway.call("POST", "product_list")
        ...

        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        client: httpx.Client | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        validate_timeout(timeout)
        self.credentials = credentials
        self._owns_client = client is None
        self._client: httpx.Client = client if client is not None else httpx.Client(timeout=timeout)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if the gateway created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def call(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> AttemptOutcome[Any]:
        """Perform one call to the remote service.

        Args:
            method: The HTTP method.
            endpoint: The endpoint path relative to the API endpoint.
            params: Optional query parameters.
            body: Optional payload, only sent for mutating methods.

        Returns:
            ``Success`` with the parsed payload for a 2xx response,
            otherwise ``Failure`` with the classified error. A transport
            failure is classified as ``NETWORK`` without status code.
        """
        prepared = prepare_call(self.credentials, method, endpoint, params, body)
        try:
            response = self._client.request(
                prepared.method, prepared.url, **prepared.request_kwargs()
            )
        except httpx.TransportError as exc:
            logger.debug(f"{prepared.method} {endpoint} failed before any response: {exc!r}")
            return Failure(classify(exc))
        return outcome_from_response(response)

    def call_or_raise(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Perform one call and unwrap its outcome.

        Args:
            method: The HTTP method.
            endpoint: The endpoint path relative to the API endpoint.
            params: Optional query parameters.
            body: Optional payload, only sent for mutating methods.

        Returns:
            The parsed payload of the response.

        Raises:
            ClassifiedError: If the call failed.
        """
        outcome = self.call(method, endpoint, params, body)
        if outcome.ok:
            return outcome.value
        raise outcome.error from outcome.error.cause
