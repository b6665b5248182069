r"""Asynchronous remote call gateway."""

from __future__ import annotations

__all__ = ["AsyncRemoteCallGateway"]

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


class AsyncRemoteCallGateway:
    r"""Single-attempt asynchronous gateway to the remote ERP REST API.

    This is the asynchronous counterpart of ``RemoteCallGateway`` built
    on ``httpx.AsyncClient``.

    Args:
        credentials: The credentials appended to every call.
        client: Optional httpx.AsyncClient instance to use for requests.
        timeout: Timeout in seconds of the client created by the
            gateway. Ignored if ``client`` is given.

    Example:
        ```pycon
        >>> import asyncio
        >>> from erpsync.gateway import AsyncRemoteCallGateway, Credentials
        >>> async def main():
        ...     credentials = Credentials(secret_key="key", company_id="42")
        ...     async with AsyncRemoteCallGateway(credentials) as gateway:
        ...         return await gateway.call("POST", "product_list")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        client: httpx.AsyncClient | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        validate_timeout(timeout)
        self.credentials = credentials
        self._owns_client = client is None
        self._client: httpx.AsyncClient = (
            client if client is not None else httpx.AsyncClient(timeout=timeout)
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if the gateway created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def call(
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
            otherwise ``Failure`` with the classified error.
        """
        prepared = prepare_call(self.credentials, method, endpoint, params, body)
        try:
            response = await self._client.request(
                prepared.method, prepared.url, **prepared.request_kwargs()
            )
        except httpx.TransportError as exc:
            logger.debug(f"{prepared.method} {endpoint} failed before any response: {exc!r}")
            return Failure(classify(exc))
        return outcome_from_response(response)

    async def call_or_raise(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Perform one call and unwrap its outcome.

        Raises:
            ClassifiedError: If the call failed.
        """
        outcome = await self.call(method, endpoint, params, body)
        if outcome.ok:
            return outcome.value
        raise outcome.error from outcome.error.cause
