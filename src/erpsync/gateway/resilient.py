r"""Gateways composed with the retry orchestrator.

Each request runs the single-attempt gateway call through the retry
orchestrator, so transient failures (``NETWORK`` and ``SERVER`` by
default) are retried with backoff while other failures are raised
immediately.
"""

from __future__ import annotations

__all__ = ["AsyncResilientGateway", "ResilientGateway"]

from typing import TYPE_CHECKING, Any

from erpsync.retry.config import OperationContext
from erpsync.retry.executor import RetryExecutor
from erpsync.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from erpsync.gateway.client import RemoteCallGateway
    from erpsync.gateway.client_async import AsyncRemoteCallGateway
    from erpsync.retry.config import CallbackConfig, RetryConfig


def _context_for(method: str, endpoint: str, context: OperationContext | None) -> OperationContext:
    if context is not None:
        return context
    return OperationContext(f"{method.upper()} {endpoint}")


class ResilientGateway:
    r"""Remote call gateway with automatic retry logic.

    Args:
        gateway: The single-attempt gateway.
        config: Retry configuration shared by all requests. Defaults to
            ``RetryConfig()``.
        callbacks: Optional lifecycle callbacks.

    Example:
        ```pycon
        >>> from erpsync.gateway import Credentials, RemoteCallGateway, ResilientGateway
        >>> from erpsync.retry import OperationContext, RetryConfig
        >>> credentials = Credentials(secret_key="key", company_id="42")
        >>> with ResilientGateway(
        ...     RemoteCallGateway(credentials), config=RetryConfig(max_retries=5)
        ... ) as gateway:  # doctest: +SKIP
        ...     products = gateway.post(
        ...         "product_list",
        ...         context=OperationContext("listProducts", correlation_ids={"userId": "u-1"}),
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        gateway: RemoteCallGateway,
        config: RetryConfig | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.gateway = gateway
        self.executor = RetryExecutor(config, callbacks)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.gateway.close()

    def request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        context: OperationContext | None = None,
    ) -> Any:
        """Call the remote service with automatic retry logic.

        Args:
            method: The HTTP method.
            endpoint: The endpoint path relative to the API endpoint.
            params: Optional query parameters.
            body: Optional payload, only sent for mutating methods.
            context: The context attached to every log record. Defaults
                to a context named ``"<METHOD> <endpoint>"``.

        Returns:
            The parsed payload of the first successful response.

        Raises:
            ClassifiedError: The last classified error, if no attempt
                succeeded.
        """
        return self.executor.execute(
            lambda: self.gateway.call(method, endpoint, params, body),
            _context_for(method, endpoint, context),
        )

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        """Send a GET request with automatic retry logic."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs: Any) -> Any:
        """Send a POST request with automatic retry logic."""
        return self.request("POST", endpoint, **kwargs)

    def put(self, endpoint: str, **kwargs: Any) -> Any:
        """Send a PUT request with automatic retry logic."""
        return self.request("PUT", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> Any:
        """Send a DELETE request with automatic retry logic."""
        return self.request("DELETE", endpoint, **kwargs)


class AsyncResilientGateway:
    r"""Asynchronous remote call gateway with automatic retry logic.

    Args:
        gateway: The single-attempt asynchronous gateway.
        config: Retry configuration shared by all requests. Defaults to
            ``RetryConfig()``.
        callbacks: Optional lifecycle callbacks.
    """

    def __init__(
        self,
        gateway: AsyncRemoteCallGateway,
        config: RetryConfig | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.gateway = gateway
        self.executor = AsyncRetryExecutor(config, callbacks)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.gateway.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        context: OperationContext | None = None,
    ) -> Any:
        """Call the remote service with automatic retry logic.

        Args:
            method: The HTTP method.
            endpoint: The endpoint path relative to the API endpoint.
            params: Optional query parameters.
            body: Optional payload, only sent for mutating methods.
            context: The context attached to every log record.

        Returns:
            The parsed payload of the first successful response.

        Raises:
            ClassifiedError: The last classified error, if no attempt
                succeeded.
        """
        return await self.executor.execute(
            lambda: self.gateway.call(method, endpoint, params, body),
            _context_for(method, endpoint, context),
        )

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("POST", endpoint, **kwargs)

    async def put(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("PUT", endpoint, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", endpoint, **kwargs)
