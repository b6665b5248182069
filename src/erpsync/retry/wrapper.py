r"""Decorator running a function through the retry orchestrator."""

from __future__ import annotations

__all__ = ["with_retry"]

import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar

from erpsync.retry.executor import RetryExecutor
from erpsync.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from erpsync.retry.config import CallbackConfig, OperationContext, RetryConfig

P = ParamSpec("P")
R = TypeVar("R")


def with_retry(
    context_factory: Callable[P, OperationContext],
    config: RetryConfig | None = None,
    callbacks: CallbackConfig | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    r"""Wrap a function so every call runs through the retry
    orchestrator.

    The wrapped function keeps the signature of the original one. The
    context of each call is derived from its arguments by
    ``context_factory``, which accepts the same arguments as the
    decorated function. Coroutine functions are wrapped into coroutine
    functions that await the orchestration.

    Args:
        context_factory: Function deriving the ``OperationContext`` from
            the call arguments.
        config: Retry configuration. Defaults to ``RetryConfig()``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        The decorator.

    Example:
        ```pycon
        >>> from erpsync.retry import OperationContext, with_retry
        >>> @with_retry(
        ...     lambda user_id, product_id: OperationContext(
        ...         "syncProduct", correlation_ids={"userId": user_id, "entityId": product_id}
        ...     )
        ... )
        ... def sync_product(user_id: str, product_id: str) -> str:
        ...     return f"mk-{product_id}"
        ...
        >>> sync_product("u-1", "p-9")
        'mk-p-9'
        >>> sync_product.__name__
        'sync_product'

        ```
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):
            async_executor = AsyncRetryExecutor(config, callbacks)

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                return await async_executor.execute(
                    functools.partial(func, *args, **kwargs), context_factory(*args, **kwargs)
                )

            return async_wrapper  # type: ignore[return-value]

        executor = RetryExecutor(config, callbacks)

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return executor.execute(
                functools.partial(func, *args, **kwargs), context_factory(*args, **kwargs)
            )

        return wrapper

    return decorator
