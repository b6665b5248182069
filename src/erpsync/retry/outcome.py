r"""Discriminated outcome of a single attempt.

Every attempt of an orchestrated operation is folded into either a
``Success`` or a ``Failure``, so the retry loop inspects a value instead
of intercepting exceptions.
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "Failure", "Success", "run_attempt", "run_attempt_async"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from erpsync.classifier import classify

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from erpsync.exceptions import ClassifiedError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful attempt carrying the operation result."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed attempt carrying the classified error."""

    error: ClassifiedError

    @property
    def ok(self) -> bool:
        return False


AttemptOutcome = Union[Success[T], Failure]


def _fold(result: Any) -> AttemptOutcome[Any]:
    if isinstance(result, (Success, Failure)):
        return result
    return Success(result)


def run_attempt(operation: Callable[[], Any]) -> AttemptOutcome[Any]:
    """Invoke an operation once and fold the result into an outcome.

    An operation returning an outcome is passed through, any other
    return value is a success, and a raised exception is classified
    into a failure. ``BaseException`` subclasses that are not
    ``Exception`` (e.g. ``KeyboardInterrupt``) propagate.

    Args:
        operation: The zero-argument operation.

    Returns:
        The attempt outcome.

    Example:
        ```pycon
        >>> from erpsync.retry.outcome import run_attempt
        >>> run_attempt(lambda: 42)
        Success(value=42)
        >>> run_attempt(lambda: 1 / 0).error.kind
        <ErrorKind.UNKNOWN: 'unknown'>

        ```
    """
    try:
        result = operation()
    except Exception as exc:  # noqa: BLE001
        return Failure(classify(exc))
    return _fold(result)


async def run_attempt_async(operation: Callable[[], Awaitable[Any]]) -> AttemptOutcome[Any]:
    """Await an asynchronous operation once and fold the result into an
    outcome.

    Cancellation (``asyncio.CancelledError``) is not an ``Exception``
    and therefore propagates to the caller.

    Args:
        operation: The zero-argument operation returning an awaitable.

    Returns:
        The attempt outcome.
    """
    try:
        result = await operation()
    except Exception as exc:  # noqa: BLE001
        return Failure(classify(exc))
    return _fold(result)
