r"""Unit tests for the functional retry entry points."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from erpsync.exceptions import ClassifiedError, ErrorKind
from erpsync.retry import (
    CallbackConfig,
    OperationContext,
    RetryConfig,
    execute_with_retry,
    execute_with_retry_async,
)

#######################################
#     Tests for execute_with_retry    #
#######################################


def test_execute_with_retry_success(mock_sleep: Mock) -> None:
    operation = Mock(side_effect=[httpx.ConnectError("refused"), "mk-100"])
    result = execute_with_retry(operation, OperationContext("syncProduct"))
    assert result == "mk-100"
    assert operation.call_count == 2
    assert mock_sleep.call_count == 1


def test_execute_with_retry_custom_config(mock_sleep: Mock) -> None:
    operation = Mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(ClassifiedError):
        execute_with_retry(operation, config=RetryConfig(max_retries=4))
    assert operation.call_count == 5


def test_execute_with_retry_custom_retryable_kinds(mock_sleep: Mock) -> None:
    """Test that CLIENT failures can be made retryable."""
    conflict = ClassifiedError("conflict", kind=ErrorKind.CLIENT, status_code=409)
    operation = Mock(side_effect=[conflict, "ok"])
    config = RetryConfig(retryable_kinds={ErrorKind.CLIENT})
    assert execute_with_retry(operation, config=config) == "ok"


def test_execute_with_retry_callbacks(mock_sleep: Mock) -> None:
    on_success = Mock()
    execute_with_retry(lambda: 1, callbacks=CallbackConfig(on_success=on_success))
    on_success.assert_called_once()


#############################################
#     Tests for execute_with_retry_async    #
#############################################


@pytest.mark.asyncio
async def test_execute_with_retry_async_success(mock_asleep: Mock) -> None:
    operation = AsyncMock(side_effect=[httpx.ReadTimeout("timed out"), "mk-100"])
    result = await execute_with_retry_async(operation, OperationContext("syncProduct"))
    assert result == "mk-100"
    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_execute_with_retry_async_not_found(mock_asleep: Mock) -> None:
    error = ClassifiedError("missing", kind=ErrorKind.NOT_FOUND, status_code=404)
    operation = AsyncMock(side_effect=error)
    with pytest.raises(ClassifiedError) as exc_info:
        await execute_with_retry_async(operation)
    assert exc_info.value is error
    operation.assert_awaited_once()
