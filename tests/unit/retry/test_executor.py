r"""Unit tests for synchronous retry executor."""

from __future__ import annotations

import logging
from unittest.mock import Mock, call

import httpx
import pytest

from erpsync.exceptions import ClassifiedError, ErrorKind
from erpsync.retry import (
    CallbackConfig,
    Failure,
    OperationContext,
    RetryConfig,
    RetryExecutor,
    Success,
)
from erpsync.utils.structured_logging import get_correlation_ids

CONTEXT = OperationContext("syncProduct", correlation_ids={"userId": "u-1", "entityId": "p-9"})


def _retry_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [record for record in caplog.records if record.getMessage().startswith("Retrying")]


def test_retry_executor_creation() -> None:
    """Test RetryExecutor initialization."""
    config = RetryConfig(max_retries=2)
    callbacks = CallbackConfig()
    executor = RetryExecutor(config, callbacks)

    assert executor.config is config
    assert executor.callbacks is callbacks
    assert executor.decider is not None
    assert executor.backoff is not None


def test_retry_executor_default_config() -> None:
    executor = RetryExecutor()
    assert executor.config == RetryConfig()


def test_retry_executor_success_first_attempt(mock_sleep: Mock) -> None:
    operation = Mock(return_value="mk-100")
    assert RetryExecutor().execute(operation, CONTEXT) == "mk-100"
    operation.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_retry_executor_network_twice_then_success(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that two NETWORK failures are retried before the success."""
    operation = Mock(
        side_effect=[
            httpx.ConnectError("connection refused"),
            httpx.ConnectError("connection refused"),
            "mk-100",
        ]
    )
    with caplog.at_level(logging.INFO, logger="erpsync"):
        result = RetryExecutor(RetryConfig(max_retries=3)).execute(operation, CONTEXT)

    assert result == "mk-100"
    assert operation.call_count == 3
    assert mock_sleep.call_count == 2
    records = _retry_records(caplog)
    assert len(records) == 2
    assert [record.attempt_number for record in records] == [2, 3]
    assert all(record.correlation_ids == {"userId": "u-1", "entityId": "p-9"} for record in records)


def test_retry_executor_auth_not_retried(mock_sleep: Mock) -> None:
    """Test that an AUTH failure is raised after a single attempt."""
    error = ClassifiedError("Unauthorized", kind=ErrorKind.AUTH, status_code=401)
    operation = Mock(return_value=Failure(error))

    with pytest.raises(ClassifiedError, match=r"Unauthorized") as exc_info:
        RetryExecutor().execute(operation, CONTEXT)

    assert exc_info.value is error
    operation.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_network_exhausted(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that the last error is raised after max_retries + 1 calls."""
    exc = httpx.ConnectTimeout("connect timed out")
    operation = Mock(side_effect=exc)

    with caplog.at_level(logging.INFO, logger="erpsync"):
        with pytest.raises(ClassifiedError, match=r"connect timed out") as exc_info:
            RetryExecutor(RetryConfig(max_retries=2)).execute(operation, CONTEXT)

    assert exc_info.value.kind == ErrorKind.NETWORK
    assert exc_info.value.cause is exc
    assert exc_info.value.__cause__ is exc
    assert operation.call_count == 3
    assert mock_sleep.call_count == 2
    assert len(_retry_records(caplog)) == 2
    failed = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert [record.will_retry for record in failed] == [True, True, False]


def test_retry_executor_zero_retries(mock_sleep: Mock) -> None:
    """Test that max_retries=0 makes exactly one attempt."""
    operation = Mock(return_value=Failure(ClassifiedError("down", kind=ErrorKind.SERVER)))
    with pytest.raises(ClassifiedError):
        RetryExecutor(RetryConfig(max_retries=0)).execute(operation, CONTEXT)
    operation.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_server_then_not_found(mock_sleep: Mock) -> None:
    """Test that a non-retryable failure after a retry stops the loop."""
    not_found = ClassifiedError("no such product", kind=ErrorKind.NOT_FOUND, status_code=404)
    operation = Mock(
        side_effect=[
            Failure(ClassifiedError("HTTP error 503", kind=ErrorKind.SERVER, status_code=503)),
            Failure(not_found),
            Success("never"),
        ]
    )
    with pytest.raises(ClassifiedError) as exc_info:
        RetryExecutor().execute(operation, CONTEXT)
    assert exc_info.value is not_found
    assert operation.call_count == 2
    assert mock_sleep.call_count == 1


def test_retry_executor_success_outcome_unwrapped(mock_sleep: Mock) -> None:
    operation = Mock(
        side_effect=[Failure(ClassifiedError("down", kind=ErrorKind.SERVER)), Success(7)]
    )
    assert RetryExecutor().execute(operation, CONTEXT) == 7


def test_retry_executor_constant_delays(mock_sleep: Mock) -> None:
    """Test that constant backoff sleeps base_delay before every retry."""
    operation = Mock(side_effect=[httpx.ReadError("reset")] * 3 + ["ok"])
    config = RetryConfig(max_retries=3, base_delay=0.25, use_exponential_backoff=False)
    assert RetryExecutor(config).execute(operation, CONTEXT) == "ok"
    assert mock_sleep.call_args_list == [call(0.25), call(0.25), call(0.25)]


def test_retry_executor_exponential_delays_within_bounds(mock_sleep: Mock) -> None:
    operation = Mock(side_effect=[httpx.ReadError("reset")] * 3 + ["ok"])
    RetryExecutor(RetryConfig(max_retries=3, base_delay=1.0, max_delay=10.0)).execute(
        operation, CONTEXT
    )
    delays = [args[0] for args, _ in mock_sleep.call_args_list]
    assert 0.5 <= delays[0] <= 1.0
    assert 1.0 <= delays[1] <= 2.0
    assert 2.0 <= delays[2] <= 4.0


def test_retry_executor_generic_exception_not_retried(mock_sleep: Mock) -> None:
    """Test that an unclassified exception is raised as UNKNOWN."""
    exc = KeyError("code")
    operation = Mock(side_effect=exc)
    with pytest.raises(ClassifiedError) as exc_info:
        RetryExecutor().execute(operation, CONTEXT)
    assert exc_info.value.kind == ErrorKind.UNKNOWN
    assert exc_info.value.cause is exc
    operation.assert_called_once()


def test_retry_executor_callbacks(mock_sleep: Mock) -> None:
    on_retry, on_success, on_failure = Mock(), Mock(), Mock()
    callbacks = CallbackConfig(on_retry=on_retry, on_success=on_success, on_failure=on_failure)
    operation = Mock(side_effect=[httpx.ConnectError("refused"), "mk-1"])

    RetryExecutor(callbacks=callbacks).execute(operation, CONTEXT)

    on_retry.assert_called_once()
    assert on_retry.call_args[0][0].attempt == 2
    assert on_success.call_args[0][0].attempt == 2
    on_failure.assert_not_called()


def test_retry_executor_on_failure_callback(mock_sleep: Mock) -> None:
    on_failure = Mock()
    operation = Mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(ClassifiedError):
        RetryExecutor(RetryConfig(max_retries=1), CallbackConfig(on_failure=on_failure)).execute(
            operation, CONTEXT
        )
    info = on_failure.call_args[0][0]
    assert info.attempt == 2
    assert info.error.kind == ErrorKind.NETWORK


def test_retry_executor_sets_correlation_ids_during_execution(mock_sleep: Mock) -> None:
    """Test that the context correlation ids are visible to the
    operation and restored afterwards."""
    seen = []

    def operation() -> str:
        seen.append(dict(get_correlation_ids()))
        return "ok"

    RetryExecutor().execute(operation, CONTEXT)
    assert seen == [{"userId": "u-1", "entityId": "p-9"}]
    assert dict(get_correlation_ids()) == {}


def test_retry_executor_default_context(caplog: pytest.LogCaptureFixture) -> None:
    """Test that the operation name defaults to the function name."""

    def fetch_products() -> None:
        raise ClassifiedError("denied", kind=ErrorKind.AUTH)

    with caplog.at_level(logging.ERROR, logger="erpsync"), pytest.raises(ClassifiedError):
        RetryExecutor().execute(fetch_products)
    assert caplog.records[0].operation.endswith("fetch_products")


def test_retry_executor_server_twice_then_success_server_only(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test SERVER, SERVER, success with only SERVER retryable."""
    server_error = ClassifiedError("HTTP error 503", kind=ErrorKind.SERVER, status_code=503)
    operation = Mock(side_effect=[Failure(server_error), Failure(server_error), "mk-100"])
    config = RetryConfig(max_retries=3, retryable_kinds={ErrorKind.SERVER})

    with caplog.at_level(logging.INFO, logger="erpsync"):
        assert RetryExecutor(config).execute(operation, CONTEXT) == "mk-100"

    assert operation.call_count == 3
    assert len(_retry_records(caplog)) == 2


def test_retry_executor_more_than_1024_retries(mock_sleep: Mock) -> None:
    """Test that a large retry budget runs to completion and raises the
    classified error."""
    error = ClassifiedError("HTTP error 503", kind=ErrorKind.SERVER, status_code=503)
    operation = Mock(return_value=Failure(error))
    config = RetryConfig(max_retries=1100, base_delay=0.01, max_delay=0.01)

    with pytest.raises(ClassifiedError) as exc_info:
        RetryExecutor(config).execute(operation, CONTEXT)

    assert exc_info.value is error
    assert operation.call_count == 1101
    assert mock_sleep.call_count == 1100
    assert all(args[0] <= 0.01 for args, _ in mock_sleep.call_args_list)
