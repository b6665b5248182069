r"""erpsync - Resilient calls from a CRM to a remote ERP REST API.

This package provides the reliability layer used to synchronize CRM
entities (products, sales documents) with an external ERP service. It
classifies remote call failures, computes backoff delays with jitter and
orchestrates bounded retries, logging every attempt with structured
fields.

Key Features:
    - Error classification into stable kinds (NETWORK, SERVER, CLIENT,
      AUTH, NOT_FOUND, UNKNOWN)
    - Constant or exponential backoff with mandatory jitter
    - Sync and async retry orchestration with a configurable set of
      retryable kinds
    - Decorator form preserving the signature of the wrapped function
    - Single-attempt gateway appending the credentials to every call
    - Structured JSON logging with correlation ids

Example:
    ```pycon
    >>> from erpsync import OperationContext, RetryConfig, execute_with_retry
    >>> execute_with_retry(
    ...     lambda: "mk-100",
    ...     OperationContext("syncProduct", correlation_ids={"userId": "u-1"}),
    ...     RetryConfig(max_retries=2),
    ... )
    'mk-100'

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRemoteCallGateway",
    "AsyncResilientGateway",
    "CallbackConfig",
    "ClassifiedError",
    "Credentials",
    "ErrorKind",
    "Failure",
    "IdMapping",
    "InMemoryMappingStore",
    "MappingStore",
    "OperationContext",
    "RemoteCallGateway",
    "ResilientGateway",
    "RetryConfig",
    "Success",
    "__version__",
    "classify",
    "compute_delay",
    "execute_with_retry",
    "execute_with_retry_async",
    "with_retry",
]

from importlib.metadata import PackageNotFoundError, version

from erpsync.backoff import compute_delay
from erpsync.classifier import classify
from erpsync.exceptions import ClassifiedError, ErrorKind
from erpsync.gateway import (
    AsyncRemoteCallGateway,
    AsyncResilientGateway,
    Credentials,
    RemoteCallGateway,
    ResilientGateway,
)
from erpsync.retry import (
    CallbackConfig,
    Failure,
    OperationContext,
    RetryConfig,
    Success,
    execute_with_retry,
    execute_with_retry_async,
    with_retry,
)
from erpsync.store import IdMapping, InMemoryMappingStore, MappingStore

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
