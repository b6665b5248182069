r"""Configuration objects for retry behavior.

This module provides the immutable retry configuration, the context
attached to one orchestrated call, and the callback configuration.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "OperationContext", "RetryConfig"]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from erpsync.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRYABLE_KINDS,
    DEFAULT_USE_EXPONENTIAL_BACKOFF,
)
from erpsync.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from erpsync.callbacks import FailureInfo, RetryInfo, SuccessInfo
    from erpsync.exceptions import ErrorKind


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    The configuration is immutable, so a single instance can be shared
    by concurrent orchestrations.

    Args:
        max_retries: Maximum number of retry attempts beyond the first
            try. Must be >= 0.
        base_delay: Delay in seconds before the first retry. Must be >= 0.
        use_exponential_backoff: Whether the delay doubles at every
            retry (with jitter) or stays constant.
        max_delay: Upper bound in seconds for a single delay. Must be
            >= base_delay.
        retryable_kinds: Error kinds allowed to trigger a retry. Any
            iterable is accepted and stored as a frozenset.

    Example:
        ```pycon
        >>> from erpsync.exceptions import ErrorKind
        >>> from erpsync.retry import RetryConfig
        >>> config = RetryConfig()
        >>> config.max_retries
        3
        >>> sorted(kind.name for kind in config.retryable_kinds)
        ['NETWORK', 'SERVER']
        >>> merged = config.merge(max_retries=5, retryable_kinds=[ErrorKind.SERVER])
        >>> merged.max_retries, merged.retryable_kinds
        (5, frozenset({<ErrorKind.SERVER: 'server'>}))
        >>> config.max_retries  # Original unchanged
        3

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    use_exponential_backoff: bool = DEFAULT_USE_EXPONENTIAL_BACKOFF
    max_delay: float = DEFAULT_MAX_DELAY
    retryable_kinds: frozenset[ErrorKind] = field(default_factory=lambda: DEFAULT_RETRYABLE_KINDS)

    def __post_init__(self) -> None:
        """Normalize and validate configuration parameters.

        Raises:
            TypeError: If max_retries is not an integer.
            ValueError: If any parameter fails validation.
        """
        object.__setattr__(self, "retryable_kinds", frozenset(self.retryable_kinds))
        validate_retry_params(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            retryable_kinds=self.retryable_kinds,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def is_retryable(self, kind: ErrorKind) -> bool:
        """Indicate whether an error kind may trigger a retry."""
        return kind in self.retryable_kinds


@dataclass(frozen=True)
class OperationContext:
    """Read-only description of one orchestrated call.

    The context is attached to every log record emitted while the call
    is orchestrated.

    Args:
        operation_name: The name of the operation, e.g.
            ``"syncProductToErp"``.
        correlation_ids: Ids correlating the call with the business
            entities, e.g. ``{"userId": "u-1", "entityId": "p-9"}``.
        extra: Opaque structured attributes.

    Example:
        ```pycon
        >>> from erpsync.retry import OperationContext
        >>> context = OperationContext("syncProduct", correlation_ids={"userId": "u-1"})
        >>> context.log_fields()
        {'operation': 'syncProduct', 'correlation_ids': {'userId': 'u-1'}}

        ```
    """

    operation_name: str
    correlation_ids: Mapping[str, str] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "correlation_ids", MappingProxyType(dict(self.correlation_ids)))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def log_fields(self) -> dict[str, Any]:
        """Return the structured fields attached to every log record.

        Returns:
            The operation name and correlation ids, plus the extra
            attributes under ``"extra"`` if any.
        """
        fields: dict[str, Any] = {
            "operation": self.operation_name,
            "correlation_ids": dict(self.correlation_ids),
        }
        if self.extra:
            fields["extra"] = dict(self.extra)
        return fields


@dataclass(frozen=True)
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_retry: Optional callback invoked before each retry.
        on_success: Optional callback invoked when the operation succeeds.
        on_failure: Optional callback invoked when the orchestrator gives up.
    """

    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None
