r"""Backoff strategies and the policy computing retry delays.

This package provides the constant and exponential-with-jitter
strategies, and ``compute_delay`` which picks one of them from a retry
configuration.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialJitterBackoff",
    "backoff_from_config",
    "compute_delay",
]

from erpsync.backoff.base import BaseBackoffStrategy
from erpsync.backoff.constant import ConstantBackoff
from erpsync.backoff.exponential import ExponentialJitterBackoff
from erpsync.backoff.policy import backoff_from_config, compute_delay
