from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from erpsync.gateway import Credentials
from erpsync.utils.structured_logging import clear_correlation_ids

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()


@pytest.fixture
def credentials() -> Credentials:
    """Create credentials pointing to a test endpoint."""
    return Credentials(
        secret_key="test-secret", company_id="1234", api_endpoint="https://erp.test/api/"
    )


@pytest.fixture(autouse=True)
def _reset_correlation_ids() -> Generator[None, None, None]:
    clear_correlation_ids()
    yield
    clear_correlation_ids()
