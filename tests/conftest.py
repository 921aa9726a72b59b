from __future__ import annotations

from unittest.mock import Mock

import pytest

from arefresh.core.composer import RequestDescriptor, compose_request
from tests.helpers import TEST_URL


@pytest.fixture
def descriptor() -> RequestDescriptor:
    """Create a GET request descriptor for testing."""
    return compose_request(TEST_URL, "GET")


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
