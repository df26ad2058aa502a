"""Testing utilities for upload gateway applications.

This module provides a mock S3 client, test settings and pytest fixtures.

Usage in conftest.py:
    from uploadgate.testing import (
        mock_s3_client,
        create_test_settings,
        InMemoryS3,
    )

    @pytest.fixture
    def s3_client():
        with mock_s3_client() as client:
            yield client

Or use provided fixtures directly:
    pytest_plugins = ["uploadgate.testing.fixtures"]
"""

from uploadgate.testing.mocks import InMemoryS3, mock_s3_client
from uploadgate.testing.utils import GatewayTestCase, create_test_settings

__all__ = [
    "InMemoryS3",
    "mock_s3_client",
    "create_test_settings",
    "GatewayTestCase",
]
