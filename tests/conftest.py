"""Shared pytest fixtures."""

from uploadgate.testing.fixtures import (  # noqa: F401
    gateway_settings,
    gateway_test_app,
    mock_s3,
    upload_service,
)
