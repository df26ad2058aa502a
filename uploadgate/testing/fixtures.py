"""Pytest fixtures for upload gateway testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["uploadgate.testing.fixtures"]

Or import specific fixtures:

    from uploadgate.testing.fixtures import gateway_settings, mock_s3
"""

import pytest

from uploadgate.core.settings import GatewaySettings
from uploadgate.storage.uploads import PresignedUploadService, UploadConfig
from uploadgate.testing.mocks import InMemoryS3
from uploadgate.testing.utils import create_test_settings


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    """Provide test settings for the gateway.

    Returns:
        GatewaySettings instance configured for testing
    """
    return create_test_settings()


@pytest.fixture
def mock_s3() -> InMemoryS3:
    """Provide in-memory S3 mock.

    Returns:
        InMemoryS3 instance
    """
    s3 = InMemoryS3()
    yield s3
    s3.clear()


@pytest.fixture
def upload_service(gateway_settings: GatewaySettings) -> PresignedUploadService:
    """Provide an upload service bound to the test bucket."""
    return PresignedUploadService(
        gateway_settings.aws_bucket_name,
        UploadConfig(
            upload_prefix=gateway_settings.upload_prefix,
            expiration_seconds=gateway_settings.presign_expiry_seconds,
            strict_validation=gateway_settings.strict_validation,
        ),
    )


@pytest.fixture
def gateway_test_app(
    gateway_settings: GatewaySettings,
    mock_s3: InMemoryS3,
):
    """Provide a test client for the gateway with mocked S3.

    The app's lifespan is not started, so no real S3 client is created.

    Yields:
        FastAPI TestClient with mocked S3
    """
    from fastapi.testclient import TestClient

    from uploadgate.fastapi.app import create_app
    from uploadgate.fastapi.dependencies import get_s3_client

    app = create_app(settings=gateway_settings)
    app.dependency_overrides[get_s3_client] = lambda: mock_s3

    yield TestClient(app)
