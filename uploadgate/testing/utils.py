"""Testing utilities for the upload gateway."""

from unittest import IsolatedAsyncioTestCase

from uploadgate.core.settings import GatewaySettings
from uploadgate.storage.uploads import PresignedUploadService, UploadConfig
from uploadgate.testing.mocks import InMemoryS3


def create_test_settings(
    bucket_name: str = "test-bucket",
    **overrides
) -> GatewaySettings:
    """Create gateway settings for testing.

    The ``.env`` file is not read so that a developer's local configuration
    cannot leak into tests.

    Args:
        bucket_name: The S3 bucket name for tests
        **overrides: Additional settings to override

    Returns:
        GatewaySettings instance configured for testing
    """
    values = {
        "aws_bucket_name": bucket_name,
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "aws_region": "us-east-1",
        "aws_url": "http://localhost:4566",
        "log_level": "DEBUG",
    }
    values.update(overrides)
    return GatewaySettings(_env_file=None, **values)


class GatewayTestCase(IsolatedAsyncioTestCase):
    """Base test case class for upload gateway tests.

    This class provides a pre-configured test environment with:
    - In-memory S3 mock
    - Test settings
    - A PresignedUploadService bound to the test bucket

    Example:
        >>> class TestUploads(GatewayTestCase):
        ...     async def test_generate(self):
        ...         url = await self.service.generate_upload_url(
        ...             self.s3_client, "a.txt"
        ...         )
        ...         self.assertIn("uploads/a.txt", url)
    """

    bucket_name: str = "test-bucket"
    strict_validation: bool = True

    def setUp(self) -> None:
        """Set up test fixtures."""
        super().setUp()
        self.s3_client = InMemoryS3()
        self.settings = create_test_settings(
            bucket_name=self.bucket_name,
            strict_validation=self.strict_validation,
        )
        self.service = PresignedUploadService(
            self.bucket_name,
            UploadConfig(
                upload_prefix=self.settings.upload_prefix,
                expiration_seconds=self.settings.presign_expiry_seconds,
                strict_validation=self.settings.strict_validation,
            ),
        )

    def tearDown(self) -> None:
        """Clean up after test."""
        self.s3_client.clear()
        super().tearDown()

    async def upload_parts(self, key: str, upload_id: str, chunks: list[bytes]) -> list[dict]:
        """Upload chunks as parts 1..n and return their descriptors.

        Args:
            key: The multipart upload's key
            upload_id: The multipart upload's ID
            chunks: Part bodies, in order

        Returns:
            ``[{"partNumber": n, "eTag": ...}, ...]`` as a client would send
        """
        parts = []
        for number, chunk in enumerate(chunks, start=1):
            resp = await self.s3_client.upload_part(
                Bucket=self.bucket_name,
                Key=key,
                UploadId=upload_id,
                PartNumber=number,
                Body=chunk,
            )
            parts.append({"partNumber": number, "eTag": resp["ETag"]})
        return parts
