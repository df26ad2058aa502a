"""S3 client manager for handling S3 connections."""

from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, Protocol, runtime_checkable

from aiobotocore.client import AioBaseClient
from aiobotocore.session import get_session
from boto3.session import Session
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import ClientError

from uploadgate.core.exceptions import (
    S3BucketNotFoundError,
    S3ConnectionError,
    S3OperationError,
)
from uploadgate.core.settings import GatewaySettings


@runtime_checkable
class S3ClientProtocol(Protocol):
    """Protocol for the S3 operations the gateway relies on."""

    async def generate_presigned_url(
        self, ClientMethod: str, Params: dict, ExpiresIn: int = 3600, **kwargs
    ) -> str:
        """Sign a URL for a single S3 operation."""
        ...

    async def create_multipart_upload(
        self, Bucket: str, Key: str, **kwargs
    ) -> dict[str, Any]:
        """Open a multipart upload."""
        ...

    async def complete_multipart_upload(
        self, Bucket: str, Key: str, UploadId: str, MultipartUpload: dict, **kwargs
    ) -> dict[str, Any]:
        """Assemble an object from uploaded parts."""
        ...


def adjust_endpoint_url(
    endpoint_url: str | None, bucket_name: str | None
) -> str | None:
    """Adjust endpoint URL for path-style addressing if needed.

    Args:
        endpoint_url: The S3 endpoint URL
        bucket_name: The S3 bucket name

    Returns:
        Adjusted endpoint URL or None
    """
    if not endpoint_url:
        return None
    if bucket_name and f"{bucket_name}." in endpoint_url:
        return endpoint_url.replace(f"{bucket_name}.", "")
    return endpoint_url


class S3ClientManager:
    """Creates S3 clients from gateway settings.

    One manager is built per application and handed to whatever needs a
    client; there is no module-level client. The async client backs the
    HTTP handlers, the sync client backs the command line tools.
    """

    def __init__(self, settings: GatewaySettings):
        self.settings = settings
        self._sync_client: BaseClient | None = None
        self._async_session = None
        self._endpoint_url = adjust_endpoint_url(
            settings.aws_url, settings.aws_bucket_name
        )
        self._client_config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if self._endpoint_url else "auto"},
            retries={
                "max_attempts": settings.aws_retry_attempts,
                "mode": "standard",
            },
        )

    @property
    def endpoint_url(self) -> str | None:
        return self._endpoint_url

    def _client_kwargs(self) -> dict[str, Any]:
        # Empty credentials fall through to botocore's default chain.
        return {
            "region_name": self.settings.aws_region,
            "aws_access_key_id": self.settings.aws_access_key_id or None,
            "aws_secret_access_key": self.settings.aws_secret_access_key or None,
            "endpoint_url": self._endpoint_url,
            "config": self._client_config,
        }

    def get_sync_client(self) -> BaseClient:
        """Get or create a synchronous S3 client.

        Returns:
            A boto3 S3 client

        Raises:
            S3ConnectionError: If client creation fails
        """
        if self._sync_client is None:
            try:
                session = Session()
                self._sync_client = session.client("s3", **self._client_kwargs())
            except Exception as e:
                raise S3ConnectionError(
                    message=f"Failed to create sync S3 client: {e}",
                    original_error=e,
                    endpoint=self._endpoint_url,
                )
        return self._sync_client

    @asynccontextmanager
    async def get_async_client(self) -> AsyncGenerator[AioBaseClient, None]:
        """Get an async S3 client within a context manager.

        Yields:
            An aiobotocore S3 client

        Raises:
            S3ConnectionError: If client creation fails
        """
        if self._async_session is None:
            self._async_session = get_session()

        async with AsyncExitStack() as stack:
            try:
                client = await stack.enter_async_context(
                    self._async_session.create_client("s3", **self._client_kwargs())
                )
            except Exception as e:
                raise S3ConnectionError(
                    message=f"Failed to create async S3 client: {e}",
                    original_error=e,
                    endpoint=self._endpoint_url,
                )
            yield client

    def check_bucket(self) -> None:
        """Verify the configured bucket exists and is reachable.

        Raises:
            S3BucketNotFoundError: If the bucket does not exist
            S3OperationError: If the bucket check is denied or fails
            S3ConnectionError: If the endpoint cannot be reached
        """
        bucket = self.settings.require_bucket()
        client = self.get_sync_client()
        try:
            client.head_bucket(Bucket=bucket)
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code in ("404", "NoSuchBucket", "NotFound"):
                raise S3BucketNotFoundError(bucket)
            if error_code in ("403", "AccessDenied"):
                raise S3OperationError(
                    "AccessDenied: permission denied checking bucket",
                    operation="head_bucket",
                    original_error=e,
                )
            raise S3OperationError(
                f"Error checking bucket: {e}",
                operation="head_bucket",
                original_error=e,
            )
        except Exception as e:
            raise S3ConnectionError(
                original_error=e,
                endpoint=self._endpoint_url,
            )

    def close(self) -> None:
        """Close the sync client if one was created."""
        if self._sync_client is not None:
            self._sync_client.close()
            self._sync_client = None
