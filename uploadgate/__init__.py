"""uploadgate: presigned single-shot and multipart uploads to S3."""

__version__ = "0.1.0"

# Core components
from uploadgate.core.client import S3ClientManager
from uploadgate.core.exceptions import (
    UploadGatewayError,
    S3ConnectionError,
    S3OperationError,
    S3ValidationError,
    S3ConfigurationError,
    S3BucketNotFoundError,
)
from uploadgate.core.settings import GatewaySettings

# Storage components
from uploadgate.storage import (
    CompletedPart,
    CompleteMultipartRequest,
    MultipartSession,
    PresignedUploadService,
    UploadConfig,
)

# FastAPI components
from uploadgate.fastapi.app import create_app
from uploadgate.fastapi.dependencies import get_s3_client, get_upload_service
from uploadgate.fastapi.error_handlers import register_error_handlers

__all__ = [
    # Version
    "__version__",
    # Core
    "S3ClientManager",
    "GatewaySettings",
    "UploadGatewayError",
    "S3ConnectionError",
    "S3OperationError",
    "S3ValidationError",
    "S3ConfigurationError",
    "S3BucketNotFoundError",
    # Storage
    "CompletedPart",
    "CompleteMultipartRequest",
    "MultipartSession",
    "PresignedUploadService",
    "UploadConfig",
    # FastAPI
    "create_app",
    "get_s3_client",
    "get_upload_service",
    "register_error_handlers",
]
