"""Storage utilities for the upload gateway.

This module provides presigned URL generation for direct client uploads,
both single-shot and multipart.
"""

from uploadgate.storage.multipart import (
    CompletedPart,
    CompleteMultipartRequest,
    MultipartSession,
    PartUrlResponse,
)
from uploadgate.storage.uploads import PresignedUploadService, UploadConfig

__all__ = [
    "CompletedPart",
    "CompleteMultipartRequest",
    "MultipartSession",
    "PartUrlResponse",
    "PresignedUploadService",
    "UploadConfig",
]
