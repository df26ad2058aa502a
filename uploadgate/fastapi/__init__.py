"""FastAPI integration for the upload gateway."""

from uploadgate.fastapi.app import create_app
from uploadgate.fastapi.dependencies import get_s3_client, get_upload_service
from uploadgate.fastapi.error_handlers import register_error_handlers

__all__ = [
    "create_app",
    "get_s3_client",
    "get_upload_service",
    "register_error_handlers",
]
