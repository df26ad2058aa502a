"""FastAPI application factory for the upload gateway."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from uploadgate import __version__
from uploadgate.core.client import S3ClientManager
from uploadgate.core.settings import GatewaySettings
from uploadgate.fastapi.error_handlers import register_error_handlers
from uploadgate.fastapi.routes import router
from uploadgate.storage.uploads import PresignedUploadService, UploadConfig

logger = logging.getLogger(__name__)


def create_app(
    settings: GatewaySettings | None = None,
    client_manager: S3ClientManager | None = None,
) -> FastAPI:
    """Build the upload gateway application.

    Settings and the S3 client manager are created here (or passed in) and
    attached to ``app.state``; handlers read them from there. One async S3
    client is opened for the lifetime of the app and shared by all requests.

    Args:
        settings: Gateway settings, read from the environment if omitted
        client_manager: S3 client manager, built from settings if omitted

    Returns:
        The configured FastAPI application

    Raises:
        S3ConfigurationError: If no bucket is configured
    """
    settings = settings or GatewaySettings()
    bucket = settings.require_bucket()
    client_manager = client_manager or S3ClientManager(settings)

    upload_service = PresignedUploadService(
        bucket,
        UploadConfig(
            upload_prefix=settings.upload_prefix,
            expiration_seconds=settings.presign_expiry_seconds,
            strict_validation=settings.strict_validation,
        ),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with client_manager.get_async_client() as client:
            app.state.s3_client = client
            logger.info(
                f"Upload gateway ready (bucket={bucket}, region={settings.aws_region})"
            )
            yield
        client_manager.close()

    app = FastAPI(
        title="Upload Gateway",
        description="Presigned single-shot and multipart uploads to S3",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.client_manager = client_manager
    app.state.upload_service = upload_service

    register_error_handlers(app)
    app.include_router(router)
    return app
