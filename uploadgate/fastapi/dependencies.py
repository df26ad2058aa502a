"""FastAPI dependencies for the upload gateway."""

from fastapi import Request

from uploadgate.storage.uploads import PresignedUploadService


def get_upload_service(request: Request) -> PresignedUploadService:
    return request.app.state.upload_service


def get_s3_client(request: Request):
    """Return the S3 client opened for the application's lifetime.

    Tests override this dependency to swap in an in-memory client.
    """
    return request.app.state.s3_client
