"""HTTP routes of the upload gateway."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from uploadgate.core.exceptions import S3ValidationError
from uploadgate.fastapi.dependencies import get_s3_client, get_upload_service
from uploadgate.storage.multipart import (
    CompleteMultipartRequest,
    MultipartSession,
    PartUrlResponse,
)
from uploadgate.storage.uploads import PresignedUploadService

router = APIRouter(tags=["uploads"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/generate", response_class=PlainTextResponse)
async def generate(
    filename: Optional[str] = None,
    service: PresignedUploadService = Depends(get_upload_service),
    s3_client=Depends(get_s3_client),
):
    """Sign a single PUT URL for ``uploads/<filename>``."""
    return await service.generate_upload_url(s3_client, filename)


@router.get("/multipart/initiate")
async def initiate_multipart(
    key: Optional[str] = None,
    filename: Optional[str] = None,
    service: PresignedUploadService = Depends(get_upload_service),
    s3_client=Depends(get_s3_client),
):
    """Open a multipart upload; ``key`` and ``filename`` are interchangeable."""
    session: MultipartSession = await service.initiate_multipart(
        s3_client, key or filename
    )
    return session.model_dump(by_alias=True)


@router.get("/multipart/presigned")
async def presign_part(
    filename: Optional[str] = None,
    uploadId: Optional[str] = None,
    partNumber: Optional[str] = None,
    service: PresignedUploadService = Depends(get_upload_service),
    s3_client=Depends(get_s3_client),
):
    url = await service.generate_part_url(s3_client, filename, uploadId, partNumber)
    return PartUrlResponse(url=url).model_dump()


@router.post("/multipart/complete", response_class=PlainTextResponse)
async def complete_multipart(
    request: Request,
    service: PresignedUploadService = Depends(get_upload_service),
    s3_client=Depends(get_s3_client),
):
    """Finish a multipart upload from the client's list of parts."""
    try:
        payload = CompleteMultipartRequest.model_validate_json(await request.body())
    except ValidationError:
        raise S3ValidationError("Invalid JSON", field="body")

    await service.complete_multipart(
        s3_client, payload.key, payload.upload_id, payload.parts
    )
    return "Upload completed"
