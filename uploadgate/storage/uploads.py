"""Presigned URL and multipart upload handling for the upload gateway."""

import logging
import re
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from uploadgate.core.client import S3ClientProtocol
from uploadgate.core.exceptions import S3OperationError, S3ValidationError
from uploadgate.storage.multipart import CompletedPart, MultipartSession

logger = logging.getLogger(__name__)

# ASCII digits with an optional sign. int() alone also takes "1_0", " 2" and non-ASCII digits.
_PART_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class UploadConfig:
    """Configuration for presigned uploads.

    Attributes:
        upload_prefix: S3 key prefix for uploads
        expiration_seconds: How long presigned URLs are valid
        strict_validation: Reject malformed part numbers and empty part
            lists instead of passing them on to S3
    """

    upload_prefix: str = "uploads/"
    expiration_seconds: int = 15 * 60
    strict_validation: bool = True


def _require(value: str | None, message: str, field: str) -> str:
    if not value:
        logger.debug(f"Rejected request: {message}")
        raise S3ValidationError(message, field=field)
    return value


def _backend_error(operation: str, key: str | None, error: Exception) -> S3OperationError:
    logger.error(f"S3 {operation} failed for {key}: {error}")
    return S3OperationError(
        str(error),
        operation=operation,
        key=key,
        original_error=error,
    )


class PresignedUploadService:
    """Service for generating presigned URLs for direct S3 uploads.

    Presigned URLs allow clients to upload files directly to S3 without
    routing bytes through the gateway. The service holds no state between
    calls: multipart upload IDs and keys are issued by S3 and carried by the
    client from one call to the next.

    Example:
        service = PresignedUploadService(bucket_name, config)

        # Single-shot upload
        url = await service.generate_upload_url(s3_client, "image.jpg")

        # Multipart upload
        session = await service.initiate_multipart(s3_client, "video.mp4")
        part_url = await service.generate_part_url(
            s3_client, "video.mp4", session.upload_id, "1"
        )
        await service.complete_multipart(
            s3_client, session.key, session.upload_id, parts
        )
    """

    def __init__(
        self,
        bucket_name: str,
        config: UploadConfig | None = None,
    ):
        """Initialize the upload service.

        Args:
            bucket_name: S3 bucket name
            config: Upload configuration
        """
        self.bucket_name = bucket_name
        self.config = config or UploadConfig()

    def build_key(self, filename: str) -> str:
        """Build the S3 key an uploaded file is stored under.

        The key is not made unique; uploading the same filename twice
        overwrites the earlier object.
        """
        return f"{self.config.upload_prefix}{filename}"

    def parse_part_number(self, raw: str | None) -> int:
        """Parse a client-supplied part number.

        Args:
            raw: The partNumber query value

        Returns:
            The part number as a positive integer

        Raises:
            S3ValidationError: If the value is missing or not usable
        """
        if self.config.strict_validation:
            _require(raw, "Missing required parameters", "partNumber")
            if not _PART_NUMBER_RE.fullmatch(raw):
                raise S3ValidationError("Invalid partNumber", field="partNumber", value=raw)
            part_number = int(raw)
            if part_number < 1:
                raise S3ValidationError("Invalid partNumber", field="partNumber", value=raw)
            return part_number

        # Lenient mode: anything unparseable counts as part 0, i.e. missing.
        part_number = 0
        if raw and _PART_NUMBER_RE.fullmatch(raw):
            part_number = int(raw)
        if part_number == 0:
            raise S3ValidationError("Missing required parameters", field="partNumber")
        return part_number

    async def generate_upload_url(
        self,
        s3_client: S3ClientProtocol,
        filename: str | None,
    ) -> str:
        """Generate a presigned PUT URL for a single-shot upload.

        Args:
            s3_client: The S3 client to use
            filename: Client-supplied filename

        Returns:
            The presigned URL

        Raises:
            S3ValidationError: If the filename is missing
            S3OperationError: If signing fails
        """
        filename = _require(filename, "Missing filename", "filename")
        key = self.build_key(filename)

        try:
            url = await s3_client.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=self.config.expiration_seconds,
                HttpMethod="PUT",
            )
        except (ClientError, BotoCoreError) as e:
            raise _backend_error("put_object", key, e)

        logger.info(f"Presigned upload URL issued for {key}")
        return url

    async def initiate_multipart(
        self,
        s3_client: S3ClientProtocol,
        filename: str | None,
    ) -> MultipartSession:
        """Open a multipart upload for a file.

        Args:
            s3_client: The S3 client to use
            filename: Client-supplied filename or key

        Returns:
            The upload ID and key issued by S3

        Raises:
            S3ValidationError: If no name was supplied
            S3OperationError: If S3 rejects the request
        """
        filename = _require(filename, "Missing key", "key")
        key = self.build_key(filename)

        try:
            response = await s3_client.create_multipart_upload(
                Bucket=self.bucket_name,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            raise _backend_error("create_multipart_upload", key, e)

        session = MultipartSession(
            upload_id=response["UploadId"],
            key=response.get("Key", key),
        )
        logger.info(f"Multipart upload {session.upload_id} opened for {session.key}")
        return session

    async def generate_part_url(
        self,
        s3_client: S3ClientProtocol,
        filename: str | None,
        upload_id: str | None,
        part_number: str | None,
    ) -> str:
        """Generate a presigned PUT URL for one part of a multipart upload.

        Args:
            s3_client: The S3 client to use
            filename: Client-supplied filename used at initiate time
            upload_id: Upload ID returned by initiate
            part_number: Raw partNumber value from the request

        Returns:
            The presigned URL for the part

        Raises:
            S3ValidationError: If a parameter is missing or invalid
            S3OperationError: If signing fails
        """
        filename = _require(filename, "Missing required parameters", "filename")
        upload_id = _require(upload_id, "Missing required parameters", "uploadId")
        number = self.parse_part_number(part_number)
        key = self.build_key(filename)

        try:
            url = await s3_client.generate_presigned_url(
                ClientMethod="upload_part",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": key,
                    "UploadId": upload_id,
                    "PartNumber": number,
                },
                ExpiresIn=self.config.expiration_seconds,
                HttpMethod="PUT",
            )
        except (ClientError, BotoCoreError) as e:
            raise _backend_error("upload_part", key, e)

        logger.debug(f"Presigned part {number} of upload {upload_id} for {key}")
        return url

    async def complete_multipart(
        self,
        s3_client: S3ClientProtocol,
        key: str | None,
        upload_id: str | None,
        parts: list[CompletedPart],
    ) -> dict:
        """Finish a multipart upload from the parts the client uploaded.

        Parts are passed to S3 in the order given; ordering and contiguity
        are the client's responsibility.

        Args:
            s3_client: The S3 client to use
            key: Key returned by initiate
            upload_id: Upload ID returned by initiate
            parts: Part numbers and ETags of the uploaded parts

        Returns:
            The raw S3 response

        Raises:
            S3ValidationError: If a field is missing
            S3OperationError: If S3 rejects the completion
        """
        key = _require(key, "Missing key", "key")
        upload_id = _require(upload_id, "Missing uploadId", "uploadId")
        if not parts and self.config.strict_validation:
            _require(None, "Missing parts", "parts")

        try:
            response = await s3_client.complete_multipart_upload(
                Bucket=self.bucket_name,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={"Parts": [part.to_s3() for part in parts]},
            )
        except (ClientError, BotoCoreError) as e:
            raise _backend_error("complete_multipart_upload", key, e)

        logger.info(f"Multipart upload {upload_id} completed for {key} ({len(parts)} parts)")
        return response
