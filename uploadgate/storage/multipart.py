"""Request and response models for multipart uploads.

Field names on the wire follow the camelCase used by browser upload
clients (``uploadId``, ``partNumber``, ``eTag``).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MultipartSession(BaseModel):
    """Identifiers of an open multipart upload, as issued by S3."""

    model_config = ConfigDict(populate_by_name=True)

    upload_id: str = Field(alias="uploadId")
    key: str


class CompletedPart(BaseModel):
    """One uploaded part, as reported back by the client."""

    model_config = ConfigDict(populate_by_name=True)

    e_tag: str = Field(alias="eTag")
    part_number: int = Field(alias="partNumber")

    def to_s3(self) -> dict:
        """Shape the part the way ``complete_multipart_upload`` expects."""
        return {"ETag": self.e_tag, "PartNumber": self.part_number}


class CompleteMultipartRequest(BaseModel):
    """Body of a multipart completion request."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = ""
    upload_id: str = Field(default="", alias="uploadId")
    parts: List[CompletedPart] = Field(default_factory=list)


class PartUrlResponse(BaseModel):
    """Presigned URL for a single part."""

    url: str
