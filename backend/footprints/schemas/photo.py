"""
Footprints Backend — Photo URL Schemas
=======================================

What:  Contracts for POST /upload (signed write URLs) and POST /image-urls
       (signed read URLs). Wire names are camelCase, as sent by the frontend.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ALIASED = ConfigDict(populate_by_name=True, extra="ignore")


class UploadUrlRequest(BaseModel):
    """
    What:  Body of POST /upload.
    How:   One signed PUT URL is issued per entry of fileNames, in order.
    """
    model_config = _ALIASED

    user_id: str = Field(alias="userId", min_length=1)
    trip_id: str = Field(alias="tripId", min_length=1)
    file_names: List[str] = Field(alias="fileNames", description="Names of the files to upload")

    @field_validator("user_id", "trip_id")
    @classmethod
    def strip_ids(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class UploadUrlItem(BaseModel):
    """
    What:  One signed upload slot.

    uploadUrl: PUT target, valid for upload_url_expiration seconds
    imageUrl:  the object key to store in the trip's ImageUrls afterwards
    """
    model_config = _ALIASED

    file_name: str = Field(alias="fileName")
    upload_url: str = Field(alias="uploadUrl")
    image_url: str = Field(alias="imageUrl")


class UploadUrlResponse(BaseModel):
    model_config = _ALIASED

    upload_urls: List[UploadUrlItem] = Field(alias="uploadUrls")


class ImageUrlRequest(BaseModel):
    """
    What:  Body of POST /image-urls.

    Items are kept untyped so a single bad entry is reported inline
    instead of rejecting the whole batch.
    """
    model_config = _ALIASED

    image_urls: List[Any] = Field(alias="imageUrls", description="Stored keys or URLs")


class ImageUrlItem(BaseModel):
    """
    What:  Resolution result for one stored key or URL.

    `error` is only present when resolution failed; presignedUrl is then null.
    """
    model_config = _ALIASED

    original_url: Any = Field(alias="originalUrl")
    presigned_url: Optional[str] = Field(alias="presignedUrl")
    error: Optional[str] = Field(default=None)


class ImageUrlResponse(BaseModel):
    model_config = _ALIASED

    image_urls: List[ImageUrlItem] = Field(alias="imageUrls")
