"""
Footprints Backend — Photo URL Route Handlers
==============================================

What:  POST /upload (signed PUT URLs) and POST /image-urls (signed GET URLs).
Who:   Called by the trip editor (upload) and the gallery (display).

Neither route touches the trip table.
"""

import logging

from fastapi import APIRouter, Depends

from footprints.schemas.photo import (
    ImageUrlRequest,
    ImageUrlResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)
from footprints.schemas.trip import ErrorResponse
from footprints.services.photo_service import photo_service
from footprints.services.storage_service import StorageService, get_storage_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Photos"])


@router.post(
    "/upload",
    response_model=UploadUrlResponse,
    response_model_by_alias=True,
    responses={
        400: {"description": "Missing ids or fileNames is not a list", "model": ErrorResponse},
        500: {"description": "Signing failed", "model": ErrorResponse},
    },
    summary="Get signed upload URLs",
    description=(
        "Returns one signed PUT URL per file name. Each URL is valid for "
        "upload_url_expiration seconds. Any file name is accepted and the "
        "upload may use any Content-Type."
    ),
)
async def issue_upload_urls(
    payload: UploadUrlRequest,
    storage: StorageService = Depends(get_storage_service),
) -> UploadUrlResponse:
    return await photo_service.issue_upload_urls(
        storage=storage,
        user_id=payload.user_id,
        trip_id=payload.trip_id,
        file_names=payload.file_names,
    )


@router.post(
    "/image-urls",
    response_model=ImageUrlResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    responses={
        400: {"description": "imageUrls is not a list", "model": ErrorResponse},
    },
    summary="Resolve stored photos to signed read URLs",
    description=(
        "Accepts object keys or previously issued URLs. Items that cannot be "
        "resolved carry an `error` and a null presignedUrl; the batch itself "
        "always succeeds."
    ),
)
async def resolve_image_urls(
    payload: ImageUrlRequest,
    storage: StorageService = Depends(get_storage_service),
) -> ImageUrlResponse:
    return await photo_service.resolve_image_urls(storage=storage, image_urls=payload.image_urls)
