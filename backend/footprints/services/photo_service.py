"""
Footprints Backend — Photo Service
===================================

What:  Batch operations on photo URLs that do not touch the trip table.
How:   Builds object keys and signs them concurrently via StorageService.
Who:   Called by the POST /upload and POST /image-urls route handlers.

Upload flow (client side):
    1. POST /upload {userId, tripId, fileNames}   → uploadUrls[]
    2. PUT bytes to each uploadUrl (any Content-Type; it is not signed)
    3. POST /Trips with ImageUrls = [imageUrl, ...] (the object keys)
"""

import asyncio
import logging
from typing import Any, List

from footprints.exceptions import InvalidImageKeyError, StorageServiceError
from footprints.schemas.photo import (
    ImageUrlItem,
    ImageUrlResponse,
    UploadUrlItem,
    UploadUrlResponse,
)
from footprints.services.image_keys import build_upload_key
from footprints.services.storage_service import StorageService

logger = logging.getLogger(__name__)


class PhotoService:
    """Signed URL batches for uploading and displaying trip photos."""

    async def issue_upload_urls(
        self,
        storage: StorageService,
        user_id: str,
        trip_id: str,
        file_names: List[str],
    ) -> UploadUrlResponse:
        """
        One signed PUT URL per file name, in input order.

        Any signing failure fails the whole batch (StorageServiceError → 500);
        a partial set of upload slots is of no use to the client.
        """
        keys = [build_upload_key(user_id, trip_id, name) for name in file_names]
        urls = await asyncio.gather(*(storage.presign_upload(key) for key in keys))

        logger.info("Issued %d upload URLs for trip %s/%s", len(keys), user_id, trip_id)
        return UploadUrlResponse(
            upload_urls=[
                UploadUrlItem(file_name=name, upload_url=url, image_url=key)
                for name, key, url in zip(file_names, keys, urls)
            ]
        )

    async def resolve_image_urls(
        self, storage: StorageService, image_urls: List[Any]
    ) -> ImageUrlResponse:
        """
        Signed read URL for each stored key or URL, in input order.

        Failures are reported on the item (presignedUrl null + error) and
        never fail the batch.
        """
        items = await asyncio.gather(*(self._resolve_one(storage, value) for value in image_urls))
        failed = sum(1 for item in items if item.error is not None)
        if failed:
            logger.warning("Resolved %d image URLs, %d failed", len(items), failed)
        return ImageUrlResponse(image_urls=list(items))

    async def _resolve_one(self, storage: StorageService, value: Any) -> ImageUrlItem:
        try:
            url = await storage.resolve_image_url(value)
        except (InvalidImageKeyError, StorageServiceError) as e:
            logger.warning("Could not resolve image URL %r: %s", value, e)
            message = e.message if isinstance(e, StorageServiceError) else str(e)
            return ImageUrlItem(original_url=value, presigned_url=None, error=message)
        return ImageUrlItem(original_url=value, presigned_url=url)


# ── Singleton Instance ────────────────────────────────────────────────────
photo_service = PhotoService()
