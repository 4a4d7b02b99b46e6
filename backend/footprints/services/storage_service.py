"""
Footprints Backend — Object Store Service
==========================================

What:  Issues time-limited signed URLs against the photos bucket.
How:   Wraps one boto3 S3 client (SigV4). Signing is local computation;
       it runs in a worker thread so a batch of signatures can be awaited
       together with asyncio.gather without blocking the event loop.
Who:   Injected into trip and photo routes via get_storage_service().
When:  Client built once per process; URLs signed on every request.

Signed URL lifetimes (from settings):
    PUT (upload):   upload_url_expiration   (default 300s)
    GET (download): download_url_expiration (default 3600s)

Download URLs pin the response Content-Type to the one inferred from the
key's extension, so browsers render HEIC/WEBP/SVG photos instead of
downloading them as binary/octet-stream.
"""

import asyncio
import logging
from typing import Any, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from footprints.config import settings
from footprints.exceptions import StorageServiceError
from footprints.services.image_keys import content_type_for_key, normalize_image_key

logger = logging.getLogger(__name__)


def _build_client() -> Any:
    """S3 client from settings; explicit keys are optional (default chain otherwise)."""
    options = {
        "region_name": settings.aws_region,
        "config": Config(signature_version="s3v4"),
    }
    if settings.s3_endpoint_url:
        options["endpoint_url"] = settings.s3_endpoint_url
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        options["aws_access_key_id"] = settings.aws_access_key_id
        options["aws_secret_access_key"] = settings.aws_secret_access_key
    return boto3.client("s3", **options)


class StorageService:
    """
    Signed URL issuer for the photos bucket.

    Attributes:
        bucket_name:          target bucket (settings.photos_bucket by default)
        upload_expiration:    seconds a PUT URL stays valid
        download_expiration:  seconds a GET URL stays valid
        client:               boto3 S3 client (injectable for tests)
    """

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        client: Any = None,
        upload_expiration: Optional[int] = None,
        download_expiration: Optional[int] = None,
    ):
        self.bucket_name = bucket_name if bucket_name is not None else settings.photos_bucket
        self.upload_expiration = upload_expiration or settings.upload_url_expiration
        self.download_expiration = download_expiration or settings.download_url_expiration
        self.client = client if client is not None else _build_client()
        logger.info(
            "StorageService initialized with bucket=%s, upload_ttl=%ds, download_ttl=%ds",
            self.bucket_name or "<unset>",
            self.upload_expiration,
            self.download_expiration,
        )

    def _require_bucket(self) -> str:
        if not self.bucket_name:
            raise StorageServiceError(
                message="Photo storage is not configured.",
                context={"setting": "PHOTOS_BUCKET"},
            )
        return self.bucket_name

    # ── Synchronous signing ───────────────────────────────────────────────

    def sign_download_url(self, key: str) -> str:
        """
        Signed GET URL for one object key.

        Raises:
            StorageServiceError: bucket unset or botocore could not sign
        """
        bucket = self._require_bucket()
        try:
            return self.client.generate_presigned_url(
                ClientMethod="get_object",
                Params={
                    "Bucket": bucket,
                    "Key": key,
                    "ResponseContentType": content_type_for_key(key),
                    "ResponseCacheControl": f"max-age={self.download_expiration}",
                },
                ExpiresIn=self.download_expiration,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to sign download URL for %s: %s", key, e)
            raise StorageServiceError(context={"key": key, "error": str(e)}) from e

    def sign_upload_url(self, key: str) -> str:
        """
        Signed PUT URL for one object key.

        Content-Type is not part of the signature: the client uploads with
        whatever type the browser reports for the file. Read URLs pin the
        served type from the extension instead.
        """
        bucket = self._require_bucket()
        try:
            return self.client.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=self.upload_expiration,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to sign upload URL for %s: %s", key, e)
            raise StorageServiceError(context={"key": key, "error": str(e)}) from e

    # ── Async wrappers ────────────────────────────────────────────────────

    async def presign_download(self, key: str) -> str:
        return await asyncio.to_thread(self.sign_download_url, key)

    async def presign_upload(self, key: str) -> str:
        return await asyncio.to_thread(self.sign_upload_url, key)

    async def resolve_image_url(self, stored: str) -> str:
        """
        Signed read URL for a stored key or previously issued URL.

        Raises:
            InvalidImageKeyError: no key can be derived from `stored`
            StorageServiceError:  signing failed
        """
        key = normalize_image_key(stored)
        return await self.presign_download(key)

    async def check_bucket(self) -> bool:
        """
        What:    Reachability probe for the health endpoint.
        Returns: True if HEAD on the bucket succeeds, False otherwise.
        """
        if not self.bucket_name:
            return False
        try:
            await asyncio.to_thread(self.client.head_bucket, Bucket=self.bucket_name)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.warning("Health check: bucket %s unreachable: %s", self.bucket_name, e)
            return False


_storage_service: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """
    FastAPI dependency returning the process-wide StorageService.

    The boto3 client is built on first use and reused by every request.
    Tests replace this dependency through app.dependency_overrides.
    """
    global _storage_service

    if _storage_service is None:
        _storage_service = StorageService()

    return _storage_service
