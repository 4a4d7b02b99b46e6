"""
Footprints Backend — Storage Service Tests
===========================================

What:  Signed URL generation and bucket probing.
How:   Parameters are checked against a MagicMock client; the signed URLs
       themselves come from a real boto3 client with dummy credentials.
       head_bucket is answered by botocore's Stubber (no network).

What we test:
    ✅ GET URLs pin Content-Type and Cache-Control and use the read lifetime
    ✅ PUT URLs leave Content-Type unsigned and use the upload lifetime
    ✅ botocore failures become StorageServiceError
    ✅ Missing bucket is reported instead of signing
    ✅ Stored URLs are normalized before signing
"""

from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
from botocore.exceptions import NoCredentialsError
from botocore.stub import Stubber

from footprints.exceptions import InvalidImageKeyError, StorageServiceError
from footprints.services.storage_service import StorageService


class TestSigningParameters:

    def setup_method(self):
        self.client = MagicMock()
        self.client.generate_presigned_url.return_value = "https://signed.example/x"
        self.service = StorageService(
            bucket_name="photos",
            client=self.client,
            upload_expiration=300,
            download_expiration=3600,
        )

    def test_download_url_parameters(self):
        url = self.service.sign_download_url("trips/u1/t1/photo.HEIC")

        assert url == "https://signed.example/x"
        self.client.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={
                "Bucket": "photos",
                "Key": "trips/u1/t1/photo.HEIC",
                "ResponseContentType": "image/heic",
                "ResponseCacheControl": "max-age=3600",
            },
            ExpiresIn=3600,
        )

    def test_upload_url_parameters(self):
        self.service.sign_upload_url("trips/u1/t1/photo.png")

        self.client.generate_presigned_url.assert_called_once_with(
            ClientMethod="put_object",
            Params={"Bucket": "photos", "Key": "trips/u1/t1/photo.png"},
            ExpiresIn=300,
        )

    def test_botocore_error_wrapped(self):
        self.client.generate_presigned_url.side_effect = NoCredentialsError()

        with pytest.raises(StorageServiceError) as exc_info:
            self.service.sign_download_url("trips/u1/t1/a.jpg")

        assert exc_info.value.context["key"] == "trips/u1/t1/a.jpg"

    def test_missing_bucket_rejected(self):
        service = StorageService(bucket_name="", client=self.client)

        with pytest.raises(StorageServiceError, match="not configured"):
            service.sign_upload_url("trips/u1/t1/a.jpg")
        self.client.generate_presigned_url.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolve_normalizes_stored_url(self):
        await self.service.resolve_image_url(
            "https://photos.s3.amazonaws.com/trips/u1/t1/a.webp?X-Amz-Signature=old"
        )

        params = self.client.generate_presigned_url.call_args.kwargs["Params"]
        assert params["Key"] == "trips/u1/t1/a.webp"
        assert params["ResponseContentType"] == "image/webp"

    @pytest.mark.asyncio
    async def test_resolve_rejects_empty_key_without_signing(self):
        with pytest.raises(InvalidImageKeyError):
            await self.service.resolve_image_url("")
        self.client.generate_presigned_url.assert_not_called()


class TestSignedUrls:
    """URLs produced by a real boto3 client."""

    @pytest.mark.asyncio
    async def test_download_url_carries_response_overrides(self, storage):
        url = await storage.presign_download("trips/u1/t1/photo.HEIC")
        query = parse_qs(urlsplit(url).query)

        assert "trips/u1/t1/photo.HEIC" in urlsplit(url).path
        assert query["response-content-type"] == ["image/heic"]
        assert query["response-cache-control"] == ["max-age=3600"]
        assert query["X-Amz-Expires"] == ["3600"]
        assert "X-Amz-Signature" in query

    @pytest.mark.asyncio
    async def test_upload_url_expires_quickly(self, storage):
        url = await storage.presign_upload("trips/u1/t1/photo.jpg")
        query = parse_qs(urlsplit(url).query)

        assert query["X-Amz-Expires"] == ["300"]
        assert "X-Amz-Signature" in query
        assert query["X-Amz-SignedHeaders"] == ["host"]


class TestCheckBucket:

    @pytest.mark.asyncio
    async def test_reachable_bucket(self, storage, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_response("head_bucket", {}, {"Bucket": "test-bucket"})
            assert await storage.check_bucket() is True

    @pytest.mark.asyncio
    async def test_missing_bucket(self, storage, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
            assert await storage.check_bucket() is False

    @pytest.mark.asyncio
    async def test_unset_bucket_not_probed(self, s3_client):
        service = StorageService(bucket_name="", client=s3_client)
        assert await service.check_bucket() is False
