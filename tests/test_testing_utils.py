"""Tests for testing utilities module."""

import pytest
from botocore.exceptions import ClientError

from uploadgate.testing.mocks import InMemoryS3, mock_s3_client
from uploadgate.testing.utils import GatewayTestCase, create_test_settings


class TestInMemoryS3:
    """Tests for InMemoryS3 mock."""

    @pytest.mark.asyncio
    async def test_put_and_get_object(self):
        """Test putting and getting an object."""
        s3 = InMemoryS3()

        await s3.put_object(Bucket="test-bucket", Key="uploads/a.txt", Body="hello")
        response = await s3.get_object(Bucket="test-bucket", Key="uploads/a.txt")

        assert response["Body"] == b"hello"

    @pytest.mark.asyncio
    async def test_get_nonexistent_object(self):
        """Test getting an object that doesn't exist."""
        s3 = InMemoryS3()

        with pytest.raises(ClientError) as exc_info:
            await s3.get_object(Bucket="test-bucket", Key="nonexistent")

        assert exc_info.value.response["Error"]["Code"] == "NoSuchKey"

    @pytest.mark.asyncio
    async def test_head_bucket(self):
        """Test head_bucket only succeeds for created buckets."""
        s3 = InMemoryS3()

        with pytest.raises(ClientError):
            await s3.head_bucket(Bucket="test-bucket")

        await s3.create_bucket(Bucket="test-bucket")
        assert await s3.head_bucket(Bucket="test-bucket") == {}

    @pytest.mark.asyncio
    async def test_presigned_part_url_carries_upload(self):
        """Test part URLs include the upload ID and part number."""
        s3 = InMemoryS3()

        url = await s3.generate_presigned_url(
            "upload_part",
            Params={"Bucket": "b", "Key": "uploads/a.bin", "UploadId": "u1", "PartNumber": 4},
            ExpiresIn=60,
        )

        assert url.startswith("https://b.s3.amazonaws.com/uploads/a.bin?")
        assert "partNumber=4" in url
        assert "uploadId=u1" in url
        assert "X-Amz-Expires=60" in url

    @pytest.mark.asyncio
    async def test_fail_with_applies_once(self):
        """Test a queued failure is raised by the next call only."""
        s3 = InMemoryS3()
        s3.fail_with = ClientError({"Error": {"Code": "SlowDown"}}, "CreateMultipartUpload")

        with pytest.raises(ClientError):
            await s3.create_multipart_upload(Bucket="b", Key="k")

        resp = await s3.create_multipart_upload(Bucket="b", Key="k")
        assert resp["UploadId"]

    @pytest.mark.asyncio
    async def test_upload_part_unknown_upload(self):
        """Test uploading a part to an unknown upload fails."""
        s3 = InMemoryS3()

        with pytest.raises(ClientError) as exc_info:
            await s3.upload_part(Bucket="b", Key="k", UploadId="nope", PartNumber=1, Body=b"x")

        assert exc_info.value.response["Error"]["Code"] == "NoSuchUpload"

    @pytest.mark.asyncio
    async def test_abort_multipart_upload(self):
        """Test aborting discards the upload."""
        s3 = InMemoryS3()
        resp = await s3.create_multipart_upload(Bucket="b", Key="k")

        await s3.abort_multipart_upload(Bucket="b", Key="k", UploadId=resp["UploadId"])

        assert s3.open_uploads() == []

    def test_clear(self):
        """Test clearing resets recorded calls and data."""
        s3 = InMemoryS3()
        s3._storage["b"] = {"k": b"x"}
        s3.presign_calls.append({})

        s3.clear()

        assert s3._storage == {}
        assert s3.presign_calls == []


class TestMockS3Client:
    """Tests for the mock_s3_client context manager."""

    @pytest.mark.asyncio
    async def test_context_manager_clears(self):
        """Test data is cleared on exit."""
        with mock_s3_client() as s3:
            await s3.put_object(Bucket="b", Key="k", Body=b"x")
            assert s3._storage["b"]["k"] == b"x"

        assert s3._storage == {}


class TestCreateTestSettings:
    """Tests for create_test_settings."""

    def test_defaults(self):
        """Test the test bucket and dummy credentials."""
        settings = create_test_settings()

        assert settings.aws_bucket_name == "test-bucket"
        assert settings.aws_access_key_id == "testing"
        assert settings.aws_url == "http://localhost:4566"

    def test_overrides(self):
        """Test keyword overrides win."""
        settings = create_test_settings(bucket_name="other", presign_expiry_seconds=30)

        assert settings.aws_bucket_name == "other"
        assert settings.presign_expiry_seconds == 30


class TestGatewayTestCase(GatewayTestCase):
    """Exercise GatewayTestCase through a full multipart upload."""

    async def test_multipart_round_trip(self):
        session = await self.service.initiate_multipart(self.s3_client, "clip.mov")
        parts = await self.upload_parts(session.key, session.upload_id, [b"12", b"34"])

        from uploadgate.storage.multipart import CompletedPart

        await self.service.complete_multipart(
            self.s3_client,
            session.key,
            session.upload_id,
            [CompletedPart.model_validate(p) for p in parts],
        )

        stored = await self.s3_client.get_object(Bucket=self.bucket_name, Key=session.key)
        self.assertEqual(stored["Body"], b"1234")


class TestFixtures:
    """Tests for the pytest fixtures."""

    def test_upload_service_fixture(self, upload_service, gateway_settings):
        """Test the service fixture follows the test settings."""
        assert upload_service.bucket_name == gateway_settings.aws_bucket_name
        assert upload_service.build_key("a.txt") == "uploads/a.txt"
