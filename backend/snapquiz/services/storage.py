from __future__ import annotations
import io
import json
from typing import Protocol
from urllib.parse import quote
from fastapi.concurrency import run_in_threadpool
from minio import Minio
from minio.error import MinioException
from urllib3.exceptions import HTTPError as TransportError
import structlog
from snapquiz.config import Settings
from snapquiz.errors import StorageUnavailable

log = structlog.get_logger()


class BlobStore(Protocol):
    """What the upload path needs from object storage."""

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under key and return a public locator URL."""
        ...


def _parse_endpoint(ep: str) -> tuple[str, bool]:
    # Return (host:port, secure)
    secure = ep.startswith("https://")
    host = ep.replace("http://", "").replace("https://", "").rstrip("/")
    return host, secure


def _public_read_policy(bucket: str) -> str:
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"AWS": ["*"]},
            "Action": ["s3:GetObject"],
            "Resource": [f"arn:aws:s3:::{bucket}/*"],
        }],
    })


class MinioBlobStore:
    def __init__(self, client: Minio, bucket: str, public_base_url: str):
        self._client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_settings(cls, s: Settings) -> "MinioBlobStore":
        host, secure = _parse_endpoint(s.s3_endpoint)
        client = Minio(
            host,
            access_key=s.s3_access_key,
            secret_key=s.s3_secret_key,
            secure=secure,
            region=s.s3_region,
        )
        return cls(client, s.s3_bucket_uploads, s.s3_public_url or s.s3_endpoint)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{quote(key)}"

    def ensure_bucket(self) -> None:
        """Create the uploads bucket with anonymous read access if it is missing."""
        try:
            if not self._client.bucket_exists(self.bucket):
                self._client.make_bucket(self.bucket)
                self._client.set_bucket_policy(self.bucket, _public_read_policy(self.bucket))
            log.info("storage.bucket_ready", bucket=self.bucket)
        except (MinioException, TransportError) as e:
            # Bucket creation may race with another instance; uploads surface real failures
            log.warning("storage.bucket_check_failed", bucket=self.bucket, error=str(e))

    def _put_sync(self, key: str, data: bytes, content_type: str) -> None:
        self._client.put_object(
            self.bucket, key, io.BytesIO(data), length=len(data), content_type=content_type
        )

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        try:
            await run_in_threadpool(self._put_sync, key, data, content_type)
        except (MinioException, TransportError) as e:
            raise StorageUnavailable(f"Error storing {key}") from e
        return self.public_url(key)
