from __future__ import annotations
import pytest
from minio.error import MinioException
from urllib3.exceptions import ProtocolError
from snapquiz.errors import StorageUnavailable
from snapquiz.services.storage import MinioBlobStore, _parse_endpoint


class StubMinio:
    def __init__(self, exists=True, error: Exception | None = None):
        self.exists = exists
        self.error = error
        self.objects: dict[str, tuple[bytes, int, str]] = {}
        self.made: list[str] = []
        self.policies: dict[str, str] = {}

    def put_object(self, bucket, key, stream, length, content_type):
        if self.error:
            raise self.error
        self.objects[f"{bucket}/{key}"] = (stream.read(), length, content_type)

    def bucket_exists(self, bucket):
        if self.error:
            raise self.error
        return self.exists

    def make_bucket(self, bucket):
        self.made.append(bucket)

    def set_bucket_policy(self, bucket, policy):
        self.policies[bucket] = policy


def _store(client):
    return MinioBlobStore(client, "uploads", "https://cdn.example.test/")


def test_parse_endpoint():
    assert _parse_endpoint("http://minio:9000") == ("minio:9000", False)
    assert _parse_endpoint("https://s3.example.com/") == ("s3.example.com", True)


def test_public_url_quotes_key():
    store = _store(StubMinio())
    assert store.public_url("images/p1/my cat.png") == "https://cdn.example.test/uploads/images/p1/my%20cat.png"


@pytest.mark.asyncio
async def test_put_writes_object_and_returns_locator():
    client = StubMinio()
    url = await _store(client).put("videos/p1/run.mp4", b"mp4", "video/mp4")
    assert url == "https://cdn.example.test/uploads/videos/p1/run.mp4"
    assert client.objects["uploads/videos/p1/run.mp4"] == (b"mp4", 3, "video/mp4")


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [MinioException("bucket gone"), ProtocolError("connection reset")])
async def test_backend_errors_become_storage_unavailable(error):
    with pytest.raises(StorageUnavailable) as err:
        await _store(StubMinio(error=error)).put("images/p1/a.png", b"x", "image/png")
    assert err.value.__cause__ is error


def test_ensure_bucket_creates_public_bucket():
    client = StubMinio(exists=False)
    _store(client).ensure_bucket()
    assert client.made == ["uploads"]
    assert "arn:aws:s3:::uploads/*" in client.policies["uploads"]


def test_ensure_bucket_tolerates_backend_errors():
    client = StubMinio(error=ProtocolError("refused"))
    _store(client).ensure_bucket()
    assert client.made == []
