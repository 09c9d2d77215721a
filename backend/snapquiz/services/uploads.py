"""
Upload-and-associate workflow.

resolve -> validate -> store -> link, terminal on the first failure.
Store and link are not transactional: if the link step fails after the blob
was written, the blob stays in the bucket unreferenced. That window is
logged as upload.orphaned and left for the caller to retry.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import PurePosixPath
import structlog
from snapquiz.models.participant import Participant
from snapquiz.services.records import ParticipantStore
from snapquiz.services.storage import BlobStore
from snapquiz.errors import (
    NotFound, MissingPayload, UnsupportedMediaType, PayloadTooLarge, PersistenceError, StorageUnavailable,
)

log = structlog.get_logger()

IMAGE = "image"
VIDEO = "video"

CATEGORY_FOR_KIND = {IMAGE: "images", VIDEO: "videos"}
FIELD_FOR_KIND = {IMAGE: "image_url", VIDEO: "video_url"}
GENERIC_FIELD = "file_url"
DEFAULT_CONTENT_TYPE = {IMAGE: "image/jpeg", VIDEO: "video/mp4"}


@dataclass
class Payload:
    filename: str
    content_type: str
    data: bytes


@dataclass
class UploadOutcome:
    participant: Participant
    kind: str
    key: str
    url: str


def classify(content_type: str | None) -> str:
    """Map a client-declared MIME type onto image/video. The payload itself is not inspected."""
    major = (content_type or "").split(";", 1)[0].strip().lower().split("/", 1)[0]
    if major == "image":
        return IMAGE
    if major == "video":
        return VIDEO
    raise UnsupportedMediaType(f"Unsupported file type: {content_type or 'unknown'}")


def safe_filename(name: str | None) -> str:
    # keep only the last path segment so keys stay inside the participant prefix
    base = PurePosixPath((name or "").replace("\\", "/")).name.strip()
    return base if base not in ("", ".", "..") else "upload"


def object_key(kind: str, participant_id, filename: str | None) -> str:
    return f"{CATEGORY_FOR_KIND[kind]}/{participant_id}/{safe_filename(filename)}"


class UploadCoordinator:
    def __init__(self, store: ParticipantStore, blobs: BlobStore, max_bytes: int):
        self.store = store
        self.blobs = blobs
        self.max_bytes = max_bytes

    async def upload_image(self, participant_id, payload: Payload | None) -> UploadOutcome:
        return await self._run(participant_id, payload, kind=IMAGE, field=FIELD_FOR_KIND[IMAGE])

    async def upload_video(self, participant_id, payload: Payload | None) -> UploadOutcome:
        return await self._run(participant_id, payload, kind=VIDEO, field=FIELD_FOR_KIND[VIDEO])

    async def upload_file(self, participant_id, payload: Payload | None) -> UploadOutcome:
        """Classify by declared content type, then link to the generic file locator."""
        return await self._run(participant_id, payload, kind=None, field=GENERIC_FIELD)

    async def _run(self, participant_id, payload: Payload | None, *, kind: str | None, field: str) -> UploadOutcome:
        participant = await self.store.get(participant_id)
        if participant is None:
            raise NotFound()

        if payload is None or not payload.data:
            raise MissingPayload()
        if len(payload.data) > self.max_bytes:
            raise PayloadTooLarge(f"File exceeds {self.max_bytes // (1024 * 1024)} MB limit")
        if kind is None:
            kind = classify(payload.content_type)
        content_type = payload.content_type or DEFAULT_CONTENT_TYPE[kind]

        key = object_key(kind, participant.id, payload.filename)
        try:
            url = await self.blobs.put(key, payload.data, content_type)
        except StorageUnavailable:
            log.error("upload.storage_failed", user_id=str(participant.id), key=key, kind=kind)
            raise
        log.info("upload.stored", user_id=str(participant.id), key=key, size=len(payload.data))

        try:
            linked = await self.store.update(participant.id, **{field: url})
        except PersistenceError:
            log.warning("upload.orphaned", user_id=str(participant.id), key=key, url=url)
            raise
        if linked is None:
            log.warning("upload.orphaned", user_id=str(participant.id), key=key, url=url)
            raise PersistenceError("User record disappeared before the upload could be linked")

        log.info("upload.linked", user_id=str(participant.id), field=field)
        return UploadOutcome(participant=linked, kind=kind, key=key, url=url)
