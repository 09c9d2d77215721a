from __future__ import annotations
from typing import Any, Sequence
import pytest
from snapquiz.main import app
from snapquiz.deps import get_blob_store, get_participant_store
from snapquiz.errors import DuplicateContact, PersistenceError, StorageUnavailable
from snapquiz.models.participant import Participant, new_participant
from snapquiz.services.records import parse_id, check_fields, check_order


class InMemoryParticipantStore:
    """Test double for the record store. Keeps insertion order as natural order."""

    def __init__(self):
        self.rows: dict[Any, Participant] = {}
        self.fail_updates = False

    async def create(self, name: str, region: str, contact_id: str) -> Participant:
        for p in self.rows.values():
            if p.contact_id == contact_id:
                raise DuplicateContact(p)
        p = new_participant(name, region, contact_id)
        self.rows[p.id] = p
        return p

    async def get(self, participant_id: Any) -> Participant | None:
        pid = parse_id(participant_id)
        return self.rows.get(pid) if pid else None

    async def get_by_contact(self, contact_id: str) -> Participant | None:
        return next((p for p in self.rows.values() if p.contact_id == contact_id), None)

    async def update(self, participant_id: Any, **fields: Any) -> Participant | None:
        check_fields(fields)
        if self.fail_updates:
            raise PersistenceError("Could not update user record")
        p = await self.get(participant_id)
        if p is None:
            return None
        for name, value in fields.items():
            setattr(p, name, value)
        return p

    async def scan(self, order: Sequence[tuple[str, bool]]) -> list[Participant]:
        check_order(order)
        rows = list(self.rows.values())
        # stable sorts applied from the least significant key up
        for name, descending in reversed(order):
            rows.sort(key=lambda p: getattr(p, name), reverse=descending)
        return rows


class InMemoryBlobStore:
    base_url = "https://blobs.example.test/uploads"

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.calls: list[str] = []
        self.fail = False

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        self.calls.append(key)
        if self.fail:
            raise StorageUnavailable(f"Error storing {key}")
        self.objects[key] = (bytes(data), content_type)
        return f"{self.base_url}/{key}"


@pytest.fixture
def store() -> InMemoryParticipantStore:
    return InMemoryParticipantStore()


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def fake_backends(store, blobs):
    app.dependency_overrides[get_participant_store] = lambda: store
    app.dependency_overrides[get_blob_store] = lambda: blobs
    yield store, blobs
    app.dependency_overrides.clear()

