"""
Dependency wiring: every service gets its collaborators handed in here,
so tests can override the two stores and nothing else.
"""
from __future__ import annotations
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from snapquiz.config import settings
from snapquiz.db import get_session
from snapquiz.services.storage import BlobStore, MinioBlobStore
from snapquiz.services.records import ParticipantStore, SqlParticipantStore
from snapquiz.services.registry import ParticipantRegistry
from snapquiz.services.uploads import UploadCoordinator
from snapquiz.services.scores import ScoreLedger
from snapquiz.services.leaderboard import Leaderboard


@lru_cache
def get_blob_store() -> BlobStore:
    return MinioBlobStore.from_settings(settings)


async def get_participant_store(session: AsyncSession = Depends(get_session)) -> ParticipantStore:
    return SqlParticipantStore(session)


def get_registry(store: ParticipantStore = Depends(get_participant_store)) -> ParticipantRegistry:
    return ParticipantRegistry(store)


def get_upload_coordinator(
    store: ParticipantStore = Depends(get_participant_store),
    blobs: BlobStore = Depends(get_blob_store),
) -> UploadCoordinator:
    return UploadCoordinator(store, blobs, max_bytes=settings.max_upload_bytes)


def get_score_ledger(store: ParticipantStore = Depends(get_participant_store)) -> ScoreLedger:
    return ScoreLedger(store)


def get_leaderboard(store: ParticipantStore = Depends(get_participant_store)) -> Leaderboard:
    return Leaderboard(store)
