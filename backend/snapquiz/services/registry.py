from __future__ import annotations
import structlog
from snapquiz.models.participant import Participant
from snapquiz.services.records import ParticipantStore
from snapquiz.errors import DuplicateContact

log = structlog.get_logger()


class ParticipantRegistry:
    def __init__(self, store: ParticipantStore):
        self.store = store

    async def register(self, name: str, region: str, contact_id: str) -> Participant:
        """
        Create a participant with zeroed scores and empty locators.
        Raises DuplicateContact (carrying the existing record) when the
        contact id is already registered.
        """
        existing = await self.store.get_by_contact(contact_id)
        if existing is not None:
            log.info("participant.duplicate_contact", user_id=str(existing.id))
            raise DuplicateContact(existing)
        p = await self.store.create(name, region, contact_id)
        log.info("participant.registered", user_id=str(p.id), region=region)
        return p

    async def get(self, participant_id) -> Participant | None:
        return await self.store.get(participant_id)
