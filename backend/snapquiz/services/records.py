"""
Participant record store: the only place that talks to the database.
"""
from __future__ import annotations
import uuid
from typing import Any, Protocol, Sequence
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from snapquiz.models.participant import Participant, new_participant, LOCATOR_FIELDS, SCORE_FIELDS
from snapquiz.errors import DuplicateContact, PersistenceError

# (field name, descending)
SortKey = tuple[str, bool]

SORTABLE_FIELDS = ("snap_score", "quiz_score", "quiz_time_taken", "created_at")
UPDATABLE_FIELDS = LOCATOR_FIELDS + SCORE_FIELDS


def parse_id(participant_id: Any) -> uuid.UUID | None:
    if isinstance(participant_id, uuid.UUID):
        return participant_id
    try:
        return uuid.UUID(str(participant_id))
    except ValueError:
        return None


def check_fields(fields: dict[str, Any]) -> None:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Not updatable: {sorted(unknown)}")


def check_order(order: Sequence[SortKey]) -> None:
    for name, _ in order:
        if name not in SORTABLE_FIELDS:
            raise ValueError(f"Not sortable: {name}")


class ParticipantStore(Protocol):
    async def create(self, name: str, region: str, contact_id: str) -> Participant: ...

    async def get(self, participant_id: Any) -> Participant | None: ...

    async def get_by_contact(self, contact_id: str) -> Participant | None: ...

    async def update(self, participant_id: Any, **fields: Any) -> Participant | None:
        """Apply field values and persist. Returns None when the record is gone."""
        ...

    async def scan(self, order: Sequence[SortKey]) -> list[Participant]: ...


class SqlParticipantStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fail(self, op: str) -> PersistenceError:
        await self.session.rollback()
        return PersistenceError(f"Could not {op} user record")

    async def create(self, name: str, region: str, contact_id: str) -> Participant:
        p = new_participant(name, region, contact_id)
        self.session.add(p)
        try:
            await self.session.commit()
        except IntegrityError:
            # unique index on contact_id lost a race with a concurrent insert
            await self.session.rollback()
            existing = await self.get_by_contact(contact_id)
            raise DuplicateContact(existing)
        except SQLAlchemyError as e:
            raise await self._fail("create") from e
        await self.session.refresh(p)
        return p

    async def get(self, participant_id: Any) -> Participant | None:
        pid = parse_id(participant_id)
        if pid is None:
            return None
        try:
            return await self.session.get(Participant, pid)
        except SQLAlchemyError as e:
            raise await self._fail("load") from e

    async def get_by_contact(self, contact_id: str) -> Participant | None:
        try:
            return await self.session.scalar(select(Participant).where(Participant.contact_id == contact_id))
        except SQLAlchemyError as e:
            raise await self._fail("load") from e

    async def update(self, participant_id: Any, **fields: Any) -> Participant | None:
        check_fields(fields)
        p = await self.get(participant_id)
        if p is None:
            return None
        for name, value in fields.items():
            setattr(p, name, value)
        try:
            await self.session.commit()
            await self.session.refresh(p)
        except SQLAlchemyError as e:
            raise await self._fail("update") from e
        return p

    async def scan(self, order: Sequence[SortKey]) -> list[Participant]:
        check_order(order)
        clauses = []
        for name, descending in order:
            col = getattr(Participant, name)
            clauses.append(col.desc() if descending else col.asc())
        # natural order as the final tie breaker
        clauses.append(Participant.created_at.asc())
        try:
            return list((await self.session.execute(select(Participant).order_by(*clauses))).scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail("list") from e
