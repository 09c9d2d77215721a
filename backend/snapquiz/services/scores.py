from __future__ import annotations
import structlog
from snapquiz.models.participant import Participant
from snapquiz.services.records import ParticipantStore
from snapquiz.errors import NotFound

log = structlog.get_logger()


class ScoreLedger:
    """Last-write-wins score updates. No best-of comparison, no averaging."""

    def __init__(self, store: ParticipantStore):
        self.store = store

    async def set_quiz_score(self, participant_id, score: float, time_taken: float, comment: str | None = None) -> Participant:
        p = await self.store.update(
            participant_id, quiz_score=score, quiz_time_taken=time_taken, quiz_comment=comment
        )
        if p is None:
            raise NotFound()
        log.info("score.quiz_updated", user_id=str(p.id), score=score, time_taken=time_taken)
        return p

    async def set_snap_score(self, participant_id, score: float) -> Participant:
        p = await self.store.update(participant_id, snap_score=score)
        if p is None:
            raise NotFound()
        log.info("score.snap_updated", user_id=str(p.id), score=score)
        return p
