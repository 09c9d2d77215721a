from __future__ import annotations
from snapquiz.models.participant import Participant
from snapquiz.services.records import ParticipantStore, SortKey

# (field, descending)
SNAP_ORDER: list[SortKey] = [("snap_score", True)]
# equal scores: the faster attempt ranks higher
QUIZ_ORDER: list[SortKey] = [("quiz_score", True), ("quiz_time_taken", False)]


class Leaderboard:
    def __init__(self, store: ParticipantStore):
        self.store = store

    async def by_snap_score(self) -> list[Participant]:
        return await self.store.scan(SNAP_ORDER)

    async def by_quiz_performance(self) -> list[Participant]:
        return await self.store.scan(QUIZ_ORDER)
