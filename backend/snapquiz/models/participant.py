from __future__ import annotations
import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Float, Text, DateTime, Index, func
from sqlalchemy.dialects.postgresql import UUID
from snapquiz.db import Base


class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    region: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    # exact-string match, no case or whitespace folding
    contact_id: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # Quiz score sub-record, always present and zeroed at creation
    quiz_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    quiz_time_taken: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # seconds
    quiz_comment: Mapped[str | None] = mapped_column(Text(), nullable=True)

    snap_score: Mapped[float] = mapped_column(Float, nullable=False, default=0, index=True)

    # Locators are "" until the first successful upload
    image_url: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    video_url: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    file_url: Mapped[str] = mapped_column(Text(), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_participants_quiz_rank", "quiz_score", "quiz_time_taken"),
    )


LOCATOR_FIELDS = ("image_url", "video_url", "file_url")
SCORE_FIELDS = ("quiz_score", "quiz_time_taken", "quiz_comment", "snap_score")


def new_participant(name: str, region: str, contact_id: str) -> Participant:
    """
    Build a transient Participant with every default filled in explicitly.
    Column defaults only apply on flush, so stores that never flush still
    see zeroed scores and empty locators.
    """
    return Participant(
        id=uuid.uuid4(),
        name=name,
        region=region,
        contact_id=contact_id,
        quiz_score=0,
        quiz_time_taken=0,
        quiz_comment=None,
        snap_score=0,
        image_url="",
        video_url="",
        file_url="",
        created_at=datetime.now(timezone.utc),
    )
