from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from pydantic.alias_generators import to_camel
from uuid import UUID
from datetime import datetime
from snapquiz.models.participant import Participant

# ints stay ints on the wire; float columns hand back 80.0 for a stored 80
Number = int | float


def _number(v) -> Number:
    if v is None:
        return 0
    return int(v) if float(v).is_integer() else v


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParticipantCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    region: str = Field(default="", max_length=120)
    # "email" was the contact field in the first revision of the API
    contact_id: str = Field(
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("contactId", "contact_id", "email"),
    )


class QuizScoreUpdate(CamelModel):
    score: Number
    time_taken: Number = Field(description="seconds")
    user_comment: str | None = None

    @field_validator("time_taken")
    @classmethod
    def non_negative(cls, v: Number):
        if v < 0:
            raise ValueError("timeTaken must not be negative")
        return v


class SnapScoreUpdate(CamelModel):
    score: Number


class QuizScore(CamelModel):
    score: Number = 0
    time_taken: Number = 0
    user_comment: str | None = None


class ParticipantPublic(CamelModel):
    id: UUID
    name: str
    region: str
    contact_id: str
    quiz_score: QuizScore
    snap_score: Number
    image_url: str
    video_url: str
    file_url: str
    created_at: datetime

    @classmethod
    def from_record(cls, p: Participant) -> "ParticipantPublic":
        return cls(
            id=p.id,
            name=p.name,
            region=p.region,
            contact_id=p.contact_id,
            quiz_score=QuizScore(
                score=_number(p.quiz_score),
                time_taken=_number(p.quiz_time_taken),
                user_comment=p.quiz_comment,
            ),
            snap_score=_number(p.snap_score),
            image_url=p.image_url or "",
            video_url=p.video_url or "",
            file_url=p.file_url or "",
            created_at=p.created_at,
        )


class ScoreUpdateResult(CamelModel):
    message: str
    user: ParticipantPublic


class ImageUploadResult(CamelModel):
    message: str
    image_url: str


class VideoUploadResult(CamelModel):
    message: str
    video_url: str


class FileUploadResult(CamelModel):
    message: str
    file_url: str
    media_type: str
