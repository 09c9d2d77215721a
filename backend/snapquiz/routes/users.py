from __future__ import annotations
from fastapi import APIRouter, Depends, UploadFile, File
from snapquiz.deps import get_registry, get_upload_coordinator, get_score_ledger, get_leaderboard
from snapquiz.errors import NotFound
from snapquiz.schemas.participant import (
    ParticipantCreate, ParticipantPublic, QuizScoreUpdate, SnapScoreUpdate, ScoreUpdateResult,
    ImageUploadResult, VideoUploadResult, FileUploadResult,
)
from snapquiz.services.registry import ParticipantRegistry
from snapquiz.services.uploads import UploadCoordinator, Payload
from snapquiz.services.scores import ScoreLedger
from snapquiz.services.leaderboard import Leaderboard

router = APIRouter(prefix="/api/users", tags=["users"])


async def _read_payload(file: UploadFile | str | None) -> Payload | None:
    # a plain form value under the file field counts as no file
    if file is None or isinstance(file, str):
        return None
    data = await file.read()
    return Payload(filename=file.filename or "", content_type=file.content_type or "", data=data)


@router.post("", response_model=ParticipantPublic, status_code=200)
async def register_user(payload: ParticipantCreate, registry: ParticipantRegistry = Depends(get_registry)):
    p = await registry.register(payload.name, payload.region, payload.contact_id)
    return ParticipantPublic.from_record(p)


@router.post("/videos/{user_id}", response_model=VideoUploadResult)
async def upload_video(
    user_id: str,
    video: UploadFile | str | None = File(default=None),
    uploads: UploadCoordinator = Depends(get_upload_coordinator),
):
    out = await uploads.upload_video(user_id, await _read_payload(video))
    return VideoUploadResult(message="Video uploaded successfully", video_url=out.url)


@router.post("/images/{user_id}", response_model=ImageUploadResult)
async def upload_image(
    user_id: str,
    image: UploadFile | str | None = File(default=None),
    uploads: UploadCoordinator = Depends(get_upload_coordinator),
):
    out = await uploads.upload_image(user_id, await _read_payload(image))
    return ImageUploadResult(message="Image uploaded successfully", image_url=out.url)


@router.post("/upload/{user_id}", response_model=FileUploadResult)
async def upload_file(
    user_id: str,
    file: UploadFile | str | None = File(default=None),
    uploads: UploadCoordinator = Depends(get_upload_coordinator),
):
    out = await uploads.upload_file(user_id, await _read_payload(file))
    return FileUploadResult(message="File uploaded successfully", file_url=out.url, media_type=out.kind)


@router.put("/quizscore/{user_id}", response_model=ScoreUpdateResult)
async def update_quiz_score(user_id: str, payload: QuizScoreUpdate, ledger: ScoreLedger = Depends(get_score_ledger)):
    p = await ledger.set_quiz_score(user_id, payload.score, payload.time_taken, payload.user_comment)
    return ScoreUpdateResult(message="Quiz score updated successfully", user=ParticipantPublic.from_record(p))


@router.put("/snapscore/{user_id}", response_model=ScoreUpdateResult)
async def update_snap_score(user_id: str, payload: SnapScoreUpdate, ledger: ScoreLedger = Depends(get_score_ledger)):
    p = await ledger.set_snap_score(user_id, payload.score)
    return ScoreUpdateResult(message="Snap score updated successfully", user=ParticipantPublic.from_record(p))


@router.get("/sort-by-snap-score", response_model=list[ParticipantPublic])
async def sort_by_snap_score(board: Leaderboard = Depends(get_leaderboard)):
    return [ParticipantPublic.from_record(p) for p in await board.by_snap_score()]


@router.get("/sort-by-quiz-score", response_model=list[ParticipantPublic])
async def sort_by_quiz_score(board: Leaderboard = Depends(get_leaderboard)):
    return [ParticipantPublic.from_record(p) for p in await board.by_quiz_performance()]


# declared after the sort-by routes so those paths never match as an id
@router.get("/{user_id}", response_model=ParticipantPublic)
async def get_user(user_id: str, registry: ParticipantRegistry = Depends(get_registry)):
    p = await registry.get(user_id)
    if p is None:
        raise NotFound()
    return ParticipantPublic.from_record(p)
