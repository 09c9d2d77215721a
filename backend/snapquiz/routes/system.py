from __future__ import annotations
from fastapi import APIRouter, Request
from datetime import datetime, timezone
from snapquiz.config import settings

router = APIRouter(tags=["system"])


@router.get("/health")
async def health(request: Request):
    """Liveness only; the record and blob stores are not pinged."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "request_id": request.state.request_id,
    }


@router.get("/version")
async def version():
    return {
        "name": settings.app_name,
        "display_name": settings.app_display_name,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
        "env": settings.environment,
        "limits": {
            "max_upload_mb": settings.max_upload_mb,
            "max_body_mb": settings.max_body_mb,
        },
    }
