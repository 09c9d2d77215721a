from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from snapquiz.config import settings
from snapquiz.db import engine
from snapquiz.deps import get_blob_store
from snapquiz.errors import ServiceError, DuplicateContact, PayloadTooLarge
from snapquiz.logging_setup import configure_logging
from snapquiz.routes.system import router as system_router
from snapquiz.routes.users import router as users_router
from snapquiz.schemas.participant import ParticipantPublic
from snapquiz.services.storage import MinioBlobStore
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    if settings.s3_ensure_bucket:
        blobs = get_blob_store()
        if isinstance(blobs, MinioBlobStore):
            await run_in_threadpool(blobs.ensure_bucket)
    yield
    # Shutdown
    await engine.dispose()
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API for participants, media uploads and leaderboards",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(users_router)

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    body = exc.payload()
    if isinstance(exc, DuplicateContact) and exc.existing is not None:
        body["user"] = ParticipantPublic.from_record(exc.existing).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=exc.status_code, content=body)

@app.middleware("http")
async def catch_unhandled(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        log.exception("request.unhandled", method=request.method, path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "internal_error", "message": "Internal server error"})

@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    # declared length only; chunked bodies without Content-Length are not counted
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_body_bytes:
        exc = PayloadTooLarge(f"Request body exceeds {settings.max_body_mb} MB limit")
        return JSONResponse(status_code=exc.status_code, content=exc.payload())
    return await call_next(request)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        response: Response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Request-ID"] = rid
    return response
