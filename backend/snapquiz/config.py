from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "snapquiz-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "SnapQuiz")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", os.getenv("API_PORT", "3000")))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/snapquiz_dev")
    db_echo: bool = os.getenv("DB_ECHO", "0") == "1"
    s3_endpoint: str = os.getenv("S3_ENDPOINT", "http://minio:9000")
    s3_access_key: str = os.getenv("S3_ACCESS_KEY", "minioadmin")
    s3_secret_key: str = os.getenv("S3_SECRET_KEY", "minioadmin")
    s3_region: str | None = os.getenv("S3_REGION") or None
    s3_bucket_uploads: str = os.getenv("S3_BUCKET_UPLOADS", "snapquiz-uploads-dev")
    # Base for public locators; falls back to the endpoint (path-style URLs)
    s3_public_url: str = os.getenv("S3_PUBLIC_URL", "")
    s3_ensure_bucket: bool = os.getenv("S3_ENSURE_BUCKET", "1") == "1"

    # Size ceilings
    max_upload_mb: int = int(os.getenv("MAX_UPLOAD_MB", "100"))
    max_body_mb: int = int(os.getenv("MAX_BODY_MB", "200"))

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def max_body_bytes(self) -> int:
        return self.max_body_mb * 1024 * 1024

settings = Settings()
