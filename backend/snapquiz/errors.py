from __future__ import annotations
from typing import Any


class ServiceError(Exception):
    """Base for failures that map onto a client-facing response."""
    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())
        self.message = message or self.default_message()

    @classmethod
    def default_message(cls) -> str:
        return cls.code.replace("_", " ").capitalize()

    def payload(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message}


class NotFound(ServiceError):
    status_code = 404
    code = "not_found"

    @classmethod
    def default_message(cls) -> str:
        return "User not found"


class DuplicateContact(ServiceError):
    status_code = 409
    code = "duplicate_contact"

    def __init__(self, existing: Any, message: str | None = None):
        super().__init__(message or "User with this contact already exists")
        self.existing = existing


class MissingPayload(ServiceError):
    status_code = 400
    code = "missing_payload"

    @classmethod
    def default_message(cls) -> str:
        return "No file uploaded"


class UnsupportedMediaType(ServiceError):
    status_code = 400
    code = "unsupported_media_type"

    @classmethod
    def default_message(cls) -> str:
        return "Unsupported file type"


class PayloadTooLarge(ServiceError):
    status_code = 413
    code = "payload_too_large"


class StorageUnavailable(ServiceError):
    status_code = 500
    code = "storage_unavailable"


class PersistenceError(ServiceError):
    status_code = 500
    code = "persistence_error"
