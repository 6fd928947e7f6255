"""
Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. Handlers in ``apps.api.main`` turn them into responses.
"""

from __future__ import annotations

from typing import Any


class PortalError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(PortalError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__()
        self.errors = errors


class NotFound(PortalError):
    status_code = 404
    message = "Record not found"


class InvalidStatus(PortalError):
    status_code = 400
    message = "Invalid status"


class InvalidCredentials(PortalError):
    status_code = 401
    message = "Invalid credentials"


class Unauthorized(PortalError):
    status_code = 401
    message = "Invalid or expired token"


class DuplicateRecord(PortalError):
    status_code = 409
    message = "Record already exists"
