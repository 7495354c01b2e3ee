# unievent/core/errors.py
from __future__ import annotations
from typing import Any, Optional


class AppError(Exception):
    """Base for every error that maps onto an HTTP response."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, *, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid input."


class Unauthenticated(AppError):
    status_code = 401
    code = "UNAUTHENTICATED"
    message = "Access token required."


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Insufficient permissions."


class InvalidProof(Forbidden):
    code = "INVALID_PROOF"
    message = "Invalid QR code."


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found."


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "Conflict."


class AlreadyCheckedIn(Conflict):
    code = "ALREADY_CHECKED_IN"
    message = "Already checked in."


class Internal(AppError):
    pass
