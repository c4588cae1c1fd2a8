from __future__ import annotations  # Error taxonomy shared by the interview and suggestion flows

from typing import Any


class ReadySetHireError(Exception):
    """Base error carrying an HTTP status and a machine-readable code."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, *, detail: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class SchemaValidationError(ReadySetHireError):
    """Model output did not match the suggestion schema; the whole payload is rejected."""

    code = "SCHEMA_VALIDATION"
    status_code = 502


class NetworkError(ReadySetHireError):
    """Transport or HTTP failure talking to the store or the question proxy."""

    code = "NETWORK"
    status_code = 502


class PersistenceError(ReadySetHireError):
    """A write to the store failed; the session walk must not move forward."""

    code = "PERSISTENCE"
    status_code = 503


class NoQuestionsError(ReadySetHireError):
    code = "NO_QUESTIONS"
    status_code = 409


class DeviceUnavailableError(ReadySetHireError):
    """Microphone missing or permission denied."""

    code = "DEVICE_UNAVAILABLE"
    status_code = 409


class CaptureStateError(ReadySetHireError):
    code = "CAPTURE_STATE"
    status_code = 409


class SessionClosedError(ReadySetHireError):
    code = "SESSION_CLOSED"
    status_code = 409


class NotFoundError(ReadySetHireError):
    code = "NOT_FOUND"
    status_code = 404


__all__ = [
    "ReadySetHireError",
    "SchemaValidationError",
    "NetworkError",
    "PersistenceError",
    "NoQuestionsError",
    "DeviceUnavailableError",
    "CaptureStateError",
    "NotFoundError",
    "SessionClosedError",
]
