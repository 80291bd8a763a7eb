from __future__ import annotations

from fastapi import status


class TrackerError(Exception):
    """Base class for failures that are reported to HTTP clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthorized(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentials(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid password"


class InvalidShape(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid data"


class BackendUnavailable(TrackerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to save"
