"""Error taxonomy shared by the store, the gateways and the HTTP handlers.

Every error carries the HTTP status it is rendered with; the application's
exception handlers turn them into ``{"error": message}`` bodies.
"""
from typing import Optional


class MoodScaleError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MoodScaleError):
    status_code = 400


class NotFoundError(MoodScaleError):
    status_code = 404


class ServiceUnavailableError(MoodScaleError):
    """A required integration has no credentials configured."""
    status_code = 500


class UpstreamError(MoodScaleError):
    """A third-party call failed. Call sites pick the status they surface."""
    status_code = 500


class ParseError(MoodScaleError):
    status_code = 500
