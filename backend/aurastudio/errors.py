# backend/aurastudio/errors.py
"""
Error taxonomy shared by every route.

Each error carries the HTTP status it is reported with; the exception
handler in main.py renders it as {"error": message, "details": ...}.
"""

from typing import Any, Optional


class AuraStudioError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(AuraStudioError):
    """Deployment secrets are missing. Raised before any provider call."""

    status_code = 500


class ValidationError(AuraStudioError):
    """The client sent a malformed request body."""

    status_code = 400


class PayloadTooLarge(AuraStudioError):
    status_code = 413


class UpstreamError(AuraStudioError):
    """The provider rejected or failed the call."""

    status_code = 502


class UnexpectedResponseError(AuraStudioError):
    status_code = 502


class MalformedOutputError(AuraStudioError):
    status_code = 502


class MissingGenerationPromptError(AuraStudioError):
    status_code = 502


class NoImageReturnedError(UpstreamError):
    status_code = 502


class GenerationError(AuraStudioError):
    status_code = 500


class UploadError(AuraStudioError):
    status_code = 500
