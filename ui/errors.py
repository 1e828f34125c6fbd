from __future__ import annotations

from typing import Optional


class AuditError(Exception):
    """Base class for errors surfaced to the user as the form's error message."""

    message = "Audit failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class ValidationError(AuditError):
    message = "Form is incomplete"


class MissingFieldError(ValidationError):
    _LABELS = {"url": "URL", "name": "Name", "email": "Email"}

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{self._LABELS.get(field, field.capitalize())} is required.")


class FetchError(AuditError):
    message = "Failed to fetch audit data"


class MetricMissingError(AuditError):
    message = "Total byte weight not found in API response."


class SaveError(AuditError):
    message = "Failed to save data"


class SubmissionInProgressError(AuditError):
    message = "An analysis is already running."
