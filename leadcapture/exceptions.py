"""
LeadCapture error taxonomy.

Every failure of a submission attempt maps to one of these classes. The
workflow handles all of them locally; none escape `SubmissionWorkflow.submit`.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .models import FieldError

# Postgres unique_violation, returned by PostgREST on duplicate keys
UNIQUE_VIOLATION_CODE = "23505"


class LeadCaptureError(Exception):
    """Base class for lead-capture failures."""


class ValidationFailed(LeadCaptureError):
    """One or more form fields failed validation."""

    def __init__(self, errors: List["FieldError"]):
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Invalid fields: {fields}")


class AdmissionRejected(LeadCaptureError):
    """The submission guard refused a request id."""

    def __init__(self, request_id: str, reason: str):
        self.request_id = request_id
        self.reason = reason
        super().__init__(f"Request {request_id} rejected: {reason}")


class ConfirmationSendError(LeadCaptureError):
    """The confirmation email could not be sent."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LeadPersistenceError(LeadCaptureError):
    """Saving the lead failed. `code` is the database error code, if any."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(f"[{code}] {message}" if code else message)

    @property
    def is_conflict(self) -> bool:
        return self.code == UNIQUE_VIOLATION_CODE
