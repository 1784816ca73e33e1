"""
LeadCapture Pydantic Models
===========================

Form input, validation errors, stored lead records and user notifications.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class Industry(str, Enum):
    """Industries offered in the form's select box."""
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    EDUCATION = "education"
    RETAIL = "retail"
    MANUFACTURING = "manufacturing"
    CONSULTING = "consulting"
    OTHER = "other"

    @property
    def label(self) -> str:
        return INDUSTRY_LABELS[self]


INDUSTRY_LABELS: Dict[Industry, str] = {
    Industry.TECHNOLOGY: "Technology",
    Industry.HEALTHCARE: "Healthcare",
    Industry.FINANCE: "Finance",
    Industry.EDUCATION: "Education",
    Industry.RETAIL: "Retail & E-commerce",
    Industry.MANUFACTURING: "Manufacturing",
    Industry.CONSULTING: "Consulting",
    Industry.OTHER: "Other",
}


def industry_options() -> List[Dict[str, str]]:
    """Select-box options in display order: [{"value": ..., "label": ...}]"""
    return [{"value": industry.value, "label": industry.label} for industry in Industry]


class NotificationKind(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class SubmissionStatus(str, Enum):
    """Outcome of one call to SubmissionWorkflow.submit()."""
    SUCCEEDED = "succeeded"
    INVALID = "invalid"
    REJECTED = "rejected"
    SEND_FAILED = "send_failed"
    PERSIST_FAILED = "persist_failed"
    FAILED = "failed"


# =============================================================================
# Form Models
# =============================================================================

FORM_FIELDS = ("name", "email", "industry")


class FormInput(BaseModel):
    """
    Raw values typed into the form.

    `industry` stays a plain string so an unselected value ("") can be held
    until validation runs.
    """
    name: str = ""
    email: str = ""
    industry: str = ""


class FieldError(BaseModel):
    """A validation message attached to one form field."""
    field: str
    message: str


# =============================================================================
# Lead Records
# =============================================================================

class LeadRecord(BaseModel):
    """
    A successfully submitted lead.

    Created once per successful submission and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    email: str = Field(..., description="Lower-cased, trimmed email")
    industry: Industry
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    def to_row(self) -> Dict[str, str]:
        """Row shape of the `leads` table."""
        return {
            "name": self.name,
            "email": self.email,
            "industry": self.industry.value,
            "submitted_at": self.submitted_at.isoformat(),
        }


# =============================================================================
# Notifications
# =============================================================================

class Notification(BaseModel):
    """Toast shown to the user."""
    title: str
    description: str = ""
    kind: NotificationKind = NotificationKind.DEFAULT
