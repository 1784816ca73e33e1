"""
Form validation utilities.

Field rules for the lead-capture form plus the email normalization applied
before anything leaves the client.
"""

import re
from typing import List

from leadcapture.exceptions import ValidationFailed
from leadcapture.models import FieldError, FormInput, Industry

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254

# local@domain.tld, no whitespace, single @
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_INDUSTRY_VALUES = {industry.value for industry in Industry}


def normalize_email(email: str) -> str:
    """
    Normalize an email for sending and storage.

    Example:
        >>> normalize_email(" Foo@Bar.com ")
        'foo@bar.com'
    """
    return (email or "").lower().strip()


def validate_name(name: str) -> List[FieldError]:
    value = (name or "").strip()
    if not value:
        return [FieldError(field="name", message="Name is required")]
    if len(value) < NAME_MIN_LENGTH:
        return [FieldError(field="name", message=f"Name must be at least {NAME_MIN_LENGTH} characters")]
    if len(value) > NAME_MAX_LENGTH:
        return [FieldError(field="name", message=f"Name must be less than {NAME_MAX_LENGTH} characters")]
    return []


def validate_email(email: str) -> List[FieldError]:
    value = normalize_email(email)
    if not value:
        return [FieldError(field="email", message="Email is required")]
    if len(value) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(value):
        return [FieldError(field="email", message="Please enter a valid email address")]
    return []


def validate_industry(industry: str) -> List[FieldError]:
    if not industry:
        return [FieldError(field="industry", message="Please select your industry")]
    if industry not in _INDUSTRY_VALUES:
        return [FieldError(field="industry", message="Please select a valid industry")]
    return []


def validate_lead_form(form: FormInput) -> List[FieldError]:
    """
    Validate every field of the form.

    Returns:
        List of FieldError, empty when the form is valid. Fields appear in
        form order: name, email, industry.
    """
    return [
        *validate_name(form.name),
        *validate_email(form.email),
        *validate_industry(form.industry),
    ]


def ensure_valid(form: FormInput) -> None:
    """Raise ValidationFailed if `form` has any field errors."""
    errors = validate_lead_form(form)
    if errors:
        raise ValidationFailed(errors)
