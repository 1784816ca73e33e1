"""
Tests for form validation rules and email normalization.
"""

import pytest

from leadcapture.exceptions import ValidationFailed
from leadcapture.models import FormInput, Industry, LeadRecord, industry_options
from leadcapture.validation import (
    ensure_valid,
    normalize_email,
    validate_email,
    validate_industry,
    validate_lead_form,
    validate_name,
)


class TestNormalizeEmail:

    def test_lowercases_and_trims(self):
        assert normalize_email(" Foo@Bar.com ") == "foo@bar.com"

    def test_idempotent(self):
        once = normalize_email("  MiXeD@Example.ORG\t")
        assert normalize_email(once) == once

    def test_none_becomes_empty(self):
        assert normalize_email(None) == ""


class TestFieldRules:

    @pytest.mark.parametrize("name,message", [
        ("", "Name is required"),
        ("   ", "Name is required"),
        ("A", "Name must be at least 2 characters"),
        ("x" * 101, "Name must be less than 100 characters"),
    ])
    def test_invalid_names(self, name, message):
        errors = validate_name(name)
        assert [(e.field, e.message) for e in errors] == [("name", message)]

    def test_valid_name(self):
        assert validate_name("Ana") == []

    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a b@c.com", "@c.com", "a@@c.com"])
    def test_invalid_emails(self, email):
        assert validate_email(email)[0].message == "Please enter a valid email address"

    def test_missing_email(self):
        assert validate_email("")[0].message == "Email is required"

    def test_email_checked_after_normalization(self):
        assert validate_email("  Ana@Example.com ") == []

    def test_overlong_email(self):
        assert validate_email("a" * 250 + "@b.com")

    def test_industry_must_be_selected(self):
        assert validate_industry("")[0].message == "Please select your industry"

    def test_unknown_industry(self):
        assert validate_industry("mining")[0].message == "Please select a valid industry"

    def test_every_option_is_valid(self):
        for option in industry_options():
            assert validate_industry(option["value"]) == []


class TestValidateLeadForm:

    def test_valid_form(self):
        form = FormInput(name="Ana", email="a@b.com", industry="technology")
        assert validate_lead_form(form) == []
        ensure_valid(form)

    def test_ensure_valid_raises_with_errors(self):
        with pytest.raises(ValidationFailed) as exc_info:
            ensure_valid(FormInput(email="a@b.com", industry="finance"))
        assert [e.field for e in exc_info.value.errors] == ["name"]


class TestModels:

    def test_industry_labels_in_display_order(self):
        options = industry_options()
        assert options[0] == {"value": "technology", "label": "Technology"}
        assert {"value": "retail", "label": "Retail & E-commerce"} in options
        assert options[-1]["value"] == "other"
        assert len(options) == len(Industry)

    def test_lead_record_is_frozen_and_normalized(self):
        record = LeadRecord(name="Ana", email=" A@B.com ", industry="healthcare")
        assert record.email == "a@b.com"
        assert record.industry == Industry.HEALTHCARE
        with pytest.raises(Exception):
            record.email = "other@b.com"

    def test_lead_record_row_shape(self):
        record = LeadRecord(name="Ana", email="a@b.com", industry=Industry.FINANCE)
        row = record.to_row()
        assert set(row) == {"name", "email", "industry", "submitted_at"}
        assert row["industry"] == "finance"
        assert row["submitted_at"].endswith("+00:00")
