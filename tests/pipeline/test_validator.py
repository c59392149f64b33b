"""Tests for lead validation."""

from leadmerge.core.config import ValidationConfig
from leadmerge.core.models import ValidationStatus
from leadmerge.pipeline.validator import (
    check_lead,
    is_disposable_email,
    is_role_based_email,
    is_valid_email_format,
    validate_lead,
)


def test_email_format():
    assert is_valid_email_format("sam.lee@acme.io") is True
    assert is_valid_email_format("not-an-email") is False
    assert is_valid_email_format("sam@@acme.io") is False


def test_disposable_and_role_checks():
    config = ValidationConfig()
    assert is_disposable_email("bob@Mailinator.com", config.disposable_domains) is True
    assert is_disposable_email("bob@acme.io", config.disposable_domains) is False
    assert is_role_based_email("Info@corp.com", config.role_prefixes) is True
    assert is_role_based_email("jane@corp.com", config.role_prefixes) is False


def test_complete_lead_is_valid(make_lead):
    lead = make_lead(first_name="Sam", last_name="Lee", company_name="Acme", email="sam.lee@acme.io")

    validate_lead(lead)

    assert lead.validation_status == ValidationStatus.VALID
    assert lead.validation_reasons == []


def test_missing_email_is_invalid(make_lead):
    lead = make_lead(first_name="Sam", last_name="Lee", company_name="Acme")

    validate_lead(lead)

    assert lead.validation_status == ValidationStatus.INVALID
    assert lead.validation_reasons == ["missing_email"]


def test_role_based_email_is_a_soft_warning(make_lead):
    lead = make_lead(company_name="Corp", email="info@corp.com")

    validate_lead(lead)

    assert lead.validation_status == ValidationStatus.VALID
    assert lead.validation_reasons == ["role_based_email", "missing_name"]


def test_disposable_email_is_invalid(make_lead):
    lead = make_lead(first_name="Bob", last_name="Ray", company_name="Acme", email="bob@mailinator.com")

    validate_lead(lead)

    assert lead.validation_status == ValidationStatus.INVALID
    assert lead.validation_reasons == ["disposable_email"]


def test_missing_company_name_is_invalid(make_lead):
    lead = make_lead(first_name="Sam", last_name="Lee", email="sam.lee@acme.io")

    validate_lead(lead)

    assert lead.validation_status == ValidationStatus.INVALID
    assert "missing_company_name" in lead.validation_reasons


def test_reasons_are_ordered(make_lead):
    lead = make_lead(email="not-an-email")
    assert check_lead(lead) == ["invalid_email_format", "missing_company_name", "missing_name"]


def test_custom_role_prefixes(make_lead):
    lead = make_lead(first_name="Sam", last_name="Lee", company_name="Acme", email="sam@acme.io")
    config = ValidationConfig(role_prefixes=["sam"])

    assert check_lead(lead, config) == ["role_based_email"]


def test_validation_leaves_contact_fields_alone(make_lead):
    lead = make_lead(company_name="Acme", email="  SAM@ACME.IO ", phone="555")

    validate_lead(lead)

    assert lead.email == "  SAM@ACME.IO "
    assert lead.phone == "555"
