"""Tests for campaign-platform export formats."""

import pytest
from pydantic import ValidationError

from leadmerge.core.config import ExportConfig, ExportTarget
from leadmerge.core.models import LeadSource
from leadmerge.export.platforms import format_exports, format_for_instantly, format_for_smartlead, lead_tags


@pytest.fixture
def scored_lead(make_lead):
    return make_lead(
        first_name="Sam",
        last_name="Lee",
        company_name="Acme",
        email="sam.lee@acme.io",
        website="acme.io",
        phone="+15125551234",
        job_title="Founder",
        location="1 Main St, Austin, TX",
        standardized_location="Austin, TX",
        company_size_range="10-50",
        vertical="software",
        rating=4.5,
        lead_source=LeadSource.MERGED,
        quality_score=95,
    )


def test_instantly_row(scored_lead):
    [row] = format_for_instantly([scored_lead])

    assert row == {
        "email": "sam.lee@acme.io",
        "firstName": "Sam",
        "lastName": "Lee",
        "companyName": "Acme",
        "customField1": "Founder",
        "customField2": "10-50",
        "customField3": "Austin, TX",
        "customField4": "software",
        "customField5": "+15125551234",
        "customField6": "acme.io",
        "tags": "software,merged,score:95",
    }


def test_smartlead_row(scored_lead):
    [row] = format_for_smartlead([scored_lead])

    assert row["Email"] == "sam.lee@acme.io"
    assert row["Company"] == "Acme"
    assert row["Location"] == "Austin, TX"
    assert row["Lead Source"] == "merged"
    assert row["Quality Score"] == 95
    assert row["Google Rating"] == 4.5
    assert row["LinkedIn Profile"] == ""


def test_missing_values_become_empty_strings(make_lead):
    [row] = format_for_instantly([make_lead(email="sam@acme.io")])

    assert row["firstName"] == ""
    assert row["customField3"] == ""
    assert row["tags"] == "profile_only"


def test_tags_skip_missing_parts(make_lead):
    assert lead_tags(make_lead(quality_score=0)) == "profile_only,score:0"


def test_format_exports_by_target(scored_lead):
    assert set(format_exports([scored_lead], ExportTarget.INSTANTLY)) == {"instantly"}
    assert set(format_exports([scored_lead], ExportTarget.SMARTLEAD)) == {"smartlead"}
    assert set(format_exports([scored_lead], ExportTarget.BOTH)) == {"instantly", "smartlead"}


def test_export_order_follows_input(make_lead):
    leads = [make_lead(email=f"user{i}@acme.io") for i in range(3)]
    rows = format_exports(leads, ExportTarget.INSTANTLY)["instantly"]
    assert [row["email"] for row in rows] == ["user0@acme.io", "user1@acme.io", "user2@acme.io"]


def test_unknown_target_rejected():
    with pytest.raises(ValidationError):
        ExportConfig(target="mailchimp")
