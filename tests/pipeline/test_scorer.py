"""Tests for lead quality scoring."""

import pytest

from leadmerge.core.config import ScoreWeights, ScoringConfig
from leadmerge.core.models import LeadSource, LeadStateError, ValidationStatus
from leadmerge.pipeline.scorer import calculate_quality_score, score_lead


def _full_lead(make_lead, **overrides):
    fields = dict(
        first_name="Sam",
        last_name="Lee",
        company_name="Acme",
        website="acme.io",
        email="sam@acme.io",
        phone="+15125551234",
        rating=4.5,
        review_count=20,
        profile_url="https://www.linkedin.com/in/samlee",
        recent_activity=["posted about hiring"],
        lead_source=LeadSource.MERGED,
        domain_has_mx=True,
        validation_status=ValidationStatus.VALID,
    )
    fields.update(overrides)
    return make_lead(**fields)


def test_fully_populated_lead_scores_100(make_lead):
    assert calculate_quality_score(_full_lead(make_lead)) == 100


def test_score_is_capped_at_100(make_lead):
    config = ScoringConfig(weights=ScoreWeights(valid_email=90))
    assert calculate_quality_score(_full_lead(make_lead), config) == 100


def test_unvalidated_lead_cannot_be_scored(make_lead):
    lead = _full_lead(make_lead, validation_status=ValidationStatus.UNVALIDATED)

    with pytest.raises(LeadStateError):
        calculate_quality_score(lead)


def test_invalid_lead_gets_no_email_points(make_lead):
    lead = make_lead(email="bob@mailinator.com", validation_status=ValidationStatus.INVALID)
    # only the email domain counts, as a website signal
    assert calculate_quality_score(lead) == 10


def test_inferred_and_role_emails_lose_bonuses(make_lead):
    lead = make_lead(
        email="info@acme.io",
        email_inferred=True,
        validation_status=ValidationStatus.VALID,
        validation_reasons=["role_based_email"],
    )
    # valid email + website (from the email domain)
    assert calculate_quality_score(lead) == 40 + 10


def test_rating_and_review_thresholds(make_lead):
    base = dict(validation_status=ValidationStatus.VALID)
    low = make_lead(rating=3.9, review_count=9, **base)
    high = make_lead(rating=4.0, review_count=10, **base)

    assert calculate_quality_score(high) - calculate_quality_score(low) == 8 + 7


def test_mx_points_only_when_confirmed(make_lead):
    base = dict(email="sam@acme.io", validation_status=ValidationStatus.VALID)
    unknown = make_lead(domain_has_mx=None, **base)
    missing = make_lead(domain_has_mx=False, **base)
    confirmed = make_lead(domain_has_mx=True, **base)

    # valid + verified + personal + website from the email domain
    assert calculate_quality_score(unknown) == 65
    assert calculate_quality_score(missing) == 65
    assert calculate_quality_score(confirmed) == 70


def test_score_lead_stores_result(make_lead):
    lead = _full_lead(make_lead)
    score_lead(lead)
    assert lead.quality_score == 100


def test_empty_valid_lead_scores_zero(make_lead):
    lead = make_lead(validation_status=ValidationStatus.VALID)
    assert calculate_quality_score(lead) == 0
