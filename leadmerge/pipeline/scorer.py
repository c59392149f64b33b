"""Deterministic 0-100 quality score for validated leads."""

from typing import Optional

from leadmerge.core.config import ScoringConfig
from leadmerge.core.models import LeadSource, LeadStateError, UnifiedLead, ValidationStatus
from leadmerge.pipeline.validator import ROLE_BASED_EMAIL

MAX_SCORE = 100


def calculate_quality_score(lead: UnifiedLead, config: Optional[ScoringConfig] = None) -> int:
    """Sum the configured weights for every signal present on the lead.

    Raises:
        LeadStateError: if the lead has not been through validation.
    """
    if lead.validation_status == ValidationStatus.UNVALIDATED:
        raise LeadStateError(f"Cannot score unvalidated lead {lead.provenance}")

    config = config or ScoringConfig()
    weights = config.weights
    score = 0

    if lead.email and lead.validation_status == ValidationStatus.VALID:
        score += weights.valid_email
        if not lead.email_inferred:
            score += weights.verified_email
        if ROLE_BASED_EMAIL not in lead.validation_reasons:
            score += weights.personal_email

    if lead.company_name:
        score += weights.company_name
    if lead.website or lead.domain:
        score += weights.website

    if lead.phone:
        score += weights.phone
    if lead.first_name and lead.last_name:
        score += weights.full_name

    if lead.rating is not None and lead.rating >= config.rating_threshold:
        score += weights.high_rating
    if lead.review_count is not None and lead.review_count >= config.review_threshold:
        score += weights.many_reviews

    if lead.profile_url:
        score += weights.profile_url
    if lead.recent_activity:
        score += weights.recent_activity

    if lead.lead_source == LeadSource.MERGED:
        score += weights.merged_source
    if lead.domain_has_mx is True:
        score += weights.domain_has_mx

    return max(0, min(score, MAX_SCORE))


def score_lead(lead: UnifiedLead, config: Optional[ScoringConfig] = None) -> UnifiedLead:
    """Compute and store the quality score on the lead."""
    lead.quality_score = calculate_quality_score(lead, config)
    return lead
