"""Run summary report."""

from collections import Counter
from datetime import datetime
from typing import Any, Iterable

from leadmerge.core.models import LeadSource, UnifiedLead, ValidationStatus
from leadmerge.pipeline.validator import ROLE_BASED_EMAIL


def _pct(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def count_by_field(leads: Iterable[UnifiedLead], field: str) -> dict[str, int]:
    """Count leads by any attribute; missing values count as "unknown"."""
    counts: Counter = Counter()
    for lead in leads:
        value = getattr(lead, field, None)
        if hasattr(value, "value"):
            value = value.value
        counts[str(value) if value not in (None, "") else "unknown"] += 1
    return dict(counts)


def rejected_entry(lead: UnifiedLead) -> dict:
    return {
        "provenance": lead.provenance,
        "company_name": lead.company_name,
        "email": lead.email,
        "lead_source": lead.lead_source.value,
        "reasons": list(lead.validation_reasons),
    }


def build_report(
    profile_count: int,
    directory_count: int,
    merged_count: int,
    validated: list[UnifiedLead],
    final_leads: list[UnifiedLead],
    below_threshold: int,
    duplicates_removed: int,
    generated_at: datetime,
    high_quality_score: int = 80,
    medium_quality_score: int = 50,
    group_by: str = "vertical",
) -> dict[str, Any]:
    """Summarize a run: inputs, validation, quality buckets and sources.

    Args:
        validated: every merged lead after validation, valid or not
        final_leads: leads that survived the threshold and deduplication
        medium_quality_score: lower bound of the medium bucket
    """
    total_input = profile_count + directory_count
    valid = [lead for lead in validated if lead.validation_status == ValidationStatus.VALID]
    rejected = [lead for lead in validated if lead.validation_status == ValidationStatus.INVALID]

    reason_counts: Counter = Counter()
    for lead in rejected:
        reason_counts.update(lead.validation_reasons)

    scores = [lead.quality_score for lead in final_leads if lead.quality_score is not None]

    return {
        "summary": {
            "profile_input": profile_count,
            "directory_input": directory_count,
            "merged_leads": merged_count,
            "final_output": len(final_leads),
            "below_threshold": below_threshold,
            "duplicates_removed": duplicates_removed,
            "deduplication_rate_pct": _pct(total_input - len(final_leads), total_input),
        },
        "validation": {
            "total_validated": len(validated),
            "valid": len(valid),
            "rejected": len(rejected),
            "pass_rate_pct": _pct(len(valid), len(validated)),
            "inferred_emails": sum(1 for lead in final_leads if lead.email_inferred),
            "role_based_emails": sum(1 for lead in final_leads if ROLE_BASED_EMAIL in lead.validation_reasons),
            "rejection_reasons": dict(reason_counts),
            "rejected_leads": [rejected_entry(lead) for lead in rejected],
        },
        "quality": {
            "average_score": int(sum(scores) / len(scores) + 0.5) if scores else 0,
            "high": sum(1 for score in scores if score >= high_quality_score),
            "medium": sum(1 for score in scores if medium_quality_score <= score < high_quality_score),
            "low": sum(1 for score in scores if score < medium_quality_score),
        },
        "sources": {
            "profile_only": sum(1 for lead in final_leads if lead.lead_source == LeadSource.PROFILE_ONLY),
            "directory_only": sum(1 for lead in final_leads if lead.lead_source == LeadSource.DIRECTORY_ONLY),
            "merged": sum(1 for lead in final_leads if lead.lead_source == LeadSource.MERGED),
        },
        f"by_{group_by}": count_by_field(final_leads, group_by),
        "timestamp": generated_at.isoformat(),
    }
