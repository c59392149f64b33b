"""Flat export schemas for the Instantly and SmartLead campaign platforms."""

from typing import Any, Iterable

from leadmerge.core.config import ExportTarget
from leadmerge.core.models import UnifiedLead


def _text(value: Any) -> Any:
    return "" if value is None else value


def lead_tags(lead: UnifiedLead) -> str:
    """Comma-joined vertical, source and score tags, skipping empty parts."""
    score = f"score:{lead.quality_score}" if lead.quality_score is not None else None
    parts = [lead.vertical, lead.lead_source.value, score]
    return ",".join(part for part in parts if part)


def format_for_instantly(leads: Iterable[UnifiedLead]) -> list[dict]:
    """Map leads onto Instantly's lead upload columns."""
    return [
        {
            "email": _text(lead.email),
            "firstName": _text(lead.first_name),
            "lastName": _text(lead.last_name),
            "companyName": _text(lead.company_name),
            "customField1": _text(lead.job_title),
            "customField2": _text(lead.company_size_range),
            "customField3": _text(lead.standardized_location or lead.location),
            "customField4": _text(lead.industry or lead.vertical),
            "customField5": _text(lead.phone),
            "customField6": _text(lead.website),
            "tags": lead_tags(lead),
        }
        for lead in leads
    ]


def format_for_smartlead(leads: Iterable[UnifiedLead]) -> list[dict]:
    """Map leads onto SmartLead's CSV import columns."""
    return [
        {
            "Email": _text(lead.email),
            "First Name": _text(lead.first_name),
            "Last Name": _text(lead.last_name),
            "Company": _text(lead.company_name),
            "Industry": _text(lead.industry or lead.vertical),
            "Location": _text(lead.standardized_location or lead.location),
            "Phone": _text(lead.phone),
            "Website": _text(lead.website),
            "Job Title": _text(lead.job_title),
            "Company Size": _text(lead.company_size_range),
            "Lead Source": lead.lead_source.value,
            "Quality Score": _text(lead.quality_score),
            "LinkedIn Profile": _text(lead.profile_url),
            "Google Rating": _text(lead.rating),
        }
        for lead in leads
    ]


PLATFORM_FORMATTERS = {
    ExportTarget.INSTANTLY: format_for_instantly,
    ExportTarget.SMARTLEAD: format_for_smartlead,
}


def format_exports(leads: list[UnifiedLead], target: ExportTarget) -> dict[str, list[dict]]:
    """Build the export lists selected by target, keyed by platform name."""
    target = ExportTarget(target)
    if target == ExportTarget.BOTH:
        selected = [ExportTarget.INSTANTLY, ExportTarget.SMARTLEAD]
    else:
        selected = [target]
    return {platform.value: PLATFORM_FORMATTERS[platform](leads) for platform in selected}
