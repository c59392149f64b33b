"""Contact payloads for the CRM sync step."""

import re
from typing import Iterable, Optional

import structlog

from leadmerge.core.models import UnifiedLead

log = structlog.get_logger()

_CITY_STATE_RE = re.compile(r"([A-Za-z\s]+),\s*([A-Z]{2})\b")


def parse_location(location: Optional[str]) -> dict:
    """Split "City, ST" into city and state; anything else is kept as the address."""
    if not location:
        return {"address": None, "city": None, "state": None}

    match = _CITY_STATE_RE.search(location)
    if match:
        return {"address": None, "city": " ".join(match.group(1).split()), "state": match.group(2)}

    return {"address": location, "city": None, "state": None}


def map_lead_to_crm_contact(lead: UnifiedLead, source: str = "Cold Email Campaign") -> dict:
    """Build a CRM contact payload from a final lead.

    Raises:
        ValueError: if the lead lacks a full name or any way to reach it.
    """
    if not lead.first_name or not lead.last_name:
        raise ValueError("first_name and last_name are required for a CRM contact")
    if not lead.email and not lead.phone:
        raise ValueError("Either email or phone is required for a CRM contact")

    tags = []
    if lead.vertical or lead.industry:
        tags.append(lead.vertical or lead.industry)
    tags.append("cold-outreach")
    tags.append(lead.lead_source.value)

    contact = {
        "firstName": lead.first_name,
        "lastName": lead.last_name,
        "email": lead.email,
        "phone": lead.phone,
        "companyName": lead.company_name,
        "website": lead.website,
        "source": source,
        "tags": tags,
        "customFields": {
            "lead_source": source,
            "quality_score": lead.quality_score or 0,
            "vertical": lead.vertical or lead.industry or "unknown",
            "company_size": lead.company_size_range,
            "enrichment_date": lead.enrichment_timestamp.isoformat(),
        },
        **parse_location(lead.standardized_location or lead.location),
    }

    return {key: value for key, value in contact.items() if value is not None}


def map_leads_to_crm_contacts(leads: Iterable[UnifiedLead], source: str = "Cold Email Campaign") -> list[dict]:
    """Map every lead that qualifies as a CRM contact, logging the rest."""
    contacts = []
    for lead in leads:
        try:
            contacts.append(map_lead_to_crm_contact(lead, source))
        except ValueError as e:
            log.info("crm_contact_skipped", lead=lead.provenance, reason=str(e))
    return contacts
