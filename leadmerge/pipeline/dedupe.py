"""Collapse leads that share a composite key."""

from typing import Iterable, Optional

import structlog

from leadmerge.core.models import UnifiedLead
from leadmerge.matching.domains import extract_domain

log = structlog.get_logger()

KEY_SEPARATOR = "::"


def resolve_key_field(lead: UnifiedLead, field: str) -> Optional[str]:
    """Value of one key field. Domain is always recomputed from the lead's URLs."""
    if field == "domain":
        return extract_domain(lead.website) or extract_domain(lead.email)
    value = getattr(lead, field, None)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def dedupe_key(lead: UnifiedLead, fields: Iterable[str]) -> str:
    """Join the present key values and lower-case the result."""
    parts = [resolve_key_field(lead, field) for field in fields]
    return KEY_SEPARATOR.join(part for part in parts if part).lower()


def deduplicate(leads: list[UnifiedLead], fields: Iterable[str] = ("email", "domain")) -> list[UnifiedLead]:
    """Keep the first lead seen for each key, in input order.

    Leads with an empty key are always kept. Later duplicates are dropped,
    not merged into the survivor.
    """
    fields = list(fields)
    seen: set[str] = set()
    unique: list[UnifiedLead] = []

    for lead in leads:
        key = dedupe_key(lead, fields)

        if not key:
            unique.append(lead)
            continue

        if key in seen:
            log.info("duplicate_dropped", key=key, lead=lead.provenance)
            continue

        seen.add(key)
        unique.append(lead)

    return unique
