"""Contactability and data-quality checks for unified leads."""

from typing import Iterable, Optional

import structlog
from email_validator import EmailNotValidError, validate_email

from leadmerge.core.config import ValidationConfig
from leadmerge.core.models import UnifiedLead, ValidationStatus
from leadmerge.matching.domains import extract_domain

log = structlog.get_logger()

MISSING_EMAIL = "missing_email"
INVALID_EMAIL_FORMAT = "invalid_email_format"
DISPOSABLE_EMAIL = "disposable_email"
ROLE_BASED_EMAIL = "role_based_email"
MISSING_COMPANY_NAME = "missing_company_name"
MISSING_NAME = "missing_name"

HARD_FAILURES = frozenset({
    MISSING_EMAIL,
    INVALID_EMAIL_FORMAT,
    DISPOSABLE_EMAIL,
    MISSING_COMPANY_NAME,
})


def is_valid_email_format(email: str) -> bool:
    """Syntax-only check; no DNS or deliverability lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_disposable_email(email: str, disposable_domains: Iterable[str]) -> bool:
    domain = extract_domain(email)
    return domain in set(disposable_domains) if domain else False


def is_role_based_email(email: str, role_prefixes: Iterable[str]) -> bool:
    local_part = email.split("@", 1)[0].lower()
    return local_part in set(role_prefixes)


def check_lead(lead: UnifiedLead, config: Optional[ValidationConfig] = None) -> list[str]:
    """Return the ordered list of reason codes for a lead."""
    config = config or ValidationConfig()
    reasons: list[str] = []

    if not lead.email:
        reasons.append(MISSING_EMAIL)
    else:
        if not is_valid_email_format(lead.email):
            reasons.append(INVALID_EMAIL_FORMAT)
        if is_disposable_email(lead.email, config.disposable_domains):
            reasons.append(DISPOSABLE_EMAIL)
        if is_role_based_email(lead.email, config.role_prefixes):
            reasons.append(ROLE_BASED_EMAIL)

    # Directory listings carry the business name as company_name
    if not lead.company_name:
        reasons.append(MISSING_COMPANY_NAME)

    if not lead.first_name or not lead.last_name:
        reasons.append(MISSING_NAME)

    return reasons


def validate_lead(lead: UnifiedLead, config: Optional[ValidationConfig] = None) -> UnifiedLead:
    """Attach validation status and reasons to a lead. Contact fields are left alone."""
    reasons = check_lead(lead, config)
    lead.validation_reasons = reasons
    lead.validation_status = (
        ValidationStatus.INVALID
        if any(reason in HARD_FAILURES for reason in reasons)
        else ValidationStatus.VALID
    )

    if lead.validation_status == ValidationStatus.INVALID:
        log.info("lead_rejected", lead=lead.provenance, reasons=reasons)

    return lead
