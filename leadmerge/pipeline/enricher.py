"""Fill gaps on unified leads: inferred email, size range, MX, phone, location."""

import asyncio
import re
from typing import Optional

import dns.asyncresolver
import dns.exception
import structlog

from leadmerge.core.config import EnrichmentConfig, EnrichmentLevel
from leadmerge.core.models import UnifiedLead

log = structlog.get_logger()

_NON_ALPHA_RE = re.compile(r"[^a-z]")
_LOCATION_RE = re.compile(r"([A-Za-z\s]+),\s*([A-Z]{2})\b")
_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d{3})")


def infer_email(first_name: Optional[str], last_name: Optional[str], domain: Optional[str]) -> Optional[str]:
    """Build first.last@domain, keeping only letters from the name parts.

    Example:
        Jane, O'Brien, corp.com -> jane.obrien@corp.com
    """
    if not first_name or not last_name or not domain:
        return None

    first = _NON_ALPHA_RE.sub("", first_name.lower())
    last = _NON_ALPHA_RE.sub("", last_name.lower())
    if not first or not last:
        return None

    return f"{first}.{last}@{domain.lower()}"


def parse_company_size(size: Optional[str]) -> Optional[str]:
    """Normalize a free-text company size into a range like "50-200"."""
    if not size:
        return None

    text = _THOUSANDS_RE.sub("", str(size).lower())
    numbers = re.findall(r"\d+", text)

    if len(numbers) >= 2:
        return f"{numbers[0]}-{numbers[1]}"
    if len(numbers) == 1:
        count = int(numbers[0])
        if count < 10:
            return "1-10"
        if count < 50:
            return "10-50"
        if count < 200:
            return "50-200"
        if count < 500:
            return "200-500"
        return "500+"

    return size


def standardize_phone(phone: Optional[str]) -> Optional[str]:
    """Best-effort E.164 for North American numbers; anything else passes through."""
    if not phone:
        return None

    digits = re.sub(r"\D", "", phone)

    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"

    return phone


def standardize_location(location: Optional[str]) -> Optional[str]:
    """Pull "City, ST" out of free text, or return the text unchanged."""
    if not location:
        return None

    match = _LOCATION_RE.search(location)
    if match:
        city = " ".join(match.group(1).split())
        return f"{city}, {match.group(2)}"

    return location


def split_full_name(full_name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """First token is the first name, the rest is the last name."""
    if not full_name or not full_name.strip():
        return None, None
    parts = full_name.split()
    return parts[0], " ".join(parts[1:]) or None


class MxChecker:
    """Checks whether a domain publishes MX records.

    Lookups are cached per domain for the lifetime of the checker. Any DNS
    failure, timeout or empty answer counts as "no MX".
    """

    def __init__(self, timeout_seconds: float = 3.0, resolver: Optional[dns.asyncresolver.Resolver] = None):
        self.timeout_seconds = timeout_seconds
        self._resolver = resolver
        self._cache: dict[str, bool] = {}

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            resolver = dns.asyncresolver.Resolver()
            resolver.timeout = self.timeout_seconds
            resolver.lifetime = self.timeout_seconds
            self._resolver = resolver
        return self._resolver

    async def has_mx(self, domain: str) -> bool:
        domain = domain.lower().strip(".")
        if domain in self._cache:
            return self._cache[domain]

        try:
            resolver = self._get_resolver()
            answers = await asyncio.wait_for(
                resolver.resolve(domain, "MX"),
                timeout=self.timeout_seconds,
            )
            result = len(answers) > 0
        except (dns.exception.DNSException, asyncio.TimeoutError, OSError) as e:
            log.warning("mx_lookup_failed", domain=domain, error=type(e).__name__)
            result = False

        self._cache[domain] = result
        return result


class FieldEnricher:
    """Enriches leads in place without overwriting values that are already set."""

    def __init__(self, config: Optional[EnrichmentConfig] = None, mx_checker: Optional[MxChecker] = None):
        self.config = config or EnrichmentConfig()
        self.mx_checker = mx_checker or MxChecker(timeout_seconds=self.config.mx_timeout_seconds)

    async def enrich(self, lead: UnifiedLead) -> UnifiedLead:
        """Run every enrichment step allowed by the configured level.

        A failing step is logged and skipped; the remaining steps still run.
        """
        self._step(lead, "split_name", self._split_name)
        self._step(lead, "infer_email", self._infer_email)
        self._step(lead, "company_size", self._company_size)

        if self.config.level in (EnrichmentLevel.STANDARD, EnrichmentLevel.ADVANCED):
            await self._check_mx(lead)
            self._step(lead, "phone", self._phone)
            self._step(lead, "location", self._location)

        return lead

    def _step(self, lead: UnifiedLead, name: str, func) -> None:
        try:
            func(lead)
        except Exception as e:
            log.warning("enrichment_step_failed", step=name, lead=lead.provenance, error=str(e))

    def _split_name(self, lead: UnifiedLead) -> None:
        if lead.first_name or not lead.full_name:
            return
        first, last = split_full_name(lead.full_name)
        lead.first_name = first
        if not lead.last_name:
            lead.last_name = last

    def _infer_email(self, lead: UnifiedLead) -> None:
        if lead.email:
            return
        email = infer_email(lead.first_name, lead.last_name, lead.domain)
        if email:
            lead.email = email
            lead.email_inferred = True

    def _company_size(self, lead: UnifiedLead) -> None:
        if lead.company_size_range is None:
            lead.company_size_range = parse_company_size(lead.company_size)

    def _phone(self, lead: UnifiedLead) -> None:
        if lead.phone:
            lead.phone = standardize_phone(lead.phone)

    def _location(self, lead: UnifiedLead) -> None:
        if lead.standardized_location is None and lead.location:
            lead.standardized_location = standardize_location(lead.location)

    async def _check_mx(self, lead: UnifiedLead) -> None:
        if lead.domain_has_mx is not None:
            return
        domain = lead.domain
        if not domain:
            return
        try:
            lead.domain_has_mx = await self.mx_checker.has_mx(domain)
        except Exception as e:
            log.warning("enrichment_step_failed", step="mx", lead=lead.provenance, error=str(e))
            lead.domain_has_mx = False
