"""Cross-source matching policies used by the merge engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Protocol

import structlog

from leadmerge.matching.domains import extract_domain, fuzzy_match

if TYPE_CHECKING:
    from leadmerge.core.models import DirectoryRecord, ProfileRecord

log = structlog.get_logger()


class MatchStrategy(Protocol):
    """Pick the directory record describing the same business as a profile record."""

    def find_match(
        self,
        profile: ProfileRecord,
        candidates: Iterable[DirectoryRecord],
    ) -> Optional[DirectoryRecord]:
        ...


def profile_domain(profile: ProfileRecord, ignored_domains: Iterable[str] = ()) -> Optional[str]:
    """Domain of a profile record's company, from its website or company URL."""
    ignored = set(ignored_domains)
    for candidate in (profile.website, profile.company_url):
        domain = extract_domain(candidate)
        if domain and domain not in ignored:
            return domain
    return None


def directory_domain(record: DirectoryRecord, ignored_domains: Iterable[str] = ()) -> Optional[str]:
    """Domain of a directory listing's website."""
    domain = extract_domain(record.website)
    if domain and domain in set(ignored_domains):
        return None
    return domain


class DomainThenNameStrategy:
    """Exact domain match first, fuzzy company name as the fallback."""

    def __init__(self, threshold: float = 0.8, ignored_domains: Iterable[str] = ()):
        self.threshold = threshold
        self.ignored_domains = tuple(ignored_domains)

    def find_match(
        self,
        profile: ProfileRecord,
        candidates: Iterable[DirectoryRecord],
    ) -> Optional[DirectoryRecord]:
        candidates = list(candidates)

        domain = profile_domain(profile, self.ignored_domains)
        if domain:
            for record in candidates:
                if directory_domain(record, self.ignored_domains) == domain:
                    log.debug("match_by_domain", profile=profile.record_id,
                              directory=record.record_id, domain=domain)
                    return record

        if profile.company_name:
            for record in candidates:
                if fuzzy_match(profile.company_name, record.name, self.threshold):
                    log.debug("match_by_name", profile=profile.record_id,
                              directory=record.record_id, name=record.name)
                    return record

        return None
