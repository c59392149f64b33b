"""Merge profile and directory records into unified leads."""

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import structlog

from leadmerge.core.models import DirectoryRecord, LeadSource, ProfileRecord, UnifiedLead
from leadmerge.matching.domains import extract_domain
from leadmerge.matching.strategy import (
    DomainThenNameStrategy,
    MatchStrategy,
    directory_domain,
    profile_domain,
)

log = structlog.get_logger()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _prefer(primary, fallback):
    return primary if primary is not None else fallback


def _pick_website(candidates: list[Optional[str]], ignored_domains: Iterable[str]) -> Optional[str]:
    """First candidate whose domain is a real company domain."""
    ignored = set(ignored_domains)
    for candidate in candidates:
        domain = extract_domain(candidate)
        if domain and domain not in ignored:
            return candidate
    return None


def lead_from_profile(
    profile: ProfileRecord,
    timestamp: datetime,
    match: Optional[DirectoryRecord] = None,
    ignored_domains: Iterable[str] = (),
) -> UnifiedLead:
    """Build a lead from a profile record, overlaying a matched directory record.

    Phone, address, rating, review count and map URL come from the directory
    side when it has them. Person fields always come from the profile.
    """
    directory = match
    provenance = [profile.record_id]
    if directory is not None:
        provenance.append(directory.record_id)

    website = _pick_website(
        [profile.website, profile.company_url, directory.website if directory else None],
        ignored_domains,
    )

    return UnifiedLead(
        first_name=profile.first_name,
        last_name=profile.last_name,
        full_name=profile.full_name,
        job_title=profile.job_title,
        company_name=profile.company_name or (directory.name if directory else None),
        website=website,
        email=profile.email or (directory.email if directory else None),
        phone=_prefer(directory.phone if directory else None, profile.phone),
        location=_prefer(directory.address if directory else None, profile.location),
        rating=directory.rating if directory else None,
        review_count=directory.review_count if directory else None,
        map_url=directory.map_url if directory else None,
        profile_url=profile.profile_url,
        recent_activity=list(profile.recent_activity),
        company_size=profile.company_size,
        industry=profile.industry or (directory.category if directory else None),
        vertical=profile.vertical or (directory.vertical if directory else None),
        lead_source=LeadSource.MERGED if directory is not None else LeadSource.PROFILE_ONLY,
        enrichment_timestamp=timestamp,
        provenance=provenance,
    )


def lead_from_directory(record: DirectoryRecord, timestamp: datetime) -> UnifiedLead:
    """Build a lead from an unmatched directory listing."""
    return UnifiedLead(
        company_name=record.name,
        website=record.website,
        email=record.email,
        phone=record.phone,
        location=record.address,
        rating=record.rating,
        review_count=record.review_count,
        map_url=record.map_url,
        industry=record.category,
        vertical=record.vertical,
        lead_source=LeadSource.DIRECTORY_ONLY,
        enrichment_timestamp=timestamp,
        provenance=[record.record_id],
    )


class MergeEngine:
    """Pairs records across the two sources, one lead per business."""

    def __init__(
        self,
        strategy: Optional[MatchStrategy] = None,
        clock: Optional[Clock] = None,
    ):
        self.strategy = strategy or DomainThenNameStrategy()
        self.clock = clock or utc_now
        self.matched_domains: set[str] = set()

    def merge(
        self,
        profiles: list[ProfileRecord],
        directory: list[DirectoryRecord],
    ) -> list[UnifiedLead]:
        """Merge both record sets.

        Profile records are walked first since they carry the decision maker.
        Each directory record can be consumed by at most one profile; whatever
        is left over becomes a directory-only lead.
        """
        self.matched_domains = set()
        merged: list[UnifiedLead] = []
        consumed: set[str] = set()
        ignored = getattr(self.strategy, "ignored_domains", ())

        for profile in profiles:
            candidates = [record for record in directory if record.record_id not in consumed]
            match = self.strategy.find_match(profile, candidates)

            if match is not None:
                consumed.add(match.record_id)
                domain = profile_domain(profile, ignored) or directory_domain(match, ignored)
                if domain:
                    self.matched_domains.add(domain)
                log.info("records_merged", profile=profile.record_id, directory=match.record_id)

            merged.append(lead_from_profile(profile, self.clock(), match, ignored))

        for record in directory:
            if record.record_id in consumed:
                continue
            merged.append(lead_from_directory(record, self.clock()))

        log.info(
            "merge_complete",
            profiles=len(profiles),
            directory=len(directory),
            matched=len(consumed),
            leads=len(merged),
            matched_domains=len(self.matched_domains),
        )
        return merged


def merge_records(
    profiles: list[ProfileRecord],
    directory: list[DirectoryRecord],
    strategy: Optional[MatchStrategy] = None,
    clock: Optional[Clock] = None,
) -> list[UnifiedLead]:
    """Merge profile and directory records with a one-off engine."""
    return MergeEngine(strategy=strategy, clock=clock).merge(profiles, directory)
