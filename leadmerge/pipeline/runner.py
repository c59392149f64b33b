"""Lead pipeline orchestrator."""

import asyncio
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel

from leadmerge.core.config import ExportTarget, PipelineConfig
from leadmerge.core.models import DirectoryRecord, ProfileRecord, UnifiedLead, ValidationStatus
from leadmerge.core.store import DEFAULT_DB_PATH, init_store, set_value
from leadmerge.export.crm import map_leads_to_crm_contacts
from leadmerge.export.csv_writer import to_csv
from leadmerge.export.platforms import format_exports
from leadmerge.matching.strategy import DomainThenNameStrategy, MatchStrategy
from leadmerge.pipeline.dedupe import deduplicate
from leadmerge.pipeline.enricher import FieldEnricher, MxChecker
from leadmerge.pipeline.merge import Clock, MergeEngine, utc_now
from leadmerge.pipeline.report import build_report
from leadmerge.pipeline.scorer import score_lead
from leadmerge.pipeline.validator import validate_lead

log = structlog.get_logger()


class PipelineResult(BaseModel):
    leads: list[UnifiedLead]
    rejected: list[UnifiedLead]
    exports: dict[str, list[dict]]
    crm_contacts: list[dict]
    report: dict


async def process_lead(lead: UnifiedLead, enricher: FieldEnricher, config: PipelineConfig) -> UnifiedLead:
    """Enrich, validate and (when valid) score a single lead, in that order."""
    await enricher.enrich(lead)
    validate_lead(lead, config.validation)
    if lead.validation_status == ValidationStatus.VALID:
        score_lead(lead, config.scoring)
    return lead


async def run_pipeline(
    profiles: list[ProfileRecord],
    directory: list[DirectoryRecord],
    config: Optional[PipelineConfig] = None,
    mx_checker: Optional[MxChecker] = None,
    clock: Optional[Clock] = None,
    strategy: Optional[MatchStrategy] = None,
) -> PipelineResult:
    """Run the full batch: merge, enrich, validate, score, filter, dedupe, export.

    Raises:
        ValueError: if neither source supplied any records.
    """
    config = config or PipelineConfig()
    clock = clock or utc_now

    if not profiles and not directory:
        raise ValueError("No input records supplied for either source")

    log.info("pipeline_started", profiles=len(profiles), directory=len(directory),
             target=config.export.target.value, min_score=config.scoring.min_quality_score)

    strategy = strategy or DomainThenNameStrategy(
        threshold=config.matching.fuzzy_threshold,
        ignored_domains=config.matching.ignored_domains,
    )
    leads = MergeEngine(strategy=strategy, clock=clock).merge(profiles, directory)

    enricher = FieldEnricher(config.enrichment, mx_checker)
    semaphore = asyncio.Semaphore(max(1, config.enrichment.concurrency))

    async def bounded(lead: UnifiedLead) -> UnifiedLead:
        async with semaphore:
            return await process_lead(lead, enricher, config)

    # gather keeps input order, so merge order carries through to the exports
    processed = await asyncio.gather(*(bounded(lead) for lead in leads))

    valid = [lead for lead in processed if lead.validation_status == ValidationStatus.VALID]
    rejected = [lead for lead in processed if lead.validation_status == ValidationStatus.INVALID]
    log.info("validation_complete", valid=len(valid), rejected=len(rejected))

    qualified = [lead for lead in valid if lead.quality_score >= config.scoring.min_quality_score]
    log.info("threshold_applied", qualified=len(qualified), below=len(valid) - len(qualified))

    unique = deduplicate(qualified, config.dedupe.keys)
    log.info("deduplication_complete", unique=len(unique), removed=len(qualified) - len(unique))

    exports = format_exports(unique, config.export.target)
    crm_contacts = map_leads_to_crm_contacts(unique, config.export.crm_source)

    report = build_report(
        profile_count=len(profiles),
        directory_count=len(directory),
        merged_count=len(leads),
        validated=processed,
        final_leads=unique,
        below_threshold=len(valid) - len(qualified),
        duplicates_removed=len(qualified) - len(unique),
        generated_at=clock(),
        high_quality_score=config.scoring.high_quality_score,
        medium_quality_score=config.scoring.min_quality_score,
        group_by=config.report.group_by,
    )

    log.info("pipeline_complete", final=len(unique), rejected=len(rejected))
    return PipelineResult(
        leads=unique,
        rejected=rejected,
        exports=exports,
        crm_contacts=crm_contacts,
        report=report,
    )


def save_results(result: PipelineResult, db_path: Path = DEFAULT_DB_PATH) -> list[str]:
    """Persist exports, the enriched lead dump and the report. Returns written keys."""
    init_store(db_path)
    written = []

    for platform in ExportTarget:
        rows = result.exports.get(platform.value)
        if rows is None:
            continue
        set_value(db_path, f"{platform.value}_export.json", rows)
        set_value(db_path, f"{platform.value}_export.csv", to_csv(rows))
        written += [f"{platform.value}_export.json", f"{platform.value}_export.csv"]

    set_value(db_path, "enriched_leads.json", [lead.export_dict() for lead in result.leads])
    set_value(db_path, "crm_contacts.json", result.crm_contacts)
    set_value(db_path, "report.json", result.report)
    written += ["enriched_leads.json", "crm_contacts.json", "report.json"]

    log.info("results_saved", db=str(db_path), keys=written)
    return written
