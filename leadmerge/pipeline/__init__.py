"""Lead pipeline: merge, enrich, validate, score, dedupe, report."""

from leadmerge.pipeline.merge import MergeEngine, merge_records
from leadmerge.pipeline.enricher import FieldEnricher, MxChecker
from leadmerge.pipeline.validator import validate_lead
from leadmerge.pipeline.scorer import calculate_quality_score, score_lead
from leadmerge.pipeline.dedupe import deduplicate
from leadmerge.pipeline.report import build_report
from leadmerge.pipeline.runner import PipelineResult, run_pipeline, save_results
