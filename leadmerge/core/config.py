"""Configuration loading and models."""

import os
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator


class ExportTarget(str, Enum):
    INSTANTLY = "instantly"
    SMARTLEAD = "smartlead"
    BOTH = "both"


class EnrichmentLevel(str, Enum):
    BASIC = "basic"
    STANDARD = "standard"
    ADVANCED = "advanced"


class MatchingConfig(BaseModel):
    fuzzy_threshold: float = 0.8
    # Hosts that identify the scraping source rather than the company
    ignored_domains: list[str] = ["linkedin.com"]


class EnrichmentConfig(BaseModel):
    level: EnrichmentLevel = EnrichmentLevel.STANDARD
    mx_timeout_seconds: float = 3.0
    concurrency: int = 10


class ValidationConfig(BaseModel):
    disposable_domains: list[str] = [
        "tempmail.com",
        "guerrillamail.com",
        "10minutemail.com",
        "mailinator.com",
        "throwaway.email",
        "temp-mail.org",
        "getnada.com",
    ]
    role_prefixes: list[str] = [
        "info", "contact", "sales", "support", "admin", "hello",
        "help", "service", "team", "office", "general", "inquiries",
    ]


class ScoreWeights(BaseModel):
    valid_email: int = 40
    verified_email: int = 10  # email was scraped, not inferred
    personal_email: int = 5  # email is not a role alias
    company_name: int = 10
    website: int = 10
    phone: int = 10
    full_name: int = 5
    high_rating: int = 8
    many_reviews: int = 7
    profile_url: int = 5
    recent_activity: int = 5
    merged_source: int = 5
    domain_has_mx: int = 5

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("score weights cannot be negative")
        return value


class ScoringConfig(BaseModel):
    min_quality_score: int = 50
    rating_threshold: float = 4.0
    review_threshold: int = 10
    high_quality_score: int = 80
    weights: ScoreWeights = ScoreWeights()


DEDUPE_KEY_FIELDS = {
    "email", "domain", "phone", "company_name", "website",
    "first_name", "last_name", "map_url", "profile_url",
}


class DedupeConfig(BaseModel):
    keys: list[str] = ["email", "domain"]

    @field_validator("keys")
    @classmethod
    def _known_fields(cls, keys: list[str]) -> list[str]:
        unknown = [key for key in keys if key not in DEDUPE_KEY_FIELDS]
        if unknown:
            raise ValueError(f"Unknown dedupe key fields: {unknown}")
        return keys


class ExportConfig(BaseModel):
    target: ExportTarget = ExportTarget.INSTANTLY
    crm_source: str = "Cold Email Campaign"


class ReportConfig(BaseModel):
    group_by: str = "vertical"


class PipelineConfig(BaseModel):
    matching: MatchingConfig = MatchingConfig()
    enrichment: EnrichmentConfig = EnrichmentConfig()
    validation: ValidationConfig = ValidationConfig()
    scoring: ScoringConfig = ScoringConfig()
    dedupe: DedupeConfig = DedupeConfig()
    export: ExportConfig = ExportConfig()
    report: ReportConfig = ReportConfig()


DEFAULT_CONFIG_PATH = Path("config")


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> PipelineConfig:
    """Load pipeline config from YAML file."""
    config_file = config_path / "pipeline.yaml"

    data = {}
    if config_file.exists():
        with open(config_file) as f:
            data = yaml.safe_load(f) or {}

    # Check env var for export target if not set in YAML
    export_section = data.setdefault("export", {}) or {}
    if "target" not in export_section:
        env_target = os.environ.get("LEADMERGE_EXPORT_TARGET", "")
        if env_target:
            export_section["target"] = env_target
    data["export"] = export_section

    return PipelineConfig(**data)
