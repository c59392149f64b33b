"""Lead data models shared across the pipeline."""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, computed_field, field_validator

from leadmerge.matching.domains import extract_domain


class LeadSource(str, Enum):
    PROFILE_ONLY = "profile_only"
    DIRECTORY_ONLY = "directory_only"
    MERGED = "merged"


class ValidationStatus(str, Enum):
    UNVALIDATED = "unvalidated"
    VALID = "valid"
    INVALID = "invalid"


class LeadStateError(RuntimeError):
    """Raised when a pipeline stage runs on a lead in the wrong state."""


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _as_text(value: Any) -> Any:
    # Spreadsheet and JSON exports hand numeric-looking cells over as numbers
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


_TEXT_ANNOTATIONS = (str, Optional[str])


class RawRecord(BaseModel):
    """Base for scraped records. Immutable once ingested."""

    model_config = ConfigDict(frozen=True)

    record_id: str
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    vertical: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _strip_blanks(cls, value: Any, info: ValidationInfo) -> Any:
        if cls.model_fields[info.field_name].annotation in _TEXT_ANNOTATIONS:
            value = _as_text(value)
        return _blank_to_none(value)


class ProfileRecord(RawRecord):
    """A person scraped from the professional-profile source."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    company_url: Optional[str] = None
    location: Optional[str] = None
    profile_url: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    recent_activity: list[Any] = []

    @field_validator("recent_activity", mode="before")
    @classmethod
    def _activity_list(cls, value: Any) -> list:
        if value is None or value == "":
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]


class DirectoryRecord(RawRecord):
    """A business listing scraped from the map/directory source."""

    name: Optional[str] = None
    address: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    map_url: Optional[str] = None
    category: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def _parse_rating(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, (int, float)):
            return value
        match = re.search(r"\d+(?:[.,]\d+)?", str(value))
        return float(match.group(0).replace(",", ".")) if match else None

    @field_validator("review_count", mode="before")
    @classmethod
    def _parse_review_count(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value)
        digits = re.sub(r"(?<=\d)[,.](?=\d{3})", "", str(value))
        match = re.search(r"\d+", digits)
        return int(match.group(0)) if match else None


class UnifiedLead(BaseModel):
    """A business contact assembled from one or two raw records."""

    model_config = ConfigDict(validate_assignment=True)

    # identity
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    website: Optional[str] = None

    # contact
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    standardized_location: Optional[str] = None

    # provenance
    lead_source: LeadSource
    enrichment_timestamp: datetime
    provenance: list[str] = []

    # signals
    company_size: Optional[str] = None
    company_size_range: Optional[str] = None
    job_title: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    map_url: Optional[str] = None
    profile_url: Optional[str] = None
    recent_activity: list[Any] = []
    industry: Optional[str] = None
    vertical: Optional[str] = None

    # derived flags
    email_inferred: bool = False
    domain_has_mx: Optional[bool] = None

    # validation and scoring
    validation_status: ValidationStatus = ValidationStatus.UNVALIDATED
    validation_reasons: list[str] = []
    quality_score: Optional[int] = None

    @computed_field
    @property
    def domain(self) -> Optional[str]:
        """Company domain, taken from the website first and the email second."""
        return extract_domain(self.website) or extract_domain(self.email)

    def export_dict(self) -> dict:
        """JSON-safe dict used for the enriched leads dump."""
        return self.model_dump(mode="json")
