"""Core infrastructure: config, models, key-value store."""

from leadmerge.core.config import (
    PipelineConfig,
    MatchingConfig,
    EnrichmentConfig,
    ValidationConfig,
    ScoringConfig,
    ScoreWeights,
    DedupeConfig,
    ExportConfig,
    ExportTarget,
    EnrichmentLevel,
    load_config,
)
from leadmerge.core.models import (
    DirectoryRecord,
    LeadSource,
    LeadStateError,
    ProfileRecord,
    UnifiedLead,
    ValidationStatus,
)
from leadmerge.core.store import (
    init_store,
    set_value,
    get_value,
    get_raw_value,
    list_keys,
)
