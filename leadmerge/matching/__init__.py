"""Domain extraction, name similarity and cross-source match strategies."""

from leadmerge.matching.domains import extract_domain, fuzzy_match, name_similarity, normalize_name
from leadmerge.matching.strategy import (
    DomainThenNameStrategy,
    MatchStrategy,
    directory_domain,
    profile_domain,
)
