"""Source loading and field alias resolution."""

from leadmerge.ingest.aliases import DIRECTORY_ALIASES, PROFILE_ALIASES, resolve_fields
from leadmerge.ingest.loader import (
    build_directory_records,
    build_profile_records,
    load_rows,
    load_sources,
)
