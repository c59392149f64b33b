"""Shared fixtures for pipeline tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from leadmerge.core.models import LeadSource, UnifiedLead
from leadmerge.pipeline.enricher import MxChecker

FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def fake_mx():
    """MX checker that answers True without touching DNS."""
    checker = MagicMock(spec=MxChecker)
    checker.has_mx = AsyncMock(return_value=True)
    return checker


@pytest.fixture
def make_lead():
    def _make(**fields) -> UnifiedLead:
        fields.setdefault("lead_source", LeadSource.PROFILE_ONLY)
        fields.setdefault("enrichment_timestamp", FIXED_TIME)
        fields.setdefault("provenance", ["profile:0"])
        return UnifiedLead(**fields)

    return _make
