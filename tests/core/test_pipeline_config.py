"""Tests for pipeline configuration loading."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from leadmerge.core.config import (
    DedupeConfig,
    EnrichmentLevel,
    ExportTarget,
    PipelineConfig,
    ScoreWeights,
    load_config,
)


def test_defaults():
    config = PipelineConfig()

    assert config.matching.fuzzy_threshold == 0.8
    assert config.enrichment.level == EnrichmentLevel.STANDARD
    assert config.scoring.min_quality_score == 50
    assert config.scoring.weights.valid_email == 40
    assert config.dedupe.keys == ["email", "domain"]
    assert config.export.target == ExportTarget.INSTANTLY
    assert "mailinator.com" in config.validation.disposable_domains
    assert "info" in config.validation.role_prefixes


def test_load_config_missing_file_returns_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(Path(tmpdir))

    assert config == PipelineConfig()


def test_load_config_reads_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "pipeline.yaml").write_text(
            "scoring:\n"
            "  min_quality_score: 70\n"
            "  weights:\n"
            "    phone: 15\n"
            "export:\n"
            "  target: both\n"
            "dedupe:\n"
            "  keys: [email]\n"
        )
        config = load_config(Path(tmpdir))

    assert config.scoring.min_quality_score == 70
    assert config.scoring.weights.phone == 15
    assert config.scoring.weights.website == 10
    assert config.export.target == ExportTarget.BOTH
    assert config.dedupe.keys == ["email"]


def test_env_sets_target_when_yaml_does_not():
    with tempfile.TemporaryDirectory() as tmpdir:
        with patch.dict(os.environ, {"LEADMERGE_EXPORT_TARGET": "smartlead"}):
            config = load_config(Path(tmpdir))

    assert config.export.target == ExportTarget.SMARTLEAD


def test_yaml_target_beats_env():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "pipeline.yaml").write_text("export:\n  target: instantly\n")
        with patch.dict(os.environ, {"LEADMERGE_EXPORT_TARGET": "smartlead"}):
            config = load_config(Path(tmpdir))

    assert config.export.target == ExportTarget.INSTANTLY


def test_unknown_target_is_a_configuration_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        with patch.dict(os.environ, {"LEADMERGE_EXPORT_TARGET": "mailchimp"}):
            with pytest.raises(ValidationError):
                load_config(Path(tmpdir))


def test_unknown_dedupe_field_rejected():
    with pytest.raises(ValidationError):
        DedupeConfig(keys=["email", "favourite_colour"])


def test_negative_weight_rejected():
    with pytest.raises(ValidationError):
        ScoreWeights(phone=-5)
