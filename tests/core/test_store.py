"""Tests for the key-value store."""

import tempfile
from pathlib import Path

from leadmerge.core.store import get_raw_value, get_value, init_store, list_keys, set_value


def test_init_creates_file_and_parent_dirs():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "nested" / "store.db"
        init_store(db_path)
        assert db_path.exists()


def test_json_values_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        init_store(db_path)

        set_value(db_path, "report.json", {"summary": {"final_output": 3}})

        assert get_value(db_path, "report.json") == {"summary": {"final_output": 3}}
        assert get_raw_value(db_path, "report.json") == '{"summary": {"final_output": 3}}'


def test_text_values_stored_verbatim():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        init_store(db_path)

        set_value(db_path, "instantly_export.csv", "email\nsam@acme.io")

        assert get_value(db_path, "instantly_export.csv") == "email\nsam@acme.io"


def test_set_value_replaces_previous_value():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        init_store(db_path)

        set_value(db_path, "report.json", {"run": 1})
        set_value(db_path, "report.json", {"run": 2})

        assert get_value(db_path, "report.json") == {"run": 2}
        assert list_keys(db_path) == ["report.json"]


def test_missing_key_returns_none():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        init_store(db_path)

        assert get_value(db_path, "nope") is None
        assert get_raw_value(db_path, "nope") is None


def test_list_keys_sorted():
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        init_store(db_path)

        for key in ["report.json", "enriched_leads.json", "instantly_export.csv"]:
            set_value(db_path, key, [])

        assert list_keys(db_path) == ["enriched_leads.json", "instantly_export.csv", "report.json"]
