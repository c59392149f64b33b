"""Load scraped profile and directory records from disk."""

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Optional

import structlog
from openpyxl import load_workbook
from pydantic import ValidationError

from leadmerge.core.models import DirectoryRecord, ProfileRecord
from leadmerge.ingest.aliases import DIRECTORY_ALIASES, PROFILE_ALIASES, resolve_fields

log = structlog.get_logger()

SUPPORTED_SUFFIXES = {".json", ".csv", ".xlsx"}


def _read_json(path: Path) -> list[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        # Dataset exports sometimes wrap rows as {"items": [...]}
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records in {path}")
    return data


def _read_csv(path: Path) -> list[dict]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        return list(csv.DictReader(f))


def _read_xlsx(path: Path) -> list[dict]:
    wb = load_workbook(path, read_only=True)
    ws = wb.active

    rows = ws.iter_rows(values_only=True)
    header = next(rows, None)
    if header is None:
        wb.close()
        return []

    headers = [str(cell).strip() if cell is not None else "" for cell in header]

    records = []
    for row in rows:
        if row is None or all(cell is None for cell in row):
            continue
        records.append({
            name: value for name, value in zip(headers, row) if name
        })

    wb.close()
    return records


def load_rows(path: Path) -> list[Any]:
    """Read raw rows from a JSON, CSV or XLSX file."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported record file {path.name}. Expected one of: {sorted(SUPPORTED_SUFFIXES)}")

    if suffix == ".json":
        rows = _read_json(path)
    elif suffix == ".csv":
        rows = _read_csv(path)
    else:
        rows = _read_xlsx(path)

    log.info("rows_loaded", path=str(path), count=len(rows))
    return rows


def build_profile_records(rows: Iterable[Any]) -> list[ProfileRecord]:
    """Turn raw profile-source rows into canonical profile records."""
    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            log.warning("skipping_profile_row_not_a_mapping", index=index)
            continue
        try:
            records.append(ProfileRecord(record_id=f"profile:{index}", **resolve_fields(row, PROFILE_ALIASES)))
        except ValidationError as e:
            log.warning("skipping_profile_row_invalid", index=index, error=str(e))
    return records


def build_directory_records(rows: Iterable[Any]) -> list[DirectoryRecord]:
    """Turn raw directory-source rows into canonical directory records."""
    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            log.warning("skipping_directory_row_not_a_mapping", index=index)
            continue
        try:
            records.append(DirectoryRecord(record_id=f"directory:{index}", **resolve_fields(row, DIRECTORY_ALIASES)))
        except ValidationError as e:
            log.warning("skipping_directory_row_invalid", index=index, error=str(e))
    return records


def load_sources(
    profiles_path: Optional[Path] = None,
    directory_path: Optional[Path] = None,
) -> tuple[list[ProfileRecord], list[DirectoryRecord]]:
    """Load both sources. Either path may be omitted."""
    profiles = build_profile_records(load_rows(profiles_path)) if profiles_path else []
    directory = build_directory_records(load_rows(directory_path)) if directory_path else []

    log.info("sources_loaded", profiles=len(profiles), directory=len(directory))
    return profiles, directory
