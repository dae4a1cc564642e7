"""Helpers to load tournament player sheets and emit derived player records."""

from __future__ import annotations

import csv
import logging
import math
import re
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel

from spirit11.config import ALL_CATEGORIES, normalize_category
from spirit11.models import PlayerRecord, RawStats
from spirit11.persistence import Spirit11Store
from spirit11.valuation import derive_stats

logger = logging.getLogger(__name__)

COUNTER_FIELDS: Tuple[str, ...] = (
    "total_runs",
    "balls_faced",
    "innings_played",
    "wickets",
    "overs_bowled",
    "runs_conceded",
)

DEFAULT_PLAYERS_MAPPING = {
    "name": "Name",
    "university": "University",
    "category": "Category",
    "total_runs": "Total Runs",
    "balls_faced": "Balls Faced",
    "innings_played": "Innings Played",
    "wickets": "Wickets",
    "overs_bowled": "Overs Bowled",
    "runs_conceded": "Runs Conceded",
}


class ImportValidationError(ValueError):
    """Raised when a sheet row cannot be turned into a player."""


class PlayerImportRow(BaseModel):
    line: int
    raw_name: str
    raw_university: str
    raw_category: str
    raw_counters: dict[str, str]

    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]], mapping: Mapping[str, str], *, line: int) -> "PlayerImportRow":
        def extract(key: str) -> str:
            column = mapping.get(key, DEFAULT_PLAYERS_MAPPING[key])
            value = row.get(column)
            return value.strip() if value is not None else ""

        return cls(
            line=line,
            raw_name=extract("name"),
            raw_university=extract("university"),
            raw_category=extract("category"),
            raw_counters={key: extract(key) for key in COUNTER_FIELDS},
        )

    @property
    def label(self) -> str:
        return f"line {self.line} ({self.raw_name or 'unnamed'})"


@dataclass
class ImportReport:
    total_rows: int = 0
    imported_rows: int = 0
    rejected_rows: List[str] = field(default_factory=list)


def _parse_counter(key: str, raw_value: str) -> int:
    text = re.sub(r"[,\s]", "", raw_value)
    if not text:
        raise ImportValidationError(f"{key} is empty")
    try:
        value = float(text)
    except ValueError:
        raise ImportValidationError(f"{key} '{raw_value}' is not numeric") from None
    if not math.isfinite(value) or value < 0:
        raise ImportValidationError(f"{key} '{raw_value}' must be a non-negative number")
    # Fractional entries are truncated the way the tournament sheets were read.
    return int(value)


def row_to_record(row: PlayerImportRow, *, player_id: str | None = None) -> PlayerRecord:
    if not row.raw_name:
        raise ImportValidationError("name is required")
    try:
        category = normalize_category(row.raw_category)
    except ValueError as exc:
        raise ImportValidationError(str(exc)) from None
    if category == ALL_CATEGORIES:
        raise ImportValidationError("category 'all' is not a player category")

    counters = {key: _parse_counter(key, row.raw_counters.get(key, "")) for key in COUNTER_FIELDS}
    return PlayerRecord(
        player_id=player_id or uuid4().hex,
        name=row.raw_name,
        university=row.raw_university,
        category=category,
        stats=derive_stats(RawStats(**counters)),
    )


def rows_to_records(rows: Iterable[PlayerImportRow]) -> Tuple[List[PlayerRecord], ImportReport]:
    records: List[PlayerRecord] = []
    report = ImportReport()
    for row in rows:
        report.total_rows += 1
        try:
            records.append(row_to_record(row))
        except ImportValidationError as exc:
            logger.warning("Skipping %s: %s", row.label, exc)
            report.rejected_rows.append(f"{row.label}: {exc}")
    report.imported_rows = len(records)
    return records, report


def parse_player_csv(text: str, *, mapping: Mapping[str, str] | None = None) -> List[PlayerImportRow]:
    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
    rows: List[PlayerImportRow] = []
    for raw in reader:
        if not any((value or "").strip() for value in raw.values() if isinstance(value, str)):
            continue
        rows.append(PlayerImportRow.from_mapping(raw, mapping, line=reader.line_num))
    return rows


def load_player_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerImportRow]:
    return parse_player_csv(path.read_text(encoding="utf-8"), mapping=mapping)


def load_records_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[PlayerRecord], ImportReport]:
    return rows_to_records(load_player_csv(path, mapping=mapping))


def import_players(
    store: Spirit11Store,
    text: str,
    *,
    mapping: Mapping[str, str] | None = None,
    replace: bool = False,
) -> ImportReport:
    """Derive stats for every valid row of ``text`` and persist the players.

    Raises ImportValidationError when the sheet holds no valid rows, leaving
    the stored catalog untouched.
    """

    records, report = rows_to_records(parse_player_csv(text, mapping=mapping))
    if not records:
        detail = "; ".join(report.rejected_rows[:3]) or "no player rows found"
        raise ImportValidationError(f"Nothing to import: {detail}")
    store.save_players(records, replace=replace)
    logger.info(
        "Imported %s/%s player rows (%s rejected)",
        report.imported_rows,
        report.total_rows,
        len(report.rejected_rows),
    )
    return report


__all__ = [
    "COUNTER_FIELDS",
    "DEFAULT_PLAYERS_MAPPING",
    "ImportReport",
    "ImportValidationError",
    "import_players",
    "PlayerImportRow",
    "load_player_csv",
    "load_records_from_csv",
    "parse_player_csv",
    "row_to_record",
    "rows_to_records",
]
