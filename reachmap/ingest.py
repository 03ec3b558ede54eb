"""
CSV rows -> normalized post records.

Analytics exports put the post time in Pacific wall-clock time. Each record is
re-read in the audience's time zone (Manila) before its hour and weekday are
taken, so the heatmap answers "when does my audience see posts".
"""
from __future__ import annotations

import csv
import io
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from reachmap.config import DEFAULT_ALIASES, SOURCE_TZ, TARGET_TZ, ColumnAliases
from reachmap.errors import ValidationError

logger = logging.getLogger(__name__)

# Excel-style exports open with "sep=," followed by a title row.
PREAMBLE_MARKERS = ("sep=", "Content")

# Formats pandas does not pick up on its own.
FALLBACK_TIME_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M", "%m/%d/%Y")

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class NormalizedRecord:
    raw_fields: Dict[str, str]
    local_timestamp: pd.Timestamp
    hour_of_day: int
    day_of_week: int  # 0 = Sunday
    reach: int


@dataclass
class Normalized:
    """Records that survived parsing, plus how many data rows did not."""

    records: List[NormalizedRecord] = field(default_factory=list)
    dropped: int = 0

    def __iter__(self):
        return iter(self.records)

    def __len__(self):
        return len(self.records)

    def __getitem__(self, index):
        return self.records[index]


# -----------------------
# Reading
# -----------------------
def read_csv_rows(source) -> List[List[str]]:
    """
    Read a CSV file (path or text stream) into rows of string cells.
    Blank lines are skipped; a UTF-8 BOM is tolerated.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, newline="", encoding="utf-8-sig") as fh:
            return _rows_from(fh)
    if isinstance(source, bytes):
        return _rows_from(io.StringIO(source.decode("utf-8-sig"), newline=""))
    return _rows_from(source)


def _rows_from(fh) -> List[List[str]]:
    rows = []
    for row in csv.reader(fh):
        if not any(cell.strip() for cell in row):
            continue
        rows.append(row)
    if rows and rows[0] and rows[0][0].startswith("\ufeff"):
        rows[0][0] = rows[0][0].lstrip("\ufeff")
    return rows


# -----------------------
# Helpers
# -----------------------
def strip_preamble(rows):
    if (
        len(rows) >= 2
        and rows[0][:1] == [PREAMBLE_MARKERS[0]]
        and rows[1][:1] == [PREAMBLE_MARKERS[1]]
    ):
        return rows[2:]
    return rows


def parse_post_time(value) -> Optional[pd.Timestamp]:
    """
    Read a post time as Pacific wall-clock time and convert it to Manila time.
    Any zone or offset written in the value is discarded first: the digits are
    taken as-is. Returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    xs = str(value).strip()
    if not xs or xs.lower() in {"nan", "nat"}:
        return None

    try:
        dt = pd.to_datetime(xs, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        dt = pd.NaT
    if pd.isna(dt):
        for fmt in FALLBACK_TIME_FORMATS:
            try:
                dt = pd.Timestamp(datetime.strptime(xs, fmt))
                break
            except ValueError:
                continue
        if pd.isna(dt):
            return None

    if dt.tzinfo is not None:
        dt = dt.tz_localize(None)

    # Fall-back hour repeats: take the first (daylight) one. Spring-forward gap: move past it.
    try:
        pacific = dt.tz_localize(SOURCE_TZ, ambiguous=True, nonexistent="shift_forward")
        return pacific.tz_convert(TARGET_TZ)
    except (ValueError, NotImplementedError, OverflowError):
        return None


def parse_reach(value) -> Optional[int]:
    """Leading base-10 integer of the cell ('120 people' -> 120); None if absent or negative."""
    if value is None:
        return None
    match = _INT_PREFIX_RE.match(str(value))
    if not match:
        return None
    reach = int(match.group(1))
    if reach < 0:
        return None
    return reach


def sunday_based_weekday(ts: pd.Timestamp) -> int:
    # pandas counts Monday as 0
    return (ts.dayofweek + 1) % 7


# -----------------------
# Normalizer
# -----------------------
def normalize(rows, aliases: ColumnAliases = DEFAULT_ALIASES) -> Normalized:
    rows = strip_preamble(list(rows))
    header = list(rows[0]) if rows else []

    post_col, reach_col = aliases.resolve(header)
    if post_col is None or reach_col is None:
        raise ValidationError(
            f"Invalid CSV. Data should have {aliases.describe()} as columns."
        )

    result = Normalized()
    for line_no, values in enumerate(rows[1:], start=2):
        raw_fields = dict(zip(header, values))

        local_ts = parse_post_time(raw_fields.get(post_col))
        if local_ts is None:
            logger.warning(f"Skipping row {line_no} without parsable {post_col!r}: {raw_fields.get(post_col)!r}")
            result.dropped += 1
            continue

        reach = parse_reach(raw_fields.get(reach_col))
        if reach is None:
            logger.warning(f"Skipping row {line_no} without parsable {reach_col!r}: {raw_fields.get(reach_col)!r}")
            result.dropped += 1
            continue

        result.records.append(NormalizedRecord(
            raw_fields=raw_fields,
            local_timestamp=local_ts,
            hour_of_day=int(local_ts.hour),
            day_of_week=int(sunday_based_weekday(local_ts)),
            reach=reach,
        ))

    logger.info(f"Normalized {len(result.records)} records ({result.dropped} dropped)")
    return result
