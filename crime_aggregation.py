import re
from collections import Counter
from collections.abc import Hashable
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

# --- Configuration ---
UNKNOWN_LABEL = "Unknown"
TOP_N = 15
MAX_LABEL_LENGTH = 40
ELLIPSIS = "..."

CATEGORY_FIELD = 'crm_cd_desc'
AREA_FIELDS = ('area_name', 'area')
DATE_FIELD = 'date_rptd'
# Report dates must start with a four digit year, e.g. "2021-03-15"
DATE_PATTERN = re.compile(r'\d{4}\b')

Label = Union[str, int, float]


@dataclass(frozen=True)
class CountEntry:
    label: Label
    value: int


@dataclass(frozen=True)
class DisplayCountEntry:
    """A ranked label count with a label short enough for a chart axis."""
    display_label: str
    full_label: str
    value: int


@dataclass(frozen=True)
class TimeBucketEntry:
    period_key: str
    value: int


@dataclass(frozen=True)
class AggregationResult:
    by_category: Tuple[DisplayCountEntry, ...]
    by_area: Tuple[DisplayCountEntry, ...]
    over_time: Tuple[TimeBucketEntry, ...]
    total_processed: int


def _as_label(value) -> Label:
    # Grouped by the literal value, so 5 and "5" stay apart
    return value if isinstance(value, Hashable) else str(value)


def resolve_category(record: Mapping) -> Label:
    """Crime type label for a record, 'Unknown' when missing or empty."""
    value = record.get(CATEGORY_FIELD)
    return _as_label(value) if value else UNKNOWN_LABEL


def resolve_area(record: Mapping) -> Label:
    """Area label for a record.

    The dataset has carried the area under both 'area_name' and 'area', so the
    first non-empty one wins and 'Unknown' is used when neither is present.
    """
    for field in AREA_FIELDS:
        value = record.get(field)
        if value:
            return _as_label(value)
    return UNKNOWN_LABEL


def month_key(value) -> Optional[str]:
    """
    Turn a report date into a 'YYYY-MM' key.

    Args:
        value: Date text as returned by the API (e.g. "2021-03-15T00:00:00.000"),
            or a date/datetime object.

    Returns:
        str: Zero padded year-month key, e.g. "2021-03"
        None: If the value is missing or cannot be parsed as a date
    """
    if isinstance(value, date) and not pd.isna(value):
        return f"{value.year:04d}-{value.month:02d}"
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        return None
    try:
        stamp = pd.Timestamp(value.strip())
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(stamp):
        return None
    return f"{stamp.year:04d}-{stamp.month:02d}"


def display_label(label: str, max_length: int = MAX_LABEL_LENGTH) -> str:
    if len(label) > max_length:
        return label[:max_length - len(ELLIPSIS)] + ELLIPSIS
    return label


def top_counts(counts: Counter, limit: int = TOP_N) -> List[CountEntry]:
    """
    Rank label counts by descending value and keep the top `limit`.

    Counter keeps labels in the order they were first seen and sorted() is
    stable, so equal counts stay in first-seen order.
    """
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [CountEntry(label=label, value=value) for label, value in ranked]


def rank_counts(counts: Counter, limit: int = TOP_N) -> List[DisplayCountEntry]:
    return [
        DisplayCountEntry(display_label=display_label(str(entry.label)), full_label=str(entry.label), value=entry.value)
        for entry in top_counts(counts, limit)
    ]


def aggregate(records: Iterable[Mapping]) -> AggregationResult:
    """
    Aggregate crime records into the summary views shown on the dashboard.

    Every record is counted once under its crime type and once under its area
    (falling back to 'Unknown'), and once under its report month when the
    report date parses. Records with bad fields are never dropped from the
    total.

    Args:
        records: Raw records, each a mapping of field name to value

    Returns:
        AggregationResult: top 15 crime types, top 15 areas, the monthly
        series in chronological order and the number of records processed
    """
    type_counts = Counter()
    area_counts = Counter()
    time_counts = Counter()
    parsed_months: Dict[str, Optional[str]] = {}
    processed = 0

    for record in records:
        type_counts[resolve_category(record)] += 1
        area_counts[resolve_area(record)] += 1

        reported = record.get(DATE_FIELD)
        if reported:
            if isinstance(reported, str):
                if reported not in parsed_months:
                    parsed_months[reported] = month_key(reported)
                key = parsed_months[reported]
            else:
                key = month_key(reported)
            if key is not None:
                time_counts[key] += 1
        processed += 1

    over_time = tuple(
        TimeBucketEntry(period_key=key, value=value)
        for key, value in sorted(time_counts.items())
    )

    return AggregationResult(
        by_category=tuple(rank_counts(type_counts)),
        by_area=tuple(rank_counts(area_counts)),
        over_time=over_time,
        total_processed=processed,
    )
