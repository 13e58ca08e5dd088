#!/usr/bin/env python3
"""
Record intake: map spreadsheet rows onto the canonical record fields.

Header text is matched case-insensitively against a synonym table, text
cells are cleaned up, and rows that cannot possibly produce a session
(no room, dates or times) are dropped before they reach the pipeline.
"""

import numbers
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .utils import is_blank


# Sentinel value for "match all" in filter_records
ALL = object()

HEADER_MAP = {
    'course/section': 'course_section',
    'course section': 'course_section',
    'course offering id': 'course_offering_id',
    'start date': 'start_date',
    'end date': 'end_date',
    'days met': 'days_met',
    'start time': 'start_time',
    'end time': 'end_time',
    'instructor': 'instructor',
    'room': 'room',
    'max enrollment': 'max_enrollment',
    'status': 'status',
    'term': 'term',
}

FIELDS = [
    'course_section',
    'course_offering_id',
    'start_date',
    'end_date',
    'days_met',
    'start_time',
    'end_time',
    'instructor',
    'room',
    'max_enrollment',
    'status',
    'term',
]

# Dates and times keep their raw cell value; the field parsers handle them
RAW_FIELDS = {'start_date', 'end_date', 'start_time', 'end_time', 'max_enrollment'}

REQUIRED_FIELDS = ['room', 'start_date', 'end_date', 'start_time', 'end_time']


def cell_text(value) -> str:
    """Clean a spreadsheet cell into text ('' for empty cells)."""
    if is_blank(value):
        return ''
    # Integer-valued floats come from numeric columns read with blanks in them
    if isinstance(value, numbers.Real) and not isinstance(value, bool) \
            and float(value).is_integer():
        return str(int(value))
    return str(value).strip()


def map_header(header) -> Optional[str]:
    """Canonical field name for a spreadsheet header, or None if unknown."""
    return HEADER_MAP.get(str(header).strip().lower())


def normalize_row(row: Mapping) -> Dict:
    """Map one raw row onto the canonical fields; unknown columns are ignored."""
    record = {field: '' for field in FIELDS}
    for header, value in row.items():
        field = map_header(header)
        if field is None:
            continue
        if field in RAW_FIELDS:
            record[field] = '' if is_blank(value) else value
        else:
            record[field] = cell_text(value)
    return record


def has_required_fields(record: Mapping) -> bool:
    return all(not is_blank(record.get(field)) for field in REQUIRED_FIELDS)


def normalize_rows(rows: Iterable[Mapping]) -> List[Dict]:
    """
    Normalize raw rows and drop the ones missing a room, dates or times.

    Args:
        rows: Iterable of mappings keyed by spreadsheet header text

    Returns:
        List of record dicts keyed by FIELDS, in input order
    """
    records = [normalize_row(row) for row in rows]
    return [r for r in records if has_required_fields(r)]


def records_from_frame(df: pd.DataFrame) -> List[Dict]:
    """Normalize the rows of a DataFrame read from a spreadsheet."""
    if df is None or df.empty:
        return []
    return normalize_rows(df.to_dict('records'))


def filter_records(
    records: Iterable[Mapping],
    room: str | object = ALL,
    instructor: str | object = ALL,
    predicate: Optional[Callable[[Mapping], bool]] = None
) -> List[Mapping]:
    """
    Filter records by exact values or custom predicate.

    Args:
        records: Iterable of normalized records
        room: Exact room to match, or ALL to match all rooms
        instructor: Exact instructor to match, or ALL to match all instructors
        predicate: Custom function record -> bool
                   If provided, overrides exact matching parameters

    Returns:
        Filtered list of records matching the criteria

    Examples:
        # Everything scheduled in one room
        filter_records(records, room='THOM 107AC')

        # One instructor's sections in one room
        filter_records(records, room='THOM 107AC', instructor='A')

        # Only scheduled (not cancelled) sections
        filter_records(records, predicate=lambda r: r['status'] == 'Scheduled')
    """
    if predicate is not None:
        return [r for r in records if predicate(r)]

    def matches(r: Mapping) -> bool:
        if room is not ALL and r.get('room') != room:
            return False
        if instructor is not ALL and r.get('instructor') != instructor:
            return False
        return True

    return [r for r in records if matches(r)]
