#!/usr/bin/env python3
"""
Field normalization for spreadsheet scheduling records.

Spreadsheet exports are loose about how they write dates, times and the
days a class meets.  The helpers here turn those cells into canonical
values:

- parse_date: serial numbers, date objects and several text formats -> date
- parse_time: '12:00 PM', '14:30', '2 PM', ... on a given date -> datetime
- normalize_days: 'MWF', 'TR', 'TuTh', 'Mon, Wed' -> weekday tokens

Nothing in this module raises for bad cell values; failures come back as
None (or an empty token list) and the caller skips the record.
"""

import numbers
import re
import warnings
from datetime import date, datetime, time, timedelta
from typing import List, Optional

import pandas as pd

from .utils import is_blank


# Spreadsheet serial dates count days from this epoch
SERIAL_EPOCH = datetime(1899, 12, 30)

# strptime accepts unpadded month/day for %m/%d, so these cover
# M/d/yyyy, MM/dd/yyyy, M/d/yy, MM/dd/yy and yyyy-MM-dd
DATE_FORMATS = ['%m/%d/%Y', '%m/%d/%y', '%Y-%m-%d']

# h:mm a, h a, HH:mm / H:mm, h.mm a
TIME_FORMATS = ['%I:%M %p', '%I %p', '%H:%M', '%I.%M %p']

_TIME_PATTERN = re.compile(r'(\d{1,2})(?::(\d{2}))?\s*(AM|PM)?', re.IGNORECASE)
_YEAR_PATTERN = re.compile(r'(?<!\d)\d{4}(?!\d)')

# Weekday tokens; index follows Sunday=0 .. Saturday=6
WEEKDAY_TOKENS = 'UMTWRFS'

_DAY_WORDS = re.compile(
    r'sunday|monday|tuesday|wednesday|thursday|friday|saturday'
    r'|thurs|tues|sun|mon|tue|wed|thu|fri|sat',
    re.IGNORECASE,
)
_WORD_TOKENS = {
    'sun': 'U', 'mon': 'M', 'tue': 'T', 'wed': 'W',
    'thu': 'R', 'fri': 'F', 'sat': 'S',
}

# Order matters: 'Th' must become R before 'T' is read as Tuesday
_TWO_LETTER_DAYS = [('th', 'R'), ('tu', 'T'), ('su', 'U'), ('sa', 'S')]


def parse_date(value) -> Optional[date]:
    """
    Parse a spreadsheet date cell.

    Args:
        value: Serial day count (int/float), date/datetime/Timestamp, or text
               such as '8/25/2025', '08/25/25' or '2025-08-25'

    Returns:
        The calendar date, or None if the value cannot be read as a date
    """
    if is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, numbers.Real):
        try:
            return (SERIAL_EPOCH + timedelta(days=float(value))).date()
        except (OverflowError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # Last resort: let pandas guess ('Aug 25, 2025', '2025/08/25 00:00', ...).
    # Without a full year pandas fills the gaps from today or year 1
    if not _YEAR_PATTERN.search(text):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        try:
            parsed = pd.to_datetime(text, errors='coerce')
        except (ValueError, TypeError, OverflowError):
            return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_time(base_date: date, value, strict: bool = False) -> Optional[datetime]:
    """
    Combine a time-of-day cell with a calendar date.

    Text is tried against the known formats in order, then a loose
    'hour[:minute] [AM|PM]' match.  When nothing matches, the result is
    midnight of base_date, or None if strict is set.
    """
    midnight = datetime.combine(base_date, time())

    if is_blank(value):
        return None if strict else midnight

    if isinstance(value, datetime):
        return datetime.combine(base_date, value.time())
    if isinstance(value, time):
        return datetime.combine(base_date, value.replace(tzinfo=None))
    if isinstance(value, numbers.Real) and not isinstance(value, bool) and 0 <= value < 1:
        # Spreadsheet time as a fraction of a day
        minutes = min(round(float(value) * 24 * 60), 24 * 60 - 1)
        return midnight + timedelta(minutes=minutes)

    text = str(value).strip()
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return datetime.combine(base_date, parsed.time())

    match = _TIME_PATTERN.search(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2)) if match.group(2) else 0
        marker = (match.group(3) or '').upper()
        if marker == 'PM' and hour < 12:
            hour += 12
        if marker == 'AM' and hour == 12:
            hour = 0
        if hour <= 23 and minute <= 59:
            return midnight.replace(hour=hour, minute=minute)

    return None if strict else midnight


def normalize_days(text) -> List[str]:
    """
    Convert a days-met pattern into weekday tokens (M T W R F S U).

    Examples:
        normalize_days('MWF')      -> ['M', 'W', 'F']
        normalize_days('TuTh')     -> ['T', 'R']
        normalize_days('T')        -> ['T']
        normalize_days('Th')       -> ['R']
        normalize_days('Mon, Wed') -> ['M', 'W']
    """
    if is_blank(text):
        return []

    s = re.sub(r'[\s,]', '', str(text))
    s = _DAY_WORDS.sub(lambda m: _WORD_TOKENS[m.group(0)[:3].lower()], s)
    for pattern, token in _TWO_LETTER_DAYS:
        s = re.sub(pattern, token, s, flags=re.IGNORECASE)

    tokens = []
    for ch in s:
        upper = ch.upper()
        if upper in WEEKDAY_TOKENS:
            tokens.append(upper)
    return tokens


def day_to_index(token: str) -> int:
    """Weekday index of a token (Sunday=0 .. Saturday=6), or -1 if unknown."""
    return WEEKDAY_TOKENS.find(token) if len(token) == 1 else -1


def weekday_index(d: date) -> int:
    """Weekday index of a date, Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7
