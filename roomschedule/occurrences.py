#!/usr/bin/env python3
"""
Expand a scheduling record into the concrete dates the class meets.
"""

from datetime import date
from typing import List, Mapping

import pandas as pd

from .fields import parse_date, normalize_days, day_to_index, weekday_index


def generate_occurrences(record: Mapping) -> List[date]:
    """
    List every date in [start_date, end_date] on a requested weekday.

    Returns an empty list if either date is unreadable, the range is
    inverted, or the days-met pattern names no weekday.
    """
    start = parse_date(record.get('start_date'))
    end = parse_date(record.get('end_date'))
    if start is None or end is None or end < start:
        return []

    wanted = {day_to_index(token) for token in normalize_days(record.get('days_met'))}
    wanted.discard(-1)
    if not wanted:
        return []

    return [
        d.date()
        for d in pd.date_range(start, end, freq='D')
        if weekday_index(d) in wanted
    ]
