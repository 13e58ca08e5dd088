#!/usr/bin/env python3
"""
Utility functions for the room schedule pipeline.
"""

import math


def time_to_minutes(t):
    """Convert a datetime or time to minutes since midnight."""
    return t.hour * 60 + t.minute


def format_clock(t):
    """Format a datetime/time as 12-hour clock text, e.g. '2:50 PM'."""
    hour = t.hour % 12 or 12
    suffix = 'AM' if t.hour < 12 else 'PM'
    return f"{hour}:{t.minute:02d} {suffix}"


def format_hour(hour):
    """Format an hour of day (0..24) as an axis label, e.g. 7 -> '7 AM'."""
    h = hour % 24
    suffix = 'AM' if h < 12 else 'PM'
    return f"{h % 12 or 12} {suffix}"


def format_column_date(d):
    """Format a date as a column header, e.g. 'Tue Aug 26'."""
    return f"{d:%a %b} {d.day}"


def is_blank(value):
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return not value.strip()
    # pandas.NaT compares unequal to itself
    return value != value
