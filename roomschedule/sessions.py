#!/usr/bin/env python3
"""
Session building: turn records into dated, timed class meetings.

A record meets on every occurrence date generated for it; each meeting
becomes a SessionInstance with resolved start/end datetimes and the
instructor's color.  Meetings whose times cannot be read, or whose start
is not before their end, are dropped without complaint.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .colors import FALLBACK_COLOR, assign_colors
from .fields import parse_time
from .occurrences import generate_occurrences
from .records import ALL, filter_records
from .utils import format_clock


UNKNOWN_INSTRUCTOR = 'Unknown'


@dataclass(frozen=True)
class SessionInstance:
    """One meeting of one class section on one date."""

    date: date
    start: datetime
    end: datetime
    instructor: str
    course_section: str
    room: str
    color: str

    @property
    def time_range(self) -> str:
        return f"{format_clock(self.start)}–{format_clock(self.end)}"


def instructor_name(record: Mapping) -> str:
    return record.get('instructor') or UNKNOWN_INSTRUCTOR


def distinct_instructors(records: Iterable[Mapping]) -> List[str]:
    """Instructor names in first-seen order; blank names become 'Unknown'."""
    return list(dict.fromkeys(instructor_name(r) for r in records))


def distinct_rooms(records: Iterable[Mapping]) -> List[str]:
    """Sorted room names present in the records."""
    return sorted({r['room'] for r in records if r.get('room')})


def build_sessions(
    records: Iterable[Mapping],
    room: str | object = ALL,
    colors: Optional[Dict[str, str]] = None
) -> List[SessionInstance]:
    """
    Expand records into session instances.

    Args:
        records: Normalized records (see records.normalize_rows)
        room: Only build sessions for this room; ALL, None or '' keeps every room
        colors: Instructor -> color map.  Computed from the instructors of
                all records (not just the selected room) when omitted, so
                colors stay the same whichever room is shown.

    Returns:
        Sessions sorted by date, then start time
    """
    records = list(records)
    if colors is None:
        colors = assign_colors(distinct_instructors(records))

    selected = records if room is ALL or not room else filter_records(records, room=room)

    sessions = []
    for record in selected:
        instructor = instructor_name(record)
        for day in generate_occurrences(record):
            start = parse_time(day, record.get('start_time'), strict=True)
            end = parse_time(day, record.get('end_time'), strict=True)
            if start is None or end is None:
                continue
            if start >= end:
                continue
            sessions.append(SessionInstance(
                date=day,
                start=start,
                end=end,
                instructor=instructor,
                course_section=record.get('course_section') or '',
                room=record.get('room') or '',
                color=colors.get(instructor, FALLBACK_COLOR),
            ))

    sessions.sort(key=lambda s: (s.date, s.start))
    return sessions


def session_dates(sessions: Iterable[SessionInstance]) -> List[date]:
    """Distinct session dates in order of appearance."""
    return list(dict.fromkeys(s.date for s in sessions))


def sessions_to_frame(sessions: Iterable[SessionInstance]) -> pd.DataFrame:
    """Tabulate sessions for display or CSV export."""
    columns = ['Date', 'Start', 'End', 'Course/Section', 'Instructor', 'Room', 'Color']
    data = [
        {
            'Date': s.date.isoformat(),
            'Start': s.start.strftime('%H:%M'),
            'End': s.end.strftime('%H:%M'),
            'Course/Section': s.course_section,
            'Instructor': s.instructor,
            'Room': s.room,
            'Color': s.color,
        }
        for s in sessions
    ]
    return pd.DataFrame(data, columns=columns)
