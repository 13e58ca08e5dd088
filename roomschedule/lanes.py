#!/usr/bin/env python3
"""
Lane packing for sessions that overlap on the same date.

Sessions are taken in start order and dropped into the lowest lane that
is free by the time they begin (greedy interval partitioning).  This uses
as many lanes as the day's peak number of simultaneous sessions.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List

from .sessions import SessionInstance


@dataclass(frozen=True)
class PlacedSession:
    """A session plus its lane and the number of lanes on its date."""

    session: SessionInstance
    lane: int
    lanes: int


def assign_lanes(day_sessions: Iterable[SessionInstance]) -> List[PlacedSession]:
    """
    Assign lanes to the sessions of a single date.

    Args:
        day_sessions: Sessions that all share one date

    Returns:
        PlacedSession list in start order; every entry carries the same
        lane count (at least 1)
    """
    # sorted() is stable, so equal starts keep their input order
    items = sorted(day_sessions, key=lambda s: s.start)
    lane_ends = []
    placed = []
    for s in items:
        lane = next((i for i, end in enumerate(lane_ends) if end <= s.start), None)
        if lane is None:
            lane = len(lane_ends)
            lane_ends.append(s.end)
        else:
            lane_ends[lane] = s.end
        placed.append((s, lane))

    total = max(1, len(lane_ends))
    return [PlacedSession(session=s, lane=lane, lanes=total) for s, lane in placed]


def pack_lanes(sessions: Iterable[SessionInstance]) -> Dict[date, List[PlacedSession]]:
    """Group sessions by date (in date order) and assign lanes per date."""
    by_date: Dict[date, List[SessionInstance]] = {}
    for s in sessions:
        by_date.setdefault(s.date, []).append(s)
    return {d: assign_lanes(by_date[d]) for d in sorted(by_date)}
