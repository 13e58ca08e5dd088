#!/usr/bin/env python3
"""
Layout composition: positioned sessions -> pixel geometry.

The scene is a plain description of what to draw (date columns, hour
grid lines, session blocks, legend) in pixel coordinates with the origin
at the top left.  It does not depend on any drawing library; the
matplotlib renderer in visualize_schedule consumes it.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .lanes import pack_lanes
from .sessions import SessionInstance
from .utils import time_to_minutes, format_column_date, format_hour


DEFAULT_MIN_HOUR = 7
DEFAULT_MAX_HOUR = 22

# Padding added around the sessions when computing the visible window
AUTO_PADDING_MINUTES = 30


@dataclass(frozen=True)
class LayoutConfig:
    """Pixel constants for the timetable grid."""

    column_width: float = 140
    gutter: float = 16
    hour_height: float = 50
    header_height: float = 32
    label_width: float = 80
    inset: float = 3
    block_padding: float = 6
    vertical_margin: float = 2
    min_block_height: float = 14

    def __post_init__(self):
        for name in ('column_width', 'hour_height'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ('gutter', 'header_height', 'label_width', 'inset',
                     'block_padding', 'vertical_margin', 'min_block_height'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if 2 * self.inset >= self.column_width:
            raise ValueError(f"inset {self.inset} leaves no room in a {self.column_width}px column")


@dataclass(frozen=True)
class DateColumn:
    date: date
    x: float
    width: float
    label: str
    shaded: bool


@dataclass(frozen=True)
class HourTick:
    hour: int
    y: float
    label: str


@dataclass(frozen=True)
class SessionBlock:
    """
    A session block in pixel space.

    slot_x/slot_width describe the lane slot inside the date column;
    x/y/width/height describe the drawn rectangle inside that slot.
    """

    session: SessionInstance
    lane: int
    lanes: int
    slot_x: float
    slot_width: float
    x: float
    y: float
    width: float
    height: float
    color: str
    title: str
    subtitle: str


@dataclass
class Scene:
    title: str
    width: float
    height: float
    min_hour: int
    max_hour: int
    columns: List[DateColumn]
    ticks: List[HourTick]
    blocks: List[SessionBlock]
    legend: List[Tuple[str, str]]
    config: LayoutConfig = field(default_factory=LayoutConfig)

    @property
    def plot_top(self) -> float:
        return self.config.header_height + self.config.gutter

    @property
    def plot_height(self) -> float:
        return (self.max_hour - self.min_hour) * self.config.hour_height

    @property
    def grid_left(self) -> float:
        return self.config.label_width

    @property
    def grid_right(self) -> float:
        return self.width - self.config.gutter

    def blocks_for(self, d: date) -> List[SessionBlock]:
        return [b for b in self.blocks if b.session.date == d]


def validate_hour_bounds(min_hour: int, max_hour: int):
    """Raise ValueError unless 0 <= min_hour <= 23 and 1 <= max_hour <= 24."""
    if not 0 <= min_hour <= 23:
        raise ValueError(f"min_hour must be between 0 and 23, got {min_hour}")
    if not 1 <= max_hour <= 24:
        raise ValueError(f"max_hour must be between 1 and 24, got {max_hour}")


def auto_hour_bounds(sessions: Sequence[SessionInstance]) -> Tuple[int, int]:
    """
    Smallest whole-hour window holding every session plus 30 minutes each side.

    Falls back to (DEFAULT_MIN_HOUR, DEFAULT_MAX_HOUR) without sessions.
    """
    if not sessions:
        return DEFAULT_MIN_HOUR, DEFAULT_MAX_HOUR

    starts = np.array([time_to_minutes(s.start) for s in sessions])
    ends = np.array([time_to_minutes(s.end) for s in sessions])

    lo = max(0, starts.min() - AUTO_PADDING_MINUTES)
    hi = min(24 * 60, ends.max() + AUTO_PADDING_MINUTES)
    return int(math.floor(lo / 60)), int(math.ceil(hi / 60))


def effective_hour_bounds(
    min_hour: int,
    max_hour: int,
    sessions: Sequence[SessionInstance]
) -> Tuple[int, int]:
    """Combine user bounds with the auto window; users can only widen it."""
    auto_min, auto_max = auto_hour_bounds(sessions)
    return min(min_hour, auto_min), max(max_hour, auto_max)


def legend_entries(sessions: Sequence[SessionInstance]) -> List[Tuple[str, str]]:
    """(instructor, color) pairs in first-seen order."""
    seen = {}
    for s in sessions:
        seen.setdefault(s.instructor, s.color)
    return list(seen.items())


def compose_layout(
    sessions: Sequence[SessionInstance],
    min_hour: int = DEFAULT_MIN_HOUR,
    max_hour: int = DEFAULT_MAX_HOUR,
    config: Optional[LayoutConfig] = None,
    title: str = '',
    colors: Optional[Dict[str, str]] = None
) -> Scene:
    """
    Lay sessions out on a date x time grid.

    Args:
        sessions: Sessions sorted by date and start (see build_sessions)
        min_hour: Requested first visible hour
        max_hour: Requested last visible hour
        config: Pixel constants (LayoutConfig() if omitted)
        title: Scene title, usually the room name
        colors: Instructor -> color map for the legend; the legend is
                derived from the sessions when omitted

    Raises:
        ValueError: If min_hour or max_hour is outside the day

    Returns:
        Scene with one column per session date
    """
    validate_hour_bounds(min_hour, max_hour)
    config = config or LayoutConfig()
    sessions = list(sessions)
    lo, hi = effective_hour_bounds(min_hour, max_hour, sessions)
    placed_by_date = pack_lanes(sessions)

    width = config.label_width + (config.column_width + config.gutter) * len(placed_by_date) + config.gutter
    height = config.header_height + (hi - lo) * config.hour_height + config.gutter * 2
    plot_top = config.header_height + config.gutter

    def y_for(t) -> float:
        minutes = (t.hour - lo) * 60 + t.minute
        return plot_top + minutes / 60 * config.hour_height

    columns = []
    blocks = []
    for i, (d, placed) in enumerate(placed_by_date.items()):
        x = config.label_width + config.gutter + i * (config.column_width + config.gutter)
        columns.append(DateColumn(
            date=d,
            x=x,
            width=config.column_width,
            label=format_column_date(d),
            shaded=i % 2 == 0,
        ))

        for p in placed:
            s = p.session
            y1 = y_for(s.start)
            y2 = y_for(s.end)
            slot_width = (config.column_width - 2 * config.inset) / p.lanes
            slot_x = x + config.inset + p.lane * slot_width
            blocks.append(SessionBlock(
                session=s,
                lane=p.lane,
                lanes=p.lanes,
                slot_x=slot_x,
                slot_width=slot_width,
                x=slot_x,
                y=y1 + config.vertical_margin,
                width=max(0.0, slot_width - config.block_padding),
                height=max(config.min_block_height, y2 - y1 - 2 * config.vertical_margin),
                color=s.color,
                title=s.course_section,
                subtitle=f"{s.instructor} · {s.time_range}",
            ))

    ticks = [
        HourTick(hour=h, y=plot_top + (h - lo) * config.hour_height, label=format_hour(h))
        for h in range(lo, hi + 1)
    ]

    legend = list(colors.items()) if colors is not None else legend_entries(sessions)

    return Scene(
        title=title,
        width=width,
        height=height,
        min_hour=lo,
        max_hour=hi,
        columns=columns,
        ticks=ticks,
        blocks=blocks,
        legend=legend,
        config=config,
    )
