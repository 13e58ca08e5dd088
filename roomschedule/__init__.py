"""Roomschedule - Room occupancy timetables from course-section exports."""

from .fields import parse_date, parse_time, normalize_days
from .occurrences import generate_occurrences
from .records import ALL, normalize_rows, filter_records
from .sessions import SessionInstance, build_sessions
from .colors import PALETTE, assign_colors
from .lanes import PlacedSession, assign_lanes, pack_lanes
from .layout import LayoutConfig, Scene, auto_hour_bounds, effective_hour_bounds, compose_layout
from .visualize_schedule import visualize_schedule
from .visualizer import RoomScheduleVisualizer

__all__ = [
    "parse_date",
    "parse_time",
    "normalize_days",
    "generate_occurrences",
    "ALL",
    "normalize_rows",
    "filter_records",
    "SessionInstance",
    "build_sessions",
    "PALETTE",
    "assign_colors",
    "PlacedSession",
    "assign_lanes",
    "pack_lanes",
    "LayoutConfig",
    "Scene",
    "auto_hour_bounds",
    "effective_hour_bounds",
    "compose_layout",
    "visualize_schedule",
    "RoomScheduleVisualizer",
]
