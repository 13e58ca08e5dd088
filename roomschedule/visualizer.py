#!/usr/bin/env python3
"""
Room Schedule Visualizer
Loads a course-section export, expands it into dated sessions for one room
and draws the room's occupancy timetable.
"""

import argparse
import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .colors import assign_colors
from .layout import (
    DEFAULT_MAX_HOUR,
    DEFAULT_MIN_HOUR,
    LayoutConfig,
    Scene,
    auto_hour_bounds,
    compose_layout,
    validate_hour_bounds,
)
from .records import normalize_rows, records_from_frame
from .sessions import (
    SessionInstance,
    build_sessions,
    distinct_instructors,
    distinct_rooms,
    sessions_to_frame,
)
from .visualize_schedule import export_filename, visualize_schedule


EXCEL_SUFFIXES = {'.xlsx', '.xlsm', '.xls'}


def read_table(filename) -> pd.DataFrame:
    """Read the first sheet of a spreadsheet, or a CSV file, as text-friendly rows."""
    suffix = Path(filename).suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(filename, sheet_name=0)
    return pd.read_csv(filename)


class RoomScheduleVisualizer:
    def __init__(self, verbose: bool = False, config: Optional[LayoutConfig] = None):
        """
        Initialize the visualizer.

        Args:
            verbose: If True, report dropped rows and session counts.
            config: Pixel constants for the timetable layout.
        """
        self.verbose = verbose
        self.config = config or LayoutConfig()
        self.records: List[Dict] = []
        self.room: Optional[str] = None
        self.min_hour = DEFAULT_MIN_HOUR
        self.max_hour = DEFAULT_MAX_HOUR

    def load_schedule(self, filename: str = 'schedule.xlsx'):
        """Load scheduling rows from an .xlsx or .csv export."""
        try:
            df = read_table(filename)
        except FileNotFoundError:
            print(f"Error: {filename} not found")
            return None
        except Exception as e:
            print(f"Error loading schedule: {e}")
            return None

        records = self.load_frame(df)
        print(f"Loaded {len(records)} rows from {filename}")
        return records

    def load_rows(self, rows: Iterable[Mapping]) -> List[Dict]:
        """
        Replace the current rows and preselect the first room.

        Rows are keyed by spreadsheet header text; rows missing a room,
        dates or times are dropped.
        """
        rows = list(rows)
        return self._set_records(normalize_rows(rows), len(rows))

    def load_frame(self, df: pd.DataFrame) -> List[Dict]:
        """Replace the current rows with those of a DataFrame."""
        return self._set_records(records_from_frame(df), 0 if df is None else len(df))

    def _set_records(self, records: List[Dict], total: int) -> List[Dict]:
        if self.verbose and total != len(records):
            print(f"  Skipped {total - len(records)} row(s) missing room, dates or times")
        self.records = records
        self.room = next((r['room'] for r in records if r['room']), None)
        return records

    @property
    def rooms(self) -> List[str]:
        return distinct_rooms(self.records)

    @property
    def instructors(self) -> List[str]:
        return distinct_instructors(self.records)

    @property
    def colors(self) -> Dict[str, str]:
        return assign_colors(self.instructors)

    def select_room(self, room: Optional[str]):
        """Select the room to show; None shows every room."""
        if room is not None and self.records and room not in self.rooms:
            raise ValueError(f"Unknown room {room!r}; available rooms: {self.rooms}")
        self.room = room

    def set_visible_hours(self, min_hour: int = DEFAULT_MIN_HOUR, max_hour: int = DEFAULT_MAX_HOUR):
        """
        Set the requested visible window.  Sessions outside it still widen
        the window that is actually drawn.
        """
        validate_hour_bounds(min_hour, max_hour)
        self.min_hour = min_hour
        self.max_hour = max_hour

    def build_sessions(self) -> List[SessionInstance]:
        """Expand the loaded rows into sessions for the selected room."""
        sessions = build_sessions(self.records, room=self.room, colors=self.colors)
        if self.verbose:
            print(f"  Built {len(sessions)} session(s) for {self.room or 'all rooms'}")
        return sessions

    def auto_hours(self, sessions: Optional[List[SessionInstance]] = None):
        """Hour window the selected room needs, before user settings widen it."""
        if sessions is None:
            sessions = self.build_sessions()
        return auto_hour_bounds(sessions)

    def compose_layout(self, sessions: Optional[List[SessionInstance]] = None) -> Scene:
        """Lay out the selected room's sessions for rendering."""
        if sessions is None:
            sessions = self.build_sessions()
        return compose_layout(
            sessions,
            min_hour=self.min_hour,
            max_hour=self.max_hour,
            config=self.config,
            title=self.room or '',
            colors=self.colors,
        )

    def display_schedule(self):
        """Display the expanded sessions for the selected room."""
        sessions = self.build_sessions()
        if sessions:
            print(f"\nSchedule for {self.room or 'all rooms'}:")
            print(sessions_to_frame(sessions).to_string(index=False))
            auto_min, auto_max = self.auto_hours(sessions)
            print(f"Auto hours: {auto_min}:00-{auto_max}:00")
        else:
            print("No sessions to display. Load a schedule and select a room first.")

    def save_schedule(self, filename: str = 'sessions.csv'):
        """Save the expanded sessions to a CSV file."""
        sessions = self.build_sessions()
        if sessions:
            dirname = os.path.dirname(filename)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            sessions_to_frame(sessions).to_csv(filename, index=False)
            print(f"Schedule saved to {filename}")
            return filename
        print("No sessions available to save. Load a schedule and select a room first.")
        return None

    def visualize_schedule(self, output_file: Optional[str] = None):
        """
        Draw the timetable for the selected room.

        Args:
            output_file: Image path; defaults to 'room-<room>.png'
        """
        sessions = self.build_sessions()
        if not sessions:
            print("No sessions available to visualize. Load a schedule and select a room first.")
            return None
        output_file = output_file or export_filename(self.room)
        visualize_schedule(self.compose_layout(sessions), output_file)
        print(f"Schedule visualization saved to {output_file}")
        return output_file


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='roomschedule',
        description='Draw a room occupancy timetable from a course-section export',
    )
    p.add_argument('file', help='.xlsx or .csv export')
    p.add_argument('--room', help='room to show (default: first room in the file)')
    p.add_argument('--all-rooms', action='store_true', help='show sessions of every room')
    p.add_argument('--min-hour', type=int, default=DEFAULT_MIN_HOUR)
    p.add_argument('--max-hour', type=int, default=DEFAULT_MAX_HOUR)
    p.add_argument('--output', help="image path (default: 'room-<room>.png')")
    p.add_argument('--csv', help='also write the expanded sessions to this CSV file')
    p.add_argument('--list-rooms', action='store_true', help='print the rooms and exit')
    p.add_argument('-v', '--verbose', action='store_true')
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    visualizer = RoomScheduleVisualizer(verbose=args.verbose)

    if visualizer.load_schedule(args.file) is None:
        return 1

    if args.list_rooms:
        for room in visualizer.rooms:
            print(room)
        return 0

    try:
        if args.all_rooms:
            visualizer.select_room(None)
        elif args.room:
            visualizer.select_room(args.room)
        visualizer.set_visible_hours(args.min_hour, args.max_hour)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    if args.verbose:
        visualizer.display_schedule()
    if args.csv:
        visualizer.save_schedule(args.csv)
    return 0 if visualizer.visualize_schedule(args.output) else 1


if __name__ == "__main__":
    raise SystemExit(main())
