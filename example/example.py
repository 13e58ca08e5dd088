#!/usr/bin/env python3
"""
Example script: draw the timetable of every room in a course-section export.

Run from this directory:

    python example.py
"""

from roomschedule import RoomScheduleVisualizer

visualizer = RoomScheduleVisualizer(verbose=True)
visualizer.load_schedule('schedule.csv')
visualizer.set_visible_hours(8, 18)

for room in visualizer.rooms:
    visualizer.select_room(room)
    visualizer.save_schedule(f'output/{room}.csv')
    visualizer.visualize_schedule(f'output/room-{room}.png')
