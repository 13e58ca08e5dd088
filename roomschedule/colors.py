#!/usr/bin/env python3
"""
Instructor colors.

Each distinct instructor gets the next palette color in first-seen order.
With more instructors than colors the palette wraps around, so two
instructors can end up sharing a color.
"""

from typing import Dict, Iterable

PALETTE = [
    '#ef4444',  # red
    '#3b82f6',  # blue
    '#10b981',  # green
    '#f59e0b',  # amber
    '#8b5cf6',  # violet
    '#ec4899',  # pink
    '#14b8a6',  # teal
    '#f97316',  # orange
    '#22c55e',  # emerald
    '#6366f1',  # indigo
]

# Used for a session whose instructor is missing from the color map
FALLBACK_COLOR = '#9ca3af'


def assign_colors(names: Iterable[str]) -> Dict[str, str]:
    """Map the i-th distinct name to PALETTE[i % len(PALETTE)]."""
    distinct = dict.fromkeys(names)
    return {name: PALETTE[i % len(PALETTE)] for i, name in enumerate(distinct)}
