#!/usr/bin/env python3
"""
Schedule Visualization
Draws a composed room timetable scene and saves it as an image.
"""

import os

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.patches import Rectangle, FancyBboxPatch

from .layout import Scene


DPI = 100
GRID_COLOR = '#e5e7eb'
SHADE_COLOR = '#fafafa'
TEXT_COLOR = '#111111'
AXIS_LABEL_COLOR = '#555555'
TITLE_COLOR = '#6b7280'
BLOCK_ALPHA = 0.85
CORNER_RADIUS = 8


def _pt(px):
    """Convert a pixel font size to points at DPI."""
    return px * 72 / DPI


def export_filename(room=None, extension='png'):
    """File name for an exported timetable, e.g. 'room-THOM 107AC.png'."""
    name = (room or 'schedule').replace('/', '-').replace('\\', '-')
    return f"room-{name}.{extension}"


def visualize_schedule(scene: Scene, output_file='schedule_visual.png', scale=2):
    """
    Render a scene with matplotlib and save it.

    The image format follows the file extension (.png, .svg, .pdf, ...).

    Args:
        scene: Scene from layout.compose_layout
        output_file: Path to write
        scale: Resolution multiplier for raster formats

    Returns:
        The path written
    """
    fig = plt.figure(figsize=(scene.width / DPI, scene.height / DPI), dpi=DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.axis('off')

    plot_top = scene.plot_top
    plot_bottom = scene.height - scene.config.gutter

    # Column backgrounds, dividers and date headers
    for col in scene.columns:
        ax.add_patch(Rectangle((col.x, plot_top), col.width, scene.plot_height,
                               facecolor=SHADE_COLOR if col.shaded else 'white',
                               edgecolor='none', zorder=0))
        ax.plot([col.x, col.x], [plot_top, plot_bottom], color=GRID_COLOR, linewidth=1, zorder=1)
        ax.text(col.x + col.width / 2, 20, col.label, ha='center', va='baseline',
                fontsize=_pt(12), weight='bold', color=TEXT_COLOR)

    # Hour grid lines and labels
    for tick in scene.ticks:
        ax.plot([scene.grid_left, scene.grid_right], [tick.y, tick.y],
                color=GRID_COLOR, linewidth=1, zorder=1)
        ax.text(scene.grid_left - 8, tick.y + 4, tick.label, ha='right', va='baseline',
                fontsize=_pt(11), color=AXIS_LABEL_COLOR)

    # Session blocks
    for block in scene.blocks:
        ax.add_patch(FancyBboxPatch(
            (block.x, block.y), block.width, block.height,
            boxstyle=f"round,pad=0,rounding_size={CORNER_RADIUS}",
            facecolor=block.color, edgecolor='none', alpha=BLOCK_ALPHA, zorder=2,
        ))
        ax.text(block.x + 8, block.y + 16, block.title, fontsize=_pt(11),
                color=TEXT_COLOR, va='baseline', zorder=3)
        ax.text(block.x + 8, block.y + 30, block.subtitle, fontsize=_pt(10),
                color=TEXT_COLOR, va='baseline', zorder=3)

    # Axis titles
    ax.text(scene.config.label_width / 2, 16, 'Time', ha='center', va='baseline',
            fontsize=_pt(12), color=TITLE_COLOR)
    ax.text(scene.width - 60, 16, scene.title or 'Dates', ha='right', va='baseline',
            fontsize=_pt(12), color=TITLE_COLOR)

    if scene.legend:
        handles = [mpatches.Patch(color=color, label=name) for name, color in scene.legend]
        ax.legend(handles=handles, title='Instructors', loc='upper left',
                  bbox_to_anchor=(1.0, 1.0), frameon=False, fontsize=_pt(11))

    dirname = os.path.dirname(str(output_file))
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    fig.savefig(output_file, dpi=DPI * scale, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return output_file
