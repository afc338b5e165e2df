"""Elevation chart rendering."""

import io

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon

from elevation_chart.config import DEFAULTS
from elevation_chart.models import ChartScene

DPI = 100

# Height in pixels of the text strip below the chart
SUMMARY_STRIP_HEIGHT = 24


def _new_pixel_figure(width: int, height: int):
    """Create a figure whose data coordinates are pixels, Y pointing down."""
    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI, facecolor='white')
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis('off')
    return fig, ax


def _to_png(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=DPI, facecolor='white', edgecolor='none')
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


def render_placeholder(width: int, height: int, message: str = "No route loaded") -> bytes:
    """Render a blank chart with a centered message."""
    fig, ax = _new_pixel_figure(width, height)
    ax.text(width / 2, height / 2, message, ha='center', va='center', fontsize=12, color='#999')
    return _to_png(fig)


def render_scene(
    scene: ChartScene | None,
    width: int,
    height: int,
    show_summary: bool = True,
    settings: dict | None = None,
) -> bytes:
    """Rasterize a chart scene to PNG.

    Args:
        scene: Scene from InteractionController.scene(), or None
        width: Panel width in pixels (same as passed to resize())
        height: Panel height in pixels (same as passed to resize())
        show_summary: If True, add a strip with the summary text below the chart
        settings: Colors and font size, see config.DEFAULTS

    Returns PNG image as bytes.
    """
    if scene is None:
        return render_placeholder(width, height)

    s = dict(DEFAULTS)
    if settings:
        s.update(settings)

    total_height = height + (SUMMARY_STRIP_HEIGHT if show_summary else 0)
    fig, ax = _new_pixel_figure(width, total_height)
    grid = scene.grid

    segments = [[line.start, line.end] for line in grid.horizontal_lines + grid.vertical_lines]
    if segments:
        ax.add_collection(LineCollection(segments, colors=s["grid_color"], linewidths=0.5, zorder=1))

    ax.add_patch(Polygon(
        scene.outline, closed=True,
        facecolor=s["profile_color"], edgecolor=s["profile_edge_color"], linewidth=0.8, zorder=2,
    ))

    font_size = s["label_font_size"]
    for line in grid.horizontal_lines:
        x, y = line.label_anchor
        ax.text(x, y, line.label_text, ha='right', va='center',
                fontsize=font_size, color=s["label_color"], zorder=3)
    for line in grid.vertical_lines:
        x, y = line.label_anchor
        ax.text(x, y, line.label_text, ha='center', va='top',
                fontsize=font_size, color=s["label_color"], zorder=3)

    if scene.highlight is not None:
        h = scene.highlight
        ax.plot([h.x, h.x], [h.y_top, h.y_bottom], color=s["highlight_color"], linewidth=1.2, zorder=4)

    if show_summary and scene.summary:
        ax.text(width / 2, height + SUMMARY_STRIP_HEIGHT / 2, scene.summary, ha='center', va='center',
                fontsize=font_size + 1, color=s["label_color"])

    return _to_png(fig)
