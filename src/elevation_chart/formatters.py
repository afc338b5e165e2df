"""Formatting utilities for display."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from elevation_chart.profile import ElevationSource

SUMMARY_SEPARATOR = "     "


def format_length_km(meters: float) -> str:
    """Format a distance in meters as 'X.Y km'."""
    return f"{meters / 1000:.1f} km"


def format_meters(meters: float) -> str:
    """Format a value as whole meters."""
    return f"{meters:.0f} m"


def format_position(meters: int | None) -> str:
    """Format a pointer position along the route, or a dash when there is none."""
    if meters is None:
        return "-"
    return f"{meters / 1000:.2f} km"


def format_summary(profile: ElevationSource) -> str:
    """One-line summary of a profile: length, ascent, descent and elevation range."""
    parts = [
        f"Length: {format_length_km(profile.length)}",
        f"Ascent: {format_meters(profile.total_ascent)}",
        f"Descent: {format_meters(profile.total_descent)}",
        f"Elevation: from {format_meters(profile.min_elevation)} to {format_meters(profile.max_elevation)}",
    ]
    return SUMMARY_SEPARATOR.join(parts)
