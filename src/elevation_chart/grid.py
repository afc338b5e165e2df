"""Grid lines and axis labels for the elevation chart."""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from elevation_chart.models import Axis, DrawingRect, Grid, GridLine
from elevation_chart.steps import (
    DISTANCE_STEPS,
    ELEVATION_STEPS,
    MIN_HORIZONTAL_LINE_SPACING,
    MIN_VERTICAL_LINE_SPACING,
    choose_step,
)

if TYPE_CHECKING:
    from elevation_chart.profile import ElevationSource
    from elevation_chart.transform import AffineTransformPair

# Gap in pixels between a label and the edge of the drawing rect
LABEL_OFFSET = 2

METERS_PER_KM = 1000


def elevation_lines(
    rect: DrawingRect,
    transforms: AffineTransformPair,
    profile: ElevationSource,
    min_spacing: float = MIN_HORIZONTAL_LINE_SPACING,
) -> list[GridLine]:
    """Horizontal lines at round elevations between min and max elevation."""
    pixels_per_meter = rect.height / (profile.max_elevation - profile.min_elevation)
    step = choose_step(pixels_per_meter, ELEVATION_STEPS, min_spacing)

    lines = []
    elevation = step * math.ceil(profile.min_elevation / step)
    while elevation <= profile.max_elevation:
        _, y = transforms.world_to_screen.transform(0, elevation)
        lines.append(GridLine(
            axis=Axis.HORIZONTAL,
            world_value=elevation,
            screen_coordinate=y,
            label_text=str(elevation),
            start=(rect.left, y),
            end=(rect.right, y),
            label_anchor=(rect.left - LABEL_OFFSET, y),
        ))
        elevation += step
    return lines


def distance_lines(
    rect: DrawingRect,
    transforms: AffineTransformPair,
    profile: ElevationSource,
    min_spacing: float = MIN_VERTICAL_LINE_SPACING,
) -> list[GridLine]:
    """Vertical lines at whole kilometers, starting at the route start."""
    pixels_per_meter = rect.width / profile.length
    step_km = choose_step(pixels_per_meter, DISTANCE_STEPS, min_spacing) // METERS_PER_KM

    lines = []
    km = 0
    while km * METERS_PER_KM <= profile.length:
        x, _ = transforms.world_to_screen.transform(km * METERS_PER_KM, 0)
        lines.append(GridLine(
            axis=Axis.VERTICAL,
            world_value=km * METERS_PER_KM,
            screen_coordinate=x,
            label_text=str(km),
            start=(x, rect.bottom),
            end=(x, rect.top),
            label_anchor=(x, rect.bottom + LABEL_OFFSET),
        ))
        km += step_km
    return lines


def build_grid(
    rect: DrawingRect,
    transforms: AffineTransformPair,
    profile: ElevationSource,
    min_horizontal_spacing: float = MIN_HORIZONTAL_LINE_SPACING,
    min_vertical_spacing: float = MIN_VERTICAL_LINE_SPACING,
) -> Grid:
    return Grid(
        horizontal_lines=elevation_lines(rect, transforms, profile, min_horizontal_spacing),
        vertical_lines=distance_lines(rect, transforms, profile, min_vertical_spacing),
    )
