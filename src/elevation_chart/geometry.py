"""Filled profile outline in pixel space."""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from elevation_chart.models import DrawingRect, ProfileOutline

if TYPE_CHECKING:
    from elevation_chart.profile import ElevationSource
    from elevation_chart.transform import AffineTransformPair


def build_outline(
    rect: DrawingRect,
    transforms: AffineTransformPair,
    profile: ElevationSource,
    column_step: int = 1,
) -> ProfileOutline:
    """Sample the profile at every pixel column and close it along the baseline.

    Args:
        rect: Drawing rectangle in pixels
        transforms: Transform pair built for rect and profile
        profile: Elevation source; it is queried as-is for every column,
            out-of-route positions included
        column_step: Pixels between two samples (1 = one per column)

    Returns:
        Points (left, bottom), (x, y) for each sampled column left to right,
        then (right, bottom).
    """
    if column_step < 1:
        raise ValueError(f"column_step must be >= 1, got {column_step}")

    screen_to_world = transforms.screen_to_world
    world_to_screen = transforms.world_to_screen

    outline: ProfileOutline = [(rect.left, rect.bottom)]
    for i in range(0, math.floor(rect.width) + 1, column_step):
        x = rect.left + i
        distance, _ = screen_to_world.transform(x, 0)
        elevation = profile.elevation_at(distance)
        _, y = world_to_screen.transform(0, elevation)
        outline.append((x, y))
    outline.append((rect.right, rect.bottom))
    return outline
