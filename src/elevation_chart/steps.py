"""Grid step selection for the chart axes."""

# "Nice" elevation increments in meters
ELEVATION_STEPS = (5, 10, 20, 25, 50, 100, 200, 250, 500, 1_000)

# "Nice" distance increments in meters (always whole kilometers)
DISTANCE_STEPS = (1_000, 2_000, 5_000, 10_000, 25_000, 50_000, 100_000)

# Minimum pixel gap between adjacent elevation (horizontal) grid lines
MIN_HORIZONTAL_LINE_SPACING = 50

# Minimum pixel gap between adjacent distance (vertical) grid lines
MIN_VERTICAL_LINE_SPACING = 50


def choose_step(pixels_per_unit: float, candidate_steps, min_pixel_spacing: float) -> int:
    """Pick the smallest candidate step that keeps grid lines far enough apart.

    Args:
        pixels_per_unit: Number of pixels covered by one world unit on the axis
        candidate_steps: Possible steps, ordered ascending
        min_pixel_spacing: Minimum distance in pixels between two lines

    Returns:
        The first step whose pixel spacing reaches min_pixel_spacing, or the
        largest candidate when none does (lines end up sparser than asked).
    """
    for step in candidate_steps:
        if step * pixels_per_unit >= min_pixel_spacing:
            return step
    return candidate_steps[-1]
