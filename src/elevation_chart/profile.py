"""Elevation profile sources for the chart."""

from typing import Protocol

import numpy as np

from elevation_chart.distance import cumulative_distances
from elevation_chart.models import TrackPoint


class ProfileError(ValueError):
    """Raised when samples cannot form an elevation profile."""


class ElevationSource(Protocol):
    """What the chart needs from a profile. Values must be stable for one redraw."""

    @property
    def length(self) -> float: ...

    @property
    def min_elevation(self) -> float: ...

    @property
    def max_elevation(self) -> float: ...

    @property
    def total_ascent(self) -> float: ...

    @property
    def total_descent(self) -> float: ...

    def elevation_at(self, distance: float) -> float: ...


class ElevationProfile:
    """Piecewise-linear elevation along a route.

    Elevations are interpolated between samples. Positions before the start
    or past the end of the route take the first or last sample's elevation.
    """

    def __init__(self, distances, elevations):
        distances = np.array(distances, dtype=float)
        elevations = np.array(elevations, dtype=float)
        if distances.shape != elevations.shape or distances.ndim != 1:
            raise ProfileError("distances and elevations must be 1-D arrays of the same size")
        if len(distances) < 2:
            raise ProfileError(f"Need at least 2 samples, got {len(distances)}")
        if not np.all(np.isfinite(elevations)):
            raise ProfileError("Elevations must be finite")
        if distances[0] != 0 or np.any(np.diff(distances) <= 0):
            raise ProfileError("Distances must start at 0 and be strictly increasing")

        self._distances = distances
        self._elevations = elevations
        self._distances.setflags(write=False)
        self._elevations.setflags(write=False)

        deltas = np.diff(elevations)
        self._total_ascent = float(deltas[deltas > 0].sum())
        self._total_descent = float(-deltas[deltas < 0].sum())

    @classmethod
    def from_uniform_samples(cls, length: float, elevations) -> "ElevationProfile":
        """Build a profile from elevations sampled at equal spacing over length meters."""
        elevations = np.asarray(elevations, dtype=float)
        if length <= 0:
            raise ProfileError(f"Profile length must be positive, got {length}")
        return cls(np.linspace(0.0, length, len(elevations)), elevations)

    @property
    def length(self) -> float:
        return float(self._distances[-1])

    @property
    def min_elevation(self) -> float:
        return float(self._elevations.min())

    @property
    def max_elevation(self) -> float:
        return float(self._elevations.max())

    @property
    def total_ascent(self) -> float:
        return self._total_ascent

    @property
    def total_descent(self) -> float:
        return self._total_descent

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    @property
    def elevations(self) -> np.ndarray:
        return self._elevations

    def elevation_at(self, distance: float) -> float:
        # np.interp clamps to the end values outside [0, length]
        return float(np.interp(distance, self._distances, self._elevations))

    def __repr__(self) -> str:
        return (f"ElevationProfile(length={self.length:.0f}m, samples={len(self._distances)}, "
                f"elevation={self.min_elevation:.0f}-{self.max_elevation:.0f}m)")


def profile_from_points(points: list[TrackPoint]) -> ElevationProfile:
    """Build an elevation profile from GPS track points.

    Points without elevation are dropped. Points that do not advance along
    the route (repeated fixes) are merged into the preceding sample.

    Raises:
        ProfileError: If fewer than two usable points remain.
    """
    usable = [p for p in points if p.elevation is not None]
    if len(usable) < 2:
        raise ProfileError("Route contains fewer than 2 track points with elevation")

    cum_dist = cumulative_distances(usable)
    distances = [cum_dist[0]]
    elevations = [usable[0].elevation]
    for d, p in zip(cum_dist[1:], usable[1:]):
        if d > distances[-1]:
            distances.append(d)
            elevations.append(p.elevation)

    if len(distances) < 2:
        raise ProfileError("Route has zero length")
    return ElevationProfile(distances, elevations)
