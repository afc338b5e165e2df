"""Affine mapping between chart pixels and route world coordinates.

Screen space is the drawing surface in pixels, with Y growing downward.
World space is (distance along the route, elevation), both in meters.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from elevation_chart.models import DrawingRect
    from elevation_chart.profile import ElevationSource

logger = logging.getLogger(__name__)


class NonInvertibleGeometry(ValueError):
    """Raised when the drawing rect or profile cannot produce an invertible mapping."""


class Affine:
    """Immutable 2D affine transform backed by a 3x3 homogeneous matrix."""

    __slots__ = ("_matrix",)

    def __init__(self, matrix=None):
        m = np.identity(3) if matrix is None else np.array(matrix, dtype=float)
        m.setflags(write=False)
        self._matrix = m

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine:
        return cls([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])

    @classmethod
    def scale(cls, sx: float, sy: float) -> Affine:
        return cls([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def then(self, other: Affine) -> Affine:
        """Return the transform applying self first, then other."""
        return Affine(other._matrix @ self._matrix)

    def prepend_translation(self, tx: float, ty: float) -> Affine:
        return self.then(Affine.translation(tx, ty))

    def prepend_scale(self, sx: float, sy: float) -> Affine:
        return self.then(Affine.scale(sx, sy))

    def inverse(self) -> Affine:
        """Invert the transform.

        Raises:
            NonInvertibleGeometry: If the linear part is singular.
        """
        det = self._matrix[0, 0] * self._matrix[1, 1] - self._matrix[0, 1] * self._matrix[1, 0]
        if det == 0 or not np.isfinite(det):
            raise NonInvertibleGeometry(f"Transform determinant is {det}")
        return Affine(np.linalg.inv(self._matrix))

    def transform(self, x: float, y: float) -> tuple[float, float]:
        m = self._matrix
        return (
            float(m[0, 0] * x + m[0, 1] * y + m[0, 2]),
            float(m[1, 0] * x + m[1, 1] * y + m[1, 2]),
        )

    def transform_points(self, xs, ys) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized transform of coordinate arrays."""
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        m = self._matrix
        return (
            m[0, 0] * xs + m[0, 1] * ys + m[0, 2],
            m[1, 0] * xs + m[1, 1] * ys + m[1, 2],
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Affine):
            return NotImplemented
        return bool(np.array_equal(self._matrix, other._matrix))

    def __hash__(self) -> int:
        return hash(self._matrix.tobytes())

    def __repr__(self) -> str:
        m = self._matrix
        return (f"Affine(mxx={m[0, 0]:g}, mxy={m[0, 1]:g}, tx={m[0, 2]:g}, "
                f"myx={m[1, 0]:g}, myy={m[1, 1]:g}, ty={m[1, 2]:g})")


@dataclass(frozen=True)
class AffineTransformPair:
    """Screen-to-world transform and its exact inverse, always built together."""
    screen_to_world: Affine
    world_to_screen: Affine

    @classmethod
    def from_screen_to_world(cls, screen_to_world: Affine) -> AffineTransformPair:
        return cls(screen_to_world=screen_to_world, world_to_screen=screen_to_world.inverse())


def build_transforms(rect: DrawingRect, profile: ElevationSource) -> AffineTransformPair:
    """Build the pixel <-> world transform pair for a drawing rect and profile.

    The screen-to-world transform moves the rect's top-left corner to the
    origin, scales pixels to meters (negative vertically since pixel Y grows
    downward), then shifts so that max elevation sits at the top edge. The
    world-to-screen transform is its matrix inverse.

    Raises:
        NonInvertibleGeometry: If the rect is empty or the profile is flat.
    """
    if rect.width <= 0 or rect.height <= 0:
        raise NonInvertibleGeometry(f"Empty drawing rect: {rect.width}x{rect.height}")
    if profile.max_elevation == profile.min_elevation:
        raise NonInvertibleGeometry(f"Zero elevation range at {profile.min_elevation} m")

    screen_to_world = (
        Affine()
        .prepend_translation(-rect.x, -rect.y)
        .prepend_scale(
            profile.length / rect.width,
            (profile.min_elevation - profile.max_elevation) / rect.height,
        )
        .prepend_translation(0.0, profile.max_elevation)
    )
    return AffineTransformPair.from_screen_to_world(screen_to_world)


class CoordinateMapper:
    """Holds the current transform pair and replaces it wholesale on rebuild."""

    def __init__(self):
        self._transforms: AffineTransformPair | None = None

    @property
    def transforms(self) -> AffineTransformPair | None:
        return self._transforms

    def rebuild(self, rect: DrawingRect, profile: ElevationSource) -> AffineTransformPair | None:
        """Rebuild transforms for a new rect or profile.

        Returns the new pair, or None if the geometry is degenerate, in which
        case the previous pair stays in place.
        """
        try:
            pair = build_transforms(rect, profile)
        except NonInvertibleGeometry as e:
            logger.debug("Keeping previous transforms: %s", e)
            return None
        self._transforms = pair
        return pair

    def clear(self) -> None:
        self._transforms = None
