"""Chart state: layout, rebuilds, pointer hover and the highlighted position.

All methods are meant to be called from a single event thread. A rebuild
always replaces the transform pair before the outline and grid are derived
from it, then publishes the new scene to subscribers.
"""

import logging
from enum import Enum
from typing import Callable

from elevation_chart.formatters import format_summary
from elevation_chart.geometry import build_outline
from elevation_chart.grid import build_grid
from elevation_chart.models import (
    DEFAULT_INSETS,
    ChartScene,
    DrawingRect,
    Grid,
    HighlightIndicator,
    Insets,
    ProfileOutline,
)
from elevation_chart.profile import ElevationSource
from elevation_chart.steps import MIN_HORIZONTAL_LINE_SPACING, MIN_VERTICAL_LINE_SPACING
from elevation_chart.transform import AffineTransformPair, CoordinateMapper

logger = logging.getLogger(__name__)

SceneListener = Callable[[ChartScene | None], None]
PositionListener = Callable[[int | None], None]


class HoverState(Enum):
    IDLE = "idle"
    HOVERING = "hovering"


class InteractionController:
    """Keeps the chart geometry in sync with the panel size, profile and pointer."""

    def __init__(
        self,
        profile: ElevationSource | None = None,
        insets: Insets = DEFAULT_INSETS,
        min_horizontal_spacing: float = MIN_HORIZONTAL_LINE_SPACING,
        min_vertical_spacing: float = MIN_VERTICAL_LINE_SPACING,
    ):
        self.insets = insets
        self.min_horizontal_spacing = min_horizontal_spacing
        self.min_vertical_spacing = min_vertical_spacing

        self._profile = profile
        self._rect = DrawingRect.from_panel(0, 0, insets)
        self._mapper = CoordinateMapper()
        self._scene_rect: DrawingRect | None = None
        self._outline: ProfileOutline | None = None
        self._grid: Grid | None = None
        self._summary = ""

        self._state = HoverState.IDLE
        self._mouse_position: int | None = None
        self._highlighted_position: float | None = None

        self._scene_listeners: list[SceneListener] = []
        self._position_listeners: list[PositionListener] = []

    # -- Read-only state --------------------------------------------------

    @property
    def profile(self) -> ElevationSource | None:
        return self._profile

    @property
    def rect(self) -> DrawingRect:
        return self._rect

    @property
    def transforms(self) -> AffineTransformPair | None:
        return self._mapper.transforms

    @property
    def state(self) -> HoverState:
        return self._state

    @property
    def mouse_position(self) -> int | None:
        """Route position under the pointer in whole meters, or None."""
        return self._mouse_position

    @property
    def highlighted_position(self) -> float | None:
        return self._highlighted_position

    # -- Subscriptions ----------------------------------------------------

    def subscribe(self, listener: SceneListener) -> Callable[[], None]:
        """Call listener with every new scene. Returns an unsubscribe function."""
        self._scene_listeners.append(listener)
        return lambda: _discard(self._scene_listeners, listener)

    def subscribe_mouse_position(self, listener: PositionListener) -> Callable[[], None]:
        """Call listener whenever the position under the pointer changes."""
        self._position_listeners.append(listener)
        return lambda: _discard(self._position_listeners, listener)

    # -- Inputs -----------------------------------------------------------

    def resize(self, panel_width: float, panel_height: float) -> None:
        """Lay out the chart in a panel of the given size and rebuild."""
        self._rect = DrawingRect.from_panel(panel_width, panel_height, self.insets)
        self.rebuild()

    def set_profile(self, profile: ElevationSource | None) -> None:
        """Replace the data source and rebuild. None clears the chart."""
        self._profile = profile
        self.rebuild()

    def set_highlighted_position(self, position: float | None) -> None:
        """Show the indicator at a route position; None or negative hides it."""
        self._highlighted_position = position
        self._publish()

    def pointer_moved(self, x: float, y: float) -> None:
        # Containment uses the rect the current transforms were built for
        rect = self._scene_rect
        if self.transforms is not None and rect is not None and rect.contains(x, y):
            distance, _ = self.transforms.screen_to_world.transform(x, 0)
            self._set_hover(HoverState.HOVERING, round(distance))
        else:
            self._set_hover(HoverState.IDLE, None)

    def pointer_exited(self) -> None:
        self._set_hover(HoverState.IDLE, None)

    # -- Rebuild ----------------------------------------------------------

    def rebuild(self) -> None:
        """Rebuild transforms, then outline and grid, then notify subscribers.

        Degenerate layouts or flat profiles keep the last valid geometry.
        """
        if self._profile is None:
            self._mapper.clear()
            self._scene_rect = None
            self._outline = None
            self._grid = None
            self._summary = ""
            self._set_hover(HoverState.IDLE, None)
            self._publish()
            return

        transforms = self._mapper.rebuild(self._rect, self._profile)
        if transforms is None:
            logger.debug("Skipped rebuild for rect %s", self._rect)
            return

        self._scene_rect = self._rect
        self._summary = format_summary(self._profile)
        self._outline = build_outline(self._rect, transforms, self._profile)
        self._grid = build_grid(
            self._rect,
            transforms,
            self._profile,
            min_horizontal_spacing=self.min_horizontal_spacing,
            min_vertical_spacing=self.min_vertical_spacing,
        )
        logger.debug(
            "Rebuilt chart: %d outline points, %d elevation lines, %d distance lines",
            len(self._outline), len(self._grid.horizontal_lines), len(self._grid.vertical_lines),
        )
        self._publish()

    # -- Output -----------------------------------------------------------

    def highlight_indicator(self) -> HighlightIndicator | None:
        """Vertical indicator line spanning the drawn rect, or None if hidden."""
        position = self._highlighted_position
        if position is None or not position >= 0:
            return None
        rect = self._scene_rect
        if self.transforms is None or rect is None:
            return None
        x, _ = self.transforms.world_to_screen.transform(position, 0)
        return HighlightIndicator(x=x, y_top=rect.top, y_bottom=rect.bottom)

    def scene(self) -> ChartScene | None:
        """Current drawable scene, or None while there is nothing to draw."""
        if self._outline is None or self._grid is None:
            return None
        return ChartScene(
            rect=self._scene_rect,
            outline=self._outline,
            grid=self._grid,
            highlight=self.highlight_indicator(),
            summary=self._summary,
        )

    def _set_hover(self, state: HoverState, position: int | None) -> None:
        self._state = state
        if position == self._mouse_position:
            return
        self._mouse_position = position
        for listener in list(self._position_listeners):
            listener(position)

    def _publish(self) -> None:
        if not self._scene_listeners:
            return
        scene = self.scene()
        for listener in list(self._scene_listeners):
            listener(scene)


def _discard(listeners: list, listener) -> None:
    if listener in listeners:
        listeners.remove(listener)
