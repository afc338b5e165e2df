from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Insets:
    top: float = 10.0
    right: float = 10.0
    bottom: float = 20.0
    left: float = 40.0


# Margins between the panel edge and the plotting area (labels live here)
DEFAULT_INSETS = Insets()


@dataclass(frozen=True)
class DrawingRect:
    x: float  # pixels
    y: float  # pixels
    width: float  # pixels, >= 0
    height: float  # pixels, >= 0

    @classmethod
    def from_panel(cls, panel_width: float, panel_height: float, insets: Insets = DEFAULT_INSETS) -> "DrawingRect":
        """Build the plotting rectangle left after subtracting insets from a panel."""
        return cls(
            x=insets.left,
            y=insets.top,
            width=max(0.0, panel_width - (insets.left + insets.right)),
            height=max(0.0, panel_height - (insets.top + insets.bottom)),
        )

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Check whether a pixel lies inside the rectangle (edges included)."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom


class Axis(Enum):
    HORIZONTAL = "horizontal"  # elevation lines
    VERTICAL = "vertical"  # distance lines


@dataclass(frozen=True)
class GridLine:
    axis: Axis
    world_value: float  # meters
    screen_coordinate: float  # pixel y for horizontal lines, pixel x for vertical
    label_text: str
    start: tuple[float, float]
    end: tuple[float, float]
    label_anchor: tuple[float, float]


@dataclass(frozen=True)
class Grid:
    horizontal_lines: list[GridLine] = field(default_factory=list)
    vertical_lines: list[GridLine] = field(default_factory=list)


# Closed polygon: baseline-left, one point per pixel column, baseline-right
ProfileOutline = list[tuple[float, float]]


@dataclass(frozen=True)
class HighlightIndicator:
    x: float  # pixels
    y_top: float
    y_bottom: float


@dataclass(frozen=True)
class ChartScene:
    """Everything needed to draw one redraw cycle of the chart."""
    rect: DrawingRect
    outline: ProfileOutline
    grid: Grid
    highlight: HighlightIndicator | None
    summary: str


@dataclass
class TrackPoint:
    lat: float
    lon: float
    elevation: float | None  # meters
