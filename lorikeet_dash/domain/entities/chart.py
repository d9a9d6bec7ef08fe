"""Chart Entity - a named series of samples and its SVG rendering."""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Deque, Dict, Iterable, Optional

from lorikeet_dash.domain.entities.point import Point
from lorikeet_dash.domain.entities.units import ChartUnits
from lorikeet_dash.utils.smoothing import catmull_bezier
from lorikeet_dash.utils.units import pretty

if TYPE_CHECKING:
    from lorikeet_dash.infrastructure.rendering.svg_renderer import ChartRenderer

PADDING = 50.0
GRID_LINES = 5
# rough width of one label character in pixels
CHAR_WIDTH = 9.0


@dataclass
class Chart:
    """
    Samples collected for one step, plus how to display them.

    Points are appended in collection order. When ``max_points`` is set the
    oldest samples are dropped once the cap is reached.
    """

    name: str
    units: ChartUnits = ChartUnits.VALUE
    smooth: bool = False
    colour: str = "#99c1f1"
    max_points: Optional[int] = None
    points: Deque[Point] = field(default_factory=deque)

    def __post_init__(self):
        self.points = deque(self.points, maxlen=self.max_points)

    def add_point(self, x: float, y: float) -> None:
        self.points.append(Point(x=x, y=y))

    def snapshot(self) -> "Chart":
        """Copy of this chart whose points no longer change."""
        return replace(self, points=list(self.points))

    def layout(self, width: int, height: int) -> Optional[Dict[str, Any]]:
        """
        Compute the template context for a chart of ``width`` x ``height`` pixels.

        Returns None when there are fewer than two points. A series that is flat
        in x or y produces NaN coordinates rather than raising.
        """
        if len(self.points) <= 1:
            return None

        min_x = self.points[0].x
        max_x = _fold_max(point.x - min_x for point in self.points)
        min_y = _fold_min(point.y for point in self.points)
        max_y = _fold_max(point.y - min_y for point in self.points)

        max_label = pretty(max_y + min_y, self.units)
        # the min label can be the longer one, e.g. negative values
        min_label = pretty(min_y, self.units)

        p_left = max(
            len(max_label) * CHAR_WIDTH + 5.0,
            len(min_label) * CHAR_WIDTH + 5.0,
            PADDING,
        )
        p_other = PADDING

        width = width - p_left - p_other
        height = height - p_other * 2.0

        mapped = [
            Point(
                x=_divide(point.x - min_x, max_x) * width + p_left,
                y=_divide(point.y - min_y, max_y) * -height + p_other + height,
            )
            for point in self.points
        ]

        if self.smooth:
            path = " ".join(curve.to_svg() for curve in catmull_bezier(mapped))
        else:
            path = " ".join(point.to_svg() for point in mapped[1:])

        return {
            "path": path,
            "start": mapped[0],
            "name": self.name,
            "width": width,
            "height": height,
            "p_left": p_left,
            "p_other": p_other,
            "max_y": max_y,
            "min_y": min_y,
            "max_x": max_x,
            "min_x": min_x,
            "units": self.units.value,
            "lines": GRID_LINES,
            "colour": self.colour,
        }

    def draw_svg(self, width: int, height: int, renderer: "ChartRenderer") -> str:
        """Render the chart, or the loading placeholder until two points exist."""
        context = self.layout(width, height)
        if context is None:
            return renderer.loading()
        return renderer.render("chart.svg", context)


def _divide(numerator: float, denominator: float) -> float:
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if math.isnan(numerator) or numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _fold_max(values: Iterable[float]) -> float:
    # NaN entries are skipped unless every value is NaN
    result = math.nan
    for value in values:
        if math.isnan(result) or value > result:
            result = value
    return result


def _fold_min(values: Iterable[float]) -> float:
    result = math.nan
    for value in values:
        if math.isnan(result) or value < result:
            result = value
    return result
