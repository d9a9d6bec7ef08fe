"""Catmull-Rom to cubic Bezier conversion for smoothed chart lines."""
from typing import List, Sequence

from lorikeet_dash.domain.entities.point import Curve, Point


def catmull_bezier(points: Sequence[Point]) -> List[Curve]:
    """
    Convert a polyline into one cubic Bezier curve per segment.

    The first and last points are repeated as their own neighbours instead of
    extrapolating phantom points. Needs at least two points.
    """
    curves = []
    last = len(points) - 1

    for i in range(last):
        p0 = points[0] if i == 0 else points[i - 1]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[i + 1] if i + 2 > last else points[i + 2]

        c1 = Point(
            x=(-p0.x + 6.0 * p1.x + p2.x) / 6.0,
            y=(-p0.y + 6.0 * p1.y + p2.y) / 6.0,
        )
        c2 = Point(
            x=(p1.x + 6.0 * p2.x - p3.x) / 6.0,
            y=(p1.y + 6.0 * p2.y - p3.y) / 6.0,
        )

        curves.append(Curve(c1=c1, c2=c2, end=p2))

    return curves
