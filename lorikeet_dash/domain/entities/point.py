from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_svg(self) -> str:
        return f"L {self.x:.4f} {self.y:.4f}"


@dataclass(frozen=True)
class Curve:
    """A cubic Bezier segment: two control points and the end point."""

    c1: Point
    c2: Point
    end: Point

    def to_svg(self) -> str:
        return (
            f"C {self.c1.x:.4f} {self.c1.y:.4f}, "
            f"{self.c2.x:.4f} {self.c2.y:.4f}, "
            f"{self.end.x:.4f} {self.end.y:.4f}"
        )
