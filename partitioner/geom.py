"""Basic planar geometry: points and axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point2D:
    """An immutable point in the plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box given by its lower-left and upper-right corners."""

    ll: Point2D = field(default_factory=Point2D)
    ur: Point2D = field(default_factory=Point2D)

    @classmethod
    def from_coords(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> BoundingBox:
        """Build a box from its minimum and maximum coordinates."""
        return cls(Point2D(min_x, min_y), Point2D(max_x, max_y))

    def contains(self, point: Point2D) -> bool:
        """Return True if the point lies inside the box, borders included."""
        return self.ll.x <= point.x <= self.ur.x and self.ll.y <= point.y <= self.ur.y