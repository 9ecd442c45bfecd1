"""Placed design instances with a location and a bit size."""

from __future__ import annotations

from dataclasses import dataclass

from .geom import Point2D


@dataclass(frozen=True)
class Instance:
    """A named instance placed at a location, carrying a number of bits.

    Equality compares every field; hashing uses the name alone; ordering
    compares the x coordinate.
    """

    name: str
    location: Point2D
    bitsize: int

    def __post_init__(self) -> None:
        if self.bitsize < 0:
            raise ValueError(f"bitsize must be non-negative, got {self.bitsize}")

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Instance):
            return NotImplemented
        return self.location.x < other.location.x

    @property
    def x(self) -> float:
        """The x coordinate of the location."""
        return self.location.x

    @property
    def y(self) -> float:
        """The y coordinate of the location."""
        return self.location.y

    def distance_to(self, other: Instance) -> float:
        """Manhattan distance to another instance."""
        return abs(self.x - other.x) + abs(self.y - other.y)