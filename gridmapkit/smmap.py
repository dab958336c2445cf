"""Occupancy cells that accumulate laser hits, and the map built from them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .gridmap import GridMap
from .harray2d import HierarchicalArray2D
from .point import OrientedPoint, Point

SIGHT_INC = 1


@dataclass
class PointAccumulator:
    """Counts the hits and visits of a cell and sums the hit positions."""

    acc: Point = field(default_factory=Point)
    n: int = 0
    visits: int = 0

    def update(self, value: bool, p: Point | OrientedPoint = Point()) -> None:
        """Record a hit at ``p`` when ``value`` is true, otherwise a pass-through."""
        if value:
            self.acc = Point(self.acc.x + p.x, self.acc.y + p.y)
            self.n += 1
            self.visits += SIGHT_INC
        else:
            self.visits += 1

    def mean(self) -> Point:
        """The mean hit position; the cell must have been hit."""
        return Point(self.acc.x / self.n, self.acc.y / self.n)

    def __float__(self) -> float:
        """Occupancy probability, or -1 for a cell never visited."""
        if self.visits:
            return self.n * SIGHT_INC / self.visits
        return -1.0

    def add(self, other: PointAccumulator) -> None:
        """Merge the counts of ``other`` into this cell."""
        self.acc = self.acc + other.acc
        self.n += other.n
        self.visits += other.visits

    def entropy(self) -> float:
        """Binary entropy of the occupancy probability."""
        if not self.visits:
            return -math.log(0.5)
        if self.n == self.visits or self.n == 0:
            return 0.0
        x = self.n * SIGHT_INC / self.visits
        return -(x * math.log(x) + (1 - x) * math.log(1 - x))


def scan_matcher_map(
    center: Point | OrientedPoint,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
    delta: float,
    patch_magnitude: int = 5,
) -> GridMap:
    """A map of :class:`PointAccumulator` cells stored in lazily allocated patches."""
    return GridMap(
        center,
        xmin,
        ymin,
        xmax,
        ymax,
        delta,
        storage_factory=lambda xs, ys: HierarchicalArray2D(xs, ys, patch_magnitude, PointAccumulator),
        unknown=PointAccumulator(),
    )