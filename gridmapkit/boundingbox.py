"""Bounding box of a point set aligned with its principal axes."""

from __future__ import annotations

import math
from typing import Iterable, Tuple

from .point import AnyPoint, Point


class OrientedBoundingBox:
    """The smallest box around the points whose sides follow their covariance eigenvectors.

    Raises ValueError when there are no points or the eigenvectors cannot be
    computed (the covariance has no cross term).
    """

    def __init__(self, points: Iterable[AnyPoint]) -> None:
        pts = [(float(p.x), float(p.y)) for p in points]
        if not pts:
            raise ValueError("no points given")
        n = len(pts)
        cx = sum(x for x, _ in pts) / n
        cy = sum(y for _, y in pts) / n

        x1 = sum((x - cx) ** 2 for x, _ in pts) / n
        x2 = sum((x - cx) * (y - cy) for x, y in pts) / n
        x3 = x2
        x4 = sum((y - cy) ** 2 for _, y in pts) / n

        term = x4 * x4 - 2.0 * x1 * x4 + x1 * x1 + 4.0 * x2 * x3
        if x3 == 0 or x2 == 0 or term < 0:
            raise ValueError(f"cannot compute the eigenvectors: x2={x2}, x3={x3}, term={term}")

        root = math.sqrt(term)
        lamda1 = 0.5 * (x4 + x1 + root)
        lamda2 = 0.5 * (x4 + x1 - root)

        def eigenvector(lamda: float) -> Tuple[float, float]:
            vx = -(x4 - lamda) * (x4 - lamda) * (x1 - lamda) / (x2 * x3 * x3)
            vy = (x4 - lamda) * (x1 - lamda) / (x2 * x3)
            length = math.hypot(vx, vy)
            return vx / length, vy / length

        v1x, v1y = eigenvector(lamda1)
        v2x, v2y = eigenvector(lamda2)

        us = [(x - cx) * v1x + (y - cy) * v1y for x, y in pts]
        vs = [(x - cx) * v2x + (y - cy) * v2y for x, y in pts]
        umin, umax = min(us), max(us)
        vmin, vmax = min(vs), max(vs)

        def corner(u: float, v: float) -> Point:
            return Point(cx + u * v1x + v * v2x, cy + u * v1y + v * v2y)

        self._ul = corner(umin, vmin)
        self._ur = corner(umax, vmin)
        self._ll = corner(umin, vmax)
        self._lr = corner(umax, vmax)

    @property
    def ul(self) -> Point:
        return self._ul

    @property
    def ur(self) -> Point:
        return self._ur

    @property
    def ll(self) -> Point:
        return self._ll

    @property
    def lr(self) -> Point:
        return self._lr

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        return self._ul, self._ur, self._ll, self._lr

    def area(self) -> float:
        """Area of the box."""
        return math.hypot(self._ul.x - self._ll.x, self._ul.y - self._ll.y) * math.hypot(
            self._ul.x - self._ur.x, self._ul.y - self._ur.y
        )