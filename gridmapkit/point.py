"""Planar points, oriented poses and the geometric helpers that work on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Union

MAXDOUBLE = math.inf


def normalize_angle(theta: float) -> float:
    """Bring an angle into the half-open interval [-pi, pi)."""
    if -math.pi <= theta < math.pi:
        return theta
    theta -= int(theta / (2 * math.pi)) * 2 * math.pi
    if theta >= math.pi:
        theta -= 2 * math.pi
    if theta < -math.pi:
        theta += 2 * math.pi
    return theta


@dataclass(frozen=True, order=True)
class Point:
    """A point in the plane; points order lexicographically by (x, y)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, value: float) -> Point:
        if not isinstance(value, (int, float)):
            return NotImplemented
        return Point(self.x * value, self.y * value)

    __rmul__ = __mul__

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def dot(self, other: AnyPoint) -> float:
        """Scalar product of the two position vectors."""
        return self.x * other.x + self.y * other.y


@dataclass(frozen=True)
class OrientedPoint:
    """A pose: a position with a heading angle."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    def __add__(self, other: OrientedPoint) -> OrientedPoint:
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return OrientedPoint(self.x + other.x, self.y + other.y, self.theta + other.theta)

    def __sub__(self, other: OrientedPoint) -> OrientedPoint:
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return OrientedPoint(self.x - other.x, self.y - other.y, self.theta - other.theta)

    def __mul__(self, value: float) -> OrientedPoint:
        if not isinstance(value, (int, float)):
            return NotImplemented
        return OrientedPoint(self.x * value, self.y * value, self.theta * value)

    __rmul__ = __mul__

    def normalized(self) -> OrientedPoint:
        """The same pose with its heading in [-pi, pi)."""
        return replace(self, theta=normalize_angle(self.theta))

    def rotate(self, alpha: float) -> OrientedPoint:
        """Rotate the pose about the origin by ``alpha``."""
        s, c = math.sin(alpha), math.cos(alpha)
        a = alpha + self.theta
        a = math.atan2(math.sin(a), math.cos(a))
        return OrientedPoint(c * self.x - s * self.y, s * self.x + c * self.y, a)

    def position(self) -> Point:
        """The position part of the pose."""
        return Point(self.x, self.y)

    @classmethod
    def from_point(cls, p: Point) -> OrientedPoint:
        return cls(p.x, p.y, 0.0)


AnyPoint = Union[Point, OrientedPoint]


def absolute_difference(p1: OrientedPoint, p2: OrientedPoint) -> OrientedPoint:
    """Pose of ``p1`` expressed in the frame of ``p2``."""
    delta = p1 - p2
    dtheta = math.atan2(math.sin(delta.theta), math.cos(delta.theta))
    s, c = math.sin(p2.theta), math.cos(p2.theta)
    return OrientedPoint(c * delta.x + s * delta.y, -s * delta.x + c * delta.y, dtheta)


def absolute_sum(p1: OrientedPoint, p2: AnyPoint) -> AnyPoint:
    """Express ``p2``, given in the frame of ``p1``, in the world frame."""
    s, c = math.sin(p1.theta), math.cos(p1.theta)
    if isinstance(p2, OrientedPoint):
        return OrientedPoint(c * p2.x - s * p2.y, s * p2.x + c * p2.y, p2.theta) + p1
    return Point(c * p2.x - s * p2.y, s * p2.x + c * p2.y) + p1.position()


def point_max(p1: AnyPoint, p2: AnyPoint) -> Point:
    """Componentwise maximum of two positions."""
    return Point(p1.x if p1.x > p2.x else p2.x, p1.y if p1.y > p2.y else p2.y)


def point_min(p1: AnyPoint, p2: AnyPoint) -> Point:
    """Componentwise minimum of two positions."""
    return Point(p1.x if p1.x < p2.x else p2.x, p1.y if p1.y < p2.y else p2.y)


def interpolate(p1: AnyPoint, t1: float, p2: AnyPoint, t2: float, t3: float) -> AnyPoint:
    """Interpolate between ``p1`` at time ``t1`` and ``p2`` at time ``t2`` for time ``t3``."""
    gain = (t3 - t1) / (t2 - t1)
    if isinstance(p1, OrientedPoint) and isinstance(p2, OrientedPoint):
        s = math.sin(p1.theta) + math.sin(p2.theta) * gain
        c = math.cos(p1.theta) + math.cos(p2.theta) * gain
        return OrientedPoint(
            p1.x + (p2.x - p1.x) * gain,
            p1.y + (p2.y - p1.y) * gain,
            math.atan2(s, c),
        )
    return Point(p1.x + (p2.x - p1.x) * gain, p1.y + (p2.y - p1.y) * gain)


def euclidian_dist(p1: AnyPoint, p2: AnyPoint) -> float:
    """Distance between the positions of two points or poses."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def radial_sort_key(origin: AnyPoint) -> Callable[[AnyPoint], float]:
    """A sort key ordering points by their bearing seen from ``origin``."""

    def key(p: AnyPoint) -> float:
        return math.atan2(p.y - origin.y, p.x - origin.x)

    return key