"""Single closed-form steps of point-pair registration."""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from .point import OrientedPoint, Point

PointPair = Tuple[Point, Point]


def _means(pairs: List[PointPair]) -> Tuple[Point, Point]:
    if not pairs:
        raise ValueError("no point pairs given")
    scale = 1.0 / len(pairs)
    first = Point(sum(a.x for a, _ in pairs), sum(a.y for a, _ in pairs)) * scale
    second = Point(sum(b.x for _, b in pairs), sum(b.y for _, b in pairs)) * scale
    return first, second


def _finish(theta: float, mean_first: Point, mean_second: Point, pairs: List[PointPair]) -> Tuple[OrientedPoint, float]:
    s, c = math.sin(theta), math.cos(theta)
    x = mean_second.x - (c * mean_first.x - s * mean_first.y)
    y = mean_second.y - (s * mean_first.x + c * mean_first.y)
    error = 0.0
    for a, b in pairs:
        delta = Point(c * a.x - s * a.y + x - b.x, s * a.x + c * a.y + y - b.y)
        error += delta.dot(delta)
    return OrientedPoint(x, y, theta), error


def icp_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """Transform moving the first points of the pairs onto the second, and its squared error."""
    pair_list = list(pairs)
    mean_first, mean_second = _means(pair_list)
    sxx = sxy = syx = 0.0
    for a, b in pair_list:
        f = a - mean_first
        g = b - mean_second
        sxx += f.x * g.x
        sxy += f.x * g.y
        syx += f.y * g.x
    theta = math.atan2(sxy - syx, sxx + sxy)
    return _finish(theta, mean_first, mean_second, pair_list)


def icp_nonlinear_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """Like :func:`icp_step`, with the rotation averaged from the bearing differences."""
    pair_list = list(pairs)
    mean_first, mean_second = _means(pair_list)
    gain = math.sqrt(mean_first.dot(mean_first))
    ms = mc = 0.0
    for a, b in pair_list:
        f = a - mean_first
        g = b - mean_second
        dalpha = math.atan2(g.y, g.x) - math.atan2(f.y, f.x)
        ms += gain * math.sin(dalpha)
        mc += gain * math.cos(dalpha)
    theta = math.atan2(ms, mc)
    return _finish(theta, mean_first, mean_second, pair_list)