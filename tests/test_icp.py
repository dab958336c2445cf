import math

import pytest

from gridmapkit.icp import icp_nonlinear_step, icp_step
from gridmapkit.point import Point

CROSS = [Point(1, 0), Point(-1, 0), Point(0, 1), Point(0, -1)]


def _shifted(points, dx, dy):
    return [(p, Point(p.x + dx, p.y + dy)) for p in points]


def _rotated(points, angle):
    c, s = math.cos(angle), math.sin(angle)
    return [(p, Point(c * p.x - s * p.y, s * p.x + c * p.y)) for p in points]


def test_icp_step_recovers_translation():
    pose, error = icp_step(_shifted(CROSS, 2.0, -1.5))
    assert pose.x == pytest.approx(2.0)
    assert pose.y == pytest.approx(-1.5)
    assert pose.theta == pytest.approx(0.0)
    assert error == pytest.approx(0.0, abs=1e-12)


def test_icp_step_identity():
    pose, error = icp_step([(p, p) for p in CROSS])
    assert (pose.x, pose.y, pose.theta) == pytest.approx((0.0, 0.0, 0.0))
    assert error == pytest.approx(0.0)


def test_icp_step_empty_raises():
    with pytest.raises(ValueError):
        icp_step([])


def test_nonlinear_recovers_translation():
    points = [Point(p.x + 1, p.y + 1) for p in CROSS]
    pose, error = icp_nonlinear_step(_shifted(points, 0.5, 3.0))
    assert pose.x == pytest.approx(0.5)
    assert pose.y == pytest.approx(3.0)
    assert pose.theta == pytest.approx(0.0)
    assert error == pytest.approx(0.0, abs=1e-12)


def test_nonlinear_recovers_rotation():
    points = [Point(p.x + 1, p.y + 1) for p in CROSS]
    pose, error = icp_nonlinear_step(_rotated(points, 0.3))
    assert pose.theta == pytest.approx(0.3)
    assert pose.x == pytest.approx(0.0, abs=1e-9)
    assert pose.y == pytest.approx(0.0, abs=1e-9)
    assert error == pytest.approx(0.0, abs=1e-12)


def test_nonlinear_empty_raises():
    with pytest.raises(ValueError):
        icp_nonlinear_step(iter([]))