import math

import pytest

from gridmapkit.movement import (
    FSRMovement,
    compose_moves,
    frame_transformation,
    invert_move,
    move_between_points,
    move_point,
)
from gridmapkit.point import OrientedPoint


def assert_close(a, b, fields):
    for name in fields:
        va, vb = getattr(a, name), getattr(b, name)
        if name in ("theta", "r"):
            assert math.sin(va) == pytest.approx(math.sin(vb), abs=1e-9)
            assert math.cos(va) == pytest.approx(math.cos(vb), abs=1e-9)
        else:
            assert va == pytest.approx(vb, abs=1e-9)


POSE = ("x", "y", "theta")
MOVE = ("f", "s", "r")

POSES = [
    OrientedPoint(0.0, 0.0, 0.0),
    OrientedPoint(1.0, 2.0, 0.5),
    OrientedPoint(-3.0, 4.0, -2.5),
    OrientedPoint(7.0, -1.0, 3.0),
]

MOVES = [
    FSRMovement(1.0, 0.0, 0.0),
    FSRMovement(0.5, -0.3, 1.2),
    FSRMovement(-2.0, 1.0, -2.9),
]


def test_default_is_identity():
    p = OrientedPoint(1.0, 2.0, 0.5)
    assert FSRMovement() == FSRMovement(0.0, 0.0, 0.0)
    assert_close(FSRMovement().move(p), p, POSE)


@pytest.mark.parametrize("a", POSES)
@pytest.mark.parametrize("b", POSES)
def test_move_between_points_reaches_target(a, b):
    m = move_between_points(a, b)
    assert_close(move_point(a, m), b, POSE)


@pytest.mark.parametrize("m", MOVES)
def test_compose_with_inverse_is_identity(m):
    assert_close(compose_moves(m, invert_move(m)), FSRMovement(), MOVE)
    assert_close(compose_moves(invert_move(m), m), FSRMovement(), MOVE)


@pytest.mark.parametrize("m", MOVES)
def test_double_inverse(m):
    twice = invert_move(invert_move(m))
    assert_close(twice, m, MOVE)
    assert_close(m.inverted().inverted(), m, MOVE)


@pytest.mark.parametrize("a", MOVES)
@pytest.mark.parametrize("b", MOVES)
def test_composition_matches_sequential_moves(a, b):
    p = OrientedPoint(1.0, -2.0, 0.7)
    sequential = move_point(move_point(p, a), b)
    assert_close(move_point(p, compose_moves(a, b)), sequential, POSE)
    assert a.compose(b) == compose_moves(a, b)
    assert a.move(p) == move_point(p, a)


def test_normalized_rotation_range():
    m = FSRMovement(1.0, 2.0, 11.0).normalized()
    assert -math.pi <= m.r < math.pi
    assert (m.f, m.s) == (1.0, 2.0)
    assert math.sin(m.r) == pytest.approx(math.sin(11.0))


def test_moved_pose_heading_is_normalized():
    p = move_point(OrientedPoint(0.0, 0.0, 3.0), FSRMovement(0.0, 0.0, 3.0))
    assert -math.pi <= p.theta < math.pi


def test_forward_move_keeps_distance():
    p = OrientedPoint(1.0, 1.0, 0.9)
    q = move_point(p, FSRMovement(2.0, 0.0, 0.0))
    assert math.hypot(q.x - p.x, q.y - p.y) == pytest.approx(2.0)
    assert q.theta == pytest.approx(p.theta)


def test_frame_transformation_maps_reference():
    ref1 = OrientedPoint(1.0, 2.0, 0.4)
    ref2 = OrientedPoint(-3.0, 0.5, 2.0)
    assert_close(frame_transformation(ref1, ref2, ref1), ref2, POSE)


def test_frame_transformation_same_frame_is_identity():
    ref = OrientedPoint(1.0, 2.0, 0.4)
    p = OrientedPoint(5.0, -1.0, -1.0)
    assert_close(frame_transformation(ref, ref, p), p, POSE)


def test_frame_transformation_preserves_relative_pose():
    ref1 = OrientedPoint(1.0, 2.0, 0.4)
    ref2 = OrientedPoint(-3.0, 0.5, 2.0)
    p1 = OrientedPoint(4.0, 4.0, 1.0)
    p2 = frame_transformation(ref1, ref2, p1)
    assert_close(move_between_points(ref2, p2), move_between_points(ref1, p1), MOVE)