"""Forward/sideward/rotate robot movements and their algebra."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .point import OrientedPoint, normalize_angle


@dataclass(frozen=True)
class FSRMovement:
    """A movement made of a forward step, a sideward step and a rotation."""

    f: float = 0.0
    s: float = 0.0
    r: float = 0.0

    def normalized(self) -> FSRMovement:
        """The same movement with its rotation in [-pi, pi)."""
        return replace(self, r=normalize_angle(self.r))

    def inverted(self) -> FSRMovement:
        """The movement that undoes this one."""
        return invert_move(self)

    def compose(self, other: FSRMovement) -> FSRMovement:
        """This movement followed by ``other``."""
        return compose_moves(self, other)

    def move(self, pt: OrientedPoint) -> OrientedPoint:
        """Apply this movement to a pose."""
        return move_point(pt, self)


def compose_moves(move1: FSRMovement, move2: FSRMovement) -> FSRMovement:
    """The movement ``move1`` followed by ``move2``."""
    c, s = math.cos(move1.r), math.sin(move1.r)
    return FSRMovement(
        c * move2.f - s * move2.s + move1.f,
        s * move2.f + c * move2.s + move1.s,
        move1.r + move2.r,
    ).normalized()


def move_point(pt: OrientedPoint, move: FSRMovement) -> OrientedPoint:
    """Apply ``move`` to the pose ``pt``."""
    c, s = math.cos(pt.theta), math.sin(pt.theta)
    return OrientedPoint(
        pt.x + move.f * c - move.s * s,
        pt.y + move.f * s + move.s * c,
        move.r + pt.theta,
    ).normalized()


def move_between_points(pt1: OrientedPoint, pt2: OrientedPoint) -> FSRMovement:
    """The movement that takes pose ``pt1`` to pose ``pt2``."""
    dx, dy = pt2.x - pt1.x, pt2.y - pt1.y
    c, s = math.cos(pt1.theta), math.sin(pt1.theta)
    return FSRMovement(dy * s + dx * c, dy * c - dx * s, pt2.theta - pt1.theta).normalized()


def invert_move(move: FSRMovement) -> FSRMovement:
    """The movement that undoes ``move``."""
    c, s = math.cos(move.r), math.sin(move.r)
    return FSRMovement(
        -c * move.f - s * move.s,
        s * move.f - c * move.s,
        -move.r,
    ).normalized()


def frame_transformation(
    reference_frame1: OrientedPoint,
    reference_frame2: OrientedPoint,
    pt_frame1: OrientedPoint,
) -> OrientedPoint:
    """Map a pose from frame 1 to frame 2, given one reference pose seen in both frames."""
    zero = OrientedPoint()
    itrans_ref1 = move_between_points(zero, reference_frame1).inverted()
    trans_ref2 = move_between_points(zero, reference_frame2)
    trans_pt = move_between_points(zero, pt_frame1)
    return compose_moves(compose_moves(trans_ref2, itrans_ref1), trans_pt).move(zero)