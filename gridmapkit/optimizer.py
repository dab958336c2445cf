"""Greedy pose search that climbs a likelihood with shrinking steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .point import OrientedPoint, absolute_difference

Likelihood = Callable[[Any, Any, OrientedPoint, float], float]


@dataclass(frozen=True)
class OptimizerParams:
    """Settings of the pose search."""

    discretization: float = 0.05
    angular_step: float = 0.05
    linear_step: float = 0.05
    iterations: int = 5
    max_range: float = 80.0


class Move(Enum):
    """The elementary pose changes tried at each step, in the order they are tried."""

    FORWARD = (1, 0, 0)
    BACKWARD = (-1, 0, 0)
    LEFT = (0, 1, 0)
    RIGHT = (0, -1, 0)
    TURN_RIGHT = (0, 0, -1)
    TURN_LEFT = (0, 0, 1)

    def apply(self, pose: OrientedPoint, lstep: float, astep: float) -> OrientedPoint:
        dx, dy, dt = self.value
        return OrientedPoint(pose.x + dx * lstep, pose.y + dy * lstep, pose.theta + dt * astep)


class Optimizer:
    """Hill-climbs ``likelihood(map, reading, pose, max_range)`` over poses.

    After a round yields no improvement the steps are halved; the search stops
    after ``params.iterations`` such rounds, and always makes at least one.
    """

    def __init__(self, params: OptimizerParams, likelihood: Likelihood, local_map: Any = None) -> None:
        self.params = params
        self.likelihood = likelihood
        self.local_map = local_map

    def _score(self, local_map: Any, reading: Any, pose: OrientedPoint) -> float:
        return self.likelihood(local_map, reading, pose, self.params.max_range)

    def gradient_descent(self, reading: Any, pose: OrientedPoint, local_map: Any = None) -> OrientedPoint:
        """The best pose found starting from ``pose``."""
        lmap = self.local_map if local_map is None else local_map
        best_pose = pose
        best_score = self._score(lmap, reading, best_pose)
        lstep, astep = self.params.linear_step, self.params.angular_step
        rounds = 0
        while True:
            it_pose, it_score = best_pose, best_score
            improved = True
            while improved:
                test_pose, test_score = it_pose, it_score
                for move in Move:
                    candidate = move.apply(it_pose, lstep, astep)
                    score = self._score(lmap, reading, candidate)
                    if score > test_score:
                        test_pose, test_score = candidate, score
                improved = test_score > it_score
                if improved:
                    it_pose, it_score = test_pose, test_score
            if it_score > best_score:
                best_pose, best_score = it_pose, it_score
            else:
                rounds += 1
                lstep *= 0.5
                astep *= 0.5
            if rounds >= self.params.iterations:
                return best_pose

    def match_readings(self, old_reading: Any, new_reading: Any) -> OrientedPoint:
        """Pose of ``new_reading`` relative to ``old_reading``, refined against a map of the old one.

        Readings carry a ``pose``; the local map must offer ``clear()`` and
        ``update(reading, pose, max_range)``.
        """
        if self.local_map is None:
            raise ValueError("matching readings needs a local map")
        self.local_map.clear()
        self.local_map.update(old_reading, OrientedPoint(0.0, 0.0, 0.0), self.params.max_range)
        delta = absolute_difference(new_reading.pose, old_reading.pose)
        return self.gradient_descent(new_reading, delta, self.local_map)