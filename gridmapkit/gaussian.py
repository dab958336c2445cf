"""Gaussian sampling, evaluation and three-dimensional pose Gaussians."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .point import OrientedPoint

Vector3 = Tuple[float, float, float]
Matrix3 = Tuple[Vector3, Vector3, Vector3]

_rng = random.Random()

_IDENTITY3: Matrix3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def _nonzero_uniform() -> float:
    r = _rng.random()
    while r == 0.0:
        r = _rng.random()
    return r


def _polar_gaussian(sigma: float) -> float:
    # Polar form of the Box-Muller transformation.
    while True:
        x1 = 2.0 * _nonzero_uniform() - 1.0
        x2 = 2.0 * _nonzero_uniform() - 1.0
        w = x1 * x1 + x2 * x2
        if 0.0 < w <= 1.0:
            return sigma * x2 * math.sqrt(-2.0 * math.log(w) / w)


def sample_gaussian(sigma: float, seed: int = 0) -> float:
    """Draw from a zero-mean normal with standard deviation ``sigma``.

    A non-zero ``seed`` reseeds the generator first.
    """
    if seed != 0:
        _rng.seed(seed)
    if sigma == 0:
        return 0.0
    return _polar_gaussian(sigma)


def eval_gaussian(sigma_square: float, delta: float) -> float:
    """Density of a zero-mean normal with variance ``sigma_square`` at ``delta``."""
    if sigma_square <= 0:
        sigma_square = 1e-4
    return math.exp(-0.5 * delta * delta / sigma_square) / math.sqrt(2 * math.pi * sigma_square)


def eval_log_gaussian(sigma_square: float, delta: float) -> float:
    """Log density of a zero-mean normal with variance ``sigma_square`` at ``delta``."""
    if sigma_square <= 0:
        sigma_square = 1e-4
    return -0.5 * delta * delta / sigma_square - 0.5 * math.log(2 * math.pi * sigma_square)


def sample_uniform_int(maximum: int) -> int:
    """A uniform integer in [0, maximum)."""
    return int(maximum * _rng.random())


def sample_uniform_double(low: float, high: float) -> float:
    """A uniform float between ``low`` and ``high``."""
    return low + _rng.random() * (high - low)


@dataclass(frozen=True)
class Covariance3:
    """Symmetric covariance of an (x, y, theta) pose."""

    xx: float = 0.0
    yy: float = 0.0
    tt: float = 0.0
    xy: float = 0.0
    xt: float = 0.0
    yt: float = 0.0

    def __add__(self, other: Covariance3) -> Covariance3:
        if not isinstance(other, Covariance3):
            return NotImplemented
        return Covariance3(
            self.xx + other.xx,
            self.yy + other.yy,
            self.tt + other.tt,
            self.xy + other.xy,
            self.xt + other.xt,
            self.yt + other.yt,
        )

    def matrix(self) -> np.ndarray:
        return np.array(
            [
                [self.xx, self.xy, self.xt],
                [self.xy, self.yy, self.yt],
                [self.xt, self.yt, self.tt],
            ]
        )


def _to_matrix3(m: np.ndarray) -> Matrix3:
    return tuple(tuple(float(v) for v in row) for row in m)  # type: ignore[return-value]


@dataclass(frozen=True)
class EigenCovariance3:
    """Eigen decomposition of a pose covariance; eigenvectors are the columns of ``evec``."""

    eval: Vector3 = (0.0, 0.0, 0.0)
    evec: Matrix3 = _IDENTITY3

    def rotate(self, angle: float) -> EigenCovariance3:
        """The decomposition rotated about the theta axis by ``angle``."""
        c, s = math.cos(angle), math.sin(angle)
        rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        return EigenCovariance3(self.eval, _to_matrix3(rot @ np.array(self.evec)))

    def sample(self) -> OrientedPoint:
        """Draw a zero-mean pose noise sample with this covariance."""
        pnoise = []
        for value in self.eval:
            v = sample_gaussian(math.sqrt(value)) if value >= 0 else math.nan
            pnoise.append(0.0 if math.isnan(v) else v)
        noise = np.array(self.evec) @ np.array(pnoise)
        theta = float(noise[2])
        return OrientedPoint(
            float(noise[0]), float(noise[1]), math.atan2(math.sin(theta), math.cos(theta))
        )


def eigen_covariance(cov: Covariance3) -> EigenCovariance3:
    """Decompose a covariance into eigenvalues and eigenvectors."""
    values, vectors = np.linalg.eigh(cov.matrix())
    return EigenCovariance3(tuple(float(v) for v in values), _to_matrix3(vectors))  # type: ignore[arg-type]


@dataclass(frozen=True)
class Gaussian3:
    """A Gaussian over poses."""

    mean: OrientedPoint = OrientedPoint()
    covariance: EigenCovariance3 = EigenCovariance3()
    cov: Covariance3 = Covariance3()

    def eval(self, p: OrientedPoint) -> float:
        """Log density of the pose ``p``."""
        q = p - self.mean
        dtheta = p.theta - self.mean.theta
        qt = math.atan2(math.sin(dtheta), math.cos(dtheta))
        q_vec = (q.x, q.y, qt)
        evec = self.covariance.evec
        total = 0.0
        for j in range(3):
            v = sum(evec[i][j] * q_vec[i] for i in range(3))
            total += eval_log_gaussian(self.covariance.eval[j], v)
        return total


def compute_gaussian_from_samples(
    poses: Iterable[OrientedPoint], weights: Optional[Sequence[float]] = None
) -> Gaussian3:
    """Estimate a pose Gaussian from samples, optionally weighted.

    Without weights the sums are divided by one more than the number of samples.
    """
    pose_list = list(poses)
    if weights is None:
        weight_list = [1.0] * len(pose_list)
        wcum = 1.0 + len(pose_list)
    else:
        weight_list = [float(w) for w in weights]
        wcum = sum(weight_list)

    pairs = list(zip(pose_list, weight_list))
    mx = sum(w * p.x for p, w in pairs) / wcum
    my = sum(w * p.y for p, w in pairs) / wcum
    s = sum(w * math.sin(p.theta) for p, w in pairs) / wcum
    c = sum(w * math.cos(p.theta) for p, w in pairs) / wcum
    mean = OrientedPoint(mx, my, math.atan2(s, c))

    acc = dict.fromkeys(("xx", "yy", "tt", "xy", "yt", "xt"), 0.0)
    for p, w in pairs:
        d = p - mean
        dt = math.atan2(math.sin(d.theta), math.cos(d.theta))
        acc["xx"] += w * d.x * d.x
        acc["yy"] += w * d.y * d.y
        acc["tt"] += w * dt * dt
        acc["xy"] += w * d.x * d.y
        acc["yt"] += w * d.y * dt
        acc["xt"] += w * d.x * dt
    cov = Covariance3(**{k: v / wcum for k, v in acc.items()})
    return Gaussian3(mean, eigen_covariance(cov), cov)