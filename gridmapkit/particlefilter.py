"""Particle filter helpers: weight normalisation, systematic resampling and evolvers."""

from __future__ import annotations

import copy
import dataclasses
import math
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, Sequence, Tuple, TypeVar

P = TypeVar("P")

WeightOf = Callable[[Any], float]
WithWeight = Callable[[Any, float], Any]


def _set_weight(particle: Any, weight: float) -> Any:
    """A copy of ``particle`` carrying ``weight`` in its ``weight`` attribute."""
    if dataclasses.is_dataclass(particle) and not isinstance(particle, type):
        return dataclasses.replace(particle, weight=weight)
    clone = copy.copy(particle)
    clone.weight = weight
    return clone


def _systematic(weights: Sequence[float], nparticles: int) -> List[int]:
    """Low-variance resampling of indexes into ``weights``."""
    if not weights:
        raise ValueError("cannot resample an empty set of weights")
    total = math.fsum(weights)
    n = nparticles if nparticles > 0 else len(weights)
    interval = total / n
    target = interval * random.random()
    indexes: List[int] = []
    cweight = 0.0
    for i, w in enumerate(weights):
        cweight += w
        while cweight > target and len(indexes) < n:
            indexes.append(i)
            target += interval
    indexes.extend([0] * (n - len(indexes)))
    return indexes


def to_normal_form(values: Iterable[float]) -> Tuple[List[float], float]:
    """Convert log weights to weights relative to the largest one.

    Returns the converted weights and the largest log weight.
    """
    logs = [float(v) for v in values]
    lmax = max(logs, default=-math.inf)
    return [math.exp(v - lmax) for v in logs], lmax


def to_log_form(values: Iterable[float], lmax: float) -> List[float]:
    """The logarithm of each weight, minus ``lmax``."""
    return [math.log(float(v)) - lmax for v in values]


def resample_indexes(weights: Iterable[float], nparticles: int = 0) -> List[int]:
    """Indexes drawn by systematic resampling; ``nparticles`` of them, or one per weight."""
    return _systematic([float(w) for w in weights], nparticles)


def repeat_indexes(indexes: Sequence[int], particles: Sequence[P]) -> List[P]:
    """The particles picked by ``indexes``, which must be as many as the particles."""
    if len(indexes) != len(particles):
        raise ValueError(f"{len(indexes)} indexes for {len(particles)} particles")
    return [particles[i] for i in indexes]


def neff(weights: Iterable[float]) -> float:
    """Effective number of particles of a set of weights."""
    values = [float(w) for w in weights]
    total = sum(values)
    return 1.0 / sum((w / total) ** 2 for w in values)


def normalize(weights: Iterable[float]) -> List[float]:
    """The weights scaled to sum to one."""
    values = [float(w) for w in weights]
    total = sum(values)
    return [w / total for w in values]


def rle(values: Iterable[int]) -> List[Tuple[int, int]]:
    """Run-length encoding as (value, count) pairs."""
    runs: List[Tuple[int, int]] = []
    current = 0
    count = 0
    for v in values:
        v = int(v)
        if count and v == current:
            count += 1
        else:
            if count:
                runs.append((current, count))
            current, count = v, 1
    if count:
        runs.append((current, count))
    return runs


@dataclass
class UniformResampler(Generic[P]):
    """Systematic resampler over particles whose weight ``weight_of`` reads."""

    weight_of: WeightOf = float
    with_weight: WithWeight = _set_weight

    def resample_indexes(self, weights: Sequence[P], nparticles: int = 0) -> List[int]:
        """Indexes of the particles that survive resampling."""
        return _systematic([self.weight_of(p) for p in weights], nparticles)

    def resample(self, particles: Sequence[P], nparticles: int = 0) -> List[P]:
        """Resampled copies of the particles, each with weight one over their number."""
        indexes = self.resample_indexes(particles, nparticles)
        uw = 1.0 / len(indexes)
        return [self.with_weight(particles[i], uw) for i in indexes]

    def neff(self, particles: Sequence[P]) -> float:
        """Effective number of particles."""
        weights = [self.weight_of(p) for p in particles]
        return sum(weights) ** 2 / sum(w * w for w in weights)


@dataclass
class Evolver(Generic[P]):
    """Moves every particle through an evolution model."""

    evolution_model: Callable[[P], P]

    def evolve(self, particles: List[P]) -> None:
        """Replace each particle by its evolution, in place."""
        particles[:] = [self.evolution_model(p) for p in particles]

    def evolve_into(self, src: Iterable[P]) -> List[P]:
        """The evolutions of the given particles."""
        return [self.evolution_model(p) for p in src]


@dataclass
class AuxiliaryEvolver(Generic[P]):
    """Auxiliary particle filter step: pre-select particles by a predicted likelihood."""

    evolution_model: Callable[[P], P]
    qualification_model: Callable[[P], P]
    likelihood_model: Callable[[P], float]
    weight_of: WeightOf = float
    with_weight: WithWeight = field(default=_set_weight)

    def _selection(self, particles: Sequence[P]) -> Tuple[List[float], List[int]]:
        observation = [self.likelihood_model(self.qualification_model(p)) for p in particles]
        return observation, _systematic(observation, 0)

    def evolve(self, particles: List[P]) -> None:
        """Evolve the selected particles in place and reweight them."""
        observation, indexes = self._selection(particles)
        for i in indexes:
            evolved = self.evolution_model(particles[i])
            particles[i] = self.with_weight(
                evolved, self.likelihood_model(evolved) / observation[i]
            )

    def evolve_into(self, src: Sequence[P]) -> List[P]:
        """Evolutions of the selected particles, their weights scaled by the likelihood ratio."""
        observation, indexes = self._selection(src)
        dest: List[P] = []
        for i in indexes:
            original = src[i]
            evolved = self.evolution_model(original)
            ratio = self.likelihood_model(original) / observation[i]
            dest.append(self.with_weight(evolved, self.weight_of(evolved) * ratio))
        return dest