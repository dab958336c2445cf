import math
import random
from dataclasses import dataclass

import pytest

from gridmapkit.particlefilter import (
    AuxiliaryEvolver,
    Evolver,
    UniformResampler,
    neff,
    normalize,
    repeat_indexes,
    resample_indexes,
    rle,
    to_log_form,
    to_normal_form,
)


@dataclass
class Particle:
    value: float
    weight: float

    def __float__(self):
        return self.weight


def test_to_normal_form_max_is_one():
    values, lmax = to_normal_form([-3.0, -1.0, -2.0])
    assert lmax == -1.0
    assert values[1] == 1.0
    assert all(0 < v <= 1 for v in values)


def test_log_form_round_trip():
    logs = [-3.0, -1.0, -2.5]
    values, lmax = to_normal_form(logs)
    back = to_log_form(values, -lmax)
    assert back == pytest.approx(logs)


def test_normalize_sums_to_one():
    result = normalize([1.0, 3.0, 6.0])
    assert math.fsum(result) == pytest.approx(1.0)
    assert result[2] / result[0] == pytest.approx(6.0)


def test_neff_uniform_equals_count():
    assert neff([0.5] * 7) == pytest.approx(7)


def test_neff_single_weight_is_one():
    assert neff([0.0, 0.0, 4.0]) == pytest.approx(1.0)


def test_rle():
    assert rle([1, 1, 2, 2, 2, 3]) == [(1, 2), (2, 3), (3, 1)]
    assert rle([]) == []


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_resample_indexes_properties(seed):
    random.seed(seed)
    weights = [0.1, 0.0, 0.5, 0.4]
    indexes = resample_indexes(weights)
    assert len(indexes) == len(weights)
    assert indexes == sorted(indexes)
    assert 1 not in indexes


def test_resample_indexes_custom_count():
    random.seed(5)
    indexes = resample_indexes([1.0, 1.0], 6)
    assert len(indexes) == 6
    assert indexes.count(0) == indexes.count(1)


def test_resample_equal_weights_keeps_each_once():
    random.seed(9)
    assert resample_indexes([2.0] * 5) == list(range(5))


def test_resample_indexes_empty_raises():
    with pytest.raises(ValueError):
        resample_indexes([])


def test_repeat_indexes():
    assert repeat_indexes([2, 2, 0], ["a", "b", "c"]) == ["c", "c", "a"]
    with pytest.raises(ValueError):
        repeat_indexes([0], ["a", "b"])


def test_uniform_resampler_resample_sets_uniform_weight():
    random.seed(11)
    particles = [Particle(i, w) for i, w in enumerate([0.2, 0.0, 0.8])]
    result = UniformResampler().resample(particles, 4)
    assert len(result) == 4
    assert all(p.weight == pytest.approx(0.25) for p in result)
    assert all(p.value != 1 for p in result)
    assert particles[0].weight == 0.2


def test_uniform_resampler_neff():
    particles = [Particle(i, 1.0) for i in range(3)]
    assert UniformResampler().neff(particles) == pytest.approx(3)


def test_evolver():
    particles = [Particle(1, 1.0), Particle(2, 1.0)]
    evolver = Evolver(lambda p: Particle(p.value * 10, p.weight))
    assert [p.value for p in evolver.evolve_into(particles)] == [10, 20]
    assert [p.value for p in particles] == [1, 2]
    evolver.evolve(particles)
    assert [p.value for p in particles] == [10, 20]


def _aux():
    return AuxiliaryEvolver(
        evolution_model=lambda p: Particle(p.value + 1, p.weight),
        qualification_model=lambda p: p,
        likelihood_model=lambda p: 2.0 * p.value,
    )


def test_auxiliary_evolver_in_place():
    random.seed(3)
    particles = [Particle(1.0, 1.0), Particle(1.0, 1.0)]
    _aux().evolve(particles)
    for p in particles:
        assert p.value == 2.0
        assert p.weight == pytest.approx(2.0 * 2.0 / (2.0 * 1.0))


def test_auxiliary_evolver_into():
    random.seed(3)
    src = [Particle(1.0, 0.5), Particle(1.0, 0.5)]
    dest = _aux().evolve_into(src)
    assert len(dest) == 2
    for p in dest:
        assert p.value == 2.0
        assert p.weight == pytest.approx(0.5)
    assert all(p.value == 1.0 for p in src)