"""Parzen-window smoothing of one-dimensional weighted data."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterator, List, TextIO, Tuple

from .gaussian import sample_gaussian, sample_uniform_double
from .point import MAXDOUBLE


def gauss(x: float, mean: float, sigma: float) -> float:
    """Density of a normal with the given mean and standard deviation at ``x``."""
    return 1.0 / (math.sqrt(2.0 * math.pi) * sigma) * math.exp(-0.5 * ((x - mean) / sigma) ** 2)


@dataclass(frozen=True)
class DataPoint:
    """A sample position ``x`` with weight ``y``."""

    x: float = 0.0
    y: float = 0.0


class DataSmoother:
    """Turns weighted samples into a smooth density with a Gaussian kernel.

    The density is evaluated on the window reaching three kernel widths
    beyond the outermost samples.
    """

    def __init__(self, parzen_window: float) -> None:
        self.reset(parzen_window)

    def reset(self, parzen_window: float) -> None:
        """Drop all data and set a new kernel width."""
        self._data: List[DataPoint] = []
        self._cumulated: List[float] = []
        self._int = -1.0
        self._parzen_window = parzen_window
        self._from = MAXDOUBLE
        self._to = -MAXDOUBLE
        self._last_step = 0.001

    @property
    def data(self) -> Tuple[DataPoint, ...]:
        return tuple(self._data)

    @property
    def parzen_window(self) -> float:
        return self._parzen_window

    @property
    def x_from(self) -> float:
        return self._from

    @property
    def x_to(self) -> float:
        return self._to

    def _require_data(self) -> None:
        if not self._data:
            raise ValueError("the smoother holds no data")

    def _grid(self, step: float, end: float) -> Iterator[float]:
        if step <= 0:
            raise ValueError("step must be positive")
        x = self._from
        while x <= end:
            yield x
            x += step

    def set_min_to_zero(self) -> None:
        """Shift all weights so that the smallest becomes zero."""
        if self._data:
            minval = min(d.y for d in self._data)
            self._data = [DataPoint(d.x, d.y - minval) for d in self._data]
        self._cumulated.clear()

    def add(self, x: float, p: float) -> None:
        """Add a sample at ``x`` with weight ``p``."""
        self._data.append(DataPoint(x, p))
        self._int = -1.0
        reach = 3.0 * self._parzen_window
        if x - reach < self._from:
            self._from = x - reach
        if x + reach > self._to:
            self._to = x + reach
        self._cumulated.clear()

    def integrate(self, step: float) -> float:
        """Integrate the density over the whole window and remember the result."""
        self._last_step = step
        self._int = sum(self.smoothed_data(x) * step for x in self._grid(step, self._to))
        return self._int

    def integral(self, step: float, x_to: float) -> float:
        """Integrate the density from the start of the window up to ``x_to``."""
        return sum(self.smoothed_data(x) * step for x in self._grid(step, x_to))

    def smoothed_data(self, x: float) -> float:
        """The smoothed density at ``x``."""
        self._require_data()
        w = self._parzen_window
        p = sum(d.y * math.exp(-0.5 * ((x - d.x) / w) ** 2) for d in self._data)
        sum_y = sum(d.y for d in self._data)
        return p / (math.sqrt(2.0 * math.pi) * sum_y * w)

    def sample_numeric(self, step: float) -> float:
        """Draw from the density by numeric inversion on a grid of ``step``."""
        self._require_data()
        if self._int < 0 or step != self._last_step:
            self.integrate(step)
        r = sample_uniform_double(0.0, self._int)
        total = 0.0
        for x in self._grid(step, self._to):
            total += self.smoothed_data(x) * step
            if total > r:
                return x - 0.5 * step
        return self._to

    def compute_cumulated(self) -> List[float]:
        """Recompute the running sums of the weights."""
        self._require_data()
        self._cumulated = list(accumulate(d.y for d in self._data))
        return list(self._cumulated)

    def _ensure_cumulated(self) -> None:
        self._require_data()
        if not self._cumulated:
            self.compute_cumulated()

    def sample(self) -> float:
        """Draw one sample: pick a data point by weight and add kernel noise."""
        self._ensure_cumulated()
        target = sample_uniform_double(0.0, self._cumulated[-1])
        total = 0.0
        for point, cumulated in zip(self._data, self._cumulated):
            total += cumulated
            if total >= target:
                return point.x + sample_gaussian(self._parzen_window)
        raise RuntimeError("cumulated weights do not reach the drawn value")

    def sample_multiple(self, num: int) -> List[float]:
        """Draw ``num`` samples in one sweep over the data."""
        self._ensure_cumulated()
        maxval = self._cumulated[-1]
        randoms = sorted(sample_uniform_double(0.0, maxval) for _ in range(num))
        samples: List[float] = []
        total = 0.0
        j = 0
        for point, cumulated in zip(self._data, self._cumulated):
            if j >= num:
                break
            total += cumulated
            while j < num and total >= randoms[j]:
                samples.append(point.x + sample_gaussian(self._parzen_window))
                j += 1
        return samples

    def approx_gauss(self, step: float) -> Tuple[float, float]:
        """Mean and standard deviation of the density, evaluated on a grid."""
        self._require_data()
        values = [(x, self.smoothed_data(x)) for x in self._grid(step, self._to)]
        total = sum(d for _, d in values)
        mean = sum(x * d for x, d in values) / total
        var = sum((x - mean) ** 2 * d for x, d in values) / total
        return mean, math.sqrt(var)

    def cramer_von_mises_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Sum of squared differences between the running integrals of the density and a normal."""
        p = 0.0
        sint = 0.0
        gint = 0.0
        for x in self._grid(step, self._to):
            sint += self.smoothed_data(x) * step
            gint += gauss(x, mean, sigma) * step
            p += (sint - gint) ** 2
        return p

    def kld_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Kullback-Leibler divergence from a normal to the density on the window.

        Raises ValueError when the two integrate to masses more than 0.1 apart.
        """
        p = 0.0
        sd = 0.0
        sg = 0.0
        for x in self._grid(step, self._to):
            d = 1e-10 + self.smoothed_data(x)
            g = 1e-10 + gauss(x, mean, sigma)
            sd += d
            sg += g
            p += d * math.log(d / g)
        sd *= step
        sg *= step
        if abs(sd - sg) > 0.1:
            raise ValueError(f"masses differ too much on the window: {sd} vs {sg}")
        return p * step

    def dump_data(self, stream: TextIO) -> None:
        """Write the samples as ``x y`` lines."""
        for d in self._data:
            stream.write(f"{d.x:f} {d.y:f}\n")

    def dump_smoothed_data(self, stream: TextIO, step: float) -> None:
        """Write the density over the window as ``x density`` lines."""
        for x in self._grid(step, self._to):
            stream.write(f"{x:f} {self.smoothed_data(x):f}\n")