"""Random road surface profiles sampled at a fixed time step."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate

import numpy as np

_NOISE_STD = 0.01
_BASE_FREQUENCY = 0.1
_SMOOTHING = 0.95


class RoadProfile:
    """Road height samples taken every ``dt`` seconds."""

    def __init__(self, samples: Sequence[float] | np.ndarray, dt: float) -> None:
        data = np.array(samples, dtype=float)
        if data.ndim != 1 or data.size == 0:
            raise ValueError("samples must be a non-empty one-dimensional sequence")
        if dt <= 0:
            raise ValueError("dt must be positive")
        data.setflags(write=False)
        self.samples = data
        self.dt = float(dt)

    @classmethod
    def generate(cls, steps: int, dt: float, rng: np.random.Generator | None = None) -> RoadProfile:
        """Build a smoothed random profile with roughness decaying over time."""
        if steps < 1:
            raise ValueError("steps must be at least 1")
        if rng is None:
            rng = np.random.default_rng()
        noise = np.asarray(rng.normal(0.0, _NOISE_STD, size=steps), dtype=float)
        times = np.arange(steps) * dt
        forcing = noise / (1.0 + _BASE_FREQUENCY * times)
        samples = list(accumulate(forcing, lambda prev, f: f + _SMOOTHING * prev))
        return cls(samples, dt)

    def __len__(self) -> int:
        return self.samples.size

    def _index(self, t: int, delay: float, last: int) -> int:
        idx = int((t * self.dt + delay) / self.dt)
        return max(0, min(last, idx))

    def displacement(self, t: int, delay: float = 0.0) -> float:
        """Road height at step ``t`` shifted by ``delay`` seconds, clamped to the profile."""
        return float(self.samples[self._index(t, delay, self.samples.size - 1)])

    def velocity(self, t: int, delay: float = 0.0) -> float:
        """Forward-difference road velocity at step ``t`` shifted by ``delay`` seconds."""
        if self.samples.size < 2:
            raise ValueError("velocity needs at least two samples")
        idx = self._index(t, delay, self.samples.size - 2)
        return float((self.samples[idx + 1] - self.samples[idx]) / self.dt)