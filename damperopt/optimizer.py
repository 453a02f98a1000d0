"""Bayesian optimisation over a box of bounded parameters using expected improvement."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from damperopt.surrogate import GaussianProcess, Surrogate

_MIN_SIGMA = 1e-6


@dataclass(frozen=True)
class ParameterBounds:
    """Closed interval ``[low, high]`` for one parameter."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"lower bound {self.low} exceeds upper bound {self.high}")


class BayesianOptimization:
    """Minimise a black-box objective with a surrogate model and random search on EI."""

    def __init__(
        self,
        bounds: Sequence[ParameterBounds],
        objective: Callable[[np.ndarray], float],
        surrogate: Surrogate | None = None,
        n_candidates: int = 1000,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.bounds = tuple(bounds)
        if not self.bounds:
            raise ValueError("at least one parameter bound is required")
        if n_candidates < 1:
            raise ValueError("n_candidates must be at least 1")
        self.objective = objective
        self.surrogate = surrogate if surrogate is not None else GaussianProcess()
        self.n_candidates = n_candidates
        self.rng = rng if rng is not None else np.random.default_rng()
        self._lows = np.array([b.low for b in self.bounds])
        self._highs = np.array([b.high for b in self.bounds])
        self._samples: list[np.ndarray] = []
        self._values: list[float] = []
        self._fitted_count: int | None = None

    @property
    def samples(self) -> tuple[np.ndarray, ...]:
        """Every point evaluated so far, in order."""
        return tuple(s.copy() for s in self._samples)

    @property
    def values(self) -> tuple[float, ...]:
        """Objective values matching :attr:`samples`."""
        return tuple(self._values)

    def _draw(self, count: int) -> np.ndarray:
        return self.rng.uniform(self._lows, self._highs, size=(count, self._lows.size))

    def _record(self, x: np.ndarray) -> None:
        value = float(self.objective(x.copy()))
        self._samples.append(x)
        self._values.append(value)

    def _ensure_fitted(self) -> None:
        if self._fitted_count != len(self._samples):
            self.surrogate.fit(np.array(self._samples), np.array(self._values))
            self._fitted_count = len(self._samples)

    def initialize(self, n_initial: int) -> None:
        """Discard earlier samples and evaluate ``n_initial`` uniformly random points."""
        if n_initial < 1:
            raise ValueError("n_initial must be at least 1")
        self._samples = []
        self._values = []
        self._fitted_count = None
        for x in self._draw(n_initial):
            self._record(x)

    def optimize(self, n_iterations: int) -> None:
        """Evaluate ``n_iterations`` further points chosen by expected improvement."""
        if not self._values:
            raise RuntimeError("initialize must be called before optimize")
        for _ in range(n_iterations):
            best_y = min(self._values)
            candidates = self._draw(self.n_candidates)
            next_x = max(candidates, key=lambda x: self.expected_improvement(x, best_y))
            self._record(next_x)

    def expected_improvement(self, x: Sequence[float] | np.ndarray, best_y: float) -> float:
        """Expected improvement over ``best_y`` at ``x`` under the current surrogate."""
        self._ensure_fitted()
        mean, variance = self.surrogate.predict(x)
        sigma = math.sqrt(max(variance, 0.0))
        if sigma < _MIN_SIGMA:
            return 0.0
        gain = best_y - mean
        z = gain / sigma
        cdf = 0.5 * (1.0 + math.erf(z / math.sqrt(2.0)))
        pdf = math.exp(-z * z / 2.0) / math.sqrt(2.0 * math.pi)
        return gain * cdf + sigma * pdf

    def best(self) -> tuple[np.ndarray, float]:
        """The lowest objective value seen and the point where it was found."""
        if not self._values:
            raise RuntimeError("no samples have been evaluated")
        idx = min(range(len(self._values)), key=self._values.__getitem__)
        return self._samples[idx].copy(), self._values[idx]