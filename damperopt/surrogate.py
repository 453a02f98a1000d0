"""Surrogate models that predict an objective's mean and variance from samples."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np

_MIN_VARIANCE = 1e-6
_AVERAGE_EPSILON = 1e-6


class Surrogate(Protocol):
    """A regression model that can be refitted and queried point by point."""

    def fit(self, X: Sequence[Sequence[float]] | np.ndarray, y: Sequence[float] | np.ndarray) -> None:
        ...

    def predict(self, x: Sequence[float] | np.ndarray) -> tuple[float, float]:
        ...


def _training_data(
    X: Sequence[Sequence[float]] | np.ndarray, y: Sequence[float] | np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    inputs = np.asarray(X, dtype=float)
    outputs = np.asarray(y, dtype=float).reshape(-1)
    if inputs.size == 0:
        inputs = inputs.reshape(0, 0)
    if inputs.ndim != 2:
        raise ValueError("X must be a two-dimensional collection of points")
    if inputs.shape[0] != outputs.size:
        raise ValueError(f"X has {inputs.shape[0]} points but y has {outputs.size} values")
    return inputs, outputs


def _check_point(x: Sequence[float] | np.ndarray, inputs: np.ndarray) -> np.ndarray:
    point = np.asarray(x, dtype=float).reshape(-1)
    if inputs.shape[0] and point.size != inputs.shape[1]:
        raise ValueError(f"expected a point of dimension {inputs.shape[1]}, got {point.size}")
    return point


class KernelAverage:
    """Gaussian-weighted average of observed values with a constant variance."""

    PRIOR_VARIANCE = 1.0

    def __init__(self) -> None:
        self._X = np.empty((0, 0))
        self._y = np.empty(0)

    def fit(self, X: Sequence[Sequence[float]] | np.ndarray, y: Sequence[float] | np.ndarray) -> None:
        """Replace the stored observations."""
        self._X, self._y = _training_data(X, y)

    def predict(self, x: Sequence[float] | np.ndarray) -> tuple[float, float]:
        """Return the weighted mean at ``x`` and the fixed prior variance."""
        point = _check_point(x, self._X)
        n = self._y.size
        if n == 0:
            return 0.0, self.PRIOR_VARIANCE
        sq_dist = np.sum((self._X - point) ** 2, axis=1)
        total = float(np.sum(self._y * np.exp(-sq_dist / 2.0)))
        return total / (n + _AVERAGE_EPSILON), self.PRIOR_VARIANCE


class GaussianProcess:
    """Gaussian process regression with a squared-exponential kernel."""

    def __init__(self, length_scale: float = 1.0, sigma_f: float = 1.0, sigma_n: float = 0.1) -> None:
        if length_scale <= 0:
            raise ValueError("length_scale must be positive")
        self.length_scale = float(length_scale)
        self.sigma_f = float(sigma_f)
        self.sigma_n = float(sigma_n)
        self._X = np.empty((0, 0))
        self._chol = np.empty((0, 0))
        self._alpha = np.empty(0)

    def _kernel(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        sq_dist = np.sum((a[:, None, :] - b[None, :, :]) ** 2, axis=2)
        return self.sigma_f**2 * np.exp(-sq_dist / (2.0 * self.length_scale**2))

    def _cho_solve(self, rhs: np.ndarray) -> np.ndarray:
        return np.linalg.solve(self._chol.T, np.linalg.solve(self._chol, rhs))

    def fit(self, X: Sequence[Sequence[float]] | np.ndarray, y: Sequence[float] | np.ndarray) -> None:
        """Condition the process on the observations ``X`` and ``y``."""
        inputs, outputs = _training_data(X, y)
        self._X = inputs
        if outputs.size == 0:
            self._chol = np.empty((0, 0))
            self._alpha = np.empty(0)
            return
        cov = self._kernel(inputs, inputs) + self.sigma_n**2 * np.eye(outputs.size)
        self._chol = np.linalg.cholesky(cov)
        self._alpha = self._cho_solve(outputs)

    def predict(self, x: Sequence[float] | np.ndarray) -> tuple[float, float]:
        """Posterior mean and variance at ``x``; the variance is at least 1e-6."""
        prior = self.sigma_f**2
        if self._alpha.size == 0:
            return 0.0, prior
        point = _check_point(x, self._X)
        k = self._kernel(point[None, :], self._X)[0]
        mean = float(k @ self._alpha)
        variance = prior - float(k @ self._cho_solve(k))
        return mean, max(variance, _MIN_VARIANCE)