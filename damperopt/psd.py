"""Signal helpers: value clamping and power spectral density estimation."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

_BLACKMAN_A0 = 0.42
_BLACKMAN_A1 = 0.5
_BLACKMAN_A2 = 0.08


def clamp(x: float, low: float, high: float) -> float:
    """Limit ``x`` to the closed interval ``[low, high]``."""
    return max(low, min(high, x))


def _autocorrelation(centred: np.ndarray, max_lag: int) -> np.ndarray:
    """Unbiased autocorrelation of a zero-mean signal for lags ``0..max_lag-1``."""
    n = centred.size
    n_fft = 1 << (2 * n - 1).bit_length()
    spectrum = np.fft.rfft(centred, n_fft)
    raw = np.fft.irfft(spectrum * np.conj(spectrum), n_fft)[:max_lag]
    return raw / (n - np.arange(max_lag))


def compute_psd(
    signal: Sequence[float] | np.ndarray, dt: float, f_min: float, f_max: float
) -> np.ndarray:
    """Estimate the power spectral density of ``signal`` between ``f_min`` and ``f_max``.

    The estimate is a Blackman-windowed cosine transform of the unbiased
    autocorrelation over the first half of the lags, sampled at the
    frequency resolution ``1 / (N * dt)``. Negative powers are clipped to zero.
    """
    data = np.asarray(signal, dtype=float)
    n = data.size
    if n == 0:
        raise ValueError("signal must not be empty")
    if dt <= 0:
        raise ValueError("dt must be positive")

    df = 1.0 / (n * dt)
    n_freqs = max(int((f_max - f_min) / df) + 1, 0)
    freqs = f_min + np.arange(n_freqs) * df
    freqs = freqs[freqs <= f_max]

    max_lag = n // 2
    if max_lag == 0:
        return np.zeros(freqs.size)

    centred = data - data.mean()
    autocorr = _autocorrelation(centred, max_lag)

    lags = np.arange(max_lag)
    window = (
        _BLACKMAN_A0
        - _BLACKMAN_A1 * np.cos(2.0 * math.pi * lags / max_lag)
        + _BLACKMAN_A2 * np.cos(4.0 * math.pi * lags / max_lag)
    )
    weighted = autocorr * window
    phases = 2.0 * math.pi * np.outer(freqs, lags) * dt
    power = (np.cos(phases) @ weighted) * 2.0 * dt
    return np.maximum(power, 0.0)