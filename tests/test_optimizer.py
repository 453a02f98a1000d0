import math

import numpy as np
import pytest

from damperopt.optimizer import BayesianOptimization, ParameterBounds
from damperopt.surrogate import KernelAverage


class _FlatSurrogate:
    def __init__(self, variance):
        self.variance = variance

    def fit(self, X, y):
        pass

    def predict(self, x):
        return 0.0, self.variance


def _quadratic(x):
    return float(np.sum((np.asarray(x) - 0.3) ** 2))


def _bounds():
    return [ParameterBounds(0.0, 1.0), ParameterBounds(-1.0, 1.0)]


def test_bounds_reject_inverted_interval():
    with pytest.raises(ValueError):
        ParameterBounds(2.0, 1.0)


def test_constructor_validation():
    with pytest.raises(ValueError):
        BayesianOptimization([], _quadratic)
    with pytest.raises(ValueError):
        BayesianOptimization(_bounds(), _quadratic, n_candidates=0)


def test_initialize_samples_within_bounds():
    opt = BayesianOptimization(_bounds(), _quadratic, rng=np.random.default_rng(0))
    opt.initialize(10)
    assert len(opt.samples) == 10
    assert len(opt.values) == 10
    for x in opt.samples:
        assert 0.0 <= x[0] <= 1.0
        assert -1.0 <= x[1] <= 1.0
    assert list(opt.values) == [_quadratic(x) for x in opt.samples]


def test_initialize_rejects_zero_points():
    opt = BayesianOptimization(_bounds(), _quadratic)
    with pytest.raises(ValueError):
        opt.initialize(0)


def test_initialize_discards_previous_samples():
    opt = BayesianOptimization(_bounds(), _quadratic, rng=np.random.default_rng(1))
    opt.initialize(5)
    opt.initialize(3)
    assert len(opt.samples) == 3


def test_best_and_optimize_require_samples():
    opt = BayesianOptimization(_bounds(), _quadratic)
    with pytest.raises(RuntimeError):
        opt.best()
    with pytest.raises(RuntimeError):
        opt.optimize(1)


def test_optimize_adds_samples_and_best_is_minimum():
    calls = []

    def objective(x):
        calls.append(x)
        return _quadratic(x)

    opt = BayesianOptimization(
        _bounds(), objective, n_candidates=200, rng=np.random.default_rng(2)
    )
    opt.initialize(4)
    opt.optimize(6)
    assert len(calls) == 10
    assert len(opt.samples) == 10
    best_x, best_value = opt.best()
    assert best_value == min(opt.values)
    assert best_value == pytest.approx(_quadratic(best_x))
    for x in opt.samples:
        assert 0.0 <= x[0] <= 1.0
        assert -1.0 <= x[1] <= 1.0


def test_seeded_runs_are_reproducible():
    def run():
        opt = BayesianOptimization(
            _bounds(), _quadratic, n_candidates=100, rng=np.random.default_rng(7)
        )
        opt.initialize(3)
        opt.optimize(3)
        return opt.best()

    x1, v1 = run()
    x2, v2 = run()
    assert v1 == v2
    assert np.array_equal(x1, x2)


def test_finds_minimum_of_one_dimensional_quadratic():
    opt = BayesianOptimization(
        [ParameterBounds(0.0, 1.0)], _quadratic, n_candidates=500, rng=np.random.default_rng(11)
    )
    opt.initialize(5)
    opt.optimize(20)
    best_x, best_value = opt.best()
    assert best_value < 0.01
    assert abs(best_x[0] - 0.3) < 0.1


def test_works_with_kernel_average_surrogate():
    opt = BayesianOptimization(
        _bounds(), _quadratic, surrogate=KernelAverage(), n_candidates=100,
        rng=np.random.default_rng(5),
    )
    opt.initialize(3)
    opt.optimize(4)
    assert len(opt.values) == 7
    assert opt.best()[1] == min(opt.values)


def test_expected_improvement_is_zero_without_uncertainty():
    opt = BayesianOptimization(_bounds(), _quadratic, surrogate=_FlatSurrogate(1e-14))
    opt.initialize(1)
    assert opt.expected_improvement([0.5, 0.0], 10.0) == 0.0


def test_expected_improvement_grows_with_incumbent():
    opt = BayesianOptimization(_bounds(), _quadratic, surrogate=_FlatSurrogate(1.0))
    opt.initialize(1)
    values = [opt.expected_improvement([0.5, 0.0], b) for b in (-3.0, -1.0, 0.0, 1.0, 3.0)]
    assert all(v >= 0.0 for v in values)
    assert values == sorted(values)
    assert values[2] == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))