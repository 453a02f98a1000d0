import numpy as np
import pytest

from damperopt.surrogate import GaussianProcess, KernelAverage


def test_kernel_average_empty_predicts_zero_with_prior_variance():
    model = KernelAverage()
    mean, variance = model.predict([0.5, 0.5])
    assert mean == 0.0
    assert variance == KernelAverage.PRIOR_VARIANCE


def test_kernel_average_single_point_returns_its_value():
    model = KernelAverage()
    model.fit([[1.0, 2.0]], [3.0])
    mean, _ = model.predict([1.0, 2.0])
    assert mean == pytest.approx(3.0, rel=1e-5)


def test_kernel_average_decays_far_from_data():
    model = KernelAverage()
    model.fit([[0.0], [0.1]], [5.0, 7.0])
    far, _ = model.predict([100.0])
    near, _ = model.predict([0.05])
    assert abs(far) < 1e-12
    assert near > far


def test_kernel_average_is_linear_in_values():
    X = [[0.0, 0.0], [1.0, 0.5], [2.0, 1.0]]
    a = KernelAverage()
    a.fit(X, [1.0, 2.0, 3.0])
    b = KernelAverage()
    b.fit(X, [-2.0, -4.0, -6.0])
    point = [0.7, 0.3]
    assert b.predict(point)[0] == pytest.approx(-2.0 * a.predict(point)[0])


def test_kernel_average_rejects_mismatched_data():
    with pytest.raises(ValueError):
        KernelAverage().fit([[0.0], [1.0]], [1.0])


def test_gp_prior_before_fit():
    gp = GaussianProcess(length_scale=1.0, sigma_f=2.0, sigma_n=0.1)
    mean, variance = gp.predict([0.0, 1.0])
    assert mean == 0.0
    assert variance == pytest.approx(4.0)


def test_gp_interpolates_with_small_noise():
    X = [[0.0], [1.0], [2.0]]
    y = [1.0, -0.5, 2.0]
    gp = GaussianProcess(length_scale=1.0, sigma_f=1.0, sigma_n=1e-3)
    gp.fit(X, y)
    for point, value in zip(X, y):
        mean, variance = gp.predict(point)
        assert mean == pytest.approx(value, abs=1e-3)
        assert variance < 1e-2


def test_gp_reverts_to_prior_far_away():
    gp = GaussianProcess(length_scale=0.5, sigma_f=1.5, sigma_n=0.1)
    gp.fit([[0.0, 0.0], [0.2, 0.1]], [3.0, 4.0])
    mean, variance = gp.predict([50.0, 50.0])
    assert abs(mean) < 1e-9
    assert variance == pytest.approx(1.5**2)


def test_gp_variance_has_floor():
    gp = GaussianProcess(length_scale=1.0, sigma_f=1.0, sigma_n=0.0)
    gp.fit([[0.0]], [1.0])
    _, variance = gp.predict([0.0])
    assert variance >= 1e-6


def test_gp_mean_flips_with_negated_targets():
    rng = np.random.default_rng(3)
    X = rng.uniform(0, 1, size=(6, 3))
    y = rng.normal(size=6)
    a = GaussianProcess()
    a.fit(X, y)
    b = GaussianProcess()
    b.fit(X, -y)
    point = [0.4, 0.6, 0.2]
    assert b.predict(point)[0] == pytest.approx(-a.predict(point)[0])
    assert b.predict(point)[1] == pytest.approx(a.predict(point)[1])


def test_gp_refit_with_empty_data_returns_prior():
    gp = GaussianProcess(sigma_f=1.0)
    gp.fit([[0.0]], [5.0])
    gp.fit([], [])
    assert gp.predict([0.0]) == (0.0, 1.0)


def test_gp_rejects_bad_inputs():
    with pytest.raises(ValueError):
        GaussianProcess(length_scale=0.0)
    gp = GaussianProcess()
    with pytest.raises(ValueError):
        gp.fit([[0.0, 1.0]], [1.0, 2.0])
    gp.fit([[0.0, 1.0]], [1.0])
    with pytest.raises(ValueError):
        gp.predict([0.0, 1.0, 2.0])