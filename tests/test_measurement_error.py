import pytest
import numpy as np
from methods import measurement_error as me
from methods import ols
from methods.errors import DimensionMismatchError
from methods.simulate import simulate_linear_model

# ---------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------

@pytest.fixture
def rng():
    return np.random.default_rng(7)

@pytest.fixture
def data_large():
    return simulate_linear_model(n=20000, beta=(5.0, 2.0), sigma=1.0, seed=11)

# ---------------------------------------------------------------------
# Unit Tests: add_measurement_error
# ---------------------------------------------------------------------

def test_add_measurement_error_copies(rng):
    X = np.column_stack([np.ones(30), rng.uniform(0, 1, 30)])
    X_before = X.copy()
    X_noisy = me.add_measurement_error(X, 1, sigma=0.5, rng=rng)
    assert np.array_equal(X, X_before)
    assert not np.shares_memory(X, X_noisy)
    assert np.array_equal(X_noisy[:, 0], X[:, 0])
    assert not np.allclose(X_noisy[:, 1], X[:, 1])
    assert X_noisy.flags.writeable

def test_add_measurement_error_explicit_noise():
    X = np.column_stack([np.ones(4), np.arange(4.0)])
    u = np.array([0.1, -0.2, 0.3, 0.0])
    X_noisy = me.add_measurement_error(X, 1, noise=u)
    assert np.allclose(X_noisy[:, 1], np.arange(4.0) + u)

def test_add_measurement_error_zero_sigma_is_identity(rng):
    X = np.column_stack([np.ones(10), rng.standard_normal(10)])
    assert np.array_equal(me.add_measurement_error(X, 1, sigma=0.0, rng=rng), X)

@pytest.mark.parametrize("column", [-1, 2])
def test_add_measurement_error_bad_column(column):
    with pytest.raises(DimensionMismatchError):
        me.add_measurement_error(np.ones((5, 2)), column, sigma=1.0)

def test_add_measurement_error_bad_noise():
    with pytest.raises(DimensionMismatchError, match="noise has 3 entries"):
        me.add_measurement_error(np.ones((5, 2)), 1, noise=np.zeros(3))
    with pytest.raises(ValueError, match="sigma"):
        me.add_measurement_error(np.ones((5, 2)), 1)

# ---------------------------------------------------------------------
# Unit Tests: reliability ratio
# ---------------------------------------------------------------------

def test_reliability_ratio():
    assert me.reliability_ratio(1.0, 0.0) == 1.0
    assert me.reliability_ratio(1.0, 1.0) == pytest.approx(0.5)
    assert me.reliability_ratio(1 / 12, 0.09) == pytest.approx((1 / 12) / (1 / 12 + 0.09))
    with pytest.raises(ValueError):
        me.reliability_ratio(0.0, 1.0)
    with pytest.raises(ValueError):
        me.reliability_ratio(1.0, -0.1)

# ---------------------------------------------------------------------
# Attenuation bias
# ---------------------------------------------------------------------

def test_attenuation_bias_large_n(data_large):
    X, y = data_large["X"], data_large["y"]
    X_before = X.copy()
    res = me.estimate_with_measurement_error(
        X, y, column=1, sigma=0.3, rng=np.random.default_rng(3)
    )
    clean, noisy = res["beta_clean"][1], res["beta_noisy"][1]
    assert 0 < noisy < clean
    assert 0 < res["attenuation"] < 1
    # plim noisy slope = 2 * lambda, lambda ~ 0.48
    assert noisy == pytest.approx(2.0 * res["predicted"], abs=0.1)
    assert np.array_equal(X, X_before)
    assert np.allclose(res["beta_clean"], ols.estimate(X, y))

def test_estimate_with_measurement_error_noisy_matches_refit(data_large):
    X, y = data_large["X"], data_large["y"]
    res = me.estimate_with_measurement_error(
        X, y, column=1, sigma=0.5, rng=np.random.default_rng(5)
    )
    assert np.allclose(res["beta_noisy"], ols.estimate(res["X_noisy"], y))

def test_monte_carlo_attenuation():
    mc = me.monte_carlo_attenuation(n=500, n_sims=100, sigma_noise=0.3, seed=42)
    assert mc["mc_clean"].shape == (100,)
    assert mc["mc_noisy"].shape == (100,)
    assert np.mean(mc["mc_noisy"]) < np.mean(mc["mc_clean"])
    assert np.mean(mc["mc_clean"]) == pytest.approx(2.0, abs=0.1)
    assert np.mean(mc["mc_noisy"]) == pytest.approx(mc["predicted"], abs=0.15)
    assert mc["bias"] < 0

def test_monte_carlo_reproducible():
    a = me.monte_carlo_attenuation(n=50, n_sims=5, sigma_noise=0.2, seed=1)
    b = me.monte_carlo_attenuation(n=50, n_sims=5, sigma_noise=0.2, seed=1)
    assert np.array_equal(a["mc_noisy"], b["mc_noisy"])

def test_estimate_with_measurement_error_on_intercept(data_large):
    X, y = data_large["X"], data_large["y"]
    res = me.estimate_with_measurement_error(
        X, y, column=0, sigma=0.3, rng=np.random.default_rng(0)
    )
    # Constant column: no reliability ratio to speak of
    assert res["predicted"] == 1.0
    assert np.all(np.isfinite(res["beta_noisy"]))
    assert np.array_equal(res["X_noisy"][:, 1], X[:, 1])

def test_estimate_with_measurement_error_keys(data_large):
    res = me.estimate_with_measurement_error(
        data_large["X"], data_large["y"], column=1, sigma=0.2,
        rng=np.random.default_rng(1)
    )
    assert sorted(res) == ["X_noisy", "attenuation", "beta_clean",
                           "beta_noisy", "predicted"]
