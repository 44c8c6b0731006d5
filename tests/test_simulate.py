import pytest
import numpy as np
from methods.simulate import simulate_linear_model
from methods.utils import add_const

# ---------------------------------------------------------------------
# Unit Tests: simulate_linear_model
# ---------------------------------------------------------------------

def test_shapes_and_intercept():
    d = simulate_linear_model(n=100, beta=(5.0, 2.0, -1.0), seed=0)
    assert d["X"].shape == (100, 3)
    assert d["y"].shape == (100,)
    assert np.all(d["X"][:, 0] == 1.0)
    assert np.all((d["X"][:, 1:] >= 0) & (d["X"][:, 1:] < 1))

def test_zero_noise_is_exact():
    d = simulate_linear_model(n=20, sigma=0.0, seed=0)
    assert np.array_equal(d["noise"], np.zeros(20))
    assert np.allclose(d["y"], d["X"] @ d["beta"])

def test_seed_reproducible():
    a = simulate_linear_model(seed=9)
    b = simulate_linear_model(seed=9)
    assert np.array_equal(a["X"], b["X"])
    assert np.array_equal(a["y"], b["y"])

def test_explicit_generator_advances():
    rng = np.random.default_rng(1)
    a = simulate_linear_model(n=10, rng=rng)
    b = simulate_linear_model(n=10, rng=rng)
    assert not np.array_equal(a["y"], b["y"])

@pytest.mark.parametrize("kwargs", [
    dict(beta=()),
    dict(n=1, beta=(1.0, 2.0)),
    dict(sigma=-1.0),
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        simulate_linear_model(**kwargs)

# ---------------------------------------------------------------------
# Unit Tests: add_const
# ---------------------------------------------------------------------

def test_add_const():
    X = add_const(np.array([1.0, 2.0, 3.0]))
    assert X.shape == (3, 2)
    assert np.all(X[:, 0] == 1.0)
    X2 = add_const(np.ones((4, 2)) * 7)
    assert X2.shape == (4, 3)
