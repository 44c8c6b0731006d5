"""
Simulated data from a known linear model.

    y = X @ beta + eps,   X = [1, u_1, ..., u_{k-1}],  u_j ~ U(0, 1),
    eps ~ N(0, sigma^2)
"""

import numpy as np

from .utils import add_const


def simulate_linear_model(n=100, beta=(5.0, 2.0), sigma=1.0, seed=None,
                          rng=None):
    """
    Draw one sample from the linear DGP.

    Parameters
    ----------
    n : int
        Number of observations.
    beta : sequence of float
        True coefficients; beta[0] is the intercept.
    sigma : float
        Std dev of the error term (0 gives an exact fit).
    seed : int or None
        Seed for a fresh generator when `rng` is not given.
    rng : numpy.random.Generator or None

    Returns
    -------
    dict with keys:
        X     : design matrix, shape (n, k), leading ones column
        y     : outcome vector
        beta  : true coefficients as an array
        noise : the error draw
    """
    beta = np.asarray(beta, dtype=float)
    if beta.ndim != 1 or beta.size == 0:
        raise ValueError("beta must be a non-empty 1-d sequence")
    if n < beta.size:
        raise ValueError(f"n ({n}) must be at least len(beta) ({beta.size})")
    if sigma < 0:
        raise ValueError(f"sigma must be non-negative, got {sigma}")
    if rng is None:
        rng = np.random.default_rng(seed)

    k = beta.size
    X = add_const(rng.uniform(0, 1, size=(n, k - 1)))
    noise = rng.normal(0, sigma, n) if sigma > 0 else np.zeros(n)
    y = X @ beta + noise
    return dict(X=X, y=y, beta=beta, noise=noise)
