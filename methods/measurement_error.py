"""
Section 2: Measurement Error -- Attenuation Bias

Re-estimates OLS after adding classical measurement error to one
regressor. With x_obs = x + u, u independent of x and eps,

    plim beta_hat = beta * Var(x) / (Var(x) + Var(u))

so the slope shrinks toward zero by the reliability ratio.

The perturbation is always applied to a copy of X.
"""

import numpy as np

from .errors import DimensionMismatchError
from .utils import readonly
from . import ols
from .simulate import simulate_linear_model


def add_measurement_error(X, column, sigma=None, rng=None, noise=None):
    """
    Return a copy of X with noise added to one column.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix. Left untouched.
    column : int
        Column to perturb, 0 <= column < k.
    sigma : float or None
        Std dev of N(0, sigma^2) noise. Ignored when `noise` is given.
    rng : numpy.random.Generator or None
    noise : ndarray, shape (n,), or None
        Explicit noise vector to add.

    Returns
    -------
    X_noisy : ndarray, shape (n, k)
    """
    X = readonly(X, ndim=2, name="X")
    n, k = X.shape
    if not 0 <= column < k:
        raise DimensionMismatchError(
            f"column {column} out of range for {k} columns"
        )
    if noise is None:
        if sigma is None or sigma < 0:
            raise ValueError("give a non-negative sigma or an explicit noise vector")
        if rng is None:
            rng = np.random.default_rng()
        noise = rng.normal(0, sigma, n)
    else:
        noise = readonly(noise, ndim=1, name="noise")
        if noise.shape[0] != n:
            raise DimensionMismatchError(
                f"noise has {noise.shape[0]} entries, X has {n} rows"
            )

    X_noisy = X.copy()
    X_noisy[:, column] += noise
    return X_noisy


def reliability_ratio(var_x, var_noise):
    """
    Attenuation factor lambda = Var(x) / (Var(x) + Var(u)).

    Parameters
    ----------
    var_x : float
        Variance of the true regressor.
    var_noise : float
        Variance of the measurement error.

    Returns
    -------
    float in (0, 1]
    """
    if var_x <= 0 or var_noise < 0:
        raise ValueError("need var_x > 0 and var_noise >= 0")
    return var_x / (var_x + var_noise)


def estimate_with_measurement_error(X, y, column, sigma, rng=None):
    """
    Compare the OLS estimate before and after mismeasuring one column.

    Parameters
    ----------
    X : ndarray, shape (n, k)
    y : ndarray, shape (n,)
    column : int
        Regressor that receives the noise.
    sigma : float
        Std dev of the measurement error.
    rng : numpy.random.Generator or None

    Returns
    -------
    dict with keys:
        beta_clean  : estimate on the true regressors
        beta_noisy  : estimate on the mismeasured regressors
        attenuation : beta_noisy[column] / beta_clean[column]
        predicted   : reliability ratio implied by the sample Var(x);
                      1.0 for a constant column such as the intercept
        X_noisy     : the perturbed copy of X
    """
    X_noisy = add_measurement_error(X, column, sigma=sigma, rng=rng)
    beta_clean = ols.estimate(X, y)
    beta_noisy = ols.estimate(X_noisy, y)
    var_x = float(np.var(np.asarray(X)[:, column]))
    lam = reliability_ratio(var_x, sigma ** 2) if var_x > 0 else 1.0
    return dict(
        beta_clean=beta_clean,
        beta_noisy=beta_noisy,
        attenuation=beta_noisy[column] / beta_clean[column],
        predicted=lam,
        X_noisy=X_noisy,
    )


def monte_carlo_attenuation(n, n_sims, sigma_noise, beta=(5.0, 2.0),
                            sigma_eps=1.0, column=1, seed=None):
    """
    Monte Carlo demonstration of attenuation bias.

    Each replication draws a fresh sample from `simulate_linear_model`,
    adds N(0, sigma_noise^2) error to `column` and records the clean and
    noisy estimates of that coefficient.

    Parameters
    ----------
    n : int
        Sample size per simulation.
    n_sims : int
        Number of Monte Carlo replications.
    sigma_noise : float
        Std dev of the measurement error.
    beta : sequence of float
        True coefficients.
    sigma_eps : float
        Std dev of the regression error.
    column : int
        Mismeasured regressor.
    seed : int or None
        Random seed for reproducibility.

    Returns
    -------
    dict with keys:
        mc_clean  : array of clean estimates
        mc_noisy  : array of noisy estimates
        bias      : mean(mc_noisy) - beta[column]
        predicted : beta[column] * reliability ratio for U(0, 1) regressors
    """
    rng = np.random.default_rng(seed)
    beta = np.asarray(beta, dtype=float)
    mc_clean = np.empty(n_sims)
    mc_noisy = np.empty(n_sims)

    for sim in range(n_sims):
        d = simulate_linear_model(n, beta=beta, sigma=sigma_eps, rng=rng)
        X_noisy = add_measurement_error(d["X"], column, sigma=sigma_noise,
                                        rng=rng)
        mc_clean[sim] = ols.estimate(d["X"], d["y"])[column]
        mc_noisy[sim] = ols.estimate(X_noisy, d["y"])[column]

    # Var(U(0, 1)) = 1/12
    lam = reliability_ratio(1 / 12, sigma_noise ** 2) if column > 0 else 1.0
    return dict(
        mc_clean=mc_clean,
        mc_noisy=mc_noisy,
        bias=np.mean(mc_noisy) - beta[column],
        predicted=beta[column] * lam,
    )
