"""
Section 1: OLS -- Ordinary Least Squares

Implements OLS estimation from scratch: the coefficient estimate, the
residuals, the residual variance and a Wald-type (normal approximation)
confidence interval for a single coefficient.

Every function takes its arrays read-only and returns new arrays; the
caller's design matrix is never modified.
"""

import numpy as np
from scipy import stats

from .errors import DimensionMismatchError
from .utils import check_xy, readonly, qr_solve, normal_solve, xtx_inv

Z_95 = 1.96


def _frozen(a):
    a.flags.writeable = False
    return a


def estimate(X, y, method="qr"):
    """
    OLS estimation: beta_hat solves (X'X) beta = X'y.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix (include a constant column for intercept).
        Must have full column rank.
    y : ndarray, shape (n,)
        Outcome vector.
    method : {"qr", "normal"}
        "qr" uses a pivoted QR decomposition with a rank check and is the
        numerically stable choice. "normal" solves the normal equations
        directly, as written on the blackboard.

    Returns
    -------
    beta : ndarray, shape (k,)
        Read-only coefficient vector.

    Raises
    ------
    SingularMatrixError
        X is rank deficient (or has fewer rows than columns).
    DimensionMismatchError
        X and y disagree on the number of observations.
    """
    X, y = check_xy(X, y)
    if method == "qr":
        b = qr_solve(X, y)
    elif method == "normal":
        b = normal_solve(X, y)
    else:
        raise ValueError(f"method must be 'qr' or 'normal', got {method!r}")
    return _frozen(b)


def residuals(X, y, beta):
    """Residuals e = y - X @ beta (read-only)."""
    X, y = check_xy(X, y)
    beta = readonly(beta, ndim=1, name="beta")
    if beta.shape[0] != X.shape[1]:
        raise DimensionMismatchError(
            f"beta has {beta.shape[0]} entries but X has {X.shape[1]} columns"
        )
    return _frozen(y - X @ beta)


def residual_variance(e, n_params=0):
    """
    Residual variance sigma_hat^2 = e'e / (n - n_params).

    n_params=0 gives the population-style variance of the residual
    vector; n_params=k gives the unbiased estimator. The two differ by
    the factor n / (n - k).
    """
    e = readonly(e, ndim=1, name="residuals")
    n = e.shape[0]
    if n_params < 0 or n - n_params <= 0:
        raise ValueError(
            f"need more residuals ({n}) than estimated parameters ({n_params})"
        )
    return float(e @ e) / (n - n_params)


def vcov(X, s2):
    """
    Homoskedastic covariance of beta_hat: (X'X)^{-1} * sigma_hat^2.

    Assumes uncorrelated, constant-variance errors; this is not a
    heteroskedasticity-consistent estimator.
    """
    X = readonly(X, ndim=2, name="X")
    return _frozen(xtx_inv(X) * s2)


def z_value(level=0.95):
    """Two-sided standard normal critical value for a coverage level."""
    if not 0 < level < 1:
        raise ValueError(f"level must be in (0, 1), got {level}")
    return float(stats.norm.ppf(0.5 + level / 2))


def fit(X, y, z=Z_95, dof_correction=True):
    """
    Full OLS fit with homoskedastic standard errors and Wald intervals.

    Parameters
    ----------
    X : ndarray, shape (n, k)
    y : ndarray, shape (n,)
    z : float
        Normal multiplier for the interval (1.96 for 95%).
    dof_correction : bool
        If True, sigma_hat^2 = e'e / (n - k); otherwise e'e / n.

    Returns
    -------
    dict with keys:
        beta      : coefficient vector
        se        : standard errors
        residuals : OLS residuals
        s2        : estimated error variance
        fitted    : fitted values X @ beta
        ci_lo, ci_hi : interval bounds, one per coefficient
        n, k      : sample size and number of parameters
    """
    if not (np.isfinite(z) and z >= 0):
        raise ValueError(f"z must be finite and non-negative, got {z}")
    X, y = check_xy(X, y)
    n, k = X.shape
    b = estimate(X, y)
    fitted = _frozen(X @ b)
    e = _frozen(y - fitted)
    s2 = residual_variance(e, n_params=k if dof_correction else 0)
    se = _frozen(np.sqrt(np.diag(vcov(X, s2))))
    return dict(
        beta=b, se=se, residuals=e, s2=s2, fitted=fitted,
        ci_lo=_frozen(b - z * se), ci_hi=_frozen(b + z * se),
        n=n, k=k,
    )


def confidence_interval(X, y, coefficient_index, z=Z_95, dof_correction=True):
    """
    Wald confidence interval [beta_j - z*SE_j, beta_j + z*SE_j].

    Parameters
    ----------
    X : ndarray, shape (n, k)
    y : ndarray, shape (n,)
    coefficient_index : int
        0-based index j of the coefficient, 0 <= j < k.
    z : float
        Normal multiplier; the default 1.96 gives a 95% interval with no
        small-sample t correction.
    dof_correction : bool
        Passed through to `fit`.

    Returns
    -------
    (lower, upper) : tuple of float
    """
    k = readonly(X, ndim=2, name="X").shape[1]
    j = coefficient_index
    if isinstance(j, (bool, np.bool_)) or not isinstance(j, (int, np.integer)):
        raise TypeError(f"coefficient_index must be an integer, got {j!r}")
    if not 0 <= j < k:
        raise DimensionMismatchError(
            f"coefficient_index {coefficient_index} out of range for "
            f"{k} coefficients"
        )
    res = fit(X, y, z=z, dof_correction=dof_correction)
    return float(res["ci_lo"][j]), float(res["ci_hi"][j])
