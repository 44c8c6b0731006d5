"""
Shared utility functions used across the method modules.
"""

import numpy as np
from scipy import linalg

from .errors import SingularMatrixError, DimensionMismatchError

RCOND = 1e-7


def readonly(a, ndim=None, name="array"):
    """
    Return a read-only float view of `a`.

    The caller's array is never written through the returned view, so any
    function that needs to perturb data has to take an explicit copy.

    Parameters
    ----------
    a : array_like
    ndim : int or None
        Required number of dimensions.
    name : str
        Used in error messages.

    Returns
    -------
    ndarray
        Float64 view (or converted copy) with `writeable=False`.
    """
    arr = np.asarray(a, dtype=float).view()
    if ndim is not None and arr.ndim != ndim:
        raise DimensionMismatchError(
            f"{name} must be {ndim}-dimensional, got shape {arr.shape}"
        )
    if not np.isfinite(arr).all():
        raise ValueError(f"{name} contains NaN or Inf values")
    arr.flags.writeable = False
    return arr


def check_xy(X, y):
    """Validate a design matrix / response pair and return read-only views."""
    X = readonly(X, ndim=2, name="X")
    y = readonly(y, ndim=1, name="y")
    if X.shape[0] != y.shape[0]:
        raise DimensionMismatchError(
            f"X and y must have the same number of observations: "
            f"{X.shape[0]} vs {y.shape[0]}"
        )
    n, k = X.shape
    if k == 0:
        raise DimensionMismatchError("X must have at least one column")
    if n < k:
        raise SingularMatrixError(
            f"Fewer observations ({n}) than parameters ({k}); "
            "X'X is singular"
        )
    return X, y


def qr_solve(X, y, rcond=RCOND):
    """
    Least squares via pivoted QR with a rank check.

    Parameters
    ----------
    X : ndarray, shape (n, k)
    y : ndarray, shape (n,)
    rcond : float
        Diagonal entries of R below rcond * max|R_ii| count as zero.

    Returns
    -------
    b : ndarray, shape (k,)
    """
    Q, R, piv = linalg.qr(X, mode="economic", pivoting=True)
    r_diag = np.abs(np.diag(R))
    k = X.shape[1]
    rank = 0 if r_diag[0] == 0 else int(np.sum(r_diag > rcond * r_diag[0]))
    if rank < k:
        dropped = np.sort(piv[rank:])
        raise SingularMatrixError(
            f"Design matrix has rank {rank} < {k} columns; "
            f"linearly dependent column(s): {dropped.tolist()}"
        )
    b = np.empty(k)
    b[piv] = linalg.solve_triangular(R, Q.T @ y)
    return b


def normal_solve(X, y):
    """OLS via the normal equations (X'X) b = X'y."""
    try:
        return np.linalg.solve(X.T @ X, X.T @ y)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(f"X'X is singular: {e}") from e


def xtx_inv(X, rcond=RCOND):
    """
    (X'X)^{-1}, refusing near-singular designs.

    Computed as R^{-1} R^{-T} from the pivoted QR of X, which avoids
    forming X'X explicitly.
    """
    _, R, piv = linalg.qr(X, mode="economic", pivoting=True)
    r_diag = np.abs(np.diag(R))
    k = X.shape[1]
    if r_diag[0] == 0 or np.sum(r_diag > rcond * r_diag[0]) < k:
        raise SingularMatrixError("X'X is singular; cannot invert")
    R_inv = linalg.solve_triangular(R, np.eye(k))
    out = np.empty((k, k))
    out[np.ix_(piv, piv)] = R_inv @ R_inv.T
    return out


def add_const(x):
    """
    Prepend a column of ones (intercept) to the design matrix.

    Parameters
    ----------
    x : ndarray
        1-d array or 2-d matrix of regressors.

    Returns
    -------
    X : ndarray, shape (n, k+1)
        New design matrix with leading ones column.
    """
    x = np.asarray(x, dtype=float)
    x = np.atleast_2d(x).T if x.ndim == 1 else x
    return np.column_stack([np.ones(x.shape[0]), x])
