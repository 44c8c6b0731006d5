"""
Section 0: Array basics -- indexing, ranges, bounds checking

numpy quietly accepts a[-1] (wraps to the end) and a[2:99] (truncates to
the end). The helpers here make every out-of-range access fail with
OutOfBoundsError instead, and never modify their input.
"""

import numpy as np

from .errors import OutOfBoundsError


def _check_index(shape, index):
    index = index if isinstance(index, tuple) else (index,)
    if len(index) != len(shape):
        raise OutOfBoundsError(
            f"{len(index)} index component(s) for an array of shape {shape}"
        )
    for axis, (i, extent) in enumerate(zip(index, shape)):
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)):
            raise TypeError(f"index on axis {axis} must be an integer, got {i!r}")
        if not 0 <= i < extent:
            raise OutOfBoundsError(
                f"index {i} out of bounds for axis {axis} with size {extent}"
            )
    return index


def checked_get(a, index):
    """
    Bounds-checked element access.

    Parameters
    ----------
    a : array_like
    index : int or tuple of int
        One 0-based integer per axis, each in [0, extent).

    Returns
    -------
    The element at `index`.
    """
    a = np.asarray(a)
    return a[_check_index(a.shape, index)]


def checked_slice(a, start, stop):
    """
    Bounds-checked slice a[start:stop] along the first axis.

    Requires 0 <= start <= stop <= len(a); returns a copy.
    """
    a = np.asarray(a)
    if a.ndim == 0:
        raise OutOfBoundsError("cannot slice a 0-dimensional array")
    n = a.shape[0]
    if not 0 <= start <= stop <= n:
        raise OutOfBoundsError(
            f"slice [{start}:{stop}] out of bounds for length {n}"
        )
    return a[start:stop].copy()


def replace(a, index, value):
    """
    Return a copy of `a` with the element at `index` set to `value`.

    The copy is promoted to hold `value` exactly: replacing into an
    integer array with 2.5 gives a float array, not a truncated 2.
    """
    a = np.asarray(a)
    index = _check_index(a.shape, index)
    out = a.astype(np.result_type(a, value))
    out[index] = value
    return out


def closed_range(start, stop, step=1):
    """
    Range that includes `stop` when it lies on the step grid.

    closed_range(1, 5) -> range(1, 6); closed_range(10, 1, -3) -> 10, 7, 4, 1.
    """
    if step == 0:
        raise ValueError("step must be non-zero")
    return range(start, stop + (1 if step > 0 else -1), step)


def collect(r):
    """Materialise a range (or any iterable of numbers) as an ndarray."""
    return np.fromiter(r, dtype=int if isinstance(r, range) else float)
