"""
Exception types raised by the methods package.

Each subclasses the built-in exception a caller would already expect,
so `except ValueError` / `except IndexError` keep working.
"""

import numpy as np


class SingularMatrixError(np.linalg.LinAlgError):
    """X'X is singular or numerically rank deficient."""


class DimensionMismatchError(ValueError):
    """Array shapes disagree, or an index is outside the coefficient range."""


class OutOfBoundsError(IndexError):
    """Access outside the declared extents of an array or range."""
