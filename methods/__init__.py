"""
PracticalMath OLS methods -- array basics and OLS from scratch.

Each sub-module implements one topic using only numpy / scipy,
with no black-box econometrics packages.
"""

from .errors import SingularMatrixError, DimensionMismatchError, OutOfBoundsError
from .utils import add_const
from .ols import estimate, confidence_interval
from . import indexing
from . import ols
from . import simulate
from . import measurement_error
