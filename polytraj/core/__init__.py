"""
polytraj Core Module

This module provides the foundational components for polytraj:
- Piecewise polynomial trajectories (PiecewisePolynomial)
- Per-axis vector trajectories (PiecewisePolynomialND)
- Polynomial helpers built on numpy.polynomial
- The trajectory error hierarchy
"""

from .errors import (
    EmptyResultError,
    EmptyTrajectoryError,
    InvalidDurationError,
    MalformedInputError,
    OutOfRangeError,
    SerializationError,
    TimeGapError,
    TimeOverlapError,
    TrajectoryError,
)
from .piecewise import PiecewisePolynomial
from .piecewise_nd import PiecewisePolynomialND
from .polynomial import as_polynomial, differentiate, shift_argument

__all__ = [
    # Trajectories
    "PiecewisePolynomial",
    "PiecewisePolynomialND",
    # Polynomial helpers
    "as_polynomial",
    "differentiate",
    "shift_argument",
    # Errors
    "TrajectoryError",
    "EmptyTrajectoryError",
    "OutOfRangeError",
    "EmptyResultError",
    "InvalidDurationError",
    "TimeGapError",
    "TimeOverlapError",
    "MalformedInputError",
    "SerializationError",
]
