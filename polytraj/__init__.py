"""polytraj - piecewise polynomial trajectories"""

import logging

# Builders
from . import builders

# Analysis tools
from .analysis import (
    breakpoint_jumps,
    continuity_order,
    is_continuous,
    print_discontinuity_summary,
)

# Free constructors
from .builders import (
    constant,
    constant_nd,
    linear,
    linear_nd,
    piecewise_linear,
    piecewise_linear_nd,
    subspace,
)
from .config import AnalysisOptions

# Core trajectory types and errors
from .core import (
    EmptyResultError,
    EmptyTrajectoryError,
    InvalidDurationError,
    MalformedInputError,
    OutOfRangeError,
    PiecewisePolynomial,
    PiecewisePolynomialND,
    SerializationError,
    TimeGapError,
    TimeOverlapError,
    TrajectoryError,
)

# Persistence
from .io import BinaryChannel, TextChannel, load, save

# Visualization
from .visualization import plot_trajectory, plot_trajectory_nd

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    "PiecewisePolynomial",
    "PiecewisePolynomialND",
    "AnalysisOptions",
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
    # Builders
    "constant",
    "linear",
    "piecewise_linear",
    "constant_nd",
    "linear_nd",
    "piecewise_linear_nd",
    "subspace",
    # Analysis
    "breakpoint_jumps",
    "is_continuous",
    "continuity_order",
    "print_discontinuity_summary",
    # Persistence
    "BinaryChannel",
    "TextChannel",
    "save",
    "load",
    # Visualization
    "plot_trajectory",
    "plot_trajectory_nd",
    # Builders module
    "builders",
]
