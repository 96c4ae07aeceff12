"""
Trajectory Errors

Exception hierarchy for piecewise polynomial trajectories. All errors derive
from ``ValueError`` so callers validating plain input keep working.
"""


class TrajectoryError(ValueError):
    """Base class for all trajectory errors."""


class EmptyTrajectoryError(TrajectoryError):
    """The operation needs at least one segment."""


class OutOfRangeError(TrajectoryError):
    """A time argument lies outside ``[start_time, end_time]``."""


class EmptyResultError(TrajectoryError):
    """Trimming or selecting would leave no segment."""


class InvalidDurationError(TrajectoryError):
    """An appended segment does not have a strictly positive duration."""


class TimeGapError(TrajectoryError):
    """A concatenated trajectory starts after the current end time."""


class TimeOverlapError(TrajectoryError):
    """A concatenated trajectory starts before the current end time."""


class MalformedInputError(TrajectoryError):
    """Mismatched lengths, non-increasing breakpoints or invalid polynomials."""


class SerializationError(TrajectoryError):
    """Reading from or writing to a channel failed."""
