from __future__ import annotations

import bisect
import logging
import math
import numbers
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

import numpy
import scipy.interpolate
from numpy.polynomial import Polynomial

from .errors import (
    EmptyResultError,
    EmptyTrajectoryError,
    InvalidDurationError,
    MalformedInputError,
    OutOfRangeError,
    SerializationError,
    TimeGapError,
    TimeOverlapError,
)
from .polynomial import as_polynomial, coefficients, differentiate, shift_argument

if TYPE_CHECKING:  # Avoid import cycles during runtime
    from ..io.channel import Channel

logger = logging.getLogger(__name__)


# Trajectory y(t) made of polynomial segments split among breakpoints.
# Over [times[i], times[i+1]) the curve is y(t) = segments[i](t - time_shift[i]);
# the last interval is closed at times[-1].
class PiecewisePolynomial:
    """Piecewise polynomial trajectory with per-segment time shifts.

    Parameters
    ----------
    segments : sequence of polynomials, optional
        Segment polynomials, anything accepted by ``as_polynomial``.
    times : sequence of float, optional
        ``len(segments) + 1`` strictly increasing breakpoints, or, if
        ``relative`` is True, ``len(segments)`` positive segment durations.
    time_shift : sequence of float, optional
        Explicit per-segment shifts, used verbatim. When omitted the shifts
        are 0 (absolute times) or the segment start (relative times).
    relative : bool, optional
        Interpret ``times`` as durations, laid end to end from 0.
    start_time : float, optional
        Reference breakpoint of an empty trajectory (default: 0.0). The first
        ``append`` starts from it.

    Raises
    ------
    MalformedInputError
        If the lengths do not match or breakpoints are not strictly increasing.

    Notes
    -----
    Evaluating outside ``[start_time, end_time]`` is not an error: the first
    and last segments are extrapolated.
    """

    def __init__(
        self,
        segments: Optional[Sequence[Any]] = None,
        times: Optional[Sequence[float]] = None,
        time_shift: Optional[Sequence[float]] = None,
        relative: bool = False,
        start_time: float = 0.0,
    ) -> None:
        segments = [as_polynomial(p) for p in (segments if segments is not None else [])]
        if not segments:
            if times is not None and len(times) > 1:
                raise MalformedInputError("Breakpoints given without segments.")
            if times is not None and len(times) == 1:
                start_time = times[0]
            self.segments: List[Polynomial] = []
            self.times: List[float] = [float(start_time)]
            self.time_shift: List[float] = []
            return

        if times is None:
            raise MalformedInputError("Segments given without breakpoints.")
        times = [float(t) for t in times]

        if relative:
            if time_shift is not None:
                raise MalformedInputError(
                    "Explicit time shifts cannot be combined with relative times."
                )
            if len(times) != len(segments):
                raise MalformedInputError(
                    f"Expected {len(segments)} durations, got {len(times)}."
                )
            if any(not d > 0 for d in times):
                raise MalformedInputError("Segment durations must be positive.")
            absolute = [0.0]
            for d in times:
                absolute.append(absolute[-1] + d)
            times = absolute
            time_shift = times[:-1]
        elif time_shift is None:
            time_shift = [0.0] * len(segments)

        self.segments = segments
        self.times = times
        self.time_shift = [float(s) for s in time_shift]
        self._validate()

    @classmethod
    def from_segment(cls, p: Any, a: float, b: float) -> "PiecewisePolynomial":
        """Single segment on ``[a, b]`` whose local time starts at 0."""
        return cls([p], [a, b], [a])

    @classmethod
    def from_ppoly(cls, pp: scipy.interpolate.PPoly) -> "PiecewisePolynomial":
        """Convert a SciPy ``PPoly`` with increasing breakpoints.

        SciPy stores every piece relative to its left breakpoint, which maps
        to a time shift equal to that breakpoint.
        """
        x = numpy.asarray(pp.x, dtype=float)
        c = numpy.asarray(pp.c, dtype=float)
        if c.ndim != 2:
            raise MalformedInputError("Only scalar-valued PPoly can be converted.")
        segments = [Polynomial(c[::-1, i]) for i in range(c.shape[1])]
        return cls(segments, list(x), list(x[:-1]))

    # Invariant: n segments, n + 1 strictly increasing breakpoints, n shifts.
    def _validate(self) -> None:
        n = len(self.segments)
        if len(self.times) != n + 1 or len(self.time_shift) != n:
            raise MalformedInputError(
                f"Expected {n + 1} breakpoints and {n} time shifts, "
                f"got {len(self.times)} and {len(self.time_shift)}."
            )
        for a, b in zip(self.times, self.times[1:]):
            if not a < b:
                raise MalformedInputError("Breakpoints must be strictly increasing.")

    def _require_segments(self) -> None:
        if not self.segments:
            raise EmptyTrajectoryError("Trajectory has no segments.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def start_time(self) -> float:
        return self.times[0]

    @property
    def end_time(self) -> float:
        return self.times[-1]

    @property
    def duration(self) -> float:
        return self.times[-1] - self.times[0]

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def __len__(self) -> int:
        return len(self.segments)

    def find_segment(self, t: float) -> int:
        """Index of the segment used to evaluate time ``t``.

        Times before the start map to the first segment and times at or past
        the end map to the last one, so any ``t`` yields a valid index.
        """
        self._require_segments()
        idx = bisect.bisect_right(self.times, t) - 1
        return min(max(idx, 0), len(self.segments) - 1)

    def evaluate(self, t: float) -> float:
        i = self.find_segment(t)
        return float(self.segments[i](t - self.time_shift[i]))

    def __call__(self, t: float) -> float:
        return self.evaluate(t)

    def derivative(self, t: float, n: int = 1) -> float:
        """Value of the nth derivative at ``t``.

        Local time is only shifted, never scaled, so no chain-rule factor
        applies.
        """
        i = self.find_segment(t)
        return float(differentiate(self.segments[i], n)(t - self.time_shift[i]))

    def sample(self, ts: Any, n: int = 0) -> numpy.ndarray:
        """Evaluate the nth derivative at every time in the array ``ts``."""
        self._require_segments()
        ts = numpy.asarray(ts, dtype=float)
        idx = numpy.searchsorted(self.times, ts, side="right") - 1
        idx = numpy.clip(idx, 0, len(self.segments) - 1)
        result = numpy.empty_like(ts)
        for i in numpy.unique(idx):
            mask = idx == i
            poly = differentiate(self.segments[i], n)
            result[mask] = poly(ts[mask] - self.time_shift[i])
        return result

    def start(self) -> float:
        self._require_segments()
        return float(self.segments[0](self.times[0] - self.time_shift[0]))

    def end(self) -> float:
        self._require_segments()
        return float(self.segments[-1](self.times[-1] - self.time_shift[-1]))

    def one_sided_values(self, index: int, n: int = 0) -> Tuple[float, float]:
        """Left and right limits of the nth derivative at ``times[index]``.

        Only internal breakpoints (``1 <= index < num_segments``) have two
        sides.
        """
        if not 0 < index < len(self.segments):
            raise OutOfRangeError(
                f"Breakpoint index {index} is not internal "
                f"(valid: 1..{len(self.segments) - 1})."
            )
        t = self.times[index]
        left = differentiate(self.segments[index - 1], n)
        right = differentiate(self.segments[index], n)
        return (
            float(left(t - self.time_shift[index - 1])),
            float(right(t - self.time_shift[index])),
        )

    def max_discontinuity(self, derivative: int = 0) -> Tuple[float, float]:
        """Largest jump of the given derivative over internal breakpoints.

        Returns
        -------
        Tuple[float, float]
            ``(time, magnitude)`` of the largest jump; the earliest breakpoint
            wins ties. With fewer than two segments there is no internal
            breakpoint and ``(nan, 0.0)`` is returned.
        """
        best_time, best_mag = math.nan, 0.0
        found = False
        for i in range(1, len(self.segments)):
            left, right = self.one_sided_values(i, derivative)
            mag = abs(right - left)
            if not found or mag > best_mag:
                best_time, best_mag = self.times[i], mag
                found = True
        return best_time, best_mag

    # ------------------------------------------------------------------
    # Derived trajectories
    # ------------------------------------------------------------------

    def copy(self) -> "PiecewisePolynomial":
        result = PiecewisePolynomial(start_time=self.times[0])
        result.segments = [p.copy() for p in self.segments]
        result.times = list(self.times)
        result.time_shift = list(self.time_shift)
        return result

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "PiecewisePolynomial":
        return self.copy()

    def differentiate(self, n: int = 1) -> "PiecewisePolynomial":
        result = self.copy()
        result.segments = [differentiate(p, n) for p in self.segments]
        return result

    def split(self, t: float) -> Tuple["PiecewisePolynomial", "PiecewisePolynomial"]:
        """Split into independent ``(front, back)`` trajectories at time ``t``.

        The segment containing ``t`` is copied unchanged into both halves;
        only its breakpoints are clipped. If ``t`` is a breakpoint no segment
        is duplicated, and splitting at the very start or end leaves one half
        empty (with reference time ``t``).

        Raises
        ------
        OutOfRangeError
            If ``t`` is outside ``[start_time, end_time]``.
        """
        self._require_segments()
        if not self.times[0] <= t <= self.times[-1]:
            raise OutOfRangeError(
                f"Split time {t} outside [{self.times[0]}, {self.times[-1]}]."
            )
        t = float(t)
        k = bisect.bisect_left(self.times, t)
        if self.times[k] == t:
            front = self._slice(0, k, self.times[: k + 1])
            back = self._slice(k, len(self.segments), self.times[k:])
        else:
            i = k - 1
            front = self._slice(0, i + 1, self.times[: i + 1] + [t])
            back = self._slice(i, len(self.segments), [t] + self.times[i + 1 :])
        logger.debug(
            "Split at t=%s into %d + %d segments", t, len(front), len(back)
        )
        return front, back

    def _slice(self, lo: int, hi: int, times: List[float]) -> "PiecewisePolynomial":
        result = PiecewisePolynomial(start_time=times[0])
        result.segments = [p.copy() for p in self.segments[lo:hi]]
        result.times = list(times)
        result.time_shift = list(self.time_shift[lo:hi])
        result._validate()
        return result

    def select(self, a: float, b: float) -> "PiecewisePolynomial":
        """Copy of the part between ``a`` and ``b``.

        Bounds are clamped to ``[start_time, end_time]``; self is unchanged.
        """
        self._require_segments()
        if not a < b:
            raise EmptyResultError(f"Empty selection [{a}, {b}].")
        a = max(a, self.times[0])
        b = min(b, self.times[-1])
        if not a < b:
            raise OutOfRangeError(
                f"Selection does not overlap [{self.times[0]}, {self.times[-1]}]."
            )
        result = self.copy()
        result.trim_front(a)
        result.trim_back(b)
        return result

    def to_ppoly(self) -> scipy.interpolate.PPoly:
        """Equivalent SciPy ``PPoly`` (coefficients about each left breakpoint)."""
        self._require_segments()
        local = [
            coefficients(shift_argument(p, s - t0))
            for p, s, t0 in zip(self.segments, self.time_shift, self.times)
        ]
        order = max(len(c) for c in local)
        c = numpy.zeros((order, len(local)))
        for i, coef in enumerate(local):
            c[order - len(coef) :, i] = coef[::-1]
        return scipy.interpolate.PPoly(c, numpy.asarray(self.times))

    # ------------------------------------------------------------------
    # In-place editing
    # ------------------------------------------------------------------

    def append(self, p: Any, t: float, relative: bool = False) -> None:
        """Append a segment after the last breakpoint.

        Parameters
        ----------
        p : polynomial
            New segment, evaluated in local time starting at 0 at the old end.
        t : float
            New end time, or the segment duration if ``relative`` is True.
        relative : bool, optional
            Interpret ``t`` as a duration (default: False).

        Raises
        ------
        InvalidDurationError
            If the new segment would not have positive length.
        """
        end = self.times[-1]
        new_end = end + t if relative else float(t)
        if not new_end > end:
            raise InvalidDurationError(
                f"Segment ending at {new_end} does not extend past {end}."
            )
        self.segments.append(as_polynomial(p))
        self.time_shift.append(end)
        self.times.append(new_end)
        logger.debug("Appended segment [%s, %s]", end, new_end)

    def concat(
        self, traj: "PiecewisePolynomial", relative: bool = False, merge: bool = False
    ) -> None:
        """Append all segments of ``traj``.

        With ``relative`` the breakpoints and shifts of ``traj`` are moved
        forward by ``end_time`` first; otherwise ``traj`` must start exactly
        at ``end_time``.

        With ``merge`` the join breakpoint is dropped when the segments on
        both sides are the same polynomial with the same shift. This rejoins
        the halves of ``split(t)`` for a ``t`` inside a segment. A split at a
        breakpoint duplicates nothing and is undone by a plain ``concat``;
        merging there would also fuse two neighbours that were identical.

        Raises
        ------
        TimeGapError
            If ``traj`` starts after ``end_time``.
        TimeOverlapError
            If ``traj`` starts before ``end_time``.
        """
        if not traj.segments:
            return
        offset = self.times[-1] if relative else 0.0
        times = [t + offset for t in traj.times]
        shifts = [s + offset for s in traj.time_shift]
        segments = [p.copy() for p in traj.segments]

        if not self.segments:
            self.segments, self.times, self.time_shift = segments, times, shifts
            self._validate()
            return

        end = self.times[-1]
        if times[0] > end:
            raise TimeGapError(f"Trajectory starts at {times[0]}, after end {end}.")
        if times[0] < end:
            raise TimeOverlapError(
                f"Trajectory starts at {times[0]}, before end {end}."
            )

        if (
            merge
            and segments[0] == self.segments[-1]
            and shifts[0] == self.time_shift[-1]
        ):
            self.times[-1] = times[1]
            segments, times, shifts = segments[1:], times[1:], shifts[1:]
            logger.debug("Merged seamless join at t=%s", end)
        self.segments.extend(segments)
        self.times.extend(times[1:])
        self.time_shift.extend(shifts)
        self._validate()
        logger.debug("Concatenated %d segments at t=%s", len(traj.segments), end)

    def shift_time(self, dt: float) -> None:
        """Move the trajectory forward in time by ``dt``."""
        self.times = [t + dt for t in self.times]
        self.time_shift = [s + dt for s in self.time_shift]
        logger.debug("Shifted time by %s", dt)

    def zero_time_shift(self) -> None:
        """Re-express every segment so that local time equals global time."""
        self.segments = [
            shift_argument(p, s) if s != 0 else p
            for p, s in zip(self.segments, self.time_shift)
        ]
        self.time_shift = [0.0] * len(self.segments)
        logger.debug("Folded time shifts of %d segments", len(self.segments))

    def trim_front(self, tstart: float) -> None:
        """Make ``tstart`` the new start time.

        Raises
        ------
        EmptyResultError
            If ``tstart`` is not before ``end_time``.
        OutOfRangeError
            If ``tstart`` is before ``start_time``.
        """
        self._require_segments()
        if not tstart < self.times[-1]:
            raise EmptyResultError(
                f"Trimming front at {tstart} leaves nothing before {self.times[-1]}."
            )
        if tstart < self.times[0]:
            raise OutOfRangeError(
                f"Trim time {tstart} is before start {self.times[0]}."
            )
        i = self.find_segment(tstart)
        self.segments = self.segments[i:]
        self.time_shift = self.time_shift[i:]
        self.times = [float(tstart)] + self.times[i + 1 :]
        self._validate()
        logger.debug("Trimmed front at t=%s", tstart)

    def trim_back(self, tend: float) -> None:
        """Make ``tend`` the new end time.

        Raises
        ------
        EmptyResultError
            If ``tend`` is not after ``start_time``.
        OutOfRangeError
            If ``tend`` is after ``end_time``.
        """
        self._require_segments()
        if not tend > self.times[0]:
            raise EmptyResultError(
                f"Trimming back at {tend} leaves nothing after {self.times[0]}."
            )
        if tend > self.times[-1]:
            raise OutOfRangeError(f"Trim time {tend} is after end {self.times[-1]}.")
        i = bisect.bisect_left(self.times, tend) - 1
        self.segments = self.segments[: i + 1]
        self.time_shift = self.time_shift[: i + 1]
        self.times = self.times[: i + 1] + [float(tend)]
        self._validate()
        logger.debug("Trimmed back at t=%s", tend)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def write(self, channel: "Channel") -> bool:
        """Write segments, breakpoints and shifts; False on failure."""
        try:
            channel.write_count(len(self.segments))
            for p in self.segments:
                channel.write_doubles(coefficients(p))
            channel.write_doubles(self.times)
            channel.write_doubles(self.time_shift)
        except SerializationError as exc:
            logger.warning("Failed to write trajectory: %s", exc)
            return False
        return True

    def read(self, channel: "Channel") -> bool:
        """Replace the contents with data from ``channel``; False on failure.

        The instance is only modified once everything was read and validated.
        """
        try:
            n = channel.read_count()
            segments = [as_polynomial(channel.read_doubles()) for _ in range(n)]
            times = [float(t) for t in channel.read_doubles()]
            shifts = [float(s) for s in channel.read_doubles()]
            loaded = PiecewisePolynomial(start_time=times[0] if times else 0.0)
            loaded.segments, loaded.times, loaded.time_shift = segments, times, shifts
            loaded._validate()
        except (SerializationError, MalformedInputError) as exc:
            logger.warning("Failed to read trajectory: %s", exc)
            return False
        self.segments, self.times, self.time_shift = segments, times, shifts
        return True

    # ------------------------------------------------------------------
    # Arithmetic, applied to every segment's local polynomial
    # ------------------------------------------------------------------

    @staticmethod
    def _operand(other: Any) -> Any:
        if isinstance(other, numbers.Real):
            return float(other)
        if isinstance(other, Polynomial):
            return as_polynomial(other)
        return None

    def __iadd__(self, other: Any) -> "PiecewisePolynomial":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        self.segments = [p + operand for p in self.segments]
        return self

    def __isub__(self, other: Any) -> "PiecewisePolynomial":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        self.segments = [p - operand for p in self.segments]
        return self

    def __imul__(self, other: Any) -> "PiecewisePolynomial":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        self.segments = [p * operand for p in self.segments]
        return self

    def __itruediv__(self, other: Any) -> "PiecewisePolynomial":
        if not isinstance(other, numbers.Real):
            return NotImplemented
        self.segments = [p / float(other) for p in self.segments]
        return self

    def __add__(self, other: Any) -> "PiecewisePolynomial":
        result = self.copy()
        return result.__iadd__(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "PiecewisePolynomial":
        result = self.copy()
        return result.__isub__(other)

    def __mul__(self, other: Any) -> "PiecewisePolynomial":
        result = self.copy()
        return result.__imul__(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "PiecewisePolynomial":
        result = self.copy()
        return result.__itruediv__(other)

    def __neg__(self) -> "PiecewisePolynomial":
        result = self.copy()
        result.segments = [-p for p in result.segments]
        return result

    # ------------------------------------------------------------------
    # Comparison and formatting
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PiecewisePolynomial):
            return NotImplemented
        return (
            self.times == other.times
            and self.time_shift == other.time_shift
            and len(self.segments) == len(other.segments)
            and all(
                numpy.array_equal(coefficients(a), coefficients(b))
                for a, b in zip(self.segments, other.segments)
            )
        )

    __hash__ = None  # type: ignore[assignment]

    # numpy scalars defer to the reflected operators instead of broadcasting.
    __array_ufunc__ = None

    def __repr__(self) -> str:
        return (
            f"PiecewisePolynomial(segments={len(self.segments)}, "
            f"start_time={self.start_time}, end_time={self.end_time})"
        )

    # Format the piecewise function into a readable table, one segment per line.
    def __str__(self) -> str:
        if not self.segments:
            return f"<empty trajectory at {self.times[0]:.2f}>\n"
        result = ""
        x = ["{:.2f}".format(val) for val in self.times]
        maxlen = max([len(val) for val in x])
        for i, p in enumerate(self.segments):
            result += x[i].rjust(maxlen)
            result += " - "
            result += x[i + 1].rjust(maxlen)
            result += ": "
            terms = []
            for k, c in enumerate(coefficients(p)):
                arg = "(t-{})".format(self.time_shift[i]) if self.time_shift[i] else "t"
                terms.append("{}*{}^{}".format(c, arg, k))
            result += " + ".join(terms)
            result += "\n"
        return result
