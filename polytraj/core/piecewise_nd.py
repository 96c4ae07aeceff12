from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

import numpy

from .errors import EmptyTrajectoryError, MalformedInputError, SerializationError
from .piecewise import PiecewisePolynomial

if TYPE_CHECKING:  # Avoid import cycles during runtime
    from ..io.channel import Channel

logger = logging.getLogger(__name__)


class PiecewisePolynomialND:
    """Vector-valued trajectory built from one ``PiecewisePolynomial`` per axis.

    All elements are expected to share their breakpoints, but this is not
    enforced; every operation is forwarded to each element independently.

    Parameters
    ----------
    elements : sequence of PiecewisePolynomial, optional
        Per-axis trajectories. They are used as given, not copied.
    """

    def __init__(self, elements: Optional[Sequence[PiecewisePolynomial]] = None) -> None:
        self.elements: List[PiecewisePolynomial] = list(elements or [])

    @classmethod
    def from_segments(
        cls, polys: Sequence[Any], a: float, b: float
    ) -> "PiecewisePolynomialND":
        """One single-segment element per polynomial, all on ``[a, b]``."""
        return cls([PiecewisePolynomial.from_segment(p, a, b) for p in polys])

    @property
    def dim(self) -> int:
        return len(self.elements)

    def _require_elements(self) -> None:
        if not self.elements:
            raise EmptyTrajectoryError("Trajectory has no elements.")

    def _require_dim(self, n: int) -> None:
        if n != len(self.elements):
            raise MalformedInputError(
                f"Expected {len(self.elements)} elements, got {n}."
            )

    @property
    def start_time(self) -> float:
        self._require_elements()
        return self.elements[0].start_time

    @property
    def end_time(self) -> float:
        self._require_elements()
        return self.elements[0].end_time

    def evaluate(self, t: float) -> numpy.ndarray:
        self._require_elements()
        return numpy.array([e.evaluate(t) for e in self.elements])

    def __call__(self, t: float) -> numpy.ndarray:
        return self.evaluate(t)

    def derivative(self, t: float, n: int = 1) -> numpy.ndarray:
        self._require_elements()
        return numpy.array([e.derivative(t, n) for e in self.elements])

    def sample(self, ts: Any, n: int = 0) -> numpy.ndarray:
        """Array of shape ``(len(ts), dim)``."""
        self._require_elements()
        return numpy.stack([e.sample(ts, n) for e in self.elements], axis=-1)

    def start(self) -> numpy.ndarray:
        self._require_elements()
        return numpy.array([e.start() for e in self.elements])

    def end(self) -> numpy.ndarray:
        self._require_elements()
        return numpy.array([e.end() for e in self.elements])

    def copy(self) -> "PiecewisePolynomialND":
        return PiecewisePolynomialND([e.copy() for e in self.elements])

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "PiecewisePolynomialND":
        return self.copy()

    def differentiate(self, n: int = 1) -> "PiecewisePolynomialND":
        self._require_elements()
        return PiecewisePolynomialND([e.differentiate(n) for e in self.elements])

    def append(self, polys: Sequence[Any], t: float, relative: bool = False) -> None:
        self._require_elements()
        self._require_dim(len(polys))
        for e, p in zip(self.elements, polys):
            e.append(p, t, relative)

    def concat(
        self, traj: "PiecewisePolynomialND", relative: bool = False, merge: bool = False
    ) -> None:
        self._require_elements()
        self._require_dim(traj.dim)
        for e, other in zip(self.elements, traj.elements):
            e.concat(other, relative, merge)

    def shift_time(self, dt: float) -> None:
        self._require_elements()
        for e in self.elements:
            e.shift_time(dt)

    def zero_time_shift(self) -> None:
        self._require_elements()
        for e in self.elements:
            e.zero_time_shift()

    def split(
        self, t: float
    ) -> Tuple["PiecewisePolynomialND", "PiecewisePolynomialND"]:
        self._require_elements()
        halves = [e.split(t) for e in self.elements]
        return (
            PiecewisePolynomialND([front for front, _ in halves]),
            PiecewisePolynomialND([back for _, back in halves]),
        )

    def trim_front(self, tstart: float) -> None:
        self._require_elements()
        for e in self.elements:
            e.trim_front(tstart)

    def trim_back(self, tend: float) -> None:
        self._require_elements()
        for e in self.elements:
            e.trim_back(tend)

    def select(self, a: float, b: float) -> "PiecewisePolynomialND":
        self._require_elements()
        return PiecewisePolynomialND([e.select(a, b) for e in self.elements])

    def max_discontinuity(
        self, derivative: int = 0
    ) -> Tuple[numpy.ndarray, numpy.ndarray]:
        """Per-axis ``(times, magnitudes)`` of the largest jump."""
        self._require_elements()
        result = [e.max_discontinuity(derivative) for e in self.elements]
        return (
            numpy.array([t for t, _ in result]),
            numpy.array([m for _, m in result]),
        )

    def write(self, channel: "Channel") -> bool:
        try:
            channel.write_count(len(self.elements))
        except SerializationError as exc:
            logger.warning("Failed to write trajectory: %s", exc)
            return False
        return all(e.write(channel) for e in self.elements)

    def read(self, channel: "Channel") -> bool:
        try:
            n = channel.read_count()
        except SerializationError as exc:
            logger.warning("Failed to read trajectory: %s", exc)
            return False
        elements = []
        for _ in range(n):
            element = PiecewisePolynomial()
            if not element.read(channel):
                return False
            elements.append(element)
        self.elements = elements
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PiecewisePolynomialND):
            return NotImplemented
        return self.elements == other.elements

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PiecewisePolynomialND(dim={self.dim})"
