"""
Simple Trajectory Builders

Helper functions for elementary degree-0 and degree-1 trajectories, in one
dimension and per axis. Every segment is expressed in local time, starting
at 0 at its left breakpoint.
"""

from typing import Sequence

from numpy.polynomial import Polynomial

from ..core import MalformedInputError, PiecewisePolynomial, PiecewisePolynomialND


def constant(x: float, ta: float, tb: float) -> PiecewisePolynomial:
    """
    Create a trajectory holding the value ``x`` on ``[ta, tb]``.

    Examples
    --------
    >>> constant(1.0, 0.0, 2.0)(1.5)
    1.0
    """
    return PiecewisePolynomial.from_segment(Polynomial([x]), ta, tb)


def linear(a: float, b: float, ta: float, tb: float) -> PiecewisePolynomial:
    """
    Create a trajectory moving linearly from ``a`` at ``ta`` to ``b`` at ``tb``.

    Examples
    --------
    >>> linear(0.0, 10.0, 0.0, 5.0)(2.5)
    5.0
    """
    if not ta < tb:
        raise MalformedInputError(f"Empty time interval [{ta}, {tb}].")
    slope = (b - a) / (tb - ta)
    return PiecewisePolynomial.from_segment(Polynomial([a, slope]), ta, tb)


def piecewise_linear(
    milestones: Sequence[float], times: Sequence[float]
) -> PiecewisePolynomial:
    """
    Create a trajectory interpolating linearly between milestones.

    Parameters
    ----------
    milestones : Sequence[float]
        Values at each time; at least two.
    times : Sequence[float]
        Strictly increasing times, one per milestone.

    Returns
    -------
    PiecewisePolynomial
        ``len(milestones) - 1`` linear segments.

    Examples
    --------
    >>> traj = piecewise_linear([0, 1, 0], [0, 1, 2])
    >>> traj(1.5)
    0.5
    """
    if len(milestones) != len(times):
        raise MalformedInputError(
            f"Got {len(milestones)} milestones but {len(times)} times."
        )
    if len(milestones) < 2:
        raise MalformedInputError("At least two milestones are required.")
    traj = linear(milestones[0], milestones[1], times[0], times[1])
    for i in range(1, len(milestones) - 1):
        traj.concat(linear(milestones[i], milestones[i + 1], times[i], times[i + 1]))
    return traj


def constant_nd(q: Sequence[float], ta: float, tb: float) -> PiecewisePolynomialND:
    """Create a per-axis constant trajectory holding ``q`` on ``[ta, tb]``."""
    return PiecewisePolynomialND([constant(x, ta, tb) for x in q])


def linear_nd(
    a: Sequence[float], b: Sequence[float], ta: float, tb: float
) -> PiecewisePolynomialND:
    """Create a straight-line trajectory from ``a`` at ``ta`` to ``b`` at ``tb``."""
    if len(a) != len(b):
        raise MalformedInputError(f"Dimension mismatch: {len(a)} != {len(b)}.")
    return PiecewisePolynomialND([linear(x, y, ta, tb) for x, y in zip(a, b)])


def piecewise_linear_nd(
    milestones: Sequence[Sequence[float]], times: Sequence[float]
) -> PiecewisePolynomialND:
    """
    Create a polyline trajectory through the given points.

    Parameters
    ----------
    milestones : Sequence[Sequence[float]]
        One point per time, all of the same dimension.
    times : Sequence[float]
        Strictly increasing times.
    """
    if not milestones:
        raise MalformedInputError("At least two milestones are required.")
    dim = len(milestones[0])
    if any(len(m) != dim for m in milestones):
        raise MalformedInputError("Milestones must all have the same dimension.")
    return PiecewisePolynomialND(
        [piecewise_linear([m[k] for m in milestones], times) for k in range(dim)]
    )


def subspace(
    x0: Sequence[float], dx: Sequence[float], poly: PiecewisePolynomial
) -> PiecewisePolynomialND:
    """
    Embed a 1-D trajectory along a direction: ``x(t) = x0 + dx * poly(t)``.

    Examples
    --------
    >>> traj = subspace([1.0, 2.0], [1.0, -1.0], linear(0.0, 1.0, 0.0, 1.0))
    >>> traj(1.0).tolist()
    [2.0, 1.0]
    """
    if len(x0) != len(dx):
        raise MalformedInputError(f"Dimension mismatch: {len(x0)} != {len(dx)}.")
    return PiecewisePolynomialND([poly * d + x for x, d in zip(x0, dx)])
