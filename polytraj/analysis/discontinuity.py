"""
Discontinuity Analysis Module

Provides functions for inspecting how smoothly a trajectory passes through
its internal breakpoints.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..config import DEFAULT_OPTIONS
from ..core import PiecewisePolynomial


def breakpoint_jumps(traj: PiecewisePolynomial, derivative: int = 0) -> List[Dict]:
    """
    Get the jump of a derivative at every internal breakpoint.

    Parameters
    ----------
    traj : PiecewisePolynomial
        Trajectory to inspect
    derivative : int, optional
        Derivative order (default: 0, the value itself)

    Returns
    -------
    List[Dict]
        One entry per internal breakpoint with index, time, left, right and
        magnitude

    Examples
    --------
    >>> for jump in breakpoint_jumps(traj, derivative=1):
    ...     print(f"t={jump['time']:.2f}: {jump['magnitude']:.3g}")
    """
    jumps = []
    for i in range(1, traj.num_segments):
        left, right = traj.one_sided_values(i, derivative)
        jumps.append(
            {
                "index": i,
                "time": traj.times[i],
                "left": left,
                "right": right,
                "magnitude": abs(right - left),
            }
        )
    return jumps


def is_continuous(
    traj: PiecewisePolynomial,
    derivative: int = 0,
    tolerance: Optional[float] = None,
) -> bool:
    """True if no breakpoint jump of ``derivative`` exceeds ``tolerance``."""
    if tolerance is None:
        tolerance = DEFAULT_OPTIONS.tolerance
    _, magnitude = traj.max_discontinuity(derivative)
    return magnitude <= tolerance


def continuity_order(
    traj: PiecewisePolynomial,
    max_derivative: Optional[int] = None,
    tolerance: Optional[float] = None,
) -> int:
    """
    Highest k such that derivatives 0..k are all continuous.

    Returns -1 if the trajectory itself jumps, and at most ``max_derivative``.

    Examples
    --------
    >>> continuity_order(piecewise_linear([0, 1, 0], [0, 1, 2]))
    0
    """
    if max_derivative is None:
        max_derivative = DEFAULT_OPTIONS.max_derivative
    order = -1
    for k in range(max_derivative + 1):
        if not is_continuous(traj, k, tolerance):
            break
        order = k
    return order


def print_discontinuity_summary(
    traj: PiecewisePolynomial, max_derivative: Optional[int] = None
):
    """
    Print human-readable breakpoint jumps for derivatives 0..max_derivative.

    Examples
    --------
    >>> print_discontinuity_summary(piecewise_linear([0, 1, 0], [0, 1, 2]), 1)
    Discontinuity Summary:
    ------------------------------------------------------------
    [    1.00s] d0:  0.000e+00 d1:  2.000e+00
    ------------------------------------------------------------
    Continuity order: C0
    """
    if max_derivative is None:
        max_derivative = DEFAULT_OPTIONS.max_derivative

    print("Discontinuity Summary:")
    print("-" * 60)

    if traj.num_segments < 2:
        print("  No internal breakpoints")
        print("-" * 60)
        return

    per_order = [breakpoint_jumps(traj, k) for k in range(max_derivative + 1)]
    for row in zip(*per_order):
        line = f"[{row[0]['time']:8.2f}s]"
        for k, jump in enumerate(row):
            line += f" d{k}: {jump['magnitude']:10.3e}"
        print(line)

    print("-" * 60)
    order = continuity_order(traj, max_derivative)
    print(f"Continuity order: {'C' + str(order) if order >= 0 else 'discontinuous'}")
