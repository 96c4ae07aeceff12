"""
Visualization Module

Provides plotting utilities for piecewise polynomial trajectories.
"""

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..config import DEFAULT_OPTIONS
from ..core import PiecewisePolynomial, PiecewisePolynomialND

DERIVATIVE_LABELS = ["position", "velocity", "acceleration", "jerk"]


def _derivative_label(n: int) -> str:
    return DERIVATIVE_LABELS[n] if n < len(DERIVATIVE_LABELS) else f"derivative {n}"


def _time_axis(start: float, end: float, time_points: Optional[int]) -> np.ndarray:
    if time_points is None:
        time_points = DEFAULT_OPTIONS.samples
    return np.linspace(start, end, time_points)


def plot_trajectory(
    traj: PiecewisePolynomial,
    derivatives: Sequence[int] = (0,),
    time_points: Optional[int] = None,
    figsize: Tuple[float, float] = (10, 6),
    show_breakpoints: bool = True,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Plot a trajectory and some of its derivatives over its time range.

    Creates one stacked subplot per requested derivative order, with dotted
    vertical lines at the breakpoints.

    Parameters
    ----------
    traj : PiecewisePolynomial
        Non-empty trajectory to plot
    derivatives : Sequence[int], optional
        Derivative orders to plot (default: (0,))
    time_points : int, optional
        Number of sample points (default: from ``AnalysisOptions``)
    figsize : Tuple[float, float], optional
        Figure size in inches (default: (10, 6))
    show_breakpoints : bool, optional
        Whether to mark breakpoints (default: True)
    title : str, optional
        Plot title (default: auto-generated)

    Returns
    -------
    plt.Figure
        The matplotlib figure
    """
    time_arr = _time_axis(traj.start_time, traj.end_time, time_points)

    fig, axes = plt.subplots(len(derivatives), 1, figsize=figsize, sharex=True, squeeze=False)
    for ax, n in zip(axes[:, 0], derivatives):
        ax.plot(time_arr, traj.sample(time_arr, n), color="tab:blue", linewidth=2)
        if show_breakpoints:
            for t in traj.times:
                ax.axvline(t, color="tab:gray", linestyle=":", alpha=0.6)
        ax.set_ylabel(_derivative_label(n))
        ax.grid(True, alpha=0.3)

    axes[-1, 0].set_xlabel("time")
    fig.suptitle(title or f"Trajectory ({traj.num_segments} segments)")
    fig.tight_layout()
    return fig


def plot_trajectory_nd(
    traj: PiecewisePolynomialND,
    derivative: int = 0,
    time_points: Optional[int] = None,
    figsize: Tuple[float, float] = (10, 6),
    show_legend: bool = True,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Plot every axis of a vector trajectory in a single subplot.

    Parameters
    ----------
    traj : PiecewisePolynomialND
        Non-empty trajectory to plot
    derivative : int, optional
        Derivative order to plot (default: 0)
    time_points : int, optional
        Number of sample points (default: from ``AnalysisOptions``)
    figsize : Tuple[float, float], optional
        Figure size in inches (default: (10, 6))
    show_legend : bool, optional
        Whether to show legend (default: True)
    title : str, optional
        Plot title (default: auto-generated)

    Returns
    -------
    plt.Figure
        The matplotlib figure
    """
    time_arr = _time_axis(traj.start_time, traj.end_time, time_points)
    values = traj.sample(time_arr, derivative)

    fig, ax = plt.subplots(figsize=figsize)
    for k in range(traj.dim):
        ax.plot(time_arr, values[:, k], linewidth=2, label=f"axis {k}")

    ax.set_xlabel("time")
    ax.set_ylabel(_derivative_label(derivative))
    ax.grid(True, alpha=0.3)
    if show_legend:
        ax.legend(loc="best")
    ax.set_title(title or f"{traj.dim}-D trajectory ({_derivative_label(derivative)})")
    fig.tight_layout()
    return fig
