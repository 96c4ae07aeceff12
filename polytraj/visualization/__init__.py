"""
Visualization Module

Provides plotting utilities for trajectories.
"""

from .plot import (
    plot_trajectory,
    plot_trajectory_nd,
)

__all__ = [
    "plot_trajectory",
    "plot_trajectory_nd",
]
