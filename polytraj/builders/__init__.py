"""
polytraj Builders Module

This module provides helper functions to create elementary trajectories:
- Constant and linear segments
- Piecewise linear trajectories through milestones
- Per-axis (N-dimensional) variants and affine subspace embeddings
"""

from .simple import (
    constant,
    constant_nd,
    linear,
    linear_nd,
    piecewise_linear,
    piecewise_linear_nd,
    subspace,
)

__all__ = [
    # 1-D builders
    "constant",
    "linear",
    "piecewise_linear",
    # N-D builders
    "constant_nd",
    "linear_nd",
    "piecewise_linear_nd",
    "subspace",
]
