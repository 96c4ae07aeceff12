"""
polytraj Analysis Module

This module provides tools for validating trajectories:
- Breakpoint jump reports per derivative order
- Continuity checks and continuity order
- Printed summaries
"""

from .discontinuity import (
    breakpoint_jumps,
    continuity_order,
    is_continuous,
    print_discontinuity_summary,
)

__all__ = [
    "breakpoint_jumps",
    "is_continuous",
    "continuity_order",
    "print_discontinuity_summary",
]
