#!/usr/bin/env python3
"""
Simple Example - polytraj

Builds a joint trajectory from elementary pieces, edits it and checks how
smoothly it passes through its breakpoints.
"""

import io

from numpy.polynomial import Polynomial

from polytraj import (
    BinaryChannel,
    PiecewisePolynomial,
    linear,
    plot_trajectory,
    print_discontinuity_summary,
)


def example1_joint_move(visualize=False):
    """Example 1: ramp up, hold, ramp down."""

    # Accelerate with a parabola, cruise linearly, then decelerate.
    traj = PiecewisePolynomial.from_segment(Polynomial([0.0, 0.0, 0.5]), 0.0, 1.0)
    traj.append(Polynomial([0.5, 1.0]), 2.0, relative=True)
    traj.append(Polynomial([2.5, 1.0, -0.5]), 1.0, relative=True)

    print(traj)
    print(f"y(1.5) = {traj(1.5):.3f}, y'(1.5) = {traj.derivative(1.5):.3f}")
    print_discontinuity_summary(traj)

    # Shorten the cruise by one second and glue a linear return onto the rest.
    front, back = traj.split(2.0)
    back.shift_time(-1.0)
    back -= 1.0
    front.trim_back(1.0)
    front.concat(back)
    front.concat(linear(front.end(), 0.0, 0.0, 2.0), relative=True)
    print(front)

    # Persist and restore.
    buf = io.BytesIO()
    front.write(BinaryChannel(buf))
    buf.seek(0)
    restored = PiecewisePolynomial()
    restored.read(BinaryChannel(buf))
    print(f"Restored identical trajectory: {restored == front}")

    # Generate visualization if requested
    if visualize:
        print("\nGenerating visualization...")
        fig = plot_trajectory(front, derivatives=(0, 1, 2), title="Joint move")
        fig.savefig("example_simple_visualization.png", dpi=150, bbox_inches="tight")
        print("Saved: example_simple_visualization.png")

    return front


if __name__ == "__main__":
    print("\n" + "#" * 70)
    print("#  polytraj - Simple Examples")
    print("#" * 70)

    example1_joint_move(visualize=True)
