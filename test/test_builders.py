"""
Tests for the elementary trajectory builders.
"""

import unittest

import numpy

from polytraj.builders import (
    constant,
    constant_nd,
    linear,
    linear_nd,
    piecewise_linear,
    piecewise_linear_nd,
    subspace,
)
from polytraj.core import MalformedInputError, PiecewisePolynomialND


class TestScalarBuilders(unittest.TestCase):
    def test_constant(self):
        traj = constant(3.0, 1.0, 2.0)
        self.assertEqual(traj.times, [1.0, 2.0])
        self.assertEqual(traj.time_shift, [1.0])
        self.assertEqual(traj(1.0), 3.0)
        self.assertEqual(traj(2.0), 3.0)
        self.assertEqual(traj.derivative(1.5), 0.0)

    def test_linear(self):
        traj = linear(0, 10, 0, 5)
        self.assertEqual(traj.start(), 0.0)
        self.assertEqual(traj.end(), 10.0)
        self.assertEqual(traj.evaluate(2.5), 5.0)
        self.assertEqual(traj.derivative(2.5), 2.0)

    def test_linear_local_time(self):
        traj = linear(1.0, 3.0, 10.0, 12.0)
        self.assertEqual(traj.time_shift, [10.0])
        numpy.testing.assert_array_equal(traj.segments[0].coef, [1.0, 1.0])
        self.assertEqual(traj(11.0), 2.0)

    def test_linear_empty_interval(self):
        with self.assertRaises(MalformedInputError):
            linear(0, 1, 2, 2)

    def test_piecewise_linear(self):
        traj = piecewise_linear([0, 1, 0], [0, 1, 2])
        self.assertEqual(len(traj), 2)
        self.assertEqual(traj.times, [0.0, 1.0, 2.0])
        self.assertEqual(traj.evaluate(0.5), 0.5)
        self.assertEqual(traj.evaluate(1.5), 0.5)
        self.assertEqual(traj.max_discontinuity(1), (1.0, 2.0))

    def test_piecewise_linear_hits_milestones(self):
        milestones = [0.0, 2.0, -1.0, 4.0]
        times = [0.0, 0.5, 2.0, 3.0]
        traj = piecewise_linear(milestones, times)
        for m, t in zip(milestones, times):
            self.assertAlmostEqual(traj(t), m)

    def test_piecewise_linear_errors(self):
        with self.assertRaises(MalformedInputError):
            piecewise_linear([0, 1], [0, 1, 2])
        with self.assertRaises(MalformedInputError):
            piecewise_linear([0], [0])
        with self.assertRaises(MalformedInputError):
            piecewise_linear([0, 1, 2], [0, 2, 1])


class TestVectorBuilders(unittest.TestCase):
    def test_constant_nd(self):
        traj = constant_nd([1.0, 2.0, 3.0], 0.0, 1.0)
        self.assertIsInstance(traj, PiecewisePolynomialND)
        numpy.testing.assert_array_equal(traj(0.5), [1.0, 2.0, 3.0])

    def test_linear_nd(self):
        traj = linear_nd([0, 0], [2, -4], 0, 2)
        numpy.testing.assert_array_equal(traj(1.0), [1.0, -2.0])
        numpy.testing.assert_array_equal(traj.derivative(1.0), [1.0, -2.0])
        with self.assertRaises(MalformedInputError):
            linear_nd([0, 0], [1], 0, 1)

    def test_piecewise_linear_nd(self):
        traj = piecewise_linear_nd([[0, 0], [1, 1], [2, 0]], [0, 1, 2])
        numpy.testing.assert_array_equal(traj(1.5), [1.5, 0.5])
        with self.assertRaises(MalformedInputError):
            piecewise_linear_nd([[0, 0], [1]], [0, 1])
        with self.assertRaises(MalformedInputError):
            piecewise_linear_nd([], [])

    def test_subspace(self):
        poly = piecewise_linear([0, 1, 0], [0, 1, 2])
        traj = subspace([1.0, 2.0], [1.0, -2.0], poly)
        self.assertEqual(traj.dim, 2)
        numpy.testing.assert_array_equal(traj(0.0), [1.0, 2.0])
        numpy.testing.assert_array_equal(traj(1.0), [2.0, 0.0])
        numpy.testing.assert_array_equal(traj(1.5), [1.5, 1.0])
        self.assertEqual(traj.elements[0].times, poly.times)
        with self.assertRaises(MalformedInputError):
            subspace([1.0], [1.0, 2.0], poly)

    def test_subspace_does_not_modify_source(self):
        poly = piecewise_linear([0, 1, 0], [0, 1, 2])
        subspace([5.0], [3.0], poly)
        self.assertEqual(poly, piecewise_linear([0, 1, 0], [0, 1, 2]))


if __name__ == "__main__":
    unittest.main()
