"""
Tests for PiecewisePolynomialND

Each operation is forwarded to the per-axis trajectories; these tests check
the forwarding and the vector-shaped results.
"""

import math
import unittest

import numpy
from numpy.polynomial import Polynomial

from polytraj.builders import linear_nd, piecewise_linear_nd
from polytraj.core import (
    EmptyTrajectoryError,
    MalformedInputError,
    OutOfRangeError,
    PiecewisePolynomial,
    PiecewisePolynomialND,
)


class TestPiecewisePolynomialND(unittest.TestCase):
    def setUp(self):
        self.traj = piecewise_linear_nd([[0, 0], [1, 2], [0, 4]], [0, 1, 2])

    def test_from_segments(self):
        traj = PiecewisePolynomialND.from_segments(
            [Polynomial([1.0, 1.0]), Polynomial([0.0, 0.0, 1.0])], 1.0, 3.0
        )
        self.assertEqual(traj.dim, 2)
        self.assertEqual(traj.start_time, 1.0)
        self.assertEqual(traj.end_time, 3.0)
        numpy.testing.assert_array_equal(traj.evaluate(3.0), [3.0, 4.0])

    def test_evaluate_and_derivative(self):
        numpy.testing.assert_array_equal(self.traj(0.5), [0.5, 1.0])
        numpy.testing.assert_array_equal(self.traj.evaluate(1.5), [0.5, 3.0])
        numpy.testing.assert_array_equal(self.traj.derivative(1.5), [-1.0, 2.0])
        numpy.testing.assert_array_equal(self.traj.start(), [0.0, 0.0])
        numpy.testing.assert_array_equal(self.traj.end(), [0.0, 4.0])

    def test_sample_shape(self):
        values = self.traj.sample(numpy.linspace(0.0, 2.0, 5))
        self.assertEqual(values.shape, (5, 2))
        numpy.testing.assert_allclose(values[2], [1.0, 2.0])

    def test_differentiate(self):
        d = self.traj.differentiate()
        numpy.testing.assert_array_equal(d(0.5), [1.0, 2.0])
        numpy.testing.assert_array_equal(d(1.5), [-1.0, 2.0])

    def test_max_discontinuity(self):
        times, magnitudes = self.traj.max_discontinuity(1)
        numpy.testing.assert_array_equal(times, [1.0, 1.0])
        numpy.testing.assert_array_equal(magnitudes, [2.0, 0.0])

    def test_split_and_concat(self):
        front, back = self.traj.split(0.5)
        self.assertEqual(front.end_time, 0.5)
        self.assertEqual(back.start_time, 0.5)
        front.concat(back, merge=True)
        self.assertEqual(front, self.traj)

    def test_append(self):
        traj = linear_nd([0, 0], [1, 1], 0, 1)
        traj.append([[1.0], [1.0, 1.0]], 1.0, relative=True)
        self.assertEqual(traj.end_time, 2.0)
        numpy.testing.assert_array_equal(traj(2.0), [1.0, 2.0])
        with self.assertRaises(MalformedInputError):
            traj.append([[1.0]], 3.0)

    def test_concat_dimension_mismatch(self):
        with self.assertRaises(MalformedInputError):
            self.traj.concat(linear_nd([0], [1], 2, 3))

    def test_trim_and_select(self):
        part = self.traj.select(0.5, 1.5)
        trimmed = self.traj.copy()
        trimmed.trim_front(0.5)
        trimmed.trim_back(1.5)
        self.assertEqual(part, trimmed)
        self.assertEqual(part.start_time, 0.5)
        self.assertEqual(part.end_time, 1.5)
        with self.assertRaises(OutOfRangeError):
            self.traj.split(3.0)

    def test_time_shifts(self):
        traj = self.traj.copy()
        traj.shift_time(1.0)
        numpy.testing.assert_allclose(traj(2.5), self.traj(1.5))
        traj.zero_time_shift()
        numpy.testing.assert_allclose(traj(2.5), self.traj(1.5))
        for element in traj.elements:
            self.assertEqual(element.time_shift, [0.0, 0.0])

    def test_copy_is_independent(self):
        other = self.traj.copy()
        other.elements[0] *= 5.0
        self.assertNotEqual(other, self.traj)
        numpy.testing.assert_array_equal(self.traj(0.5), [0.5, 1.0])

    def test_empty(self):
        traj = PiecewisePolynomialND()
        self.assertEqual(traj.dim, 0)
        with self.assertRaises(EmptyTrajectoryError):
            traj.evaluate(0.0)
        with self.assertRaises(EmptyTrajectoryError):
            traj.start_time
        with self.assertRaises(EmptyTrajectoryError):
            traj.split(0.0)
        edits = [
            lambda: traj.trim_front(0.0),
            lambda: traj.trim_back(1.0),
            lambda: traj.shift_time(1.0),
            lambda: traj.zero_time_shift(),
            lambda: traj.differentiate(),
            lambda: traj.max_discontinuity(),
            lambda: traj.append([], 1.0),
            lambda: traj.concat(PiecewisePolynomialND()),
        ]
        for edit in edits:
            with self.assertRaises(EmptyTrajectoryError):
                edit()
        self.assertEqual(traj.dim, 0)

    def test_elements_with_own_breakpoints(self):
        traj = PiecewisePolynomialND(
            [PiecewisePolynomial.from_segment([1.0], 0.0, 1.0),
             PiecewisePolynomial.from_segment([2.0], 0.0, 2.0)]
        )
        self.assertEqual(traj.end_time, 1.0)
        numpy.testing.assert_array_equal(traj(1.5), [1.0, 2.0])
        times, magnitudes = traj.max_discontinuity()
        self.assertTrue(all(math.isnan(t) for t in times))
        numpy.testing.assert_array_equal(magnitudes, [0.0, 0.0])


if __name__ == "__main__":
    unittest.main()
