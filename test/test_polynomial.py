import unittest

import numpy
from numpy.polynomial import Chebyshev, Polynomial

from polytraj.core import MalformedInputError, as_polynomial, differentiate, shift_argument


class TestAsPolynomial(unittest.TestCase):
    def test_from_sequence(self):
        p = as_polynomial([1, 2, 3])
        numpy.testing.assert_array_equal(p.coef, [1.0, 2.0, 3.0])
        self.assertEqual(p(2.0), 17.0)

    def test_from_scalar(self):
        numpy.testing.assert_array_equal(as_polynomial(4).coef, [4.0])

    def test_copies_polynomial(self):
        p = Polynomial([1.0, 2.0])
        q = as_polynomial(p)
        self.assertIsNot(p, q)
        self.assertEqual(p, q)

    def test_converts_domain(self):
        p = Polynomial([0.0, 1.0], domain=[0, 2])
        q = as_polynomial(p)
        numpy.testing.assert_array_equal(q.domain, [-1, 1])
        for x in [0.0, 0.5, 2.0]:
            self.assertAlmostEqual(q(x), p(x))

    def test_converts_other_series(self):
        c = Chebyshev([0.0, 0.0, 1.0])
        q = as_polynomial(c)
        self.assertIsInstance(q, Polynomial)
        numpy.testing.assert_allclose(q.coef, [-1.0, 0.0, 2.0])

    def test_invalid(self):
        with self.assertRaises(MalformedInputError):
            as_polynomial([])
        with self.assertRaises(MalformedInputError):
            as_polynomial("abc")


class TestShiftAndDerivative(unittest.TestCase):
    def test_shift_argument(self):
        p = Polynomial([1.0, -2.0, 0.5, 3.0])
        q = shift_argument(p, 1.5)
        for x in numpy.linspace(-2.0, 3.0, 11):
            self.assertAlmostEqual(q(x), p(x - 1.5))

    def test_shift_by_zero(self):
        p = Polynomial([1.0, 2.0, 3.0])
        numpy.testing.assert_array_equal(shift_argument(p, 0.0).coef, p.coef)

    def test_differentiate(self):
        p = Polynomial([1.0, 2.0, 3.0])
        numpy.testing.assert_array_equal(differentiate(p, 1).coef, [2.0, 6.0])
        numpy.testing.assert_array_equal(differentiate(p, 2).coef, [6.0])
        numpy.testing.assert_array_equal(differentiate(p, 5).coef, [0.0])
        self.assertEqual(differentiate(p, 0), p)
        self.assertIsNot(differentiate(p, 0), p)
        with self.assertRaises(MalformedInputError):
            differentiate(p, -1)


if __name__ == "__main__":
    unittest.main()
