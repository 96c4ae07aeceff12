"""
Polynomial Helpers

Segments are ``numpy.polynomial.Polynomial`` instances with the default
domain and window, so that ``p(x)`` evaluates the plain power series
``c[0] + c[1]*x + ... + c[d]*x**d``.
"""

from __future__ import annotations

import numbers
from typing import Any, Sequence, Union

import numpy
from numpy.polynomial import Chebyshev, Hermite, HermiteE, Laguerre, Legendre, Polynomial

from .errors import MalformedInputError

_OTHER_SERIES = (Chebyshev, Hermite, HermiteE, Laguerre, Legendre)

PolynomialLike = Union[Polynomial, float, Sequence[float]]


def as_polynomial(p: Any) -> Polynomial:
    """Coerce ``p`` into a fresh power-series ``Polynomial``.

    Parameters
    ----------
    p : Polynomial, numpy polynomial series, scalar or sequence
        Sequences are coefficients in ascending order, ``[c0, c1, ...]``.

    Returns
    -------
    Polynomial
        A new object with the default domain and window. Never the object
        that was passed in.

    Raises
    ------
    MalformedInputError
        If ``p`` cannot be interpreted as a finite-length polynomial.
    """
    if isinstance(p, Polynomial):
        if numpy.array_equal(p.domain, Polynomial.domain) and numpy.array_equal(
            p.window, Polynomial.window
        ):
            return p.copy()
        return p.convert()
    if isinstance(p, _OTHER_SERIES):
        return p.convert(kind=Polynomial)
    if isinstance(p, numbers.Real):
        return Polynomial([float(p)])
    try:
        coef = numpy.array(p, dtype=float).flatten()
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Cannot interpret {p!r} as a polynomial.") from exc
    if len(coef) == 0:
        raise MalformedInputError("A polynomial needs at least one coefficient.")
    return Polynomial(coef)


def shift_argument(p: Polynomial, s: float) -> Polynomial:
    """Return ``q`` with ``q(x) == p(x - s)``."""
    x = Polynomial([-s, 1.0])
    coef = p.coef
    result = Polynomial([coef[-1]])
    for c in coef[-2::-1]:
        result = result * x + c
    return result


def differentiate(p: Polynomial, n: int = 1) -> Polynomial:
    """nth derivative of ``p``.

    Differentiating a degree ``d`` polynomial more than ``d`` times yields the
    zero polynomial; ``n == 0`` returns a copy.
    """
    if n < 0:
        raise MalformedInputError(f"Derivative order must be non-negative, got {n}.")
    if n == 0:
        return p.copy()
    return p.deriv(n)


def coefficients(p: Polynomial) -> numpy.ndarray:
    """Ascending coefficient array of ``p`` as float64."""
    return numpy.asarray(p.coef, dtype=float)
