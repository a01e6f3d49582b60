"""Unit tests for the special functions underlying the Beta distribution."""

import math

from unittest import TestCase

import pytest

from numpy.testing import assert_allclose
from scipy.special import betainc

from betadist.maths.stats.settings import make_settings
from betadist.maths.stats.special import (
    BetaDomainError,
    ConvergenceError,
    _betacf,
    betacf,
    fix_rounding_error,
    lbeta,
    lgam,
    polevl,
    validate_shape,
)
from betadist.maths.stats.special_numba import betacf_inner


class SpecialTests(TestCase):
    """Tests miscellaneous functions."""

    def test_polevl(self):
        """polevl should evaluate polynomials with reversed coefficients"""
        self.assertEqual(polevl(2, [1, 0, 0]), 4)
        self.assertEqual(polevl(2, [3, -1, 5]), 15)
        self.assertEqual(polevl(7.5, []), 0)

    def test_fix_rounding_error(self):
        """values marginally outside [0, 1] are snapped to the boundary"""
        self.assertEqual(fix_rounding_error(-1e-15), 0)
        self.assertEqual(fix_rounding_error(1 + 1e-15), 1)
        self.assertEqual(fix_rounding_error(0.3), 0.3)
        self.assertEqual(fix_rounding_error(-0.1), -0.1)
        self.assertEqual(fix_rounding_error(1.1), 1.1)

    def test_lgam(self):
        """lgam should match the log gamma of the standard library"""
        values = [0.001, 0.1, 0.5, 1, 1.5, 2, 3, 7.5, 12.9, 13, 50.5, 999, 1e5, 1e9]
        for x in values:
            assert_allclose(lgam(x), math.lgamma(x), rtol=1e-12, atol=1e-14)

    def test_lgam_negative(self):
        """lgam handles negative non-integer arguments"""
        for x in (-0.5, -2.5, -40.5):
            assert_allclose(lgam(x), math.lgamma(x), rtol=1e-10)

    def test_lgam_poles(self):
        """lgam raises OverflowError at the poles"""
        for x in (0, -1, -2, -50):
            self.assertRaises(OverflowError, lgam, x)
        self.assertRaises(OverflowError, lgam, 1e306)

    def test_lbeta(self):
        """lbeta is the log of the beta function"""
        # B(2, 3) = 1 / 12
        assert_allclose(lbeta(2, 3), -math.log(12))
        assert_allclose(lbeta(1, 1), 0, atol=1e-15)
        assert_allclose(lbeta(0.5, 0.5), math.log(math.pi))

    def test_validate_shape(self):
        """shape parameters must be positive and finite"""
        validate_shape(0.001, 1e6)
        for a, b in ((0, 1), (1, 0), (-1, 2), (2, -3), (float("nan"), 1)):
            with self.assertRaises(BetaDomainError):
                validate_shape(a, b)
        self.assertRaises(BetaDomainError, validate_shape, float("inf"), 1)

    def test_domain_error_is_value_error(self):
        """BetaDomainError can be caught as a ValueError"""
        self.assertTrue(issubclass(BetaDomainError, ValueError))
        self.assertTrue(issubclass(ConvergenceError, ArithmeticError))


CF_CASES = [
    (0.5, 0.5, 0.2),
    (1.0, 1.0, 0.3),
    (2.0, 3.0, 0.25),
    (5.0, 2.0, 0.6),
    (0.1, 7.0, 0.01),
    (30.0, 40.0, 0.4),
    (1000.0, 1000.0, 0.49),
]


@pytest.mark.parametrize("a,b,x", CF_CASES)
def test_betacf_numba_matches_python(a, b, x):
    """compiled and python continued fractions should agree"""
    eps = 2.2204460492503131e-16
    py_val, _, py_ok = _betacf(a, b, x, eps, 1e-16, 100_000)
    nb_val, _, nb_ok = betacf_inner(a, b, x, eps, 1e-16, 100_000)
    assert py_ok and nb_ok
    assert_allclose(nb_val, py_val, rtol=1e-12)


@pytest.mark.parametrize("a,b,x", CF_CASES)
def test_betacf_gives_incomplete_beta(a, b, x):
    """x^a (1-x)^b cf / (a B(a, b)) is the regularised incomplete beta"""
    y = math.exp(a * math.log(x) + b * math.log1p(-x) - lbeta(a, b))
    got = y * betacf(a, b, x) / a
    assert_allclose(got, betainc(a, b, x), rtol=1e-10)


def test_betacf_iteration_cap():
    """exceeding the iteration cap raises ConvergenceError"""
    settings = make_settings(max_cf_iter=1)
    with pytest.raises(ConvergenceError) as err:
        betacf(2.0, 3.0, 0.3, settings=settings)
    assert err.value.iterations == 1
    assert math.isfinite(err.value.last_estimate)
    assert "did not converge" in str(err.value)


def test_betacf_integer_args():
    """integer arguments are accepted by the compiled kernel"""
    assert_allclose(betacf(2, 3, 0.25), betacf(2.0, 3.0, 0.25))
