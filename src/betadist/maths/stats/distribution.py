"""Beta distribution CDF, density and quantile function.

The quantile solver follows

Roger W. Abernathy and Robert P. Smith. "Applying Series Expansion
to the Inverse Beta Distribution to Find Percentiles of the
F-Distribution," ACM Transactions on Mathematical Software, volume
19, number 4, December 1993, pages 474-480.

G.W. Hill and A.W. Davis. "Generalized asymptotic expansions of a
Cornish-Fisher type," Annals of Mathematical Statistics, volume 39,
number 8, August 1968, pages 1264-1273.
"""

import dataclasses
import logging
import typing

from numpy import exp, log, log1p, sqrt

from betadist.maths.solve import coarse_bisection
from betadist.maths.stats.settings import SolverSettings, resolve_settings
from betadist.maths.stats.special import (
    BetaDomainError,
    ConvergenceError,
    betacf,
    fix_rounding_error,
    lbeta,
    validate_shape,
)


logger = logging.getLogger(__name__)

MAXLOG = 7.09782712893383996843e2  # log(2**1024)


def _check_unit_interval(value, name):
    value = fix_rounding_error(value)
    # written so that nan fails
    if not 0 <= value <= 1:
        raise BetaDomainError(f"{name} must be between 0 and 1, got {value!r}")
    return float(value)


def beta_cdf(a, b, settings: SolverSettings | None = None) -> typing.Callable:
    """returns the cumulative distribution function of Beta(a, b)

    Parameters
    ----------
    a, b
        shape parameters, both > 0
    settings
        tolerances for the continued fraction

    Returns
    -------
    A function of x in [0, 1] returning the regularised incomplete beta
    function I_x(a, b).

    Raises
    ------
    BetaDomainError
        if a or b is not > 0, the returned function raises it for x
        outside [0, 1]
    """
    validate_shape(a, b)
    settings = resolve_settings(settings)
    log_norm = -lbeta(a, b)
    switch = (a + 1.0) / (a + b + 2.0)

    def cdf(x):
        x = _check_unit_interval(x, "x")
        if x == 0:
            return 0.0
        if x == 1:
            return 1.0

        y = exp(log_norm + a * log(x) + b * log1p(-x))
        if x < switch:
            result = y * betacf(a, b, x, settings=settings) / a
        else:
            # I_x(a, b) = 1 - I_{1-x}(b, a)
            result = 1.0 - y * betacf(b, a, 1.0 - x, settings=settings) / b
        return float(min(max(result, 0.0), 1.0))

    return cdf


def beta_cdf_at(a, b, x, settings: SolverSettings | None = None) -> float:
    """evaluates the CDF of Beta(a, b) at x"""
    cdf = beta_cdf(a, b, settings=settings)
    return cdf(x)


def beta_pdf(a, b) -> typing.Callable:
    """returns the probability density function of Beta(a, b)

    At x = 0 (x = 1) the limiting value is returned: 0 if a > 1 (b > 1),
    b (a) if a == 1 (b == 1) and inf otherwise.
    """
    validate_shape(a, b)
    log_norm = -lbeta(a, b)

    def _boundary(shape):
        if shape > 1:
            return 0.0
        if shape == 1:
            return float(exp(log_norm))
        return float("inf")

    def pdf(x):
        x = _check_unit_interval(x, "x")
        if x == 0:
            return _boundary(a)
        if x == 1:
            return _boundary(b)

        log_density = log_norm + (a - 1.0) * log(x) + (b - 1.0) * log1p(-x)
        if log_density > MAXLOG:
            return float("inf")
        return float(exp(log_density))

    return pdf


def beta_pdf_at(a, b, x) -> float:
    """evaluates the density of Beta(a, b) at x

    Notes
    -----
    Returns 0.0 at x = 0 and 1.0 at x = 1 regardless of a and b. Use
    beta_pdf() for the limiting density at the boundaries.
    """
    x = _check_unit_interval(x, "x")
    validate_shape(a, b)
    if x == 0:
        return 0.0
    if x == 1:
        return 1.0
    pdf = beta_pdf(a, b)
    return pdf(x)


@dataclasses.dataclass(frozen=True, slots=True)
class QuantileResult:
    """outcome of solving I_x(a, b) = p for x

    Evaluates as True only if the solver converged. On failure, x is the
    last estimate reached.
    """

    x: float
    p: float
    a: float
    b: float
    converged: bool
    iterations: int
    residual: float
    message: str = ""

    def __bool__(self) -> bool:
        return self.converged

    def complement(self) -> "QuantileResult":
        """the result for Beta(b, a) at 1 - p, i.e. x -> 1 - x"""
        return dataclasses.replace(
            self, x=1.0 - self.x, p=1.0 - self.p, a=self.b, b=self.a
        )


def _initial_guess(a, b, p, settings):
    mean = a / (a + b)
    if p >= settings.small_p:
        return mean

    # small x series, the leading term of I_x(a, b) is x^a / (a B(a, b))
    lx = (log(a) + lbeta(a, b) + log(p)) / a
    if lx > 0:
        return mean

    x = exp(lx)
    if 0 < x < 1:
        x *= (1 - x) ** (-(b - 1) / a)
    return float(min(x, mean))


def _solve_quantile(a, b, p, settings):
    """solves I_x(a, b) = p for 0 < p <= 0.5"""
    cdf = beta_cdf(a, b, settings=settings)
    pdf = beta_pdf(a, b)
    mean = a / (a + b)

    x = _initial_guess(a, b, p, settings)
    x = coarse_bisection(
        cdf,
        x,
        p,
        xtol=settings.bisect_xtol,
        ftol=settings.bisect_ptol,
        maxiter=settings.bisect_maxiter,
    )

    n = 0
    step0 = float("inf")
    dP = p - cdf(x)
    while (
        dP != 0
        and n < settings.max_newton_iter
        and abs(step0) > settings.step_tol * x
    ):
        n += 1
        phi = pdf(x)
        # the floor on the derivative bounds the step by x / 2
        lam = dP / max(2 * abs(dP / x), phi)
        step0 = lam
        step1 = -((a - 1) / x - (b - 1) / (1 - x)) * lam * lam / 2
        if step1 == 0 or abs(step1) < abs(step0):
            step = step0 + step1
        else:
            step = step0 * 2 * abs(step0 / step1)

        if 0 < x + step < 1:
            x += step
        else:
            restart = float(sqrt(x) * sqrt(mean))
            logger.debug(
                "step %r from x=%r leaves (0, 1), restarting at %r", step, x, restart
            )
            x = restart

        dP = p - cdf(x)
        logger.debug("iteration %d: x=%r, p - cdf(x)=%r", n, x, dP)

    residual = abs(dP)
    converged = residual <= settings.tol * p
    message = ""
    if not converged:
        message = (
            f"quantile of Beta({a}, {b}) at p={p} did not converge after {n} "
            f"iterations, |p - cdf(x)|={residual!r} at x={x!r}"
        )
    return QuantileResult(
        x=float(x),
        p=p,
        a=a,
        b=b,
        converged=converged,
        iterations=n,
        residual=float(residual),
        message=message,
    )


def _validate_quantile_args(a, b, p):
    validate_shape(a, b)
    return _check_unit_interval(p, "p")


def beta_quantile(a, b, p, settings: SolverSettings | None = None) -> QuantileResult:
    """solves I_x(a, b) = p for x

    Parameters
    ----------
    a, b
        shape parameters, both > 0
    p
        probability in [0, 1]
    settings
        tolerances and iteration caps

    Returns
    -------
    QuantileResult, which is False if the refinement did not converge

    Raises
    ------
    BetaDomainError
        for invalid a, b or p
    """
    settings = resolve_settings(settings)
    p = _validate_quantile_args(a, b, p)
    if p == 0 or p == 1:
        return QuantileResult(
            x=p, p=p, a=a, b=b, converged=True, iterations=0, residual=0.0
        )

    swap = p > 0.5
    if swap:
        # the solver works best in the lower tail
        a, b, p = b, a, 1.0 - p

    try:
        result = _solve_quantile(a, b, p, settings)
    except ConvergenceError as err:
        logger.debug("continued fraction failed: %s", err)
        result = QuantileResult(
            x=float("nan"),
            p=p,
            a=a,
            b=b,
            converged=False,
            iterations=err.iterations,
            residual=float("nan"),
            message=str(err),
        )

    return result.complement() if swap else result


def beta_inv_cdf_for(a, b, p, settings: SolverSettings | None = None) -> float:
    """returns x such that the CDF of Beta(a, b) at x is p

    Raises
    ------
    BetaDomainError
        for invalid a, b or p
    ConvergenceError
        if the refinement did not reach |p - cdf(x)| <= settings.tol * p,
        the last estimate is attached to the exception
    """
    result = beta_quantile(a, b, p, settings=settings)
    if not result:
        raise ConvergenceError(
            result.message, last_estimate=result.x, iterations=result.iterations
        )
    return result.x
