"""Special functions underlying the Beta distribution.

lgam and polevl are translations of functions from Release 2.3 of the
Cephes Math Library, (c) Stephen L. Moshier 1984, 1995. The continued
fraction is evaluated with the modified Lentz algorithm, see betacf.
"""

from numpy import floor, log, sin

from .settings import SolverSettings, resolve_settings
from .special_numba import betacf_inner


__author__ = "Rob Knight"
__credits__ = ["Gavin Huttley", "Rob Knight", "Sandra Smit", "Daniel McDonald"]
__license__ = "BSD-3"

ROUND_ERROR = 1e-14  # fp rounding error
# will round to 0 if smaller in magnitude than this


class BetaDomainError(ValueError):
    """raised when a shape parameter, support value or probability is
    outside the domain of the Beta distribution"""


class ConvergenceError(ArithmeticError):
    """raised when an iterative computation does not converge

    Attributes
    ----------
    last_estimate
        the value the computation had reached when it stopped
    iterations
        the number of iterations performed
    """

    def __init__(self, message: str, last_estimate: float, iterations: int):
        super().__init__(message)
        self.last_estimate = last_estimate
        self.iterations = iterations


def fix_rounding_error(x):
    """If x is almost in the range 0-1, fixes it.

    Specifically, if x is between -ROUND_ERROR and 0, returns 0.
    If x is between 1 and 1+ROUND_ERROR, returns 1.
    """
    if -ROUND_ERROR < x < 0:
        return 0.0
    elif 1 < x < 1 + ROUND_ERROR:
        return 1.0
    else:
        return x


def validate_shape(a, b):
    """raises BetaDomainError unless a and b are both finite and > 0"""
    for name, value in (("a", a), ("b", b)):
        # written so that nan fails
        if not 0 < value < float("inf"):
            msg = f"shape parameter {name} must be > 0, got {value!r}"
            raise BetaDomainError(msg)


# Translations of functions from Cephes Math Library, by Stephen L. Moshier


def polevl(x, coef):
    """evaluates a polynomial y = C_0 + C_1x + C_2x^2 + ... + C_Nx^N

    Coefficients are stored in reverse order, i.e. coef[0] = C_N
    """
    result = 0
    for c in coef:
        result = result * x + c
    return result


# Coefficients for lgam follow:
GA = [
    8.11614167470508450300e-4,
    -5.95061904284301438324e-4,
    7.93650340457716943945e-4,
    -2.77777777730099687205e-3,
    8.33333333333331927722e-2,
]

GB = [
    -1.37825152569120859100e3,
    -3.88016315134637840924e4,
    -3.31612992738871184744e5,
    -1.16237097492762307383e6,
    -1.72173700820839662146e6,
    -8.53555664245765465627e5,
]

GC = [
    1.00000000000000000000e0,
    -3.51815701436523470549e2,
    -1.70642106651881159223e4,
    -2.20528590553854454839e5,
    -1.13933444367982507207e6,
    -2.53252307177582951285e6,
    -2.01889141433532773231e6,
]

MAXLGM = 2.556348e305
LOGPI = 1.14472988584940017414
LS2PI = 0.91893853320467274178
PI = 3.14159265358979323846


def lgam(x):
    """Natural log of the gamma fuction: see Cephes docs for details"""
    if x < -34:
        q = -x
        w = lgam(q)
        p = floor(q)
        if p == q:
            raise OverflowError("lgam returned infinity.")

        z = q - p
        if z > 0.5:
            p += 1
            z = p - q
        z = q * sin(PI * z)
        if z == 0:
            raise OverflowError("lgam returned infinity.")
        z = LOGPI - log(z) - w
        return z

    if x < 13:
        z = 1
        p = 0
        u = x
        while u >= 3:
            p -= 1
            u = x + p
            z *= u
        while u < 2:
            if u == 0:
                raise OverflowError("lgam returned infinity.")
            z /= u
            p += 1
            u = x + p
        if z < 0:
            z = -z
        if u == 2:
            return log(z)
        p -= 2
        x = x + p
        p = x * polevl(x, GB) / polevl(x, GC)
        return log(z) + p
    if x > MAXLGM:
        raise OverflowError("Too large a value of x in lgam.")
    q = (x - 0.5) * log(x) - x + LS2PI
    if x > 1.0e8:
        return q
    p = 1 / (x * x)
    if x >= 1000:
        q += (
            (7.9365079365079365079365e-4 * p - 2.7777777777777777777778e-3) * p
            + 0.0833333333333333333333
        ) / x
    else:
        q += polevl(p, GA) / x
    return q


def lbeta(a, b):
    """natural log of the complete beta function B(a, b)"""
    return lgam(a) + lgam(b) - lgam(a + b)


def _betacf(a, b, x, eps, acc, max_iter):  # naive python
    qab = a + b
    qap = a + 1.0
    qam = a - 1.0
    c = 1.0
    d = 1.0 - qab * x / qap
    if abs(d) < eps:
        d = eps
    d = 1.0 / d
    res = d

    for i in range(1, max_iter + 1):
        m2 = 2 * i
        aa = i * (b - i) * x / ((qam + m2) * (a + m2))
        d = 1.0 + aa * d
        if abs(d) < eps:
            d = eps
        c = 1.0 + aa / c
        if abs(c) < eps:
            c = eps
        d = 1.0 / d
        res *= d * c
        aa = -(a + i) * (qab + i) * x / ((a + m2) * (qap + m2))
        d = 1.0 + aa * d
        if abs(d) < eps:
            d = eps
        c = 1.0 + aa / c
        if abs(c) < eps:
            c = eps
        d = 1.0 / d
        delta = d * c
        res *= delta
        if abs(delta - 1.0) < acc:
            return res, i, True

    return res, max_iter, False


def betacf(a, b, x, settings: SolverSettings | None = None):
    """continued fraction factor of the regularised incomplete beta function

    Parameters
    ----------
    a, b
        shape parameters, both > 0
    x
        support value in (0, 1). The fraction converges rapidly only for
        x < (a + 1) / (a + b + 2), callers should use the symmetry
        I_x(a, b) = 1 - I_{1-x}(b, a) for larger x.
    settings
        tolerances, defaults to DEFAULT_SETTINGS

    Returns
    -------
    The fraction such that I_x(a, b) = x^a (1-x)^b cf / (a B(a, b)).

    Raises
    ------
    ConvergenceError
        if the fraction fails to converge within settings.max_cf_iter
        iterations, this happens when a or b is too large for the
        iteration cap or x lies on the slowly converging side
    """
    settings = resolve_settings(settings)
    value, iterations, converged = betacf_inner(
        float(a),
        float(b),
        float(x),
        settings.eps,
        settings.acc,
        settings.max_cf_iter,
    )
    if not converged:
        raise ConvergenceError(
            f"continued fraction for a={a}, b={b}, x={x} did not converge "
            f"in {iterations} iterations",
            last_estimate=value,
            iterations=iterations,
        )
    return value
