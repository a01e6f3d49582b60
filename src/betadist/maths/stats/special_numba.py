import numba

from numba import njit


@njit(
    numba.types.Tuple((numba.float64, numba.int64, numba.boolean))(
        numba.float64,
        numba.float64,
        numba.float64,
        numba.float64,
        numba.float64,
        numba.int64,
    ),
    cache=True,
)
def betacf_inner(a, b, x, eps, acc, max_iter):
    """modified Lentz evaluation of the incomplete beta continued fraction

    Returns the fraction value, the number of iterations used and whether
    convergence was reached.
    """
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
        m = float(i)
        m2 = 2.0 * m
        # even step
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1.0 + aa * d
        if abs(d) < eps:
            d = eps
        c = 1.0 + aa / c
        if abs(c) < eps:
            c = eps
        d = 1.0 / d
        res *= d * c
        # odd step
        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
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
