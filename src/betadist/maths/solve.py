import logging


__author__ = "Peter Maxwell"
__credits__ = ["Peter Maxwell", "Gavin Huttley"]
__license__ = "BSD-3"

logger = logging.getLogger(__name__)


def coarse_bisection(
    func, x, target, lower=0.0, upper=1.0, args=(), xtol=0.01, ftol=0.01, maxiter=100
):
    """Crude bisection for a starting point, not a root.

    Moves x toward the solution of func(x) == target where func is
    non-decreasing on [lower, upper]. x itself is the first trial point
    (the midpoint if x is not strictly inside the bracket), the bracket
    then halves around the solution until func(x) is within ftol of target
    or the bracket is narrower than xtol.

    Returns
    -------
    The last trial point. Never raises on failing to meet the tolerances,
    as a subsequent refinement is expected to finish the job.
    """
    if upper < lower:
        (lower, upper) = (upper, lower)
    if not lower < x < upper:
        x = lower + (upper - lower) / 2.0
    i = 0
    while upper - lower > xtol and i < maxiter:
        fx = func(x, *args)
        if abs(fx - target) < ftol:
            break
        if fx < target:
            lower = x
        else:
            upper = x
        x = lower + (upper - lower) / 2.0
        i += 1
    logger.debug("coarse bisection stopped at x=%r after %d halvings", x, i)
    return x
