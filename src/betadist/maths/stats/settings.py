"""Numerical tolerances and iteration caps for the Beta distribution
functions.

Every public function in ``betadist.maths.stats`` accepts a ``settings``
argument. When omitted, ``DEFAULT_SETTINGS`` is used.
"""

import dataclasses

MACHINE_EPS = 2.2204460492503131e-16  # 2**-52
SQRT_MACHINE_EPS = 1.4901161193847656e-08  # 2**-26


@dataclasses.dataclass(frozen=True, slots=True)
class SolverSettings:
    """controls convergence of the continued fraction and quantile solver

    Parameters
    ----------
    eps
        floor applied to the Lentz continuants to avoid division by zero
    acc
        the continued fraction has converged when a multiplicative update
        differs from 1 by less than this
    max_cf_iter
        safety cap on continued fraction iterations
    tol
        a quantile is accepted when ``|p - cdf(x)| <= tol * p``
    step_tol
        refinement stops when the Newton step is below ``step_tol * x``
    max_newton_iter
        maximum number of refinement passes
    bisect_xtol, bisect_ptol
        bracket width and probability tolerances for the coarse bisection
    bisect_maxiter
        maximum number of coarse bisection halvings
    small_p
        probabilities below this use the small-x series for the first guess
    """

    eps: float = MACHINE_EPS
    acc: float = 1e-16
    max_cf_iter: int = 1_000_000_000
    tol: float = SQRT_MACHINE_EPS
    step_tol: float = 1e-11
    max_newton_iter: int = 64
    bisect_xtol: float = 0.01
    bisect_ptol: float = 0.01
    bisect_maxiter: int = 100
    small_p: float = 0.1

    def __post_init__(self) -> None:
        for name in ("eps", "acc", "tol", "step_tol", "bisect_xtol", "bisect_ptol"):
            value = getattr(self, name)
            if not value > 0:
                msg = f"{name} must be > 0, not {value!r}"
                raise ValueError(msg)

        for name in ("max_cf_iter", "max_newton_iter", "bisect_maxiter"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                msg = f"{name} must be a positive integer, not {value!r}"
                raise ValueError(msg)

        if not 0 < self.small_p < 1:
            msg = f"small_p must be in (0, 1), not {self.small_p!r}"
            raise ValueError(msg)


DEFAULT_SETTINGS = SolverSettings()


def make_settings(**kwargs) -> SolverSettings:
    """returns settings derived from the defaults with kwargs replaced

    Raises
    ------
    TypeError
        if a keyword is not a SolverSettings field
    ValueError
        if a value is invalid
    """
    return dataclasses.replace(DEFAULT_SETTINGS, **kwargs)


def resolve_settings(settings: SolverSettings | None) -> SolverSettings:
    """returns DEFAULT_SETTINGS when settings is None"""
    if settings is None:
        return DEFAULT_SETTINGS
    if not isinstance(settings, SolverSettings):
        msg = f"settings must be a SolverSettings instance, not {type(settings)}"
        raise TypeError(msg)
    return settings
