"""Cumulative distribution and quantile functions of the Beta
distribution."""

import logging
import os
import typing
import warnings
from importlib import import_module

from betadist._version import __version__

__copyright__ = "Copyright 2026-date, The betadist Project"
__license__ = "BSD-3"


def __getattr__(name: str) -> typing.Any:  # noqa: ANN401
    if (attr := globals().get(name)) is not None:
        return attr

    if name not in _import_mapping:
        raise AttributeError(name)

    module_name = _import_mapping[name]
    module = import_module(f".{module_name}", package=__name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


_import_mapping = {
    "beta_cdf": "maths.stats.distribution",
    "beta_cdf_at": "maths.stats.distribution",
    "beta_pdf": "maths.stats.distribution",
    "beta_pdf_at": "maths.stats.distribution",
    "beta_quantile": "maths.stats.distribution",
    "beta_inv_cdf_for": "maths.stats.distribution",
    "QuantileResult": "maths.stats.distribution",
    "BetaDomainError": "maths.stats.special",
    "ConvergenceError": "maths.stats.special",
    "lgam": "maths.stats.special",
    "SolverSettings": "maths.stats.settings",
    "DEFAULT_SETTINGS": "maths.stats.settings",
    "make_settings": "maths.stats.settings",
}


def __dir__() -> list[str]:
    return list(_import_mapping.keys()) + list(globals().keys())


__all__ = list(_import_mapping.keys())

version = __version__
version_info = tuple(int(v) for v in version.split(".") if v.isdigit())


warn_env = "BETADIST_WARNINGS"

if warn := os.environ.get(warn_env):
    warnings.simplefilter(warn)


# suppress numba warnings
__numba_logger = logging.getLogger("numba")
__numba_logger.setLevel(logging.WARNING)
