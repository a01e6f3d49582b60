"""Provides the Beta distribution and the special functions it needs."""


__all__ = [
    "distribution",
    "settings",
    "special",
    "special_numba",
]
