import dataclasses

import pytest

from betadist.maths.stats.settings import (
    DEFAULT_SETTINGS,
    MACHINE_EPS,
    SolverSettings,
    make_settings,
    resolve_settings,
)


def test_defaults():
    """default tolerances and caps"""
    settings = SolverSettings()
    assert settings == DEFAULT_SETTINGS
    assert settings.eps == MACHINE_EPS == 2.2204460492503131e-16
    assert settings.acc == 1e-16
    assert settings.max_cf_iter == 1_000_000_000
    assert settings.tol == 1.4901161193847656e-08
    assert settings.step_tol == 1e-11
    assert settings.max_newton_iter == 64
    assert settings.bisect_xtol == settings.bisect_ptol == 0.01
    assert settings.small_p == 0.1


def test_make_settings():
    """make_settings replaces only the named fields"""
    got = make_settings(tol=1e-6, max_newton_iter=10)
    assert got.tol == 1e-6
    assert got.max_newton_iter == 10
    assert got.acc == DEFAULT_SETTINGS.acc
    # defaults are unchanged
    assert DEFAULT_SETTINGS.tol == 1.4901161193847656e-08


def test_make_settings_unknown_field():
    with pytest.raises(TypeError):
        make_settings(not_a_field=1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"eps": 0},
        {"acc": -1e-16},
        {"tol": 0.0},
        {"step_tol": float("nan")},
        {"bisect_xtol": -0.1},
        {"max_cf_iter": 0},
        {"max_newton_iter": 2.5},
        {"bisect_maxiter": True},
        {"small_p": 1.0},
        {"small_p": 0},
    ],
)
def test_invalid_settings(kwargs):
    """invalid values raise ValueError"""
    with pytest.raises(ValueError):
        make_settings(**kwargs)


def test_frozen():
    """settings cannot be modified in place"""
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.tol = 1.0


def test_resolve_settings():
    assert resolve_settings(None) is DEFAULT_SETTINGS
    custom = make_settings(tol=1e-4)
    assert resolve_settings(custom) is custom
    with pytest.raises(TypeError):
        resolve_settings({"tol": 1e-4})
