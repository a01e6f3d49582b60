import pytest

from betadist.maths.stats.settings import DEFAULT_SETTINGS, make_settings


@pytest.fixture
def settings():
    return DEFAULT_SETTINGS


@pytest.fixture
def impatient_settings():
    """refinement is given a single pass from a deliberately poor start"""
    return make_settings(max_newton_iter=1, bisect_xtol=0.5, bisect_ptol=0.5)
