"""Shared fixtures for hypercal tests."""

from __future__ import annotations

import numpy as np
import pytest

from hypercal.core.hypercube import ParameterSpace
from hypercal.core.logging import set_log_level


@pytest.fixture(autouse=True)
def _reset_log_level():
    # Some tests lower the global level; keep the rest quiet.
    yield
    set_log_level("INFO")


@pytest.fixture
def xy_space() -> ParameterSpace:
    """x in [0, 10] = 5, y in [-1, 1] = 0."""
    space = ParameterSpace()
    space.define("x", 0.0, 10.0, 5.0)
    space.define("y", -1.0, 1.0, 0.0)
    return space


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
