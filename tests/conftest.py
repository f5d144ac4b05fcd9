import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so sampled fields are reproducible"""
    return np.random.default_rng(42)


@pytest.fixture
def ts_field():
    """Absolute Salinity and in-situ temperature on a 2x3 grid"""
    SA = np.array([[34.5, 35.0, 35.2], [34.9, 34.7, 35.1]])
    t = np.array([[12.0, 8.5, 4.0], [2.5, 1.8, 1.2]])
    return SA, t


@pytest.fixture
def sinusoid():
    """Sine wave with a 40-sample period, ten full periods long"""
    period = 40
    n = np.arange(10 * period)
    return np.sin(2 * np.pi * n / period), period
