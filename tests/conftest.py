"""Pytest fixtures for tsforecast tests."""

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend for testing

import numpy as np
import pytest

from tsforecast import TimePeriod, TimeSeries
from tsforecast.datasets import load_elecsales


@pytest.fixture
def acf_series():
    """Short series with known autocovariances."""
    return TimeSeries([10.0, 5.0, 4.5, 7.7, 3.4, 6.9])


@pytest.fixture
def elecsales():
    """Annual electricity sales, 20 observations from 1989."""
    return load_elecsales()


@pytest.fixture
def quarterly_series():
    """218 quarterly observations starting in the first quarter of 1956."""
    rng = np.random.default_rng(42)
    values = 400 + 50 * np.sin(np.arange(218) * np.pi / 2) + rng.normal(0, 10, 218)
    return TimeSeries(values, TimePeriod.one_quarter(), "1956-01-01T00:00:00")


@pytest.fixture
def weekly_series():
    """Three years of weekly observations starting in 1990."""
    rng = np.random.default_rng(7)
    values = np.abs(rng.normal(2.0, 0.5, 160))
    return TimeSeries(values, TimePeriod.one_week(), "1990-01-01T00:00:00Z")
