"""Functions for generating synthetic time series.

This module provides generators for series with known structure, handy for
testing and demonstrating the statistics and models in tsforecast.
"""

import numpy as np

from tsforecast.exceptions import InvalidArgumentError
from tsforecast.time_period import TimePeriod, TimeUnit
from tsforecast.time_series import TimeSeries
from tsforecast.types import TimestampLike


def _fourier_series(t: np.ndarray, period: float, n_components: int) -> np.ndarray:
    """Generate Fourier series basis functions.

    Parameters
    ----------
    t : np.ndarray
        Time values (observation positions)
    period : float
        Period of the seasonal component, in observations
    n_components : int
        Number of Fourier terms (sin/cos pairs)

    Returns
    -------
    np.ndarray
        Matrix of shape (len(t), 2 * n_components) with cos and sin terms
    """
    x = 2 * np.pi * (np.arange(n_components) + 1) * t[:, None] / period
    return np.concatenate((np.cos(x), np.sin(x)), axis=1)


def generate_seasonal_series(
    n: int,
    time_period: TimePeriod | TimeUnit = TimeUnit.MONTH,
    start_time: TimestampLike | None = None,
    level: float = 100.0,
    slope: float = 0.0,
    season_length: float = 12.0,
    amplitude: float = 10.0,
    noise_std: float = 1.0,
    seed: int | None = 42,
) -> TimeSeries:
    """Generate a series with a linear trend, one seasonal cycle and noise.

    The value at position ``t`` is::

        level + slope * t + amplitude * sin(2 * pi * t / season_length) + noise

    Parameters
    ----------
    n : int
        Number of observations.
    time_period : TimePeriod | TimeUnit, default TimeUnit.MONTH
        Period between observations.
    start_time : TimestampLike | None, default None
        Time of the first observation.
    level : float, default 100.0
        Value of the trend at position 0.
    slope : float, default 0.0
        Change of the trend per observation.
    season_length : float, default 12.0
        Length of the seasonal cycle in observations.
    amplitude : float, default 10.0
        Amplitude of the seasonal cycle.
    noise_std : float, default 1.0
        Standard deviation of the Gaussian noise. Zero gives a noiseless
        series.
    seed : int or None, default 42
        Random seed for reproducibility. Set to None for random data.

    Returns
    -------
    TimeSeries
        The generated series.

    Examples
    --------
    >>> from tsforecast.datasets import generate_seasonal_series
    >>> series = generate_seasonal_series(48, slope=0.5, seed=1)
    >>> series.size
    48
    """
    if n < 0:
        raise InvalidArgumentError(f"n must be non-negative, but was {n}.", {"n": n})
    if noise_std < 0:
        raise InvalidArgumentError(
            f"noise_std must be non-negative, but was {noise_std}.",
            {"noise_std": noise_std},
        )
    rng = np.random.default_rng(seed)
    t = np.arange(n, dtype=float)
    seasonal = _fourier_series(t, season_length, 1)[:, 1]
    values = level + slope * t + amplitude * seasonal + rng.normal(0.0, noise_std, n)
    return TimeSeries(values, time_period, start_time)
