"""Functions for loading real-world time series datasets.

This module provides convenience functions for loading commonly used
time series datasets as :class:`~tsforecast.TimeSeries` objects.
"""

import logging

import pandas as pd

from tsforecast.time_period import TimePeriod
from tsforecast.time_series import TimeSeries

logger = logging.getLogger(__name__)

AIR_PASSENGERS_URL = "https://raw.githubusercontent.com/facebook/prophet/main/examples/example_air_passengers.csv"

# Residential electricity sales (GWh) for South Australia, 1989 to 2008.
_ELECSALES = (
    2354.34, 2379.71, 2318.52, 2468.99, 2386.09,
    2569.47, 2575.72, 2762.72, 2844.50, 3000.70,
    3108.10, 3357.50, 3075.70, 3180.60, 3221.60,
    3176.20, 3430.60, 3527.48, 3637.89, 3655.00,
)


def load_elecsales() -> TimeSeries:
    """Load the annual electricity sales dataset.

    Residential electricity sales in South Australia from 1989 to 2008
    (20 yearly observations). The data is bundled with the package.

    Returns
    -------
    TimeSeries
        Yearly series starting at ``1989-01-01T00:00Z``.

    Examples
    --------
    >>> from tsforecast.datasets import load_elecsales
    >>> series = load_elecsales()
    >>> series.size
    20
    >>> series.moving_average(5).at(0)
    2381.53

    Notes
    -----
    Source: Hyndman, R. J. and Athanasopoulos, G., Forecasting: Principles
    and Practice.
    """
    return TimeSeries(_ELECSALES, TimePeriod.one_year(), "1989-01-01T00:00:00")


def load_air_passengers() -> TimeSeries:
    """Load the Air Passengers dataset.

    The Air Passengers dataset is a classic time series dataset containing
    monthly totals of international airline passengers from January 1949 to
    December 1960 (144 observations).

    This dataset exhibits:
    - Clear upward trend
    - Strong yearly seasonality
    - Multiplicative seasonality (variance increases with level), which a
      Box-Cox transform stabilises

    Returns
    -------
    TimeSeries
        Monthly series starting at ``1949-01-01T00:00Z``.

    Notes
    -----
    Data is downloaded from the Prophet examples repository on GitHub.
    Original source: Box, G. E. P., Jenkins, G. M. and Reinsel, G. C. (1976)
    Time Series Analysis, Forecasting and Control. Third Edition.
    """
    logger.info("Downloading air passengers data from %s", AIR_PASSENGERS_URL)
    df = pd.read_csv(AIR_PASSENGERS_URL)
    df["ds"] = pd.to_datetime(df["ds"])
    return TimeSeries.from_frame(df, TimePeriod.one_month())
