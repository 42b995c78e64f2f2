"""tsforecast: regular time series statistics and simple forecasting models.

tsforecast provides an immutable, time-indexed numeric container with the
classical time series statistics, and forecasting models that derive point
forecasts and calibrated prediction intervals from it.

Main Features
-------------
- **Exact calendar arithmetic**: Observation times advance by whole periods
  ("3 months", "1 week") using pandas date offsets.
- **Classical statistics**: Autocovariance, autocorrelation, differencing,
  Box-Cox transforms, aggregation and moving averages.
- **Prediction intervals**: Mean and random walk forecasts with intervals
  calibrated on Student's t or Gaussian quantiles.

Quick Start
-----------
>>> from tsforecast import RandomWalkForecast
>>> from tsforecast.datasets import load_elecsales
>>>
>>> series = load_elecsales()
>>> fcst = RandomWalkForecast(series, steps=5, alpha=0.05)
>>> fcst.upper_prediction_values.tolist()

Classes
-------
TimeUnit, TimePeriod
    Units of time and regular periods between observations.
TimeSeries
    Immutable time-indexed numeric sequence.
Normal, StudentsT
    Distributions used to simulate series and calibrate intervals.
MeanModel, MeanForecast
    Constant-mean forecasting model.
RandomWalk, RandomWalkForecast
    One-step persistence forecasting model.

Submodules
----------
utils
    Date parsing helpers and forecast accuracy metrics.
plotting
    Matplotlib renderers.
datasets
    Functions to load example datasets and generate synthetic data.
"""

from tsforecast import datasets, utils
from tsforecast.distributions import Distribution, Normal, StudentsT
from tsforecast.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    NullReferenceError,
    TsForecastError,
)
from tsforecast.models import (
    Forecast,
    MeanForecast,
    MeanModel,
    Model,
    RandomWalk,
    RandomWalkForecast,
)
from tsforecast.real import Interval, Real
from tsforecast.time_period import TimePeriod, TimeUnit
from tsforecast.time_series import TimeSeries

__all__ = [
    "TimeUnit",
    "TimePeriod",
    "TimeSeries",
    "Distribution",
    "Normal",
    "StudentsT",
    "Model",
    "Forecast",
    "MeanModel",
    "MeanForecast",
    "RandomWalk",
    "RandomWalkForecast",
    "Real",
    "Interval",
    "TsForecastError",
    "InvalidArgumentError",
    "NotFoundError",
    "NullReferenceError",
    "InvalidStateError",
    "utils",
    "datasets",
]
