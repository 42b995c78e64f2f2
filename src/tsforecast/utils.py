"""Utility functions for tsforecast.

This module provides helpers for parsing observation times and for
evaluating forecasts against held-out data.

Functions
---------
parse_datetime
    Turn a string or datetime into a timezone-aware observation time.
is_offset_datetime
    Check whether a string is a date-time with an explicit UTC offset.
is_local_datetime
    Check whether a string is a date-time without a UTC offset.
metrics
    Calculate accuracy metrics of a forecast against observed values.
"""

from datetime import datetime

import pandas as pd
from sklearn.metrics import (
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_squared_error,
    root_mean_squared_error,
)

from tsforecast.exceptions import InvalidArgumentError, require_not_none
from tsforecast.types import TimestampLike


def _parse(value: str) -> pd.Timestamp | None:
    try:
        parsed = pd.Timestamp(value)
    except (ValueError, TypeError):
        return None
    if parsed is pd.NaT:
        return None
    return parsed


def parse_datetime(value: TimestampLike) -> pd.Timestamp:
    """Convert ``value`` to a timezone-aware :class:`pandas.Timestamp`.

    Parameters
    ----------
    value : TimestampLike
        An ISO-8601 string, a :class:`datetime.datetime` or a
        :class:`pandas.Timestamp`. A value without a UTC offset is taken to
        be in UTC.

    Returns
    -------
    pd.Timestamp
        The parsed, timezone-aware timestamp.

    Raises
    ------
    NullReferenceError
        If ``value`` is None.
    InvalidArgumentError
        If ``value`` cannot be parsed as a date-time.

    Examples
    --------
    >>> parse_datetime("1956-01-01T00:00:00")
    Timestamp('1956-01-01 00:00:00+0000', tz='UTC')
    """
    require_not_none(value, "date-time")
    if isinstance(value, (str, datetime)):
        parsed = _parse(value)
    else:
        parsed = None
    if parsed is None:
        raise InvalidArgumentError(
            f"Could not parse {value!r} as a date-time.", {"value": value}
        )
    if parsed.tz is None:
        parsed = parsed.tz_localize("UTC")
    return parsed


def is_offset_datetime(value: str) -> bool:
    """Whether ``value`` parses as a date-time carrying a UTC offset."""
    parsed = _parse(value)
    return parsed is not None and parsed.tz is not None


def is_local_datetime(value: str) -> bool:
    """Whether ``value`` parses as a date-time without a UTC offset."""
    parsed = _parse(value)
    return parsed is not None and parsed.tz is None


def metrics(actual, predicted) -> dict[str, float]:
    """Calculate evaluation metrics for a forecast.

    Computes Mean Squared Error (MSE), Root Mean Squared Error (RMSE), Mean
    Absolute Error (MAE), and Mean Absolute Percentage Error (MAPE) over the
    observation times that both series share.

    Parameters
    ----------
    actual : TimeSeries
        The observed values for the forecast period.
    predicted : TimeSeries
        The point forecast, e.g. ``model.point_forecast(steps)``.

    Returns
    -------
    dict[str, float]
        The metrics keyed by ``"mse"``, ``"rmse"``, ``"mae"`` and ``"mape"``.

    Raises
    ------
    InvalidArgumentError
        If the two series do not share any observation time.

    Examples
    --------
    >>> from tsforecast import RandomWalk
    >>> from tsforecast.utils import metrics
    >>> train, test = series.slice(0, 15), series.slice(16, 19)
    >>> metrics(test, RandomWalk(train).point_forecast(4))
    {'mse': ..., 'rmse': ..., 'mae': ..., 'mape': ...}
    """
    require_not_none(actual, "actual series")
    require_not_none(predicted, "predicted series")
    # Predictions are matched to observations by timestamp, not position.
    merged = actual.to_frame().merge(
        predicted.to_frame().rename(columns={"y": "yhat"}), on="ds", how="inner"
    )
    if len(merged) == 0:
        raise InvalidArgumentError(
            "No matching observation times found between the actual and the "
            "predicted series. Ensure the forecast covers the test period."
        )

    y = merged["y"]
    yhat = merged["yhat"]
    return {
        "mse": float(mean_squared_error(y, yhat)),
        "rmse": float(root_mean_squared_error(y, yhat)),
        "mae": float(mean_absolute_error(y, yhat)),
        "mape": float(mean_absolute_percentage_error(y, yhat)),
    }
