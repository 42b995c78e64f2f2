"""Matplotlib renderers for series, autocorrelations and forecasts.

Every function works on copies of already computed arrays and returns the
:class:`matplotlib.axes.Axes` it drew on. Nothing here feeds back into the
series or the models.

Functions
---------
plot_series
    Line plot of a series against its observation times.
plot_acf
    Autocorrelations by lag with approximate 95% significance bounds.
plot_forecast
    A forecast with symmetric error bars, optionally after the training data.
plot_fit
    Observed values against a model's fitted values.
plot_residuals
    Scatter plot of a model's residuals.
"""

import matplotlib.pyplot as plt
import numpy as np

from tsforecast.exceptions import InvalidArgumentError


def _axes(ax, figsize=(12, 6)):
    if ax is None:
        _, ax = plt.subplots(figsize=figsize)
    return ax


def plot_series(series, ax=None, title: str = "Time Series", label: str | None = None):
    """Plot the observations of ``series`` against time.

    Parameters
    ----------
    series : TimeSeries
        The series to plot.
    ax : matplotlib.axes.Axes | None
        Axes to draw on. A new figure is created when None.
    title : str, default "Time Series"
        Title of the plot.
    label : str | None
        Legend label of the line.
    """
    ax = _axes(ax)
    ax.plot(series.to_datetimes(), series.to_numpy(), lw=1, color="black", label=label)
    ax.set_title(title)
    ax.set_xlabel("Time")
    ax.grid()
    if label is not None:
        ax.legend()
    return ax


def plot_acf(series, k: int, ax=None):
    """Plot the autocorrelations of ``series`` at lags 0 through ``k``.

    The dashed lines are the approximate bounds ``-1/n +/- 2/sqrt(n)`` outside
    of which an autocorrelation is unlikely under white noise.

    Raises
    ------
    InvalidArgumentError
        If ``series`` is empty.
    """
    if series.size == 0:
        raise InvalidArgumentError("Cannot plot the autocorrelations of an empty series.")
    acf = series.auto_correlation_up_to_lag(k)
    lags = np.arange(len(acf))
    n = series.size
    upper = -1 / n + 2 / np.sqrt(n)
    lower = -1 / n - 2 / np.sqrt(n)

    ax = _axes(ax)
    ax.vlines(lags, 0, acf, color="black", lw=1)
    ax.scatter(lags, acf, s=12, color="black", label="Autocorrelation")
    ax.axhline(upper, ls="--", color="C0", label="Upper Bound")
    ax.axhline(lower, ls="--", color="C0", label="Lower Bound")
    ax.set_title("Autocorrelations By Lag")
    ax.set_xlabel("Lag")
    ax.legend()
    return ax


def plot_forecast(forecast, ax=None, include_history: bool = True, title: str | None = None):
    """Plot a forecast with its prediction errors as error bars.

    Parameters
    ----------
    forecast : Forecast
        A forecast such as :class:`~tsforecast.models.MeanForecast`.
    ax : matplotlib.axes.Axes | None
        Axes to draw on. A new figure is created when None.
    include_history : bool, default True
        Whether to draw the training series before the forecast.
    title : str | None
        Title of the plot. Defaults to the forecast class name.
    """
    ax = _axes(ax, figsize=(14, 7))
    if include_history:
        history = forecast.model.time_series
        ax.plot(history.to_datetimes(), history.to_numpy(), lw=0.75, color="black", label="Past")

    point = forecast.forecast
    ax.errorbar(
        point.to_datetimes(),
        point.to_numpy(),
        yerr=forecast.errors.to_numpy(),
        lw=1.5,
        color="C0",
        ecolor="red",
        marker="o",
        markersize=3,
        label="Future" if include_history else "Forecast",
    )
    ax.set_title(title or type(forecast).__name__)
    ax.set_xlabel("Time")
    ax.set_ylabel("Forecast Values")
    ax.grid()
    ax.legend()
    return ax


def plot_fit(model, ax=None):
    """Plot the observed values of ``model`` against its fitted values."""
    ax = _axes(ax)
    observed = model.time_series
    fitted = model.fitted_series
    ax.scatter(observed.to_datetimes(), observed.to_numpy(), s=8, color="red", label="Observed Values")
    ax.plot(fitted.to_datetimes(), fitted.to_numpy(), lw=1, color="blue", label="Fitted Values")
    ax.set_title(f"{type(model).__name__} Fitted and Actual")
    ax.grid()
    ax.legend()
    return ax


def plot_residuals(model, ax=None):
    """Scatter plot of the residuals of ``model``."""
    ax = _axes(ax)
    residuals = model.residuals
    ax.scatter(residuals.to_datetimes(), residuals.to_numpy(), s=8, color="red", label="Model Residuals")
    ax.axhline(0.0, lw=0.75, color="black")
    ax.set_title(f"{type(model).__name__} Residuals")
    ax.grid()
    ax.legend()
    return ax
