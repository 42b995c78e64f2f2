"""Constant-mean forecasting model.

Classes
-------
MeanModel
    Forecasts every future value as the mean of the observations.
MeanForecast
    Mean model forecast with Student's t prediction intervals.
"""

import logging

import numpy as np

from tsforecast.exceptions import InvalidArgumentError, require_not_none
from tsforecast.models.base import (
    DEFAULT_ALPHA,
    DEFAULT_STEPS,
    Model,
    bounds,
    critical_value,
    forecast_series,
    interval_at,
    require_observations,
    validate_alpha,
    validate_steps,
)
from tsforecast.real import Interval, Real
from tsforecast.time_series import TimeSeries

logger = logging.getLogger(__name__)


class MeanModel:
    """A model that predicts the mean of the observations at every step.

    Parameters
    ----------
    observed : TimeSeries
        The training observations. Must not be empty.

    Raises
    ------
    NullReferenceError
        If ``observed`` is None.
    InvalidArgumentError
        If ``observed`` is empty.

    Examples
    --------
    >>> model = MeanModel(TimeSeries([3.0, 7.0, 5.0]))
    >>> model.point_forecast(2).tolist()
    [5.0, 5.0]
    """

    def __init__(self, observed: TimeSeries):
        require_not_none(observed, "time series")
        if observed.size == 0:
            raise InvalidArgumentError("The mean model needs at least one observation.")
        self._time_series = observed
        self._fitted_series = TimeSeries.from_observation_times(
            np.full(observed.size, observed.mean),
            observed.time_period,
            observed.observation_times,
        )
        self._residuals = observed.minus(self._fitted_series)
        logger.debug("Fitted mean model to %d observations", observed.size)

    @property
    def time_series(self) -> TimeSeries:
        return self._time_series

    @property
    def fitted_series(self) -> TimeSeries:
        return self._fitted_series

    @property
    def residuals(self) -> TimeSeries:
        return self._residuals

    def point_forecast(self, steps: int) -> TimeSeries:
        validate_steps(steps)
        return forecast_series(self._time_series, np.full(steps, self._time_series.mean))

    def forecast(self, steps: int = DEFAULT_STEPS, alpha: float = DEFAULT_ALPHA) -> "MeanForecast":
        return MeanForecast(self, steps, alpha)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MeanModel):
            return NotImplemented
        return self._time_series == other._time_series

    def __hash__(self) -> int:
        return hash(self._time_series)

    def __repr__(self) -> str:
        return f"MeanModel(mean={self._time_series.mean:.4f}, n={self._time_series.size})"


class MeanForecast:
    """A mean model forecast with prediction intervals.

    The error term is the same at every step::

        t_{n-1}(1 - alpha / 2) * sqrt(variance + variance / n)

    where ``variance`` is the population variance of the ``n`` training
    observations. The interval widens as ``n`` shrinks and as ``alpha``
    shrinks.

    Parameters
    ----------
    model : Model
        The fitted model, usually a :class:`MeanModel`. A bare
        :class:`TimeSeries` is wrapped in a :class:`MeanModel`.
    steps : int, default 12
        Number of steps ahead to forecast. Must be at least 1.
    alpha : float, default 0.05
        Significance level of the prediction intervals, in ``[0, 1]``.

    Raises
    ------
    InvalidArgumentError
        If ``steps < 1`` or ``alpha`` is outside ``[0, 1]``.
    InvalidStateError
        If the model has fewer than two observations.

    Examples
    --------
    >>> fcst = MeanForecast(MeanModel(series), steps=4, alpha=0.05)
    >>> fcst.upper_prediction_values == fcst.compute_upper_prediction_bounds(4, 0.05)
    True
    """

    def __init__(
        self,
        model: Model | TimeSeries,
        steps: int = DEFAULT_STEPS,
        alpha: float = DEFAULT_ALPHA,
    ):
        require_not_none(model, "model")
        validate_steps(steps)
        validate_alpha(alpha)
        if isinstance(model, TimeSeries):
            model = MeanModel(model)
        require_observations(model.time_series, 2, "compute mean forecast errors")
        self._model = model
        self._steps = steps
        self._alpha = alpha
        self._forecast = model.point_forecast(steps)
        self._errors = self._forecast_errors(steps, alpha)
        self._upper_values = bounds(self._forecast, self._errors, 1)
        self._lower_values = bounds(self._forecast, self._errors, -1)
        logger.debug(
            "Computed mean forecast: steps=%d alpha=%s error=%.6f",
            steps,
            alpha,
            self._errors.at(0),
        )

    @property
    def model(self) -> Model:
        return self._model

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def forecast(self) -> TimeSeries:
        return self._forecast

    @property
    def errors(self) -> TimeSeries:
        return self._errors

    @property
    def upper_prediction_values(self) -> TimeSeries:
        return self._upper_values

    @property
    def lower_prediction_values(self) -> TimeSeries:
        return self._lower_values

    def compute_upper_prediction_bounds(self, steps: int, alpha: float) -> TimeSeries:
        validate_steps(steps)
        validate_alpha(alpha)
        return bounds(self._model.point_forecast(steps), self._forecast_errors(steps, alpha), 1)

    def compute_lower_prediction_bounds(self, steps: int, alpha: float) -> TimeSeries:
        validate_steps(steps)
        validate_alpha(alpha)
        return bounds(self._model.point_forecast(steps), self._forecast_errors(steps, alpha), -1)

    def prediction_interval(self, step: int) -> Interval:
        return interval_at(self, step)

    def plot(self, ax=None, include_history: bool = True):
        from tsforecast.plotting import plot_forecast

        return plot_forecast(self, ax=ax, include_history=include_history, title="Mean Forecast")

    def _forecast_errors(self, steps: int, alpha: float) -> TimeSeries:
        observed = self._model.time_series
        n = observed.size
        critical = critical_value(alpha, "t", df=n - 1)
        variance = Real.of(observed.variance)
        mean_std_error = variance.divided_by(Real.of(n))
        fcst_std_error = variance.plus(mean_std_error).sqrt()
        errors = np.full(steps, critical * float(fcst_std_error))
        return forecast_series(observed, errors)

    def __repr__(self) -> str:
        return f"MeanForecast(steps={self._steps}, alpha={self._alpha})"
