"""The forecasting contract shared by all models.

Models and forecasts are expressed as protocols. Concrete models implement
them independently; the helpers in this module hold the little logic they
share.

Classes
-------
Model
    A fitted model that can produce point forecasts.
Forecast
    A point forecast together with its prediction bounds.

Functions
---------
validate_steps
    Check a forecast horizon.
validate_alpha
    Check a significance level.
validate_distribution
    Check the name of a reference distribution.
forecast_series
    Wrap forecast values in a series that continues the training data.
critical_value
    The two-tailed critical value of a reference distribution.
"""

from typing import Protocol, get_args, runtime_checkable

import numpy as np

from tsforecast.distributions import Normal, StudentsT
from tsforecast.exceptions import InvalidArgumentError, InvalidStateError
from tsforecast.real import Interval
from tsforecast.time_series import TimeSeries
from tsforecast.types import CriticalDistribution

DEFAULT_STEPS = 12
"""Default number of steps ahead to forecast."""

DEFAULT_ALPHA = 0.05
"""Default significance level, i.e. 95% prediction intervals."""


@runtime_checkable
class Model(Protocol):
    """A model fitted to an observed series."""

    @property
    def time_series(self) -> TimeSeries:
        """The observations the model was built from."""

    @property
    def fitted_series(self) -> TimeSeries:
        """In-sample one-step predictions."""

    @property
    def residuals(self) -> TimeSeries:
        """Observed minus fitted values."""

    def point_forecast(self, steps: int) -> TimeSeries:
        """Point forecasts for the next ``steps`` periods."""

    def forecast(self, steps: int = DEFAULT_STEPS, alpha: float = DEFAULT_ALPHA) -> "Forecast":
        """Point forecasts with prediction bounds."""


@runtime_checkable
class Forecast(Protocol):
    """A point forecast with prediction bounds, computed once."""

    @property
    def model(self) -> Model: ...

    @property
    def forecast(self) -> TimeSeries: ...

    @property
    def errors(self) -> TimeSeries: ...

    @property
    def upper_prediction_values(self) -> TimeSeries: ...

    @property
    def lower_prediction_values(self) -> TimeSeries: ...

    def compute_upper_prediction_bounds(self, steps: int, alpha: float) -> TimeSeries:
        """Upper bounds for an arbitrary horizon and significance level."""

    def compute_lower_prediction_bounds(self, steps: int, alpha: float) -> TimeSeries:
        """Lower bounds for an arbitrary horizon and significance level."""

    def prediction_interval(self, step: int) -> Interval:
        """The interval at the 1-based forecast ``step``."""


def validate_steps(steps: int) -> None:
    if steps < 1:
        raise InvalidArgumentError(
            "The number of steps ahead to forecast must be greater than or equal "
            f"to 1, but was {steps}.",
            {"steps": steps},
        )


def validate_alpha(alpha: float) -> None:
    if alpha < 0 or alpha > 1:
        raise InvalidArgumentError(
            f"The value of alpha must be between 0 and 1, but was {alpha}.",
            {"alpha": alpha},
        )


def validate_distribution(distribution: str) -> None:
    if distribution not in get_args(CriticalDistribution):
        raise InvalidArgumentError(
            f"Unknown reference distribution {distribution!r}, expected one of "
            f"{get_args(CriticalDistribution)}.",
            {"distribution": distribution},
        )


def require_observations(series: TimeSeries, minimum: int, what: str) -> None:
    if series.size < minimum:
        raise InvalidStateError(
            f"At least {minimum} observations are required to {what}, but the "
            f"series has {series.size}.",
            {"n": series.size},
        )


def forecast_series(series: TimeSeries, values: np.ndarray) -> TimeSeries:
    """Wrap ``values`` in a series starting one period after ``series`` ends."""
    return TimeSeries(values, series.time_period, series.next_time())


def critical_value(
    alpha: float, distribution: CriticalDistribution = "normal", df: float | None = None
) -> float:
    """The quantile of the reference distribution at ``1 - alpha / 2``.

    Parameters
    ----------
    alpha : float
        Significance level of the two-tailed interval.
    distribution : CriticalDistribution, default "normal"
        Gaussian, or Student's t with ``df`` degrees of freedom.
    df : float | None
        Degrees of freedom, required for ``"t"``.
    """
    validate_distribution(distribution)
    if distribution == "normal":
        return Normal().quantile(1 - alpha / 2)
    if df is None:
        raise InvalidArgumentError("Student's t critical values need df.")
    return StudentsT(df).quantile(1 - alpha / 2)


def bounds(point: TimeSeries, errors: TimeSeries, sign: int) -> TimeSeries:
    """``point + sign * errors`` on the forecast observation times."""
    return TimeSeries.from_observation_times(
        point.values + sign * errors.values, point.time_period, point.observation_times
    )


def interval_at(forecast: Forecast, step: int) -> Interval:
    """The prediction interval of ``forecast`` at the 1-based ``step``."""
    if not 1 <= step <= forecast.forecast.size:
        raise InvalidArgumentError(
            f"The step must lie between 1 and {forecast.forecast.size}, but was {step}.",
            {"step": step},
        )
    return Interval(
        forecast.lower_prediction_values.at(step - 1),
        forecast.upper_prediction_values.at(step - 1),
    )
