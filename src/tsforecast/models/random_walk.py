"""Random walk (naive) forecasting model.

Classes
-------
RandomWalk
    One-step persistence model: the best guess of the next value is the
    current one.
RandomWalkForecast
    Random walk forecast with prediction intervals that widen with the
    square root of the horizon.
"""

import logging

import numpy as np

from tsforecast.distributions import Distribution, Normal
from tsforecast.exceptions import InvalidArgumentError, require_not_none
from tsforecast.models.base import (
    DEFAULT_ALPHA,
    DEFAULT_STEPS,
    bounds,
    critical_value,
    forecast_series,
    interval_at,
    require_observations,
    validate_alpha,
    validate_distribution,
    validate_steps,
)
from tsforecast.real import Interval, Real
from tsforecast.time_series import TimeSeries
from tsforecast.types import CriticalDistribution

logger = logging.getLogger(__name__)


class RandomWalk:
    """A random walk model.

    The fitted value at position ``t >= 1`` is the observation at ``t - 1``;
    the fitted value at position 0 is the first observation itself. The
    residual at position 0 is therefore 0.0 and every later residual is the
    one-step change ``x[t] - x[t - 1]``.

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
    >>> model = RandomWalk(TimeSeries([1.0, 3.0, 2.0]))
    >>> model.residuals.tolist()
    [0.0, 2.0, -1.0]
    >>> model.point_forecast(2).tolist()
    [2.0, 2.0]
    """

    def __init__(self, observed: TimeSeries):
        require_not_none(observed, "time series")
        if observed.size == 0:
            raise InvalidArgumentError("A random walk needs at least one observation.")
        self._time_series = observed
        self._fitted_series = self._fit_series()
        self._residuals = self._calculate_residuals()
        logger.debug("Fitted random walk to %d observations", observed.size)

    @classmethod
    def simulate(cls, distribution: Distribution, n: int) -> "RandomWalk":
        """Simulate a random walk whose observations follow ``distribution``.

        Draws ``n`` independent values from ``distribution`` and wraps them as
        the observed series.

        Parameters
        ----------
        distribution : Distribution
            The distribution to draw from. Seed it for reproducible draws.
        n : int
            The number of observations. Must be at least 1.

        Raises
        ------
        NullReferenceError
            If ``distribution`` is None.
        InvalidArgumentError
            If ``n < 1``.
        """
        require_not_none(distribution, "distribution")
        if n < 1:
            raise InvalidArgumentError(
                f"The number of observations must be at least 1, but was {n}.", {"n": n}
            )
        return cls(TimeSeries(distribution.sample(n)))

    @classmethod
    def simulate_normal(
        cls,
        n: int,
        mean: float = 0.0,
        sigma: float = 1.0,
        seed: int | np.random.Generator | None = None,
    ) -> "RandomWalk":
        """Simulate a random walk with Gaussian draws.

        Examples
        --------
        >>> RandomWalk.simulate_normal(10, sigma=2.0, seed=42).time_series.size
        10
        """
        return cls.simulate(Normal(mean, sigma, seed=seed), n)

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
        last = self._time_series.at(self._time_series.size - 1)
        return forecast_series(self._time_series, np.full(steps, last))

    def forecast(
        self, steps: int = DEFAULT_STEPS, alpha: float = DEFAULT_ALPHA
    ) -> "RandomWalkForecast":
        return RandomWalkForecast(self, steps, alpha)

    def plot_fit(self, ax=None):
        from tsforecast.plotting import plot_fit

        return plot_fit(self, ax=ax)

    def plot_residuals(self, ax=None):
        from tsforecast.plotting import plot_residuals

        return plot_residuals(self, ax=ax)

    def _fit_series(self) -> TimeSeries:
        values = self._time_series.values
        fitted = np.empty_like(values)
        fitted[0] = values[0]
        fitted[1:] = values[:-1]
        return TimeSeries.from_observation_times(
            fitted, self._time_series.time_period, self._time_series.observation_times
        )

    def _calculate_residuals(self) -> TimeSeries:
        residuals = self._time_series.values - self._fitted_series.values
        residuals[0] = 0.0
        return TimeSeries.from_observation_times(
            residuals, self._time_series.time_period, self._time_series.observation_times
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, RandomWalk):
            return NotImplemented
        return (
            self._time_series == other._time_series
            and self._fitted_series == other._fitted_series
            and self._residuals == other._residuals
        )

    def __hash__(self) -> int:
        return hash((self._time_series, self._fitted_series, self._residuals))

    def __repr__(self) -> str:
        return f"RandomWalk(n={self._time_series.size}, last={self._time_series.at(-1):.4f})"


class RandomWalkForecast:
    """A random walk forecast with prediction intervals.

    The one-step increments are assumed i.i.d. with standard deviation
    ``sigma = sqrt(sum(residuals ** 2) / (n - 1))``. The variance of the sum of
    ``h`` increments is ``h * sigma ** 2``, so the error at step ``h`` is::

        critical * sigma * sqrt(h)

    with ``critical`` the Gaussian (or Student's t, ``n - 1`` degrees of
    freedom) quantile at ``1 - alpha / 2``.

    Parameters
    ----------
    model : RandomWalk | TimeSeries
        The fitted model. A bare series is wrapped in a :class:`RandomWalk`.
    steps : int, default 12
        Number of steps ahead to forecast. Must be at least 1.
    alpha : float, default 0.05
        Significance level of the prediction intervals, in ``[0, 1]``.
    distribution : CriticalDistribution, default "normal"
        Reference distribution of the critical value.

    Raises
    ------
    InvalidArgumentError
        If ``steps < 1`` or ``alpha`` is outside ``[0, 1]``.
    InvalidStateError
        If the model has fewer than two observations.
    """

    def __init__(
        self,
        model: RandomWalk | TimeSeries,
        steps: int = DEFAULT_STEPS,
        alpha: float = DEFAULT_ALPHA,
        distribution: CriticalDistribution = "normal",
    ):
        require_not_none(model, "model")
        validate_steps(steps)
        validate_alpha(alpha)
        if isinstance(model, TimeSeries):
            model = RandomWalk(model)
        require_observations(model.time_series, 2, "estimate the random walk variance")
        validate_distribution(distribution)
        self._model = model
        self._steps = steps
        self._alpha = alpha
        self._distribution = distribution
        self._forecast = model.point_forecast(steps)
        self._errors = self._forecast_errors(steps, alpha)
        self._upper_values = bounds(self._forecast, self._errors, 1)
        self._lower_values = bounds(self._forecast, self._errors, -1)
        logger.debug(
            "Computed random walk forecast: steps=%d alpha=%s sigma=%.6f",
            steps,
            alpha,
            self.sigma,
        )

    @property
    def model(self) -> RandomWalk:
        return self._model

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def sigma(self) -> float:
        """Standard deviation of the one-step increments."""
        residuals = self._model.residuals
        return float(Real.of(residuals.sum_of_squares / (residuals.size - 1)).sqrt())

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

        return plot_forecast(
            self, ax=ax, include_history=include_history, title="Random Walk Forecast"
        )

    def _forecast_errors(self, steps: int, alpha: float) -> TimeSeries:
        critical = critical_value(
            alpha, self._distribution, df=self._model.time_series.size - 1
        )
        horizon = np.arange(1, steps + 1)
        errors = critical * self.sigma * np.sqrt(horizon)
        return forecast_series(self._model.time_series, errors)

    def __repr__(self) -> str:
        return f"RandomWalkForecast(steps={self._steps}, alpha={self._alpha})"
