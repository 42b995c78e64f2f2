"""Immutable sequences of observations taken at regular time intervals.

Classes
-------
TimeSeries
    Time-ordered float values with one observation time per value.

Functions
---------
difference_values
    Difference a plain array a number of times at a given lag.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view
from scipy.special import boxcox, inv_boxcox

from tsforecast.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    require_not_none,
)
from tsforecast.time_period import TimePeriod, TimeUnit, as_time_period
from tsforecast.types import TimestampLike, ValuesLike
from tsforecast.utils import parse_datetime

logger = logging.getLogger(__name__)

SYNTHETIC_START = "1970-01-01T00:00:00Z"
"""Observation time of the first value when no start time is given."""


def _validate_box_cox_lambda(box_cox_lambda: float) -> None:
    if box_cox_lambda > 2 or box_cox_lambda < -1:
        raise InvalidArgumentError(
            "The Box-Cox parameter must lie between -1 and 2, but the provided "
            f"parameter was equal to {box_cox_lambda}.",
            {"box_cox_lambda": box_cox_lambda},
        )


def difference_values(values: ValuesLike, lag: int = 1, times: int = 1) -> np.ndarray:
    """Difference ``values`` ``times`` times at the given lag.

    Each pass computes ``x[t + lag] - x[t]`` and so shortens the array by
    ``lag``.

    Parameters
    ----------
    values : ValuesLike
        The values to difference.
    lag : int, default 1
        The lag at which to take differences. Must be at least 1.
    times : int, default 1
        How many passes to make. Zero returns a copy of ``values``.

    Returns
    -------
    np.ndarray
        The differenced values.

    Raises
    ------
    InvalidArgumentError
        If ``lag < 1``, ``times < 0`` or a pass would need more values than
        remain.
    """
    if lag < 1:
        raise InvalidArgumentError(
            f"The lag must be at least 1, but was {lag}.", {"lag": lag}
        )
    if times < 0:
        raise InvalidArgumentError(
            f"The number of differences must be non-negative, but was {times}.",
            {"times": times},
        )
    diffed = np.array(values, dtype=float)
    for _ in range(times):
        if lag > len(diffed):
            raise InvalidArgumentError(
                f"Cannot difference {len(diffed)} values at lag {lag}.",
                {"lag": lag, "n": len(diffed)},
            )
        diffed = diffed[lag:] - diffed[: len(diffed) - lag]
    return diffed


class TimeSeries:
    """An immutable sequence of observations taken at regular time intervals.

    Values are copied into a read-only float64 array on construction. The
    observation times and a reverse lookup from observation time to position
    are built eagerly, as are the mean, sum, sum of squares, population
    variance, standard deviation and median. Every transformation returns a
    new series.

    Parameters
    ----------
    values : ValuesLike
        The observation data.
    time_period : TimePeriod | TimeUnit, default TimeUnit.MONTH
        The period of time between observations.
    start_time : TimestampLike | None, default None
        The time of the first observation. Strings are parsed as ISO-8601
        date-times; a value without a UTC offset is taken to be in UTC.
        ``None`` uses :data:`SYNTHETIC_START`.

    Attributes
    ----------
    time_period : TimePeriod
        The period of time between observations.
    observation_times : tuple[pd.Timestamp, ...]
        The time of each observation.
    datetime_index : Mapping[pd.Timestamp, int]
        Read-only lookup from observation time to position.
    mean, sum, sum_of_squares, variance, std, median : float
        Summary statistics. ``variance`` divides by ``n``.

    Examples
    --------
    >>> from tsforecast import TimePeriod, TimeSeries
    >>> series = TimeSeries(
    ...     [10.0, 5.0, 4.5, 7.7, 3.4, 6.9],
    ...     TimePeriod.one_quarter(),
    ...     "1956-01-01T00:00:00",
    ... )
    >>> series.auto_correlation_at_lag(0)
    1.0
    >>> series.difference().size
    5
    """

    def __init__(
        self,
        values: ValuesLike = (),
        time_period: TimePeriod | TimeUnit = TimeUnit.MONTH,
        start_time: TimestampLike | None = None,
    ):
        require_not_none(values, "values")
        period = as_time_period(time_period)
        start = parse_datetime(SYNTHETIC_START if start_time is None else start_time)
        n = len(values)
        observation_times = [start] if n > 0 else []
        step = period.offset()
        for _ in range(1, n):
            observation_times.append(observation_times[-1] + step)
        self._init(values, period, observation_times)

    @classmethod
    def from_observation_times(
        cls,
        values: ValuesLike,
        time_period: TimePeriod | TimeUnit,
        observation_times: Sequence[TimestampLike],
    ) -> "TimeSeries":
        """Create a series with explicitly given observation times.

        Parameters
        ----------
        values : ValuesLike
            The observation data.
        time_period : TimePeriod | TimeUnit
            The period of time between observations.
        observation_times : Sequence[TimestampLike]
            One strictly increasing observation time per value.

        Raises
        ------
        InvalidArgumentError
            If the number of times differs from the number of values or the
            times are not strictly increasing.
        """
        require_not_none(values, "values")
        require_not_none(observation_times, "observation times")
        times = [parse_datetime(t) for t in observation_times]
        if len(times) != len(values):
            raise InvalidArgumentError(
                f"Got {len(values)} values but {len(times)} observation times.",
                {"n_values": len(values), "n_times": len(times)},
            )
        for previous, current in zip(times, times[1:]):
            if not current > previous:
                raise InvalidArgumentError(
                    "Observation times must be strictly increasing, but "
                    f"{current} follows {previous}.",
                    {"previous": previous, "current": current},
                )
        series = cls.__new__(cls)
        series._init(values, as_time_period(time_period), times)
        return series

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        time_period: TimePeriod | TimeUnit,
        ds: str = "ds",
        y: str = "y",
    ) -> "TimeSeries":
        """Create a series from a dataframe with a date column and a value column.

        Parameters
        ----------
        df : pd.DataFrame
            A pandas dataframe that must at least have columns ``ds``
            (observation time) and ``y`` (value).
        time_period : TimePeriod | TimeUnit
            The period of time between observations.
        ds : str, default "ds"
            Name of the observation time column.
        y : str, default "y"
            Name of the value column.
        """
        require_not_none(df, "dataframe")
        data = df.sort_values(ds)
        return cls.from_observation_times(
            data[y].to_numpy(dtype=float), time_period, list(pd.to_datetime(data[ds]))
        )

    def _init(
        self,
        values: ValuesLike,
        time_period: TimePeriod,
        observation_times: list[pd.Timestamp],
    ) -> None:
        require_not_none(values, "values")
        data = np.array(values, dtype=float)
        if data.ndim != 1:
            raise InvalidArgumentError(
                f"The values must be one dimensional, but had shape {data.shape}.",
                {"shape": data.shape},
            )
        data.flags.writeable = False
        self._values = data
        self._n = len(data)
        self._time_period = time_period
        self._observation_times = tuple(observation_times)
        self._datetime_index = MappingProxyType(
            {time: i for i, time in enumerate(self._observation_times)}
        )

        if self._n > 0:
            self._mean = float(np.mean(data))
            self._sum = float(np.sum(data))
            self._sum_of_squares = float(np.dot(data, data))
            self._variance = float(np.var(data))
            self._median = float(np.median(data))
        else:
            self._mean = self._variance = self._median = float("nan")
            self._sum = self._sum_of_squares = 0.0
        self._std = float(np.sqrt(self._variance))

    def _derive(
        self,
        values: ValuesLike,
        observation_times: Sequence[pd.Timestamp] | None = None,
        time_period: TimePeriod | None = None,
    ) -> "TimeSeries":
        # Timestamps here are already parsed.
        series = TimeSeries.__new__(TimeSeries)
        series._init(
            values,
            self._time_period if time_period is None else time_period,
            list(self._observation_times if observation_times is None else observation_times),
        )
        return series

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the observation data."""
        return self._values

    @property
    def size(self) -> int:
        return self._n

    def __len__(self) -> int:
        return self._n

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    @property
    def time_period(self) -> TimePeriod:
        return self._time_period

    @property
    def observation_times(self) -> tuple[pd.Timestamp, ...]:
        return self._observation_times

    @property
    def datetime_index(self) -> Mapping[pd.Timestamp, int]:
        return self._datetime_index

    @property
    def start_time(self) -> pd.Timestamp:
        if self._n == 0:
            raise IndexError("An empty series has no start time.")
        return self._observation_times[0]

    @property
    def end_time(self) -> pd.Timestamp:
        if self._n == 0:
            raise IndexError("An empty series has no end time.")
        return self._observation_times[-1]

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def sum_of_squares(self) -> float:
        return self._sum_of_squares

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def std(self) -> float:
        return self._std

    @property
    def median(self) -> float:
        return self._median

    def _position(self, time: TimestampLike) -> int:
        key = parse_datetime(time)
        try:
            return self._datetime_index[key]
        except KeyError:
            raise NotFoundError(
                f"{key} is not an observation time of this series.", {"time": key}
            ) from None

    def at(self, key: int | TimestampLike) -> float:
        """The value at a position or at an observation time.

        Parameters
        ----------
        key : int | TimestampLike
            A 0-based position (negative positions count from the end) or an
            observation time.

        Raises
        ------
        IndexError
            If the position is out of range.
        NotFoundError
            If the time is not an observation time of this series.
        """
        if isinstance(key, (int, np.integer)):
            return float(self._values[key])
        return float(self._values[self._position(key)])

    def __getitem__(self, key: int | TimestampLike) -> float:
        return self.at(key)

    def next_time(self, steps: int = 1) -> pd.Timestamp:
        """The time ``steps`` periods after the last observation."""
        return self.end_time + self._time_period.offset(steps)

    # ------------------------------------------------------------------
    # Autocovariance and autocorrelation
    # ------------------------------------------------------------------

    def auto_covariance_at_lag(self, k: int) -> float:
        """The covariance of this series with itself at lag ``k``.

        Divides by ``n`` rather than ``n - k``. Recomputed on every call.

        Raises
        ------
        InvalidArgumentError
            If ``k`` is negative.
        """
        if k < 0:
            raise InvalidArgumentError(
                f"The lag, k, must be non-negative, but was {k}.", {"k": k}
            )
        if self._n == 0:
            return float("nan")
        deviations = self._values - self._mean
        if k >= self._n:
            return 0.0
        return float(np.dot(deviations[: self._n - k], deviations[k:]) / self._n)

    def auto_correlation_at_lag(self, k: int) -> float:
        """The correlation of this series with itself at lag ``k``.

        NaN when the series has zero variance.
        """
        variance = self.auto_covariance_at_lag(0)
        covariance = self.auto_covariance_at_lag(k)
        if variance == 0:
            return float("nan")
        return covariance / variance

    def auto_covariance_up_to_lag(self, k: int) -> np.ndarray:
        """Autocovariances at lags ``0`` through ``min(k, n - 1)``."""
        if k < 0:
            raise InvalidArgumentError(
                f"The lag, k, must be non-negative, but was {k}.", {"k": k}
            )
        return np.array(
            [self.auto_covariance_at_lag(i) for i in range(min(k + 1, self._n))]
        )

    def auto_correlation_up_to_lag(self, k: int) -> np.ndarray:
        """Autocorrelations at lags ``0`` through ``min(k, n - 1)``."""
        if k < 0:
            raise InvalidArgumentError(
                f"The lag, k, must be non-negative, but was {k}.", {"k": k}
            )
        return np.array(
            [self.auto_correlation_at_lag(i) for i in range(min(k + 1, self._n))]
        )

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def transform(self, box_cox_lambda: float) -> "TimeSeries":
        """Apply the Box-Cox transformation with the given parameter.

        A parameter of 0 is the natural logarithm; any other value is the
        power transform ``(x ** lambda - 1) / lambda``.

        Raises
        ------
        InvalidArgumentError
            If ``box_cox_lambda`` is outside ``[-1, 2]``.
        """
        _validate_box_cox_lambda(box_cox_lambda)
        return self._derive(boxcox(self._values, box_cox_lambda))

    def back_transform(self, box_cox_lambda: float) -> "TimeSeries":
        """Invert :meth:`transform` with the given parameter.

        Raises
        ------
        InvalidArgumentError
            If ``box_cox_lambda`` is outside ``[-1, 2]``.
        """
        _validate_box_cox_lambda(box_cox_lambda)
        return self._derive(inv_boxcox(self._values, box_cox_lambda))

    def moving_average(self, m: int) -> "TimeSeries":
        """A moving average of order ``m``.

        The result has ``n - m + 1`` values. For odd ``m`` each value sits at
        the centre of its window; for even ``m`` it sits just left of centre.

        Raises
        ------
        InvalidArgumentError
            If ``m`` is not between 1 and the length of the series.
        """
        if m < 1 or m > self._n:
            raise InvalidArgumentError(
                f"The moving average order must lie between 1 and {self._n}, "
                f"but was {m}.",
                {"m": m, "n": self._n},
            )
        c = m % 2
        k = (m - c) // 2
        average = sliding_window_view(self._values, m).sum(axis=1) / m
        times = self._observation_times[k + c - 1 : self._n - k]
        return self._derive(average, times)

    def centered_moving_average(self, m: int) -> "TimeSeries":
        """A moving average of order ``m`` if ``m`` is odd, else a 2 x ``m`` one."""
        if m % 2 == 1:
            return self.moving_average(m)
        first_average = self.moving_average(m)
        if first_average.size < 2:
            raise InvalidArgumentError(
                f"A centered moving average of order {m} needs more than "
                f"{self._n} observations.",
                {"m": m, "n": self._n},
            )
        k = m // 2
        times = self._observation_times[k : self._n - k]
        return self._derive(first_average.moving_average(2).values, times)

    def demean(self) -> "TimeSeries":
        """This series with its mean subtracted."""
        return self._derive(self._values - self._mean)

    def difference(self, lag: int = 1, times: int = 1) -> "TimeSeries":
        """Difference this series ``times`` times at the given lag.

        Each pass drops the first ``lag`` observation times.
        """
        diffed = difference_values(self._values, lag, times)
        return self._derive(diffed, self._observation_times[lag * times :])

    # ------------------------------------------------------------------
    # Element-wise arithmetic
    # ------------------------------------------------------------------

    def _other_values(self, other: "TimeSeries | ValuesLike") -> np.ndarray:
        require_not_none(other, "other series")
        values = other.values if isinstance(other, TimeSeries) else np.asarray(other, float)
        return values

    def _check_same_length(self, other: np.ndarray) -> None:
        if len(other) != self._n:
            raise InvalidArgumentError(
                f"The two series must have the same length, but had {self._n} "
                f"and {len(other)} observations.",
                {"n": self._n, "other_n": len(other)},
            )

    def minus(self, other: "TimeSeries | ValuesLike") -> "TimeSeries":
        """Subtract ``other`` element-wise. An empty ``other`` returns ``self``."""
        other_values = self._other_values(other)
        if len(other_values) == 0:
            return self
        self._check_same_length(other_values)
        return self._derive(self._values - other_values)

    def plus(self, other: "TimeSeries | ValuesLike") -> "TimeSeries":
        """Add ``other`` element-wise."""
        other_values = self._other_values(other)
        self._check_same_length(other_values)
        return self._derive(self._values + other_values)

    def times(self, other: "TimeSeries | ValuesLike") -> "TimeSeries":
        """Multiply by ``other`` element-wise."""
        other_values = self._other_values(other)
        self._check_same_length(other_values)
        return self._derive(self._values * other_values)

    def covariance(self, other: "TimeSeries | ValuesLike") -> float:
        """Population covariance with an equal-length series."""
        other_values = self._other_values(other)
        self._check_same_length(other_values)
        return float(np.mean((self._values - self._mean) * (other_values - other_values.mean())))

    def correlation(self, other: "TimeSeries | ValuesLike") -> float:
        """Pearson correlation with an equal-length series. NaN if either is constant."""
        other_values = self._other_values(other)
        self._check_same_length(other_values)
        scale = self._std * float(np.std(other_values))
        if scale == 0:
            return float("nan")
        return self.covariance(other_values) / scale

    # ------------------------------------------------------------------
    # Slicing and aggregation
    # ------------------------------------------------------------------

    def slice(self, start: int | TimestampLike, end: int | TimestampLike) -> "TimeSeries":
        """The observations from ``start`` through ``end``, both inclusive.

        Parameters
        ----------
        start, end : int | TimestampLike
            0-based positions, or observation times of this series.

        Raises
        ------
        InvalidArgumentError
            If the positions are out of range or ``start > end``.
        NotFoundError
            If a time is not an observation time of this series.
        """
        start_idx = start if isinstance(start, (int, np.integer)) else self._position(start)
        end_idx = end if isinstance(end, (int, np.integer)) else self._position(end)
        if not 0 <= start_idx <= end_idx < self._n:
            raise InvalidArgumentError(
                f"Cannot slice positions {start_idx} through {end_idx} of a series "
                f"with {self._n} observations.",
                {"start": start_idx, "end": end_idx, "n": self._n},
            )
        return self._derive(
            self._values[start_idx : end_idx + 1],
            self._observation_times[start_idx : end_idx + 1],
        )

    def time_slice(self, start: int, end: int) -> "TimeSeries":
        """The observations from ``start`` through ``end``, 1-based and inclusive."""
        return self.slice(start - 1, end - 1)

    def aggregate(self, time_period: TimePeriod | TimeUnit) -> "TimeSeries":
        """Sum consecutive observations up to a longer time period.

        Each aggregated observation is the sum of ``period`` consecutive
        values, where ``period`` is the whole number of times the current
        period fits into ``time_period``, and carries the observation time of
        the first value of its block. A trailing partial block is dropped.

        Raises
        ------
        InvalidArgumentError
            If ``time_period`` is shorter than the current period.
        """
        target = as_time_period(time_period)
        period = int(self._time_period.frequency_per(target))
        if period < 1:
            raise InvalidArgumentError(
                f"The given time period, {target}, was of a smaller magnitude than "
                f"the original time period, {self._time_period}. To aggregate a "
                "series, the time period argument must be of a larger magnitude "
                "than the original.",
                {"source": self._time_period, "target": target},
            )
        n_blocks = self._n // period
        if self._n % period:
            logger.warning(
                "Dropping %d trailing observations that do not fill a %s block",
                self._n % period,
                target,
            )
        blocks = self._values[: n_blocks * period].reshape(n_blocks, period)
        times = self._observation_times[: n_blocks * period : period]
        return self._derive(blocks.sum(axis=1), times, target)

    def aggregate_to_years(self) -> "TimeSeries":
        return self.aggregate(TimePeriod.one_year())

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_numpy(self) -> np.ndarray:
        """A writable copy of the observation data."""
        return self._values.copy()

    def tolist(self) -> list[float]:
        return self._values.tolist()

    def to_datetimes(self) -> list:
        """Observation times as plain :class:`datetime.datetime` objects."""
        return [time.to_pydatetime() for time in self._observation_times]

    def to_frame(self) -> pd.DataFrame:
        """A dataframe with columns ``ds`` (observation time, UTC) and ``y``."""
        return pd.DataFrame(
            {
                "ds": pd.to_datetime(list(self._observation_times), utc=True),
                "y": self._values.copy(),
            }
        )

    def plot(self, ax=None, title: str = "Time Series"):
        """Plot the observations. See :func:`tsforecast.plotting.plot_series`."""
        from tsforecast.plotting import plot_series

        return plot_series(self, ax=ax, title=title)

    def plot_acf(self, k: int, ax=None):
        """Plot autocorrelations up to lag ``k``. See :func:`tsforecast.plotting.plot_acf`."""
        from tsforecast.plotting import plot_acf

        return plot_acf(self, k, ax=ax)

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return (
            self._n == other._n
            and self._time_period == other._time_period
            and self._observation_times == other._observation_times
            and bool(np.array_equal(self._values, other._values))
        )

    def __hash__(self) -> int:
        return hash(
            (self._time_period, self._n, self._observation_times, tuple(self._values.tolist()))
        )

    def __repr__(self) -> str:
        return (
            f"TimeSeries(n={self._n}, period={self._time_period}, "
            f"start={self._observation_times[0] if self._n else None})"
        )

    def __str__(self) -> str:
        return (
            f"number of observations: {self._n}\n"
            f"mean: {self._mean:.2f}\n"
            f"std: {self._std:.2f}\n"
            f"period: {self._time_period}"
        )
