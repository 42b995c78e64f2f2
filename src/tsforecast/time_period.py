"""Units of time and regular periods between observations.

Classes
-------
TimeUnit
    A time granularity with a calendar step and a fixed nominal length.
TimePeriod
    A unit of time repeated an integer number of times, e.g. "3 months".
"""

from dataclasses import dataclass
from enum import Enum

import pandas as pd

from tsforecast.exceptions import InvalidArgumentError

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_DAY = 86_400 * _NANOS_PER_SECOND
# A year is 365.2425 days, the mean length of a Gregorian year.
_NANOS_PER_YEAR = 31_556_952 * _NANOS_PER_SECOND
_NANOS_PER_MONTH = _NANOS_PER_YEAR // 12


class TimeUnit(Enum):
    """A unit of time.

    Each member carries the keyword of the :class:`pandas.DateOffset` it
    advances, how many of those it advances per unit, and its nominal length
    in nanoseconds. Calendar arithmetic uses the offset; period comparisons
    use the nominal length.
    """

    CENTURY = ("years", 100, 100 * _NANOS_PER_YEAR)
    DECADE = ("years", 10, 10 * _NANOS_PER_YEAR)
    YEAR = ("years", 1, _NANOS_PER_YEAR)
    QUARTER = ("months", 3, 3 * _NANOS_PER_MONTH)
    MONTH = ("months", 1, _NANOS_PER_MONTH)
    WEEK = ("weeks", 1, 7 * _NANOS_PER_DAY)
    DAY = ("days", 1, _NANOS_PER_DAY)
    HOUR = ("hours", 1, 3_600 * _NANOS_PER_SECOND)
    MINUTE = ("minutes", 1, 60 * _NANOS_PER_SECOND)
    SECOND = ("seconds", 1, _NANOS_PER_SECOND)
    MILLISECOND = ("microseconds", 1_000, 1_000_000)
    MICROSECOND = ("microseconds", 1, 1_000)
    NANOSECOND = ("nanoseconds", 1, 1)

    def __init__(self, offset_field: str, unit_length: int, nanos: int):
        self.offset_field = offset_field
        self.unit_length = unit_length
        self.nanos = nanos

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class TimePeriod:
    """A period of time between two consecutive observations.

    Parameters
    ----------
    unit : TimeUnit
        The base unit of time.
    length : int, default 1
        How many units make up one period. Must be at least 1.

    Examples
    --------
    >>> quarterly = TimePeriod(TimeUnit.MONTH, 3)
    >>> quarterly.frequency_per(TimePeriod.one_year())
    4.0
    >>> str(quarterly)
    '3 months'
    """

    unit: TimeUnit
    length: int = 1

    def __post_init__(self):
        if not isinstance(self.unit, TimeUnit):
            raise InvalidArgumentError(
                f"The unit must be a TimeUnit, but was {self.unit!r}.",
                {"unit": self.unit},
            )
        if self.length < 1:
            raise InvalidArgumentError(
                f"The period length must be at least 1, but was {self.length}.",
                {"length": self.length},
            )

    def total_duration(self) -> int:
        """Nominal length of this period in nanoseconds."""
        return self.unit.nanos * self.length

    def frequency_per(self, other: "TimePeriod") -> float:
        """The number of times this period occurs within ``other``.

        Parameters
        ----------
        other : TimePeriod
            The enclosing period.

        Returns
        -------
        float
            ``other.total_duration() / self.total_duration()``. Values below 1
            mean ``other`` is the shorter period.
        """
        return other.total_duration() / self.total_duration()

    def offset(self, times: int = 1) -> pd.DateOffset:
        """The calendar step spanning ``times`` of this period."""
        amount = self.unit.unit_length * self.length * times
        return pd.DateOffset(**{self.unit.offset_field: amount})

    def __str__(self) -> str:
        label = self.unit.label
        if self.unit is TimeUnit.CENTURY and self.length != 1:
            return f"{self.length} centuries"
        return f"{self.length} {label}" + ("" if self.length == 1 else "s")

    @classmethod
    def one_century(cls) -> "TimePeriod":
        return cls(TimeUnit.CENTURY)

    @classmethod
    def one_decade(cls) -> "TimePeriod":
        return cls(TimeUnit.DECADE)

    @classmethod
    def one_year(cls) -> "TimePeriod":
        return cls(TimeUnit.YEAR)

    @classmethod
    def one_quarter(cls) -> "TimePeriod":
        return cls(TimeUnit.QUARTER)

    @classmethod
    def one_month(cls) -> "TimePeriod":
        return cls(TimeUnit.MONTH)

    @classmethod
    def one_week(cls) -> "TimePeriod":
        return cls(TimeUnit.WEEK)

    @classmethod
    def one_day(cls) -> "TimePeriod":
        return cls(TimeUnit.DAY)

    @classmethod
    def one_hour(cls) -> "TimePeriod":
        return cls(TimeUnit.HOUR)

    @classmethod
    def half_hour(cls) -> "TimePeriod":
        return cls(TimeUnit.MINUTE, 30)

    @classmethod
    def one_minute(cls) -> "TimePeriod":
        return cls(TimeUnit.MINUTE)

    @classmethod
    def one_second(cls) -> "TimePeriod":
        return cls(TimeUnit.SECOND)

    @classmethod
    def one_millisecond(cls) -> "TimePeriod":
        return cls(TimeUnit.MILLISECOND)

    @classmethod
    def one_microsecond(cls) -> "TimePeriod":
        return cls(TimeUnit.MICROSECOND)

    @classmethod
    def one_nanosecond(cls) -> "TimePeriod":
        return cls(TimeUnit.NANOSECOND)


def as_time_period(period: "TimePeriod | TimeUnit") -> TimePeriod:
    """Promote a bare :class:`TimeUnit` to a single-unit :class:`TimePeriod`."""
    if isinstance(period, TimeUnit):
        return TimePeriod(period)
    if isinstance(period, TimePeriod):
        return period
    raise InvalidArgumentError(
        f"Expected a TimePeriod or TimeUnit, but got {period!r}.",
        {"period": period},
    )
