"""Real numbers and closed intervals for prediction interval arithmetic."""

import cmath
import math
from dataclasses import dataclass
from functools import total_ordering

from tsforecast.exceptions import InvalidStateError, require_not_none


@total_ordering
@dataclass(frozen=True)
class Real:
    """An immutable real number."""

    value: float

    @classmethod
    def of(cls, value: float) -> "Real":
        return cls(float(value))

    @classmethod
    def zero(cls) -> "Real":
        return cls(0.0)

    def plus(self, other: "Real") -> "Real":
        return Real(self.value + other.value)

    def minus(self, other: "Real") -> "Real":
        return Real(self.value - other.value)

    def times(self, other: "Real") -> "Real":
        return Real(self.value * other.value)

    def divided_by(self, other: "Real") -> "Real":
        return Real(self.value / other.value)

    def sqrt(self) -> "Real":
        """The principal square root.

        Raises
        ------
        InvalidStateError
            If this number is negative. Use :meth:`complex_sqrt` instead.
        """
        if self.value < 0:
            raise InvalidStateError(
                f"The square root of the negative number {self.value} is not real.",
                {"value": self.value},
            )
        return Real(math.sqrt(self.value))

    def complex_sqrt(self) -> complex:
        return cmath.sqrt(self.value)

    def squared(self) -> "Real":
        return Real(self.value * self.value)

    def cubed(self) -> "Real":
        return Real(self.value * self.value * self.value)

    def additive_inverse(self) -> "Real":
        return Real(-self.value)

    def conjugate(self) -> "Real":
        return self

    def abs(self) -> float:
        return abs(self.value)

    def __float__(self) -> float:
        return self.value

    def __lt__(self, other: "Real") -> bool:
        require_not_none(other, "other number")
        if not isinstance(other, Real):
            return NotImplemented
        return self.value < other.value


@dataclass(frozen=True)
class Interval:
    """A closed interval of the real line.

    The endpoints may be given in either order; ``lower`` and ``upper`` are
    kept as given and :meth:`contains` works regardless.
    """

    lower: float
    upper: float

    def __post_init__(self):
        # Accept Real endpoints as well as plain floats.
        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))

    @property
    def lower_real(self) -> Real:
        return Real(self.lower)

    @property
    def upper_real(self) -> Real:
        return Real(self.upper)

    @property
    def width(self) -> float:
        return abs(self.upper - self.lower)

    def contains(self, value: float) -> bool:
        low, high = sorted((self.lower, self.upper))
        return low <= value <= high

    def doesnt_contain(self, value: float) -> bool:
        return not self.contains(value)

    def endpoints_equal(self, epsilon: float = 0.0) -> bool:
        """Whether the endpoints differ by no more than ``epsilon``."""
        return abs(self.upper - self.lower) <= epsilon
