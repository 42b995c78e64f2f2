"""Probability distributions used by the forecasting models.

The models only need two things from a distribution: random draws (to
simulate series) and the quantile function (to calibrate prediction
intervals). Both are delegated to :mod:`scipy.stats`.

Classes
-------
Distribution
    Protocol every distribution satisfies.
Normal
    Gaussian distribution with a given mean and standard deviation.
StudentsT
    Student's t distribution with a given number of degrees of freedom.
"""

from typing import Protocol, runtime_checkable

import numpy as np
from scipy import stats

from tsforecast.exceptions import InvalidArgumentError


@runtime_checkable
class Distribution(Protocol):
    """Minimal protocol for a univariate continuous distribution."""

    def rand(self) -> float:
        """Draw a single random value."""

    def sample(self, n: int) -> np.ndarray:
        """Draw ``n`` independent random values."""

    def quantile(self, prob: float) -> float:
        """Inverse of the cumulative distribution function at ``prob``."""


class _ScipyDistribution:
    """Shared plumbing for distributions backed by a frozen scipy object."""

    def __init__(self, frozen, seed: int | np.random.Generator | None):
        self._frozen = frozen
        self._rng = np.random.default_rng(seed)

    def rand(self) -> float:
        return float(self._frozen.rvs(random_state=self._rng))

    def sample(self, n: int) -> np.ndarray:
        if n < 0:
            raise InvalidArgumentError(
                f"The sample size must be non-negative, but was {n}.", {"n": n}
            )
        return np.asarray(self._frozen.rvs(size=n, random_state=self._rng), float)

    def quantile(self, prob: float) -> float:
        if prob < 0 or prob > 1:
            raise InvalidArgumentError(
                f"The probability must lie between 0 and 1, but was {prob}.",
                {"prob": prob},
            )
        return float(self._frozen.ppf(prob))


class Normal(_ScipyDistribution):
    """A Gaussian distribution.

    Parameters
    ----------
    mean : float, default 0.0
        The location of the distribution.
    sigma : float, default 1.0
        The standard deviation. Must be positive.
    seed : int | np.random.Generator | None, default None
        Seed for the random draws. Use a fixed seed for reproducible
        simulations.

    Examples
    --------
    >>> Normal().quantile(0.975)
    1.959963984540054
    """

    def __init__(
        self,
        mean: float = 0.0,
        sigma: float = 1.0,
        seed: int | np.random.Generator | None = None,
    ):
        if not sigma > 0:
            raise InvalidArgumentError(
                f"The standard deviation must be positive, but was {sigma}.",
                {"sigma": sigma},
            )
        self.mean = mean
        self.sigma = sigma
        super().__init__(stats.norm(loc=mean, scale=sigma), seed)

    def __repr__(self) -> str:
        return f"Normal(mean={self.mean}, sigma={self.sigma})"


class StudentsT(_ScipyDistribution):
    """Student's t distribution centred at zero.

    Parameters
    ----------
    df : float
        Degrees of freedom. Must be positive.
    seed : int | np.random.Generator | None, default None
        Seed for the random draws.
    """

    def __init__(self, df: float, seed: int | np.random.Generator | None = None):
        if not df > 0:
            raise InvalidArgumentError(
                f"The degrees of freedom must be positive, but was {df}.", {"df": df}
            )
        self.df = df
        super().__init__(stats.t(df), seed)

    def __repr__(self) -> str:
        return f"StudentsT(df={self.df})"
