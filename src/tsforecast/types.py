"""Type definitions for tsforecast.

This module provides type aliases used throughout the tsforecast package for
type hints and documentation.

Type Aliases
------------
TimestampLike : str | datetime | pd.Timestamp
    Anything that can be turned into an observation time.
ValuesLike : Sequence[float] | np.ndarray
    Anything that can be turned into a float64 value buffer.
CriticalDistribution : Literal["normal", "t"]
    Reference distribution for prediction interval critical values.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Literal, Union

import numpy as np
import pandas as pd

TimestampLike = Union[str, datetime, pd.Timestamp]
"""An observation time.

Strings are parsed as ISO-8601 date-times. A value without a UTC offset is
taken to be in UTC.
"""

ValuesLike = Union[Sequence[float], np.ndarray]
"""Observation values, copied into a float64 array on construction."""

CriticalDistribution = Literal["normal", "t"]
"""Reference distribution for the critical value of a prediction interval.

- "normal": Standard Gaussian quantile.
- "t": Student's t quantile with n - 1 degrees of freedom.
"""
