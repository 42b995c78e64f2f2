"""Dataset loading and generation utilities for tsforecast examples.

Real-world Datasets
-------------------
- `load_elecsales()`: Annual South Australian electricity sales (1989-2008), bundled
- `load_air_passengers()`: Classic monthly airline passenger data (1949-1960), downloaded

Synthetic Datasets
------------------
- `generate_seasonal_series()`: Trend + seasonal cycle + Gaussian noise

Examples
--------
>>> from tsforecast.datasets import load_elecsales, generate_seasonal_series
>>>
>>> sales = load_elecsales()
>>> synthetic = generate_seasonal_series(120, seed=42)
"""

from tsforecast.datasets.loaders import load_air_passengers, load_elecsales
from tsforecast.datasets.synthetic import generate_seasonal_series

__all__ = [
    "load_elecsales",
    "load_air_passengers",
    "generate_seasonal_series",
]
