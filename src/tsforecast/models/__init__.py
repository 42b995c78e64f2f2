"""Forecasting models.

Classes
-------
Model, Forecast
    Protocols every model and forecast implements.
MeanModel, MeanForecast
    Constant-mean model with Student's t prediction intervals.
RandomWalk, RandomWalkForecast
    One-step persistence model with prediction intervals growing with the
    square root of the horizon.
"""

from tsforecast.models.base import DEFAULT_ALPHA, DEFAULT_STEPS, Forecast, Model
from tsforecast.models.mean import MeanForecast, MeanModel
from tsforecast.models.random_walk import RandomWalk, RandomWalkForecast

__all__ = [
    "Model",
    "Forecast",
    "MeanModel",
    "MeanForecast",
    "RandomWalk",
    "RandomWalkForecast",
    "DEFAULT_STEPS",
    "DEFAULT_ALPHA",
]
