"""Exceptions raised by tsforecast.

Every error is raised eagerly at the start of the call that violates a
precondition. Each exception also derives from the closest builtin so that
callers can catch either the tsforecast type or the builtin one.

Classes
-------
TsForecastError
    Base class for all tsforecast errors.
InvalidArgumentError
    A numeric parameter is out of range or two inputs are incompatible.
NotFoundError
    A lookup by timestamp did not match an observation time.
NullReferenceError
    A required object argument was ``None``.
InvalidStateError
    The operation is undefined for the current data.
"""

from typing import Any


class TsForecastError(Exception):
    """Base exception for all tsforecast errors.

    Attributes
    ----------
    message : str
        Human readable error message.
    context : dict[str, Any]
        The offending values, for debugging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message


class InvalidArgumentError(TsForecastError, ValueError):
    """Out-of-range parameter or mismatched inputs."""


class NotFoundError(TsForecastError, KeyError):
    """Lookup by a timestamp that is not an observation time."""

    # KeyError quotes its argument in str(); keep the plain message.
    __str__ = TsForecastError.__str__


class NullReferenceError(TsForecastError, TypeError):
    """A required argument was ``None``."""


class InvalidStateError(TsForecastError, RuntimeError):
    """Operation undefined for the current data."""


def require_not_none(value: Any, name: str) -> None:
    """Raise :class:`NullReferenceError` if ``value`` is ``None``."""
    if value is None:
        raise NullReferenceError(f"The {name} must not be None.")
