"""
Calculation Errors

Every solver validates its inputs at the point of the call and raises one of
these before producing any result. They subclass ValueError so callers that
already catch ValueError keep working.
"""


class InvalidParameterError(ValueError):
    """Base class for rejected solver inputs."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        self.message = message
        super().__init__(f"{parameter}: {message}")


class InvalidRateError(InvalidParameterError):
    """Rate is NaN, infinite, or below -1.0 (-100%)."""


class InvalidValueError(InvalidParameterError):
    """A value or period count is non-finite, non-numeric, or negative."""


class UnsatisfiableConstraintError(InvalidParameterError):
    """No rate, period count, or value can satisfy the equation for these inputs."""
