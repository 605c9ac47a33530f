"""
Exception hierarchy for PyTurnover.

All exceptions inherit from PyTurnoverError so callers can catch any
library-specific failure in one place. Errors are raised at the point the
precondition is violated and are never recovered locally.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Messages state the violated precondition with the actual value
    - Never catch and re-raise with less information
"""


class PyTurnoverError(Exception):
    """Base exception for all PyTurnover errors."""
    pass


class ValidationError(PyTurnoverError):
    """
    Input validation failed.

    Raised when user-provided inputs (arrays, tables, strings) fail
    validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    """
    pass


class ParseError(ValidationError):
    """
    A formatted value could not be parsed.

    Attributes:
        text: The offending input string
    """

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text


class IntegrationError(ValidationError):
    """
    Numerical integration was requested on an unusable grid.

    Attributes:
        n_points: Number of points supplied
    """

    def __init__(self, message: str, n_points: int | None = None):
        super().__init__(message)
        self.n_points = n_points


class DomainError(ValidationError):
    """
    Prediction requested outside what a fitted model supports.

    Raised for unseen category levels or evaluation times beyond the
    largest training time.

    Attributes:
        field: Covariate or quantity that is out of domain
        value: The offending value
    """

    def __init__(self, message: str, field: str | None = None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value
