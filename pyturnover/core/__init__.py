"""
Core infrastructure for PyTurnover.

Shared abstractions used by every subpackage (survival, scoring, data,
eda, analysis).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute.timing: Execution timing
"""

from pyturnover.core.result import Result
from pyturnover.core.exceptions import (
    PyTurnoverError,
    ValidationError,
    DimensionError,
    ParseError,
    IntegrationError,
    DomainError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyTurnoverError",
    "ValidationError",
    "DimensionError",
    "ParseError",
    "IntegrationError",
    "DomainError",
]
