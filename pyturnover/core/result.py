"""
Generic result container for all PyTurnover computations.

Every fit, score and comparison returns its payload inside a Result
envelope, so timing, warnings and backend provenance are reported the
same way whatever produced them.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, iterations, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Attributes:
        params: Domain-specific payload (coefficients, score table, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the routine that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ScoreParams(...),
        ...     info={'method': 'ipcw_brier', 'n_times': 42},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_brier',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
