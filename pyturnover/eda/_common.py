"""
Parameter payloads for exploratory analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CovariateSummary:
    """Quit rates by level of one categorical covariate, with a log-rank test."""

    name: str
    levels: tuple[str, ...]
    counts: tuple[int, ...]
    event_rates: tuple[float, ...]
    statistic: float
    df: int
    p_value: float


@dataclass(frozen=True)
class EDAParams:
    n_observations: int
    n_events: int
    event_rate: float
    n_duplicates: int
    duration_quantiles: dict[str, float]   # min, 25%, 50%, 75%, max
    km: Any                                 # KMSolution of the whole table
    covariates: tuple[CovariateSummary, ...]
