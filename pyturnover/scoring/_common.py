"""
Parameter payloads for scoring results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from numpy.typing import NDArray


@dataclass(frozen=True)
class ScoreParams:
    """Brier score table: one row per evaluation time, times strictly increasing."""

    time: NDArray                # (m,)
    brier: NDArray               # (m,) point estimates
    se: NDArray | None           # (m,) None when rebuilt from text
    lower: NDArray               # (m,)
    upper: NDArray               # (m,)
    formatted: tuple[str, ...]   # "<point> [<lower>;<upper>]"
    conf_level: float | None
    n_observations: int | None
    n_events: int | None
    model_name: str | None


@dataclass(frozen=True)
class ComparisonParams:
    """Integrated Brier Scores of competing models and the selection."""

    names: tuple[str, ...]       # candidate order as supplied
    ibs: tuple[float, ...]
    selected: str
    tied: tuple[str, ...]        # candidates within tie_tolerance of the best
    tie_tolerance: float
    scores: dict[str, Any]       # name -> ScoreSolution (empty for compare_ibs)
