"""
Parameter payloads for analysis results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from numpy.typing import NDArray


@dataclass(frozen=True)
class ProfileParams:
    """Survival predictions for profiles that differ in one covariate."""

    field: str
    levels: tuple[str, ...]
    base: dict[str, Any]          # covariates held fixed
    times: NDArray                # (m,) reporting horizons
    survival: NDArray             # (k, m) one row per level
    median: tuple[float | None, ...]
    model_name: str | None


@dataclass(frozen=True)
class ReportParams:
    config: Any                   # AnalysisConfig
    eda: Any                      # EDASolution
    partition: Any                # Partition
    encoder: Any                  # CovariateEncoder
    models: dict[str, Any]        # name -> fitted SurvivalPredictor
    comparison: Any               # ComparisonSolution
    eval_times: NDArray
    profiles: Any                 # ProfileSolution
