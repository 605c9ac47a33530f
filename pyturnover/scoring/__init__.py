"""
Scoring and model selection.

Public API:
    brier_score(model, design, times) -> ScoreSolution
    score_table(times, formatted) -> ScoreSolution
    strip_ci(text) -> float
    parse_ci(text) -> (point, lower, upper)
    format_ci(point, lower, upper) -> str
    trapezoid(times, values) -> float
    integrated_brier_score(score) -> float
    compare_ibs(scores) -> ComparisonSolution
    compare_models(models, design, times) -> ComparisonSolution
"""

from pyturnover.scoring._ci import format_ci, parse_ci, strip_ci
from pyturnover.scoring._integrate import trapezoid
from pyturnover.scoring.solvers import (
    brier_score,
    compare_ibs,
    compare_models,
    integrated_brier_score,
    score_table,
)
from pyturnover.scoring.solution import ComparisonSolution, ScoreSolution

__all__ = [
    "brier_score",
    "score_table",
    "strip_ci",
    "parse_ci",
    "format_ci",
    "trapezoid",
    "integrated_brier_score",
    "compare_ibs",
    "compare_models",
    "ScoreSolution",
    "ComparisonSolution",
]
