"""
Survival analysis.

Public API:
    kaplan_meier(time, event) -> KMSolution
    survdiff(time, event, group) -> LogRankSolution
    coxph(time, event, X) -> CoxSolution
    survival_forest(time, event, X) -> ForestSolution
"""

from pyturnover.survival.design import SurvivalDesign
from pyturnover.survival.solvers import coxph, kaplan_meier, survdiff, survival_forest
from pyturnover.survival.solution import (
    CoxSolution,
    ForestSolution,
    KMSolution,
    LogRankSolution,
)

__all__ = [
    "SurvivalDesign",
    "kaplan_meier",
    "survdiff",
    "coxph",
    "survival_forest",
    "KMSolution",
    "LogRankSolution",
    "CoxSolution",
    "ForestSolution",
]
