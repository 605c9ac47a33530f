"""
PyTurnover: survival analysis of employee turnover.

Fits a Cox proportional hazards model and a random survival forest to
tenure data, scores both with the IPCW Brier score on a held-out split,
and keeps the model with the lowest integrated Brier score.

Submodules:
    survival: Kaplan-Meier, log-rank, Cox PH, random survival forest
    scoring: Brier score, CI stripping, trapezoidal IBS, model comparison
    data: Loading, encoding and splitting the turnover table
    eda: Exploratory summaries
    analysis: The end-to-end study
"""

__version__ = "0.1.0"

from pyturnover import survival
from pyturnover import scoring
from pyturnover import data
from pyturnover import eda
from pyturnover import analysis

__all__ = [
    "__version__",
    "survival",
    "scoring",
    "data",
    "eda",
    "analysis",
]
