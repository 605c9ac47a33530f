"""
Exploratory analysis.

Public API:
    explore(df) -> EDASolution
"""

from pyturnover.eda.solvers import explore
from pyturnover.eda.solution import EDASolution
from pyturnover.eda._common import CovariateSummary

__all__ = ["explore", "EDASolution", "CovariateSummary"]
