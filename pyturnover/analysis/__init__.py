"""
End-to-end turnover study.

Public API:
    run_analysis(data, config) -> AnalysisReport
    AnalysisConfig
    typical_profile(df) -> dict
    predict_profiles(model, encoder, base, field, levels, times) -> ProfileSolution
"""

from pyturnover.analysis.config import AnalysisConfig
from pyturnover.analysis.profiles import frequent_levels, predict_profiles, typical_profile
from pyturnover.analysis.solution import AnalysisReport, ProfileSolution
from pyturnover.analysis.solvers import run_analysis

__all__ = [
    "run_analysis",
    "AnalysisConfig",
    "AnalysisReport",
    "typical_profile",
    "frequent_levels",
    "predict_profiles",
    "ProfileSolution",
]
