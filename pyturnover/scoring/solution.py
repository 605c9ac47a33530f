"""
Solution wrappers for scoring results.
"""

from __future__ import annotations

import pandas as pd

from pyturnover.core.result import Result
from pyturnover.scoring._common import ComparisonParams, ScoreParams
from pyturnover.scoring._integrate import normalized_trapezoid, trapezoid


class ScoreSolution:
    """Time-dependent Brier score table."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[ScoreParams]) -> None:
        self._result = _result

    @property
    def time(self):
        return self._result.params.time

    @property
    def brier(self):
        return self._result.params.brier

    @property
    def se(self):
        return self._result.params.se

    @property
    def lower(self):
        return self._result.params.lower

    @property
    def upper(self):
        return self._result.params.upper

    @property
    def formatted(self) -> tuple[str, ...]:
        return self._result.params.formatted

    @property
    def conf_level(self):
        return self._result.params.conf_level

    @property
    def model_name(self):
        return self._result.params.model_name

    @property
    def n_observations(self):
        return self._result.params.n_observations

    @property
    def n_times(self) -> int:
        return len(self.time)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    def area(self) -> float:
        """Raw trapezoidal area under the Brier curve."""
        return trapezoid(self.time, self.brier)

    def integrated(self) -> float:
        """Integrated Brier Score: area divided by the final time."""
        return normalized_trapezoid(self.time, self.brier)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "time": self.time,
            "brier": self.brier,
            "lower": self.lower,
            "upper": self.upper,
            "formatted": list(self.formatted),
        })

    def summary(self, max_rows: int = 20) -> str:
        name = self.model_name or "model"
        lines = [f"Brier score: {name}", ""]
        if self.n_observations is not None:
            lines.append(f"  n= {self.n_observations}, times= {self.n_times}")
        lines.append(f"  {'time':>8s}  {'Brier [CI]':>24s}")
        m = self.n_times
        for i in range(min(m, max_rows)):
            lines.append(f"  {self.time[i]:8.4g}  {self.formatted[i]:>24s}")
        if m > max_rows:
            lines.append(f"  ... ({m - max_rows} more rows)")
        if m >= 2:
            lines.append("")
            lines.append(f"  IBS= {self.integrated():.4f}")
        for w in self.warnings:
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ScoreSolution(model={self.model_name!r}, times={self.n_times})"


class ComparisonSolution:
    """Model comparison by Integrated Brier Score."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[ComparisonParams]) -> None:
        self._result = _result

    @property
    def names(self) -> tuple[str, ...]:
        return self._result.params.names

    @property
    def ibs(self) -> dict[str, float]:
        params = self._result.params
        return dict(zip(params.names, params.ibs))

    @property
    def selected(self) -> str:
        return self._result.params.selected

    @property
    def tied(self) -> tuple[str, ...]:
        return self._result.params.tied

    @property
    def tie_tolerance(self) -> float:
        return self._result.params.tie_tolerance

    @property
    def scores(self) -> dict:
        """Per-model ScoreSolution (empty when only IBS values were compared)."""
        return dict(self._result.params.scores)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def timing(self):
        return self._result.timing

    def summary(self) -> str:
        lines = ["Model comparison (Integrated Brier Score, lower is better)", ""]
        for name, value in self.ibs.items():
            mark = "*" if name == self.selected else " "
            lines.append(f"  {mark} {name:>16s}  {value:.4f}")
        lines.append("")
        if len(self.tied) > 1:
            lines.append(
                f"  Tie within {self.tie_tolerance:g} between "
                f"{', '.join(self.tied)}; first listed wins"
            )
        lines.append(f"  Selected: {self.selected}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ComparisonSolution(selected={self.selected!r}, ibs={self.ibs})"
