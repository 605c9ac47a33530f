"""
Solution wrapper for exploratory analysis.
"""

from __future__ import annotations

from pyturnover.core.result import Result
from pyturnover.eda._common import CovariateSummary, EDAParams


class EDASolution:
    """Overview of the turnover table."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[EDAParams]) -> None:
        self._result = _result

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events(self) -> int:
        return self._result.params.n_events

    @property
    def event_rate(self) -> float:
        return self._result.params.event_rate

    @property
    def n_duplicates(self) -> int:
        return self._result.params.n_duplicates

    @property
    def duration_quantiles(self) -> dict[str, float]:
        return dict(self._result.params.duration_quantiles)

    @property
    def km(self):
        """KMSolution for the whole table."""
        return self._result.params.km

    @property
    def median_survival(self) -> float | None:
        return self.km.median_survival

    @property
    def covariates(self) -> tuple[CovariateSummary, ...]:
        return self._result.params.covariates

    def covariate(self, name: str) -> CovariateSummary:
        for c in self.covariates:
            if c.name == name:
                return c
        raise KeyError(f"no summary for covariate {name!r}")

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def timing(self):
        return self._result.timing

    def summary(self) -> str:
        lines = ["Exploratory analysis", ""]
        lines.append(
            f"  n= {self.n_observations}, quits= {self.n_events} "
            f"({self.event_rate:.1%}), duplicates dropped= {self.n_duplicates}"
        )
        q = self.duration_quantiles
        lines.append(
            "  duration (months): "
            + ", ".join(f"{k}={v:.3g}" for k, v in q.items())
        )
        median = self.median_survival
        lines.append(
            f"  KM median tenure = {median:.4g}" if median is not None
            else "  KM median tenure = NA"
        )
        lines.append("")
        lines.append(
            f"  {'covariate':>12s}  {'levels':>6s}  {'chisq':>10s}  "
            f"{'df':>3s}  {'p':>10s}"
        )
        for c in sorted(self.covariates, key=lambda s: s.p_value):
            lines.append(
                f"  {c.name:>12s}  {len(c.levels):6d}  {c.statistic:10.3f}  "
                f"{c.df:3d}  {c.p_value:10.4g}"
            )
        for w in self.warnings:
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EDASolution(n={self.n_observations}, "
            f"events={self.n_events}, "
            f"covariates={len(self.covariates)})"
        )
