"""
Solution wrappers for profile predictions and the full report.
"""

from __future__ import annotations

from pyturnover.core.result import Result
from pyturnover.analysis._common import ProfileParams, ReportParams


class ProfileSolution:
    """Survival of otherwise-identical employees across one covariate."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[ProfileParams]) -> None:
        self._result = _result

    @property
    def field(self) -> str:
        return self._result.params.field

    @property
    def levels(self) -> tuple[str, ...]:
        return self._result.params.levels

    @property
    def base(self) -> dict:
        return dict(self._result.params.base)

    @property
    def times(self):
        return self._result.params.times

    @property
    def survival(self):
        """(levels, times) survival probabilities."""
        return self._result.params.survival

    @property
    def median(self) -> dict[str, float | None]:
        """Median tenure per level; None when S(t) stays above 0.5."""
        params = self._result.params
        return dict(zip(params.levels, params.median))

    @property
    def model_name(self):
        return self._result.params.model_name

    def survival_for(self, level: str):
        return self.survival[self.levels.index(level)]

    def summary(self) -> str:
        name = self.model_name or "model"
        lines = [f"Individual predictions ({name}), varying {self.field}", ""]
        header = "".join(f"S({t:g})".rjust(10) for t in self.times)
        lines.append(f"  {self.field:>16s}{header}  {'median':>8s}")
        for i, level in enumerate(self.levels):
            row = "".join(f"{s:10.3f}" for s in self.survival[i])
            med = self._result.params.median[i]
            med_str = f"{med:8.3g}" if med is not None else f"{'NA':>8s}"
            lines.append(f"  {level[:16]:>16s}{row}  {med_str}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ProfileSolution(field={self.field!r}, levels={self.levels})"


class AnalysisReport:
    """Everything one run_analysis() call produced."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[ReportParams]) -> None:
        self._result = _result

    @property
    def config(self):
        return self._result.params.config

    @property
    def eda(self):
        return self._result.params.eda

    @property
    def partition(self):
        return self._result.params.partition

    @property
    def encoder(self):
        return self._result.params.encoder

    @property
    def models(self) -> dict:
        return dict(self._result.params.models)

    @property
    def cox(self):
        return self._result.params.models["cox"]

    @property
    def forest(self):
        return self._result.params.models["forest"]

    @property
    def comparison(self):
        return self._result.params.comparison

    @property
    def selected(self) -> str:
        return self.comparison.selected

    @property
    def chosen_model(self):
        return self._result.params.models[self.selected]

    @property
    def eval_times(self):
        return self._result.params.eval_times

    @property
    def profiles(self):
        return self._result.params.profiles

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def timing(self):
        return self._result.timing

    def summary(self) -> str:
        part = self.partition
        sections = [
            self.eda.summary(),
            (
                f"Stratified split: train n= {part.n_train}, test n= {part.n_test} "
                f"(test_size= {part.test_size:g}, seed= {part.random_state})"
            ),
            self.cox.summary(),
            self.forest.summary(),
            self.comparison.summary(),
            self.profiles.summary(),
        ]
        if self.warnings:
            sections.append("\n".join(f"Warning: {w}" for w in self.warnings))
        return "\n\n".join(sections)

    def __repr__(self) -> str:
        return (
            f"AnalysisReport(n={self.eda.n_observations}, "
            f"selected={self.selected!r})"
        )
