"""
Settings for one run of the turnover analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pyturnover.core.exceptions import ValidationError
from pyturnover.data._schema import CATEGORICAL


@dataclass(frozen=True)
class AnalysisConfig:
    """Every knob of run_analysis(), validated on construction.

    Attributes:
        test_size: Held-out fraction of the stratified split
        random_state: Seed for the split and the forest
        ties: Cox tie handling
        penalizer: Cox ridge penalty
        n_estimators, min_samples_split, min_samples_leaf, max_features:
            Random survival forest settings
        n_jobs: Parallel jobs for the forest
        censoring: Which partition estimates the censoring distribution
        conf_level: Coverage of the Brier score intervals
        tie_tolerance: IBS differences at or below this are ties (Cox wins)
        profile_field: Categorical covariate varied across profiles
        profile_levels: Levels to predict for; None means the two most
            frequent levels in the training data
        horizons: Months at which profile survival is reported
    """

    test_size: float = 0.2
    random_state: int | None = 42
    ties: Literal["efron", "breslow"] = "efron"
    penalizer: float = 0.0
    n_estimators: int = 300
    min_samples_split: int = 10
    min_samples_leaf: int = 15
    max_features: int | float | str | None = "sqrt"
    n_jobs: int | None = None
    censoring: Literal["test", "train"] = "test"
    conf_level: float = 0.95
    tie_tolerance: float = 0.0
    profile_field: str = "transport"
    profile_levels: tuple[str, ...] | None = None
    horizons: tuple[float, ...] = (6.0, 12.0, 24.0, 36.0)

    def __post_init__(self):
        if not 0 < self.test_size < 1:
            raise ValidationError(f"test_size must be in (0, 1), got {self.test_size}")
        if self.ties not in ("efron", "breslow"):
            raise ValidationError(f"ties must be 'efron' or 'breslow', got '{self.ties}'")
        if self.penalizer < 0:
            raise ValidationError(f"penalizer must be non-negative, got {self.penalizer}")
        if self.n_estimators < 1:
            raise ValidationError(f"n_estimators must be >= 1, got {self.n_estimators}")
        if self.censoring not in ("test", "train"):
            raise ValidationError(
                f"censoring must be 'test' or 'train', got '{self.censoring}'"
            )
        if not 0 < self.conf_level < 1:
            raise ValidationError(f"conf_level must be in (0, 1), got {self.conf_level}")
        if self.tie_tolerance < 0:
            raise ValidationError(
                f"tie_tolerance must be non-negative, got {self.tie_tolerance}"
            )
        if self.profile_field not in CATEGORICAL:
            raise ValidationError(
                f"profile_field must be one of {CATEGORICAL}, got '{self.profile_field}'"
            )
        if self.profile_levels is not None and len(self.profile_levels) == 0:
            raise ValidationError("profile_levels must name at least one level")
        if len(self.horizons) == 0 or any(h < 0 for h in self.horizons):
            raise ValidationError(
                f"horizons must be non-empty and non-negative, got {self.horizons}"
            )
