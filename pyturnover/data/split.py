"""
Stratified train/test partition.

The split preserves the event (quit) rate in both parts; it is done once
per analysis and the parts are never modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import train_test_split

from pyturnover.core.exceptions import ValidationError
from pyturnover.data._schema import DURATION, EVENT
from pyturnover.data.encoding import CovariateEncoder
from pyturnover.survival.design import SurvivalDesign


@dataclass(frozen=True)
class Partition:
    """Disjoint, exhaustive train/test split of the turnover table."""

    train: pd.DataFrame
    test: pd.DataFrame
    test_size: float
    random_state: int | None

    @property
    def n_train(self) -> int:
        return len(self.train)

    @property
    def n_test(self) -> int:
        return len(self.test)

    def designs(self, encoder: CovariateEncoder) -> tuple[SurvivalDesign, SurvivalDesign]:
        """Fit ``encoder`` on the training rows and build both designs."""
        X_train = encoder.fit_transform(self.train)
        X_test = encoder.transform(self.test)
        names = encoder.feature_names
        train = SurvivalDesign.for_survival(
            self.train[DURATION], self.train[EVENT], X_train, feature_names=names,
        )
        test = SurvivalDesign.for_survival(
            self.test[DURATION], self.test[EVENT], X_test, feature_names=names,
        )
        return train, test


def stratified_split(
    df: pd.DataFrame,
    *,
    test_size: float = 0.2,
    random_state: int | None = None,
) -> Partition:
    """Split rows into train/test, stratified on the event indicator.

    Raises
    ------
    ValidationError
        test_size outside (0, 1), or too few rows in a stratum.
    """
    if not 0 < test_size < 1:
        raise ValidationError(f"test_size must be in (0, 1), got {test_size}")

    counts = df[EVENT].value_counts()
    if len(counts) < 2 or counts.min() < 2:
        raise ValidationError(
            f"stratified split needs at least 2 quits and 2 censored rows, "
            f"got {counts.to_dict()}"
        )

    train, test = train_test_split(
        df,
        test_size=test_size,
        stratify=df[EVENT],
        random_state=random_state,
    )
    return Partition(
        train=train.reset_index(drop=True),
        test=test.reset_index(drop=True),
        test_size=test_size,
        random_state=random_state,
    )
