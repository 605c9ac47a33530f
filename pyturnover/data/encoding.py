"""
Covariate encoding.

Categorical covariates are treatment-coded: one 0/1 column per level
except the first (sorted) level, named ``column[T.level]``. Numeric
covariates pass through unchanged. The level sets are frozen at fit time
so that training, scoring and individual profiles share one layout.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyturnover.core.exceptions import DomainError, ValidationError
from pyturnover.data._schema import CATEGORICAL, NUMERIC


class CovariateEncoder:
    """Treatment coding for the turnover covariates.

    Parameters
    ----------
    categorical : sequence of str
        Columns to dummy-code.
    numeric : sequence of str
        Columns used as-is.
    """

    def __init__(
        self,
        categorical: Sequence[str] = CATEGORICAL,
        numeric: Sequence[str] = NUMERIC,
    ) -> None:
        self.categorical = tuple(categorical)
        self.numeric = tuple(numeric)
        self.levels_: dict[str, tuple[str, ...]] | None = None

    @property
    def columns(self) -> tuple[str, ...]:
        return self.numeric + self.categorical

    def fit(self, df: pd.DataFrame) -> CovariateEncoder:
        self._check_columns(df)
        levels = {}
        for col in self.categorical:
            found = tuple(sorted(df[col].astype(str).unique()))
            if len(found) == 0:
                raise ValidationError(f"column {col!r} has no levels")
            levels[col] = found
        self.levels_ = levels
        return self

    @property
    def feature_names(self) -> tuple[str, ...]:
        levels = self._fitted_levels()
        names = list(self.numeric)
        for col in self.categorical:
            names.extend(f"{col}[T.{level}]" for level in levels[col][1:])
        return tuple(names)

    def transform(self, df: pd.DataFrame) -> NDArray:
        """(n, p) float matrix in feature_names order.

        Raises
        ------
        DomainError
            A categorical value not seen during fit.
        """
        levels = self._fitted_levels()
        self._check_columns(df)

        blocks = [df[list(self.numeric)].to_numpy(dtype=np.float64)]
        for col in self.categorical:
            values = df[col].astype(str).to_numpy()
            unknown = sorted(set(values) - set(levels[col]))
            if unknown:
                raise DomainError(
                    f"column {col!r} has levels not seen in training: {unknown}",
                    field=col, value=unknown[0],
                )
            blocks.append(
                (values[:, np.newaxis] == np.asarray(levels[col][1:])[np.newaxis, :])
                .astype(np.float64)
            )
        return np.hstack(blocks) if blocks else np.empty((len(df), 0))

    def known_rows(self, df: pd.DataFrame) -> NDArray:
        """Boolean mask of rows whose categorical levels were all seen in fit."""
        levels = self._fitted_levels()
        mask = np.ones(len(df), dtype=bool)
        for col in self.categorical:
            mask &= df[col].astype(str).isin(levels[col]).to_numpy()
        return mask

    def fit_transform(self, df: pd.DataFrame) -> NDArray:
        return self.fit(df).transform(df)

    def transform_profile(self, profile: Mapping[str, object]) -> NDArray:
        """Encode one employee given as {column: value}; returns shape (1, p)."""
        missing = [c for c in self.columns if c not in profile]
        if missing:
            raise ValidationError(f"profile is missing covariates: {missing}")
        row = {c: [profile[c]] for c in self.columns}
        return self.transform(pd.DataFrame(row))

    def _fitted_levels(self) -> dict[str, tuple[str, ...]]:
        if self.levels_ is None:
            raise ValidationError("CovariateEncoder is not fitted; call fit() first")
        return self.levels_

    def _check_columns(self, df: pd.DataFrame) -> None:
        missing = [c for c in self.columns if c not in df.columns]
        if missing:
            raise ValidationError(f"missing covariate columns: {missing}")

    def __repr__(self) -> str:
        state = "fitted" if self.levels_ is not None else "unfitted"
        return (
            f"CovariateEncoder({len(self.numeric)} numeric, "
            f"{len(self.categorical)} categorical, {state})"
        )
