"""
Reading and cleaning the employee turnover table.

    load_turnover(path) → DataFrame
    prepare_turnover(df) → DataFrame

The result has one row per distinct employee record with columns
``duration`` (months), ``event`` (0/1) and the fourteen covariates;
categorical covariates are strings, everything else float.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from pyturnover.core.exceptions import ValidationError
from pyturnover.data._schema import (
    CATEGORICAL,
    COVARIATES,
    DURATION,
    EVENT,
    NUMERIC,
    RAW_RENAMES,
)


def load_turnover(
    path: str | Path,
    *,
    sep: str = ",",
    encoding: str | None = None,
) -> pd.DataFrame:
    """Read a delimited turnover file and clean it with prepare_turnover().

    Parameters
    ----------
    path : str or Path
        CSV/TSV file with a header row.
    sep : str
        Field delimiter.
    encoding : str or None
        File encoding; None reads UTF-8. The published dataset is Latin-1.

    Raises
    ------
    ValidationError
        Missing, undecodable, empty or malformed file.
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"data file not found: {path}")

    try:
        df = pd.read_csv(path, sep=sep, encoding=encoding)
    except UnicodeDecodeError as e:
        raise ValidationError(
            f"cannot decode {path} as {encoding or 'utf-8'}: {e}; "
            f"pass the file's encoding, e.g. encoding='latin-1' "
            f"(--encoding latin-1 on the command line)"
        ) from e
    except pd.errors.EmptyDataError as e:
        raise ValidationError(f"cannot read {path}: file is empty ({e})") from e
    except pd.errors.ParserError as e:
        raise ValidationError(f"cannot parse {path} with sep={sep!r}: {e}") from e
    prepared = prepare_turnover(df)
    prepared.attrs["source_path"] = str(path)
    return prepared


def prepare_turnover(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw headers, validate, coerce dtypes, drop duplicate rows.

    The number of dropped duplicates is kept in ``attrs["n_duplicates"]``.

    Raises
    ------
    ValidationError
        Missing columns, missing values, non-numeric durations or
        covariates, negative durations, or events other than 0/1.
    """
    df = df.rename(columns={k: v for k, v in RAW_RENAMES.items() if k in df.columns})

    required = (DURATION, EVENT) + COVARIATES
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValidationError(
            f"turnover table is missing columns: {missing}"
        )

    out = df.loc[:, list(required)].copy()

    n_missing = out.isna().sum()
    if n_missing.any():
        detail = ", ".join(f"{c}={int(k)}" for c, k in n_missing.items() if k > 0)
        raise ValidationError(f"turnover table has missing values: {detail}")

    for col in (DURATION, EVENT) + NUMERIC:
        try:
            out[col] = pd.to_numeric(out[col]).astype(np.float64)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"column {col!r} is not numeric: {e}") from e

    for col in CATEGORICAL:
        out[col] = out[col].astype(str).str.strip()

    if (out[DURATION] < 0).any():
        raise ValidationError(
            f"duration must be non-negative, got minimum {out[DURATION].min():g}"
        )

    bad_events = sorted(set(out[EVENT].unique()) - {0.0, 1.0})
    if bad_events:
        raise ValidationError(f"event must be 0 or 1, got {bad_events}")

    n_before = len(out)
    out = out.drop_duplicates().reset_index(drop=True)
    out.attrs["n_duplicates"] = n_before - len(out)

    if len(out) == 0:
        raise ValidationError("turnover table has no rows")

    return out
