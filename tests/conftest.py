"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np
import pandas as pd


LEVELS = {
    "gender": ("f", "m"),
    "industry": ("Banks", "IT", "Retail"),
    "profession": ("Accounting", "HR", "Sales"),
    "traffic": ("advert", "friends", "youjs"),
    "coach": ("my head", "no", "yes"),
    "head_gender": ("f", "m"),
    "greywage": ("grey", "white"),
    "transport": ("bus", "car", "foot"),
}


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


def make_turnover(rng, n=240):
    """Synthetic table in the published turnover layout (stag/way headers).

    Exit hazard rises with anxiety and for grey wages and bus commuters;
    administrative censoring is uniform over five years.
    """
    columns = {col: rng.choice(levels, size=n) for col, levels in LEVELS.items()}
    columns["age"] = np.round(rng.uniform(18, 55, n), 1)
    for col in ("extraversion", "independ", "selfcontrol", "anxiety", "novator"):
        columns[col] = np.round(rng.uniform(1, 10, n), 1)

    lp = (
        0.15 * (columns["anxiety"] - 5.5)
        + 0.6 * (columns["greywage"] == "grey")
        + 0.4 * (columns["transport"] == "bus")
    )
    exit_time = rng.exponential(scale=30.0 * np.exp(-lp))
    censor_time = rng.uniform(1.0, 60.0, n)
    stag = np.maximum(np.round(np.minimum(exit_time, censor_time), 1), 0.1)
    event = (exit_time <= censor_time).astype(int)

    return pd.DataFrame({
        "stag": stag,
        "event": event,
        "gender": columns["gender"],
        "age": columns["age"],
        "industry": columns["industry"],
        "profession": columns["profession"],
        "traffic": columns["traffic"],
        "coach": columns["coach"],
        "head_gender": columns["head_gender"],
        "greywage": columns["greywage"],
        "way": columns["transport"],
        "extraversion": columns["extraversion"],
        "independ": columns["independ"],
        "selfcontrol": columns["selfcontrol"],
        "anxiety": columns["anxiety"],
        "novator": columns["novator"],
    })


@pytest.fixture
def raw_turnover(rng):
    """Synthetic turnover table with the raw published headers."""
    return make_turnover(rng)


@pytest.fixture
def turnover_csv(tmp_path, raw_turnover):
    """raw_turnover written to a CSV file; returns the path."""
    path = tmp_path / "turnover.csv"
    raw_turnover.to_csv(path, index=False)
    return path
