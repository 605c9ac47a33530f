"""
Tests for load_turnover() and prepare_turnover().
"""

import numpy as np
import pandas as pd
import pytest

from pyturnover.core.exceptions import ValidationError
from pyturnover.data import COVARIATES, load_turnover, prepare_turnover


class TestPrepareTurnover:

    def test_renames_raw_headers(self, raw_turnover):
        df = prepare_turnover(raw_turnover)
        assert "duration" in df.columns
        assert "transport" in df.columns
        assert "stag" not in df.columns
        assert "way" not in df.columns
        assert list(df.columns) == ["duration", "event"] + list(COVARIATES)

    def test_dtypes(self, raw_turnover):
        df = prepare_turnover(raw_turnover)
        assert df["duration"].dtype == np.float64
        assert df["age"].dtype == np.float64
        assert df["industry"].map(type).eq(str).all()

    def test_drops_duplicates(self, raw_turnover):
        doubled = pd.concat([raw_turnover, raw_turnover.iloc[:7]], ignore_index=True)
        df = prepare_turnover(doubled)
        assert len(df) == len(raw_turnover)
        assert df.attrs["n_duplicates"] == 7

    def test_strips_category_whitespace(self, raw_turnover):
        raw = raw_turnover.copy()
        raw["industry"] = " " + raw["industry"] + " "
        df = prepare_turnover(raw)
        assert set(df["industry"]) == set(raw_turnover["industry"])

    def test_does_not_mutate_input(self, raw_turnover):
        before = raw_turnover.copy()
        prepare_turnover(raw_turnover)
        pd.testing.assert_frame_equal(raw_turnover, before)

    def test_missing_column(self, raw_turnover):
        with pytest.raises(ValidationError, match="novator"):
            prepare_turnover(raw_turnover.drop(columns="novator"))

    def test_missing_values(self, raw_turnover):
        raw = raw_turnover.copy()
        raw.loc[3, "age"] = np.nan
        with pytest.raises(ValidationError, match="missing values"):
            prepare_turnover(raw)

    def test_negative_duration(self, raw_turnover):
        raw = raw_turnover.copy()
        raw.loc[0, "stag"] = -1.0
        with pytest.raises(ValidationError, match="non-negative"):
            prepare_turnover(raw)

    def test_bad_event(self, raw_turnover):
        raw = raw_turnover.copy()
        raw.loc[0, "event"] = 2
        with pytest.raises(ValidationError, match="event must be 0 or 1"):
            prepare_turnover(raw)

    def test_non_numeric_covariate(self, raw_turnover):
        raw = raw_turnover.copy()
        raw["anxiety"] = raw["anxiety"].astype(object)
        raw.loc[0, "anxiety"] = "high"
        with pytest.raises(ValidationError, match="anxiety"):
            prepare_turnover(raw)


class TestLoadTurnover:

    def test_csv(self, turnover_csv, raw_turnover):
        df = load_turnover(turnover_csv)
        assert len(df) == len(raw_turnover.drop_duplicates())
        assert df.attrs["source_path"] == str(turnover_csv)

    def test_separator_and_encoding(self, tmp_path, raw_turnover):
        raw = raw_turnover.copy()
        raw["industry"] = raw["industry"].replace({"Retail": "Détail"})
        path = tmp_path / "turnover.tsv"
        raw.to_csv(path, sep="\t", index=False, encoding="latin-1")
        df = load_turnover(path, sep="\t", encoding="latin-1")
        assert "Détail" in set(df["industry"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            load_turnover(tmp_path / "nope.csv")

    def test_wrong_encoding(self, tmp_path, raw_turnover):
        raw = raw_turnover.copy()
        raw["profession"] = raw["profession"].replace({"Accounting": "Comptabilité"})
        path = tmp_path / "turnover.csv"
        raw.to_csv(path, index=False, encoding="latin-1")
        with pytest.raises(ValidationError, match="latin-1") as exc_info:
            load_turnover(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(ValidationError, match="empty"):
            load_turnover(path)

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.csv"
        path.write_text('stag,event\n1.0,"1\n')
        with pytest.raises(ValidationError, match="cannot parse"):
            load_turnover(path)
