"""Tests for layoffs CSV ingestion."""

from pathlib import Path

import pandas as pd
import pytest

from conftest import RAW_ROWS, write_layoffs_csv
from layoffs.config import PipelineConfig, default_config
from layoffs.errors import SchemaMismatchError
from layoffs.ingestion import LayoffsLoader, coerce_raw_types, load_layoffs


class TestCoerceRawTypes:
    """Tests for text to record type conversion."""

    def test_integer_columns(self, raw_text_layoffs: pd.DataFrame) -> None:
        """Test that headcounts and funds become nullable integers."""
        df = coerce_raw_types(raw_text_layoffs)
        assert df["total_laid_off"].dtype == "Int64"
        assert df["funds_raised_millions"].dtype == "Int64"
        assert df.loc[0, "total_laid_off"] == 100
        assert pd.isna(df.loc[4, "total_laid_off"])

    def test_percentage_is_float(self, raw_text_layoffs: pd.DataFrame) -> None:
        """Test that percentages become floats with NaN for blanks."""
        df = coerce_raw_types(raw_text_layoffs)
        assert df.loc[0, "percentage_laid_off"] == pytest.approx(0.1)
        assert pd.isna(df.loc[2, "percentage_laid_off"])

    def test_blank_date_becomes_null(self, raw_text_layoffs: pd.DataFrame) -> None:
        """Test that blank dates are null but others stay strings."""
        df = coerce_raw_types(raw_text_layoffs)
        assert pd.isna(df.loc[6, "date"])
        assert df.loc[0, "date"] == "3/14/2023"

    def test_blank_industry_preserved(self, raw_text_layoffs: pd.DataFrame) -> None:
        """Test that empty industries survive as empty strings."""
        df = coerce_raw_types(raw_text_layoffs)
        assert df.loc[3, "industry"] == ""

    def test_fractional_integer_is_rounded(self, make_records) -> None:
        """Test that fractional funds are rounded like an INT column."""
        row = ("Acme", "SF", "Retail", "10", "", "1/1/2023", "Seed", "Canada", "2.6")
        df = coerce_raw_types(make_records([row]))
        assert df.loc[0, "funds_raised_millions"] == 3

    def test_does_not_mutate_input(self, raw_text_layoffs: pd.DataFrame) -> None:
        """Test that the caller's frame is untouched."""
        before = raw_text_layoffs.copy()
        coerce_raw_types(raw_text_layoffs)
        pd.testing.assert_frame_equal(raw_text_layoffs, before)


class TestLayoffsLoader:
    """Tests for LayoffsLoader."""

    def test_load(self, pipeline_config: PipelineConfig) -> None:
        """Test loading and validating the sample CSV."""
        df = load_layoffs(pipeline_config)
        assert len(df) == len(RAW_ROWS)
        assert df.loc[2, "company"] == " Beta "
        assert df.loc[3, "industry"] == ""

    def test_null_markers(self, tmp_path: Path) -> None:
        """Test that NULL literals become missing values."""
        row = ("Acme", "SF", "NULL", "NULL", "0.5", "NULL", "NULL", "Canada", "NULL")
        path = write_layoffs_csv(tmp_path / "nulls.csv", [row])
        df = LayoffsLoader(default_config(path)).load()
        assert pd.isna(df.loc[0, "industry"])
        assert pd.isna(df.loc[0, "total_laid_off"])
        assert pd.isna(df.loc[0, "date"])
        assert pd.isna(df.loc[0, "stage"])

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        config = default_config(tmp_path / "absent.csv")
        with pytest.raises(FileNotFoundError, match="not found"):
            load_layoffs(config)

    def test_missing_column(self, tmp_path: Path) -> None:
        """Test that a missing column raises SchemaMismatchError."""
        path = tmp_path / "partial.csv"
        pd.DataFrame({"company": ["Acme"], "country": ["Canada"]}).to_csv(path, index=False)
        with pytest.raises(SchemaMismatchError) as excinfo:
            load_layoffs(default_config(path))
        assert "industry" in excinfo.value.missing
        assert "company" not in excinfo.value.missing

    def test_extra_columns_dropped(self, tmp_path: Path, make_records) -> None:
        """Test that columns outside the record model are ignored."""
        df = make_records(RAW_ROWS[:1])
        df["source_url"] = "https://example.com"
        path = tmp_path / "extra.csv"
        df.to_csv(path, index=False)
        loaded = load_layoffs(default_config(path))
        assert "source_url" not in loaded.columns

    def test_resolve_path_uses_data_root(self, layoffs_csv: Path) -> None:
        """Test that paths resolve against data_root."""
        config = default_config(Path(layoffs_csv.name))
        config = config.model_copy(
            update={
                "data_paths": config.data_paths.model_copy(
                    update={"data_root": layoffs_csv.parent}
                )
            }
        )
        assert len(load_layoffs(config)) == len(RAW_ROWS)
