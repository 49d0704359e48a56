"""Tests for the cleaning pipeline orchestration."""

from pathlib import Path

import pandas as pd
import pytest

from layoffs.cleaning import CleaningPipeline, run_cleaning
from layoffs.config import CleaningConfig, PipelineConfig
from layoffs.errors import MalformedDateError, SchemaMismatchError
from layoffs.ingestion import coerce_raw_types
from layoffs.schemas.layoff import RECORD_COLUMNS


@pytest.fixture
def pipeline(pipeline_config: PipelineConfig) -> CleaningPipeline:
    """Pipeline with default rules."""
    return CleaningPipeline(pipeline_config)


class TestCleaningPipeline:
    """End-to-end tests on the raw sample."""

    def test_record_count(self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame) -> None:
        """Test that one duplicate and one empty record are removed."""
        result = pipeline.run(raw_layoffs)
        assert result.n_raw == 7
        assert result.n_duplicates == 1
        assert result.n_pruned == 1
        assert result.n_clean == 5

    def test_duplicates_collapsed(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame
    ) -> None:
        """Test that identical raw records appear once."""
        clean = pipeline.run(raw_layoffs).clean_data
        assert (clean["company"] == "Acme").sum() == 1

    def test_empty_headcount_removed(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame
    ) -> None:
        """Test that a record without any headcount figure is absent."""
        clean = pipeline.run(raw_layoffs).clean_data
        assert "Delta" not in clean["company"].tolist()
        assert (clean["total_laid_off"].notna() | clean["percentage_laid_off"].notna()).all()

    def test_date_converted(self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame) -> None:
        """Test that '3/14/2023' becomes the calendar date 2023-03-14."""
        clean = pipeline.run(raw_layoffs).clean_data
        acme = clean[clean["company"] == "Acme"].iloc[0]
        assert acme["date"] == pd.Timestamp(2023, 3, 14)
        assert acme["date"].date().isoformat() == "2023-03-14"
        assert pd.api.types.is_datetime64_any_dtype(clean["date"])

    def test_text_normalized(self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame) -> None:
        """Test trimming, crypto canonicalization and the country fix."""
        result = pipeline.run(raw_layoffs)
        clean = result.clean_data
        beta = clean[clean["company"] == "Beta"].iloc[0]
        assert beta["industry"] == "Crypto"
        assert "United States." not in clean["country"].tolist()
        assert result.n_crypto_canonicalized == 1
        assert result.n_country_fixed == 1

    def test_industry_reconciled(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame
    ) -> None:
        """Test blank industries are nulled and backfilled where possible."""
        result = pipeline.run(raw_layoffs)
        clean = result.clean_data
        assert clean.loc[clean["company"] == "Gamma", "industry"].tolist() == ["Tech", "Tech"]
        omega = clean[clean["company"] == "Omega"].iloc[0]
        assert pd.isna(omega["industry"])
        assert not (clean["industry"] == "").any()
        assert result.n_blank_industries == 2
        assert result.n_backfilled == 1

    def test_bookkeeping_dropped(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame
    ) -> None:
        """Test that the output has exactly the record columns."""
        clean = pipeline.run(raw_layoffs).clean_data
        assert list(clean.columns) == list(RECORD_COLUMNS)
        assert clean.index.tolist() == list(range(len(clean)))

    def test_input_not_mutated(self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame) -> None:
        """Test that the raw frame is left as it was."""
        before = raw_layoffs.copy()
        pipeline.run(raw_layoffs)
        pd.testing.assert_frame_equal(raw_layoffs, before)

    def test_dedup_runs_before_trim(self, pipeline: CleaningPipeline, make_records) -> None:
        """Test that rows differing only by whitespace are not deduplicated."""
        a = ("Acme", "SF", "Retail", "10", "", "1/1/2023", "Seed", "Canada", "")
        b = ("Acme ", "SF", "Retail", "10", "", "1/1/2023", "Seed", "Canada", "")
        result = pipeline.run(coerce_raw_types(make_records([a, b])))
        assert result.n_duplicates == 0
        assert result.clean_data["company"].tolist() == ["Acme", "Acme"]

    def test_empty_input(self, pipeline: CleaningPipeline, make_records) -> None:
        """Test that an empty raw set gives an empty clean set."""
        result = pipeline.run(coerce_raw_types(make_records([])))
        assert result.n_clean == 0
        assert list(result.clean_data.columns) == list(RECORD_COLUMNS)

    def test_custom_rules(self, pipeline_config: PipelineConfig, raw_layoffs: pd.DataFrame) -> None:
        """Test that configured rules replace the defaults."""
        config = pipeline_config.model_copy(
            update={
                "cleaning": CleaningConfig(
                    industry_mapping={r"^retail": "Consumer"},
                    country_trailing_punctuation=[],
                )
            }
        )
        result = CleaningPipeline(config).run(raw_layoffs.assign(country="Canada"))
        clean = result.clean_data
        assert clean.loc[clean["company"] == "Acme", "industry"].iloc[0] == "Consumer"
        assert clean.loc[clean["company"] == "Beta", "industry"].iloc[0] == "CryptoCurrency"


class TestPipelineFailures:
    """Tests for fatal errors."""

    def test_malformed_date_aborts(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame, tmp_path: Path
    ) -> None:
        """Test that a bad date aborts without writing output."""
        raw = raw_layoffs.copy()
        raw.loc[3, "date"] = "2023/02/01"
        output = tmp_path / "clean.csv"
        with pytest.raises(MalformedDateError, match="2023/02/01"):
            pipeline.run(raw, output_path=output)
        assert not output.exists()

    def test_missing_column(self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame) -> None:
        """Test that a raw frame without a record column is rejected."""
        with pytest.raises(SchemaMismatchError) as excinfo:
            pipeline.run(raw_layoffs.drop(columns=["stage"]))
        assert excinfo.value.missing == ["stage"]


class TestCleaningOutput:
    """Tests for writing the clean set."""

    def test_writes_csv(
        self, pipeline: CleaningPipeline, raw_layoffs: pd.DataFrame, tmp_path: Path
    ) -> None:
        """Test that the clean CSV is written with ISO dates."""
        output = tmp_path / "nested" / "clean.csv"
        result = pipeline.run(raw_layoffs, output_path=output)
        assert result.output_path == output
        written = pd.read_csv(output)
        assert len(written) == 5
        assert written.loc[0, "date"] == "2023-03-14"
        assert "row_num" not in written.columns

    def test_run_cleaning_from_csv(self, pipeline_config: PipelineConfig) -> None:
        """Test loading the CSV and cleaning in one call."""
        result = run_cleaning(pipeline_config)
        assert result.n_clean == 5
        assert result.output_path is None
        assert result.clean_data.loc[0, "company"] == "Acme"
