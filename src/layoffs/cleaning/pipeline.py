"""
Cleaning pipeline implementation.

Orchestrates duplicate removal, normalization and null reconciliation
over a staging copy of the raw table to produce the clean set.
"""

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from layoffs.cleaning.duplicates import remove_duplicates
from layoffs.cleaning.normalize import (
    canonicalize_industry,
    convert_dates,
    fix_country,
    trim_company,
)
from layoffs.cleaning.nulls import backfill_industry, blank_to_null, drop_unusable
from layoffs.config.settings import PipelineConfig
from layoffs.ingestion.base import require_columns
from layoffs.ingestion.layoffs import load_layoffs
from layoffs.schemas.layoff import RECORD_COLUMNS, ROW_NUMBER_COLUMN, CleanLayoffSchema
from layoffs.utils.logging import get_logger, log_context

log = get_logger(__name__)


def _count_changed(before: pd.Series, after: pd.Series) -> int:
    """Count positions where a present value was rewritten."""
    present = before.notna() & after.notna()
    changed = before[present].astype(str) != after[present].astype(str)
    return int(changed.sum())


@dataclass
class CleaningResult:
    """
    Result of a cleaning pipeline run.

    Attributes:
        clean_data: Final clean layoff records.
        n_raw: Number of raw records received.
        n_duplicates: Exact duplicates removed.
        n_crypto_canonicalized: Industries rewritten to a canonical label.
        n_country_fixed: Country names changed by trimming/punctuation fixes.
        n_blank_industries: Empty industries turned into null.
        n_backfilled: Null industries filled from sibling records.
        n_pruned: Records dropped for lacking any headcount figure.
        output_path: Path where the clean CSV was written (if any).
    """

    clean_data: pd.DataFrame
    n_raw: int
    n_duplicates: int
    n_crypto_canonicalized: int
    n_country_fixed: int
    n_blank_industries: int
    n_backfilled: int
    n_pruned: int
    output_path: Path | None = None

    @property
    def n_clean(self) -> int:
        """Number of records in the clean set."""
        return len(self.clean_data)


class CleaningPipeline:
    """
    Cleaning pipeline for the layoffs table.

    Stages run in a fixed order since each relies on the previous one:
    duplicates are ranked on raw values, industries are canonicalized
    before they are propagated, and pruning runs last.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize cleaning pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config
        self.rules = config.cleaning

    def run(self, raw: pd.DataFrame, output_path: Path | None = None) -> CleaningResult:
        """
        Clean a raw layoffs frame.

        The input frame is never modified. Either every stage succeeds
        or nothing is written.

        Args:
            raw: Typed raw layoff records (see RawLayoffSchema).
            output_path: Optional path to save the clean CSV.

        Returns:
            CleaningResult with the clean set and per-stage counts.

        Raises:
            SchemaMismatchError: If raw lacks record columns.
            MalformedDateError: If a date cannot be parsed.
        """
        with log_context(project=self.config.project):
            log.info("Starting cleaning pipeline", rows=len(raw))

            # Step 1: staging copy
            require_columns(raw, RECORD_COLUMNS, source="raw layoffs")
            staging = raw.loc[:, list(RECORD_COLUMNS)].copy()

            # Step 2: exact duplicates
            deduped = remove_duplicates(staging, self.rules.partition_columns)
            n_duplicates = len(staging) - len(deduped)

            # Step 3: normalization
            df = trim_company(deduped)

            canonical = canonicalize_industry(df, self.rules.industry_mapping)
            n_canonicalized = _count_changed(df["industry"], canonical["industry"])

            fixed = fix_country(canonical, self.rules.country_trailing_punctuation)
            n_country = _count_changed(canonical["country"], fixed["country"])

            df = convert_dates(fixed, self.rules.date_format)
            log.info(
                "Normalized records",
                industries_canonicalized=n_canonicalized,
                countries_fixed=n_country,
                null_dates=int(df["date"].isna().sum()),
            )

            # Step 4: null reconciliation
            n_missing_before = int(df["industry"].isna().sum())
            df = blank_to_null(df)
            n_missing = int(df["industry"].isna().sum())
            df = backfill_industry(df)
            n_backfilled = n_missing - int(df["industry"].isna().sum())

            rows_before_prune = len(df)
            df = drop_unusable(df)
            n_pruned = rows_before_prune - len(df)
            log.info(
                "Reconciled nulls",
                blank_industries=n_missing - n_missing_before,
                backfilled=n_backfilled,
                still_missing=n_missing - n_backfilled,
                pruned=n_pruned,
            )

            # Step 5: drop bookkeeping
            clean = df.drop(columns=[ROW_NUMBER_COLUMN]).reset_index(drop=True)
            clean = CleanLayoffSchema.validate(clean)

            result = CleaningResult(
                clean_data=clean,
                n_raw=len(raw),
                n_duplicates=n_duplicates,
                n_crypto_canonicalized=n_canonicalized,
                n_country_fixed=n_country,
                n_blank_industries=n_missing - n_missing_before,
                n_backfilled=n_backfilled,
                n_pruned=n_pruned,
            )

            if output_path is not None:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                clean.to_csv(output_path, index=False, date_format="%Y-%m-%d")
                result.output_path = output_path
                log.info("Saved clean data", path=str(output_path))

            log.info("Cleaning pipeline complete", rows_in=len(raw), rows_out=len(clean))
            return result


def run_cleaning(
    config: PipelineConfig,
    output_path: Path | None = None,
) -> CleaningResult:
    """
    Convenience function to load the raw CSV and clean it.

    Args:
        config: Pipeline configuration.
        output_path: Optional path to save the clean CSV.

    Returns:
        CleaningResult with the clean set and statistics.
    """
    raw = load_layoffs(config)
    return CleaningPipeline(config).run(raw, output_path=output_path)
