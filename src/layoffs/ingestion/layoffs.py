"""
Layoffs CSV ingestion.

Reads every column as text so that blank industries survive as empty
strings, then converts numeric columns to nullable types.
"""

import pandas as pd

from layoffs.config.settings import PipelineConfig
from layoffs.ingestion.base import DataLoader
from layoffs.schemas.layoff import (
    FLOAT_COLUMNS,
    INTEGER_COLUMNS,
    RECORD_COLUMNS,
    TEXT_COLUMNS,
    RawLayoffSchema,
)
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def _blank_to_missing(series: pd.Series) -> pd.Series:
    """Strip text values and treat blanks as missing."""
    stripped = series.map(lambda v: v.strip() if isinstance(v, str) else v)
    return stripped.where(stripped.notna() & (stripped != ""), None)


def coerce_raw_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert text columns of a raw layoffs frame to their record types.

    Integer columns become nullable Int64 (rounded like an INT column),
    percentages become float, blank dates become null. Text columns keep
    empty strings.

    Args:
        df: Raw frame with all columns as text.

    Returns:
        New frame with typed columns.
    """
    df = df.copy()

    for col in INTEGER_COLUMNS:
        values = pd.to_numeric(_blank_to_missing(df[col]), errors="raise").astype("float64")
        df[col] = values.round().astype("Int64")
    for col in FLOAT_COLUMNS:
        values = pd.to_numeric(_blank_to_missing(df[col]), errors="raise")
        df[col] = values.astype("float64")

    df["date"] = _blank_to_missing(df["date"]).astype(object)

    for col in TEXT_COLUMNS:
        df[col] = df[col].astype(object)

    return df


class LayoffsLoader(DataLoader[RawLayoffSchema]):
    """Loader for the raw layoffs CSV."""

    required_columns = RECORD_COLUMNS

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize layoffs loader."""
        super().__init__(config, RawLayoffSchema)

    def _load_raw(self) -> pd.DataFrame:
        """Load the layoffs CSV with every column as text."""
        path = self.resolve_path(self.config.data_paths.raw_layoffs)

        if not path.exists():
            msg = f"Layoffs file not found: {path}"
            raise FileNotFoundError(msg)

        log.info("Loading layoffs", path=str(path))

        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_values=self.config.ingestion.null_markers,
            encoding=self.config.ingestion.encoding,
        )
        df.columns = [c.strip() for c in df.columns]
        return df

    def _prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        """Select record columns and convert types."""
        extra = [c for c in df.columns if c not in RECORD_COLUMNS]
        if extra:
            log.warning("Ignoring extra columns", extra=extra)
        return coerce_raw_types(df[list(RECORD_COLUMNS)])


def load_layoffs(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Convenience function to load the raw layoffs table.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against RawLayoffSchema.

    Returns:
        Typed raw layoffs DataFrame.
    """
    return LayoffsLoader(config).load(validate=validate)
