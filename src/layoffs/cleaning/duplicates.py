"""
Exact-duplicate detection by composite-key partitioning.

Every row gets a 1-based row number within the group of rows sharing
the full composite key. Rows numbered above 1 are exact duplicates.
"""

from collections.abc import Sequence

import pandas as pd

from layoffs.schemas.layoff import PARTITION_COLUMNS, ROW_NUMBER_COLUMN
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def assign_row_numbers(
    df: pd.DataFrame,
    partition_columns: Sequence[str] = PARTITION_COLUMNS,
) -> pd.DataFrame:
    """
    Number rows within each composite-key partition.

    Numbering follows input order, so the first occurrence of a record
    is always row 1. Missing values are grouped as equal to each other.

    Args:
        df: Record frame.
        partition_columns: Columns forming the composite key.

    Returns:
        Copy of df with a row_num column.
    """
    df = df.copy()
    groups = df.groupby(list(partition_columns), dropna=False, sort=False)
    df[ROW_NUMBER_COLUMN] = (groups.cumcount() + 1).astype("int64")
    return df


def find_duplicates(
    df: pd.DataFrame,
    partition_columns: Sequence[str] = PARTITION_COLUMNS,
) -> pd.DataFrame:
    """Return only the rows that repeat an earlier record (row_num > 1)."""
    numbered = assign_row_numbers(df, partition_columns)
    return numbered[numbered[ROW_NUMBER_COLUMN] > 1]


def remove_duplicates(
    df: pd.DataFrame,
    partition_columns: Sequence[str] = PARTITION_COLUMNS,
) -> pd.DataFrame:
    """
    Keep the first row of every composite-key partition.

    The row_num column is left on the result; callers drop it once
    cleaning is complete.

    Args:
        df: Record frame.
        partition_columns: Columns forming the composite key.

    Returns:
        Deduplicated frame.
    """
    numbered = assign_row_numbers(df, partition_columns)
    kept = numbered[numbered[ROW_NUMBER_COLUMN] == 1]

    log.info(
        "Removed exact duplicates",
        rows_before=len(df),
        rows_after=len(kept),
        duplicates=len(df) - len(kept),
    )

    return kept
