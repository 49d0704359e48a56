"""
Null reconciliation.

Blank industries are folded into null, null industries are backfilled
from other records of the same company, and records without any
headcount figure are dropped.
"""

import pandas as pd

from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def blank_to_null(df: pd.DataFrame) -> pd.DataFrame:
    """Replace empty or whitespace-only industries with null."""
    df = df.copy()
    text = df["industry"].astype("string").str.strip()
    blank = (text == "").fillna(False).to_numpy(dtype=bool)
    df["industry"] = df["industry"].mask(blank, None)
    return df


def industry_lookup(df: pd.DataFrame) -> pd.Series:
    """
    Map each company to its first known industry.

    Args:
        df: Record frame.

    Returns:
        Series indexed by company holding the first non-null industry
        seen for it, in input order.
    """
    known = df.loc[df["industry"].notna(), ["company", "industry"]]
    first = known.drop_duplicates(subset="company", keep="first")
    return first.set_index("company")["industry"]


def backfill_industry(df: pd.DataFrame) -> pd.DataFrame:
    """
    Fill null industries from other records of the same company.

    When a company has several distinct industries the first one seen
    wins. Companies without any known industry stay null.
    """
    df = df.copy()
    lookup = industry_lookup(df)
    missing = df["industry"].isna()

    filled = df.loc[missing, "company"].map(lookup)
    df.loc[missing, "industry"] = filled

    log.debug(
        "Backfilled industries",
        missing=int(missing.sum()),
        filled=int(filled.notna().sum()),
    )
    return df


def drop_unusable(df: pd.DataFrame) -> pd.DataFrame:
    """Drop records with neither total_laid_off nor percentage_laid_off."""
    unusable = df["total_laid_off"].isna() & df["percentage_laid_off"].isna()
    return df[~unusable]


def reconcile(df: pd.DataFrame) -> pd.DataFrame:
    """Run blank normalization, backfill and pruning in order."""
    df = blank_to_null(df)
    df = backfill_industry(df)
    return drop_unusable(df)
