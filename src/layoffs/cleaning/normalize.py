"""
Field-level text and type normalization.

Each rule takes a frame and returns a new one; the caller's frame is
never modified.
"""

from collections.abc import Mapping, Sequence

import pandas as pd

from layoffs.errors import MalformedDateError
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_INDUSTRY_MAPPING: dict[str, str] = {r"^crypto": "Crypto"}
DEFAULT_COUNTRY_PREFIXES: tuple[str, ...] = ("United States.",)
DEFAULT_DATE_FORMAT = "%m/%d/%Y"


def trim_company(df: pd.DataFrame) -> pd.DataFrame:
    """Strip leading/trailing whitespace from company names."""
    df = df.copy()
    df["company"] = df["company"].astype("string").str.strip().astype(object)
    return df


def canonicalize_industry(
    df: pd.DataFrame,
    mapping: Mapping[str, str] | None = None,
) -> pd.DataFrame:
    """
    Rewrite industry variants to their canonical label.

    Patterns are matched case-insensitively. Missing industries are left
    untouched.

    Args:
        df: Record frame.
        mapping: Regex pattern -> canonical label. Defaults to
            DEFAULT_INDUSTRY_MAPPING ("Crypto Currency" -> "Crypto").

    Returns:
        Frame with canonical industries.
    """
    mapping = DEFAULT_INDUSTRY_MAPPING if mapping is None else mapping

    df = df.copy()
    industry = df["industry"]
    text = industry.astype("string")

    for pattern, label in mapping.items():
        mask = text.str.contains(pattern, case=False, regex=True, na=False)
        if mask.any():
            log.debug("Canonicalizing industry", pattern=pattern, label=label, rows=int(mask.sum()))
        industry = industry.where(~mask.to_numpy(dtype=bool), label)

    df["industry"] = industry
    return df


def fix_country(
    df: pd.DataFrame,
    prefixes: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Trim country names and strip trailing periods left by ingestion.

    Only countries starting with one of the prefixes lose their trailing
    periods, so "United States." becomes "United States".

    Args:
        df: Record frame.
        prefixes: Case-insensitive prefixes to fix. Defaults to
            DEFAULT_COUNTRY_PREFIXES.

    Returns:
        Frame with fixed country names.
    """
    prefixes = DEFAULT_COUNTRY_PREFIXES if prefixes is None else prefixes

    df = df.copy()
    country = df["country"].astype("string").str.strip()
    lowered = country.str.lower()

    for prefix in prefixes:
        mask = lowered.str.startswith(prefix.lower()).fillna(False)
        country = country.mask(mask, country.str.rstrip("."))

    df["country"] = country.astype(object)
    return df


def convert_dates(
    df: pd.DataFrame,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> pd.DataFrame:
    """
    Parse date strings into datetimes.

    Missing or blank dates become NaT. Any other value that does not
    match date_format aborts the conversion.

    Args:
        df: Record frame with string dates.
        date_format: strptime format of the raw dates.

    Returns:
        Frame with a datetime64 date column.

    Raises:
        MalformedDateError: If any present date fails to parse.
    """
    df = df.copy()
    raw = df["date"]

    if pd.api.types.is_datetime64_any_dtype(raw):
        return df

    text = raw.astype("string").str.strip()
    present = text.notna() & (text != "")
    parsed = pd.to_datetime(text.where(present), format=date_format, errors="coerce")

    malformed = (present & parsed.isna()).fillna(False)
    if malformed.any():
        values = text[malformed].unique().tolist()
        log.error("Malformed dates", count=int(malformed.sum()), sample=values[:5])
        raise MalformedDateError([str(v) for v in values], date_format)

    df["date"] = parsed
    return df


def normalize(
    df: pd.DataFrame,
    *,
    industry_mapping: Mapping[str, str] | None = None,
    country_prefixes: Sequence[str] | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> pd.DataFrame:
    """
    Apply all normalization rules in order.

    Order: company trim, industry canonicalization, country fix,
    date conversion.
    """
    df = trim_company(df)
    df = canonicalize_industry(df, industry_mapping)
    df = fix_country(df, country_prefixes)
    return convert_dates(df, date_format)
