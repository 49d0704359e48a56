"""
Read-only aggregation queries over the clean layoffs set.

Every function returns a new object and leaves its input untouched.
Year and month buckets are derived from the date column; records
without a date are excluded from them.
"""

from dataclasses import dataclass, field

import pandas as pd

from layoffs.utils.logging import get_logger

log = get_logger(__name__)

DIMENSIONS: tuple[str, ...] = (
    "company",
    "industry",
    "country",
    "stage",
    "location",
    "year",
    "month",
)
PERIOD_DIMENSIONS: tuple[str, ...] = ("year", "month")


def with_periods(df: pd.DataFrame) -> pd.DataFrame:
    """
    Attach year and month (YYYY-MM) columns, dropping undated records.

    Args:
        df: Clean layoff records.

    Returns:
        Dated records with year and month columns.
    """
    dated = df[df["date"].notna()].copy()
    dated["year"] = dated["date"].dt.year.astype("int64")
    dated["month"] = dated["date"].dt.strftime("%Y-%m")
    return dated


def date_range(df: pd.DataFrame) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Earliest and latest event date (NaT when there are none)."""
    return df["date"].min(), df["date"].max()


def max_layoffs(df: pd.DataFrame) -> dict[str, float | int | None]:
    """Largest single layoff by headcount and by fraction of workforce."""
    total = df["total_laid_off"].max()
    percentage = df["percentage_laid_off"].max()
    return {
        "total_laid_off": int(total) if pd.notna(total) else None,
        "percentage_laid_off": float(percentage) if pd.notna(percentage) else None,
    }


def total_laid_off_by(df: pd.DataFrame, dimension: str) -> pd.DataFrame:
    """
    Sum total_laid_off per group, largest first.

    Groups whose records all lack a headcount sum to null and sort last.
    A missing group key (e.g. unknown industry) forms its own group.

    Args:
        df: Clean layoff records.
        dimension: One of DIMENSIONS.

    Returns:
        DataFrame with columns [dimension, total_laid_off].

    Raises:
        ValueError: If dimension is unknown.
    """
    if dimension not in DIMENSIONS:
        msg = f"Unknown dimension {dimension!r}. Use one of: {', '.join(DIMENSIONS)}"
        raise ValueError(msg)

    source = with_periods(df) if dimension in PERIOD_DIMENSIONS else df
    totals = (
        source.groupby(dimension, dropna=False, sort=False)["total_laid_off"]
        .sum(min_count=1)
        .astype("Int64")
    )
    totals = totals.sort_values(ascending=False, na_position="last", kind="stable")
    return totals.reset_index(name="total_laid_off")


def monthly_rolling_total(df: pd.DataFrame) -> pd.DataFrame:
    """
    Monthly layoff totals with a running cumulative sum.

    Months are ordered chronologically. A month whose records carry no
    headcount contributes zero.

    Returns:
        DataFrame with columns [month, total_off, rolling_total].
    """
    dated = with_periods(df)
    monthly = (
        dated.groupby("month", sort=True)["total_laid_off"]
        .sum()
        .astype("int64")
        .reset_index(name="total_off")
    )
    monthly["rolling_total"] = monthly["total_off"].cumsum()
    return monthly


def company_year_ranking(df: pd.DataFrame, top_n: int | None = None) -> pd.DataFrame:
    """
    Dense-rank companies by yearly layoffs.

    Companies with equal yearly totals share a rank and the next total
    gets the following rank (100, 100, 50 -> 1, 1, 2).

    Args:
        df: Clean layoff records.
        top_n: Keep only ranks up to this value.

    Returns:
        DataFrame with columns [company, year, total_laid_off, ranking],
        ordered by year then ranking.
    """
    dated = with_periods(df)
    totals = (
        dated.groupby(["company", "year"], sort=False)["total_laid_off"]
        .sum(min_count=1)
        .reset_index(name="total_laid_off")
    )
    totals = totals[totals["total_laid_off"].notna()]

    ranking = (
        totals.groupby("year")["total_laid_off"]
        .transform(lambda s: s.astype("float64").rank(method="dense", ascending=False))
        .astype("int64")
    )
    ranked = totals.assign(
        total_laid_off=totals["total_laid_off"].astype("int64"),
        ranking=ranking,
    )

    if top_n is not None:
        ranked = ranked[ranked["ranking"] <= top_n]

    return ranked.sort_values(["year", "ranking", "company"]).reset_index(drop=True)


def full_shutdowns(df: pd.DataFrame) -> pd.DataFrame:
    """Records where the whole workforce was laid off, best funded first."""
    shutdowns = df[df["percentage_laid_off"] == 1]
    return shutdowns.sort_values(
        "funds_raised_millions", ascending=False, na_position="last", kind="stable"
    ).reset_index(drop=True)


@dataclass
class AnalysisReport:
    """
    Collected results of all analysis queries.

    Attributes:
        first_date: Earliest event date.
        last_date: Latest event date.
        maxima: Largest headcount and percentage layoffs.
        totals: Sum of total_laid_off per dimension.
        monthly: Monthly totals with rolling sum.
        ranking: Per-year dense company ranking.
        shutdowns: Records with percentage_laid_off == 1.
    """

    first_date: pd.Timestamp
    last_date: pd.Timestamp
    maxima: dict[str, float | int | None]
    totals: dict[str, pd.DataFrame] = field(default_factory=dict)
    monthly: pd.DataFrame = field(default_factory=pd.DataFrame)
    ranking: pd.DataFrame = field(default_factory=pd.DataFrame)
    shutdowns: pd.DataFrame = field(default_factory=pd.DataFrame)

    def tables(self) -> dict[str, pd.DataFrame]:
        """All tabular results keyed by a file-friendly name."""
        tables = {f"total_by_{dim}": frame for dim, frame in self.totals.items()}
        tables["monthly_rolling_total"] = self.monthly
        tables["company_year_ranking"] = self.ranking
        tables["full_shutdowns"] = self.shutdowns
        return tables


def run_analysis(df: pd.DataFrame, top_n: int | None = 5) -> AnalysisReport:
    """
    Run every analysis query against the clean set.

    Args:
        df: Clean layoff records.
        top_n: Ranking cutoff per year.

    Returns:
        AnalysisReport holding all results.
    """
    first, last = date_range(df)
    report = AnalysisReport(
        first_date=first,
        last_date=last,
        maxima=max_layoffs(df),
        totals={dim: total_laid_off_by(df, dim) for dim in DIMENSIONS},
        monthly=monthly_rolling_total(df),
        ranking=company_year_ranking(df, top_n=top_n),
        shutdowns=full_shutdowns(df),
    )
    log.info(
        "Analysis complete",
        records=len(df),
        months=len(report.monthly),
        ranked=len(report.ranking),
    )
    return report
