"""
Pandera schemas for layoff records.

One row is one event of a company reducing staff. The raw schema
describes the table as it arrives from the CSV source; the clean schema
encodes the invariants the cleaning pipeline guarantees.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

RECORD_COLUMNS: tuple[str, ...] = (
    "company",
    "location",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "date",
    "stage",
    "country",
    "funds_raised_millions",
)

# Every column except location identifies an exact duplicate
PARTITION_COLUMNS: tuple[str, ...] = (
    "company",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "date",
    "stage",
    "country",
    "funds_raised_millions",
)

TEXT_COLUMNS: tuple[str, ...] = ("company", "location", "industry", "stage", "country")
INTEGER_COLUMNS: tuple[str, ...] = ("total_laid_off", "funds_raised_millions")
FLOAT_COLUMNS: tuple[str, ...] = ("percentage_laid_off",)

# Bookkeeping column added by the duplicate resolver
ROW_NUMBER_COLUMN = "row_num"


class RawLayoffSchema(pa.DataFrameModel):
    """
    Schema for raw layoff records after type conversion at ingestion.

    Dates are still strings and industry may be an empty string.
    """

    company: Series[str] = pa.Field(description="Company display name (not unique)")
    location: Series[str] = pa.Field(nullable=True, description="Headquarters city")
    industry: Series[str] = pa.Field(nullable=True, description="Sector, may be blank")
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(
        ge=0,
        nullable=True,
        description="Absolute headcount reduction",
    )
    percentage_laid_off: Series[float] = pa.Field(
        ge=0.0,
        le=1.0,
        nullable=True,
        description="Fraction of the workforce laid off",
    )
    date: Series[str] = pa.Field(nullable=True, description="Event date as M/D/YYYY")
    stage: Series[str] = pa.Field(nullable=True, description="Funding/growth stage")
    country: Series[str] = pa.Field(description="Country name")
    funds_raised_millions: Series[pd.Int64Dtype] = pa.Field(
        ge=0,
        nullable=True,
        description="Funds raised in millions of USD",
    )

    class Config:
        """Schema configuration."""

        name = "RawLayoffSchema"
        strict = False
        coerce = True


class CleanLayoffSchema(pa.DataFrameModel):
    """
    Schema for the clean layoff table.

    - industry is either a non-empty label or null
    - company and country carry no surrounding whitespace
    - date is a datetime
    - at least one of total_laid_off / percentage_laid_off is set
    """

    company: Series[str] = pa.Field(str_length={"min_value": 1})
    location: Series[str] = pa.Field(nullable=True)
    industry: Series[str] = pa.Field(nullable=True, str_length={"min_value": 1})
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(ge=0, nullable=True)
    percentage_laid_off: Series[float] = pa.Field(ge=0.0, le=1.0, nullable=True)
    date: Series[pa.DateTime] = pa.Field(nullable=True)
    stage: Series[str] = pa.Field(nullable=True)
    country: Series[str] = pa.Field()
    funds_raised_millions: Series[pd.Int64Dtype] = pa.Field(ge=0, nullable=True)

    @pa.check("company", "country", name="no_surrounding_whitespace")
    def no_surrounding_whitespace(cls, series: Series[str]) -> Series[bool]:
        """Names must already be trimmed."""
        return series == series.str.strip()

    @pa.dataframe_check(name="has_headcount_signal")
    def has_headcount_signal(cls, df: pd.DataFrame) -> Series[bool]:
        """A record needs an absolute or relative layoff figure."""
        return df["total_laid_off"].notna() | df["percentage_laid_off"].notna()

    class Config:
        """Schema configuration."""

        name = "CleanLayoffSchema"
        strict = True
        coerce = True
