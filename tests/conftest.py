"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pandas as pd
import pytest

from layoffs.config import PipelineConfig, default_config
from layoffs.ingestion import coerce_raw_types
from layoffs.schemas.layoff import RECORD_COLUMNS

# Rows as they appear in the CSV export, all text
RAW_ROWS: list[tuple[str, ...]] = [
    ("Acme", "SF Bay Area", "Retail", "100", "0.1", "3/14/2023", "Post-IPO", "United States", "50"),
    ("Acme", "SF Bay Area", "Retail", "100", "0.1", "3/14/2023", "Post-IPO", "United States", "50"),
    (" Beta ", "Toronto", "CryptoCurrency", "50", "", "1/5/2023", "Series B", "Canada", ""),
    ("Gamma", "New York City", "", "20", "0.05", "2/1/2023", "Seed", "United States.", "10"),
    ("Gamma", "New York City", "Tech", "", "0.2", "12/1/2022", "Seed", "United States", "10"),
    ("Delta", "London", "Finance", "", "", "6/1/2022", "Unknown", "United Kingdom", ""),
    ("Omega", "Berlin", "", "30", "", "", "Series A", "Germany", ""),
]


def records_frame(rows: list[tuple[object, ...]]) -> pd.DataFrame:
    """Build a frame with the record columns from row tuples."""
    return pd.DataFrame(rows, columns=list(RECORD_COLUMNS), dtype=object)


def write_layoffs_csv(path: Path, rows: list[tuple[str, ...]]) -> Path:
    """Write rows to a CSV file with the record header."""
    records_frame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_text_layoffs() -> pd.DataFrame:
    """Raw layoffs exactly as read from CSV (every value a string)."""
    return records_frame(RAW_ROWS)


@pytest.fixture
def raw_layoffs(raw_text_layoffs: pd.DataFrame) -> pd.DataFrame:
    """Raw layoffs with numeric columns converted."""
    return coerce_raw_types(raw_text_layoffs)


@pytest.fixture
def layoffs_csv(tmp_path: Path) -> Path:
    """Sample raw layoffs CSV on disk."""
    return write_layoffs_csv(tmp_path / "layoffs.csv", RAW_ROWS)


@pytest.fixture
def pipeline_config(layoffs_csv: Path) -> PipelineConfig:
    """Default configuration pointing at the sample CSV."""
    return default_config(layoffs_csv, project="test-layoffs")


@pytest.fixture
def clean_layoffs() -> pd.DataFrame:
    """Small clean set for analysis queries."""
    df = pd.DataFrame(
        {
            "company": ["A", "A", "B", "C", "D", "E", "F"],
            "location": ["SF", "SF", "NYC", "Berlin", "London", "Paris", "Austin"],
            "industry": ["Retail", "Retail", "Crypto", None, "Finance", "Retail", "Crypto"],
            "total_laid_off": pd.array([60, 40, 100, 50, 10, None, 7], dtype="Int64"),
            "percentage_laid_off": [0.1, 0.2, None, 1.0, 1.0, 0.3, None],
            "date": pd.to_datetime(
                [
                    "2023-01-10",
                    "2023-02-15",
                    "2023-01-20",
                    "2023-03-01",
                    "2022-11-05",
                    "2023-03-20",
                    None,
                ]
            ),
            "stage": ["Post-IPO", "Post-IPO", "Series B", "Seed", "Series A", "Seed", None],
            "country": [
                "United States",
                "United States",
                "United States",
                "Germany",
                "United Kingdom",
                "France",
                "United States",
            ],
            "funds_raised_millions": pd.array([500, 500, 20, 5, 80, None, 1], dtype="Int64"),
        }
    )
    return df


@pytest.fixture
def make_records():
    """Factory building a record frame from row tuples."""
    return records_frame
