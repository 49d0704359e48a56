"""
Analysis layer over the clean layoffs set.

Pure, read-only aggregations plus console and CSV reporting.
"""

from layoffs.analysis.queries import (
    DIMENSIONS,
    AnalysisReport,
    company_year_ranking,
    date_range,
    full_shutdowns,
    max_layoffs,
    monthly_rolling_total,
    run_analysis,
    total_laid_off_by,
)
from layoffs.analysis.reporter import AnalysisReporter, export_report

__all__ = [
    "DIMENSIONS",
    "AnalysisReport",
    "AnalysisReporter",
    "company_year_ranking",
    "date_range",
    "export_report",
    "full_shutdowns",
    "max_layoffs",
    "monthly_rolling_total",
    "run_analysis",
    "total_laid_off_by",
]
