"""
Cleaning pipeline for the layoffs table.

Duplicate removal, normalization and null reconciliation, run in a
fixed order by CleaningPipeline.
"""

from layoffs.cleaning.pipeline import CleaningPipeline, CleaningResult, run_cleaning

__all__ = ["CleaningPipeline", "CleaningResult", "run_cleaning"]
