"""
Layoffs: Data Cleaning Pipeline for Company Layoff Records.

This package provides deduplication, normalization and null reconciliation
for the layoffs dataset, plus a read-only analysis layer over the clean data.
"""

from importlib.metadata import version

__version__ = version("layoffs")

__all__ = ["__version__"]
