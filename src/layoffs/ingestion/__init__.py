"""
Data ingestion layer for loading raw data with schema validation.

All raw data loading happens through this module to ensure
consistent validation at system boundaries.
"""

from layoffs.ingestion.layoffs import LayoffsLoader, coerce_raw_types, load_layoffs

__all__ = ["LayoffsLoader", "coerce_raw_types", "load_layoffs"]
