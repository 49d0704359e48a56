"""
Schema definitions using Pandera for data validation.

All data contracts are defined here to ensure explicit,
validated data structures throughout the pipeline.
"""

from layoffs.schemas.layoff import (
    PARTITION_COLUMNS,
    RECORD_COLUMNS,
    CleanLayoffSchema,
    RawLayoffSchema,
)
from layoffs.schemas.registry import DataRole, SchemaRegistry

__all__ = [
    "PARTITION_COLUMNS",
    "RECORD_COLUMNS",
    "CleanLayoffSchema",
    "DataRole",
    "RawLayoffSchema",
    "SchemaRegistry",
]
