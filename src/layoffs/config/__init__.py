"""
Configuration management with typed Pydantic models.

Provides YAML loading with inheritance and environment interpolation.
"""

from layoffs.config.loader import default_config, load_config
from layoffs.config.settings import (
    AnalysisConfig,
    CleaningConfig,
    DataPathsConfig,
    IngestionConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
)

__all__ = [
    "AnalysisConfig",
    "CleaningConfig",
    "DataPathsConfig",
    "IngestionConfig",
    "LoggingConfig",
    "OutputConfig",
    "PipelineConfig",
    "default_config",
    "load_config",
]
