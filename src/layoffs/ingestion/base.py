"""
Base classes and utilities for data ingestion.

Provides common functionality for all data loaders.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from layoffs.config.settings import PipelineConfig
from layoffs.errors import SchemaMismatchError
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for data loaders.

    All data loaders inherit from this class to ensure consistent
    schema validation at system boundaries.
    """

    required_columns: tuple[str, ...] = ()

    def __init__(self, config: PipelineConfig, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            config: Pipeline configuration.
            schema: Pandera schema for validation.
        """
        self.config = config
        self.schema = schema

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def _prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        """Convert raw text columns to schema types. Override as needed."""
        return df

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load, type-convert and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If data file not found.
            SchemaMismatchError: If expected columns are missing.
            pandera.errors.SchemaError: If validation fails.
        """
        log.info("Loading data", loader=self.__class__.__name__)

        df = self._load_raw()
        log.info("Loaded raw data", rows=len(df), columns=list(df.columns))

        self.check_columns(df)
        df = self._prepare(df)

        if validate:
            df = self.schema.validate(df)
            log.info("Schema validation passed", schema=self.schema.__name__)

        return df

    def check_columns(self, df: pd.DataFrame) -> None:
        """
        Ensure every required column is present.

        Raises:
            SchemaMismatchError: Listing the missing columns.
        """
        require_columns(df, self.required_columns, source=self.__class__.__name__)

    def resolve_path(self, relative_path: Path) -> Path:
        """
        Resolve a relative path against data root.

        Args:
            relative_path: Path relative to data root.

        Returns:
            Absolute path.
        """
        return self.config.data_paths.data_root / relative_path


def require_columns(
    df: pd.DataFrame,
    required: tuple[str, ...] | list[str],
    source: str | None = None,
) -> None:
    """
    Check that required columns are present.

    Raises:
        SchemaMismatchError: Listing the missing columns.
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise SchemaMismatchError(missing, source=source)
