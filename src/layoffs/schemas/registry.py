"""
Schema registry for versioning and discovery.

Provides centralized access to the layoff schemas by pipeline stage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from layoffs.schemas.layoff import CleanLayoffSchema, RawLayoffSchema

if TYPE_CHECKING:
    import pandas as pd


class DataRole(Enum):
    """Classification of data products by their role in the pipeline."""

    SOURCE = "source"  # As delivered by the tabular source
    OUTPUT = "output"  # Clean set handed to analysis


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    schema: type[pa.DataFrameModel]
    version: str
    role: DataRole
    description: str


class SchemaRegistry:
    """Centralized registry for all data schemas."""

    _version = "1.0.0"

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "raw_layoffs": SchemaInfo(
            name="raw_layoffs",
            schema=RawLayoffSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Layoff records as loaded from the CSV source",
        ),
        "clean_layoffs": SchemaInfo(
            name="clean_layoffs",
            schema=CleanLayoffSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Deduplicated, normalized and reconciled layoff records",
        ),
    }

    @classmethod
    def registry_version(cls) -> str:
        """Version of the registry as a whole."""
        return cls._version

    @classmethod
    def list_schemas(cls) -> list[str]:
        """Names of all registered schemas."""
        return list(cls._schemas.keys())

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get metadata for a schema.

        Raises:
            KeyError: If the schema is not registered.
        """
        if name not in cls._schemas:
            msg = f"Unknown schema: {name!r}. Available: {cls.list_schemas()}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def get(cls, name: str) -> type[pa.DataFrameModel]:
        """Get a schema class by name."""
        return cls.get_info(name).schema

    @classmethod
    def list_by_role(cls, role: DataRole) -> list[str]:
        """Names of schemas with the given role."""
        return [name for name, info in cls._schemas.items() if info.role == role]

    @classmethod
    def validate(cls, df: "pd.DataFrame", name: str) -> "pd.DataFrame":
        """Validate a DataFrame against a registered schema."""
        return cls.get(name).validate(df)
