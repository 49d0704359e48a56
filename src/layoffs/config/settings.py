"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
The defaults reproduce the standard cleaning rules for the layoffs table.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from layoffs.schemas.layoff import PARTITION_COLUMNS, RECORD_COLUMNS


class DataPathsConfig(BaseModel):
    """Data file paths configuration.

    All paths are relative to data_root. Use resolve() to get absolute paths.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("."), description="Root directory for all data files"
    )
    raw_layoffs: Path = Field(description="Path to the raw layoffs CSV")
    clean_output: Path | None = Field(
        default=None, description="Where to write the clean CSV (optional)"
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class IngestionConfig(BaseModel):
    """How raw CSV text is read."""

    model_config = ConfigDict(frozen=True)

    null_markers: list[str] = Field(
        default_factory=lambda: ["NULL"],
        description="Literal strings that stand for a missing value",
    )
    encoding: str = Field(default="utf-8")


class CleaningConfig(BaseModel):
    """Rules applied by the cleaning pipeline."""

    model_config = ConfigDict(frozen=True)

    partition_columns: list[str] = Field(
        default_factory=lambda: list(PARTITION_COLUMNS),
        description="Composite key identifying exact duplicates",
    )
    date_format: str = Field(default="%m/%d/%Y", description="strptime format of raw dates")
    industry_mapping: dict[str, str] = Field(
        default_factory=lambda: {r"^crypto": "Crypto"},
        description="Case-insensitive regex -> canonical industry label",
    )
    country_trailing_punctuation: list[str] = Field(
        default_factory=lambda: ["United States."],
        description="Country prefixes whose trailing periods are stripped",
    )

    @field_validator("partition_columns")
    @classmethod
    def validate_partition_columns(cls, v: list[str]) -> list[str]:
        """Ensure the composite key only names record columns."""
        if not v:
            msg = "partition_columns must not be empty"
            raise ValueError(msg)
        unknown = [c for c in v if c not in RECORD_COLUMNS]
        if unknown:
            msg = f"Unknown partition columns: {unknown}"
            raise ValueError(msg)
        return v


class AnalysisConfig(BaseModel):
    """Analysis layer configuration."""

    model_config = ConfigDict(frozen=True)

    top_n: int = Field(default=5, ge=1, description="Companies kept per year in rankings")


class OutputConfig(BaseModel):
    """Output paths configuration.

    Structure: ./output/{project}/layoffs_clean.csv, ./output/{project}/reports/
    """

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(
        default=Path("./output"), description="Root directory for all outputs"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {v!r}"
            raise ValueError(msg)
        return level


class PipelineConfig(BaseModel):
    """Complete pipeline configuration.

    The project name drives the output directory structure: ./output/{project}/
    """

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'layoffs-2023')")

    data_paths: DataPathsConfig
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def project_dir(self) -> Path:
        """Path to this project's output directory."""
        return self.output.output_root / self.project

    @property
    def clean_data_path(self) -> Path:
        """Where the clean CSV goes unless data.clean_output overrides it."""
        if self.data_paths.clean_output is not None:
            return self.data_paths.resolve("clean_output")
        return self.project_dir / "layoffs_clean.csv"

    @property
    def reports_dir(self) -> Path:
        """Path to exported analysis reports."""
        return self.project_dir / "reports"
