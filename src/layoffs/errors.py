"""
Exception types raised by the cleaning pipeline.

Both errors are fatal: they abort the whole batch and no partial
clean output is produced.
"""


class LayoffsError(Exception):
    """Base class for all pipeline errors."""


class MalformedDateError(LayoffsError, ValueError):
    """A date string could not be parsed with the expected format."""

    def __init__(self, values: list[str], date_format: str) -> None:
        self.values = values
        self.date_format = date_format
        preview = ", ".join(repr(v) for v in values[:5])
        if len(values) > 5:
            preview += f", ... ({len(values)} total)"
        super().__init__(f"Cannot parse dates with format {date_format!r}: {preview}")


class SchemaMismatchError(LayoffsError, ValueError):
    """A raw record set is missing expected columns."""

    def __init__(self, missing: list[str], source: str | None = None) -> None:
        self.missing = missing
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Missing required columns{where}: {missing}")
