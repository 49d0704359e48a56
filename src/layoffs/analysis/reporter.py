"""
Reporting sink for analysis results.

Renders an AnalysisReport as Rich tables or exports it as CSV files.
"""

from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.table import Table

from layoffs.analysis.queries import AnalysisReport
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def _format_value(value: object) -> str:
    """Render a cell, showing missing values as a dash."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return "-"
    if isinstance(value, pd.Timestamp):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class AnalysisReporter:
    """Formats and displays analysis results to the console."""

    def __init__(self, console: Console, max_rows: int = 10) -> None:
        """
        Initialize analysis reporter.

        Args:
            console: Rich Console instance for output.
            max_rows: Rows shown per table.
        """
        self.console = console
        self.max_rows = max_rows

    def print_report(self, report: AnalysisReport) -> None:
        """
        Print all analysis results.

        Args:
            report: Results to display.
        """
        self._print_summary(report)
        for name, frame in report.tables().items():
            self.print_frame(frame, title=name.replace("_", " ").title())

    def print_frame(self, frame: pd.DataFrame, title: str) -> None:
        """Print the first max_rows rows of a DataFrame as a table."""
        table = Table(title=title, show_header=True)
        for col in frame.columns:
            justify = "right" if pd.api.types.is_numeric_dtype(frame[col]) else "left"
            table.add_column(str(col), justify=justify)

        for row in frame.head(self.max_rows).itertuples(index=False):
            table.add_row(*(_format_value(v) for v in row))

        self.console.print(table)
        if len(frame) > self.max_rows:
            self.console.print(f"[dim]... {len(frame) - self.max_rows} more rows[/dim]")

    def _print_summary(self, report: AnalysisReport) -> None:
        """Print date range and maxima."""
        table = Table(title="Layoffs Overview")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("First date", _format_value(report.first_date))
        table.add_row("Last date", _format_value(report.last_date))
        table.add_row("Max total laid off", _format_value(report.maxima["total_laid_off"]))
        table.add_row(
            "Max percentage laid off",
            _format_value(report.maxima["percentage_laid_off"]),
        )

        self.console.print(table)


def export_report(report: AnalysisReport, directory: Path) -> list[Path]:
    """
    Write every analysis table to its own CSV file.

    Args:
        report: Results to export.
        directory: Target directory (created if missing).

    Returns:
        Paths of the written files.
    """
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for name, frame in report.tables().items():
        path = directory / f"{name}.csv"
        frame.to_csv(path, index=False, date_format="%Y-%m-%d")
        written.append(path)

    log.info("Exported analysis tables", directory=str(directory), files=len(written))
    return written
