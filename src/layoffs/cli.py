"""Command-line interface for the layoffs pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from layoffs.config.settings import PipelineConfig

app = typer.Typer(
    name="layoffs",
    help="Deduplicate, normalize and analyze company layoff records.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Raw layoffs CSV. Overrides data.raw_layoffs from the config.",
        exists=True,
        dir_okay=False,
    ),
]


def _resolve_config(config: Path | None, input_path: Path | None) -> "PipelineConfig":
    """Build the pipeline config from a YAML file and/or an input path."""
    from layoffs.config.loader import default_config, load_config
    from layoffs.utils.logging import configure_logging

    if config is None and input_path is None:
        console.print("[red]Error: pass --config or --input.[/red]")
        raise typer.Exit(code=1)

    if config is None:
        pipeline_config = default_config(input_path)
    else:
        console.print(f"[blue]Loading configuration from {config}[/blue]")
        pipeline_config = load_config(config)
        if input_path is not None:
            data_paths = pipeline_config.data_paths.model_copy(
                update={"raw_layoffs": input_path, "data_root": Path(".")}
            )
            pipeline_config = pipeline_config.model_copy(update={"data_paths": data_paths})

    configure_logging(
        level=pipeline_config.logging.level,
        json_output=pipeline_config.logging.json_output,
    )
    return pipeline_config


@app.command()
def clean(
    config: ConfigOption = None,
    input_path: InputOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the clean CSV.",
        ),
    ] = None,
) -> None:
    """Run the cleaning pipeline and save the clean dataset."""
    from pandera.errors import SchemaError, SchemaErrors

    from layoffs.cleaning import run_cleaning
    from layoffs.errors import LayoffsError

    pipeline_config = _resolve_config(config, input_path)
    if output is None:
        output = pipeline_config.clean_data_path

    console.print(f"[blue]Cleaning {pipeline_config.data_paths.raw_layoffs}[/blue]")
    console.print(f"[dim]Output: {output}[/dim]")

    try:
        result = run_cleaning(pipeline_config, output_path=output)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except (LayoffsError, SchemaError, SchemaErrors, ValueError) as e:
        console.print(f"[red]Cleaning failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print()
    table = Table(title="Cleaning Pipeline Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Raw records", str(result.n_raw))
    table.add_row("Exact duplicates removed", str(result.n_duplicates))
    table.add_row("Industries canonicalized", str(result.n_crypto_canonicalized))
    table.add_row("Countries fixed", str(result.n_country_fixed))
    table.add_row("Blank industries nulled", str(result.n_blank_industries))
    table.add_row("Industries backfilled", str(result.n_backfilled))
    table.add_row("Records without headcount dropped", str(result.n_pruned))
    table.add_row("Clean records", str(result.n_clean))

    console.print(table)

    if result.output_path:
        console.print(f"\n[green]Saved to: {result.output_path}[/green]")


@app.command()
def analyze(
    config: ConfigOption = None,
    input_path: InputOption = None,
    top_n: Annotated[
        int | None,
        typer.Option(
            "--top-n",
            "-n",
            help="Companies per year in the ranking. Defaults to analysis.top_n.",
            min=1,
        ),
    ] = None,
    export: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Directory to write one CSV per analysis table.",
            file_okay=False,
        ),
    ] = None,
    max_rows: Annotated[
        int,
        typer.Option("--max-rows", help="Rows shown per table.", min=1),
    ] = 10,
) -> None:
    """Clean the raw data and print the exploratory analysis."""
    from pandera.errors import SchemaError, SchemaErrors

    from layoffs.analysis import AnalysisReporter, export_report, run_analysis
    from layoffs.cleaning import run_cleaning
    from layoffs.errors import LayoffsError

    pipeline_config = _resolve_config(config, input_path)

    try:
        result = run_cleaning(pipeline_config)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except (LayoffsError, SchemaError, SchemaErrors, ValueError) as e:
        console.print(f"[red]Cleaning failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    report = run_analysis(
        result.clean_data,
        top_n=top_n or pipeline_config.analysis.top_n,
    )

    AnalysisReporter(console, max_rows=max_rows).print_report(report)

    if export is not None:
        paths = export_report(report, export)
        console.print(f"\n[green]Exported {len(paths)} tables to {export}[/green]")


@app.command()
def validate(
    input_path: Annotated[
        Path,
        typer.Option(
            "--input",
            "-i",
            help="CSV file to validate.",
            exists=True,
            dir_okay=False,
        ),
    ],
    stage: Annotated[
        str,
        typer.Option(
            "--stage",
            "-s",
            help="Which schema to check: 'raw' or 'clean'.",
        ),
    ] = "raw",
) -> None:
    """Validate a CSV against the raw or clean layoffs schema."""
    import pandas as pd
    from pandera.errors import SchemaError, SchemaErrors

    from layoffs.config.loader import default_config
    from layoffs.errors import LayoffsError
    from layoffs.ingestion import LayoffsLoader
    from layoffs.schemas import SchemaRegistry

    if stage not in ["raw", "clean"]:
        console.print(f"[red]Error: Invalid stage '{stage}'. Use 'raw' or 'clean'.[/red]")
        raise typer.Exit(code=1)

    schema_name = f"{stage}_layoffs"
    console.print(f"[blue]Validating {input_path} against {schema_name}...[/blue]")

    try:
        if stage == "raw":
            df = LayoffsLoader(default_config(input_path)).load()
        else:
            df = pd.read_csv(input_path, parse_dates=["date"])
            df = SchemaRegistry.validate(df, schema_name)
    except (LayoffsError, SchemaError, SchemaErrors, ValueError) as e:
        console.print(f"[red]Fail: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Pass: {len(df)} rows match {schema_name}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from layoffs import __version__

    console.print(f"layoffs version {__version__}")


if __name__ == "__main__":
    app()
