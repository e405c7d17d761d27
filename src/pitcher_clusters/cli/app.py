import logging
from pathlib import Path  # noqa: TC003 (needed at runtime by Typer)
from typing import Annotated

import typer

from pitcher_clusters.cli._logging import configure_logging
from pitcher_clusters.cli._output import print_cluster_summary, print_error, print_lookup, print_written
from pitcher_clusters.config import DEFAULT_YAML_PATH, create_config, load_pipeline_settings
from pitcher_clusters.domain.errors import PitcherClustersError
from pitcher_clusters.domain.result import Err, Ok
from pitcher_clusters.ingest.csv_source import CsvSource
from pitcher_clusters.report.cluster_report import read_assignment
from pitcher_clusters.report.scatter import plot_clusters
from pitcher_clusters.services.pipeline import run_pipeline

logger = logging.getLogger(__name__)

app = typer.Typer(name="pcl", help="Cluster pitchers by pitch movement from Statcast pitch data.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Cluster pitchers by pitch movement from Statcast pitch data."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@app.command(name="cluster")
def cluster_cmd(
    input_csv: Annotated[Path, typer.Argument(help="Pitch-level CSV export (one row per pitch)")],
    n_clusters: Annotated[int | None, typer.Option("--k", "-k", help="Number of clusters")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for centroid initialization")] = None,
    pitch_types: Annotated[
        list[str] | None, typer.Option("--pitch-type", "-p", help="Pitch type label(s) to keep, e.g. FF")
    ] = None,
    min_pitches: Annotated[
        int | None, typer.Option("--min-pitches", help="Pitchers need more than this many pitches")
    ] = None,
    max_iterations: Annotated[int | None, typer.Option("--max-iterations", help="Iteration cap")] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exclude pitchers with an undefined statistic instead of zero-filling")
    ] = False,
    config_path: Annotated[str, typer.Option("--config", help="YAML configuration file")] = DEFAULT_YAML_PATH,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write one-hot assignments CSV")] = None,
    plot: Annotated[Path | None, typer.Option("--plot", help="Write a scatter plot image")] = None,
) -> None:
    """Aggregate pitches per pitcher and cluster the medians.

    Example:
        pcl cluster statcast_2024.csv --k 5 --pitch-type FF --output clusters.csv --plot clusters.png
    """
    overrides: dict[str, object] = {
        "aggregation": {
            "pitch_types": pitch_types or None,
            "min_sample_count": min_pitches,
            "fill_undefined": False if strict else None,
        },
        "clustering": {
            "n_clusters": n_clusters,
            "seed": seed,
            "max_iterations": max_iterations,
        },
    }
    try:
        settings = load_pipeline_settings(create_config(yaml_path=config_path, overrides=overrides))
    except PitcherClustersError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    fields = settings.clustering.cluster_fields
    if plot is not None and len(fields) < 2:
        print_error("A scatter plot needs at least two clustering fields.")
        raise typer.Exit(code=1)

    if not input_csv.exists():
        print_error(f"Input file not found: {input_csv}")
        raise typer.Exit(code=1)

    rows = CsvSource(input_csv).fetch()
    logger.info("Loaded %d pitch rows from %s", len(rows), input_csv)

    match run_pipeline(rows, settings):
        case Ok(outcome):
            print_cluster_summary(outcome)
            if output is not None:
                print_written("assignments", outcome.report.to_csv(output))
            if plot is not None:
                print_written(
                    "scatter plot",
                    plot_clusters(outcome.cluster_inputs, outcome.result, plot, x_field=fields[0], y_field=fields[1]),
                )
        case Err(e):
            print_error(f"{e.stage}: {e.message}")
            raise typer.Exit(code=1)


@app.command(name="lookup")
def lookup_cmd(
    assignments_csv: Annotated[Path, typer.Argument(help="CSV written by 'pcl cluster --output'")],
    names: Annotated[list[str], typer.Argument(help="Pitcher name(s), e.g. 'Cole, Gerrit'")],
) -> None:
    """Show the cluster of one or more pitchers from an exported table."""
    try:
        assignment = read_assignment(assignments_csv)
    except (OSError, PitcherClustersError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    missing = [n for n in names if n not in assignment]
    if missing:
        print_error(f"Not in {assignments_csv}: {', '.join(missing)}")
        raise typer.Exit(code=1)
    print_lookup({n: assignment[n] for n in names})
