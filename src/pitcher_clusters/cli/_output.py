from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from pitcher_clusters.services.pipeline import PipelineResult

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_cluster_summary(outcome: PipelineResult) -> None:
    result = outcome.report.result
    status = "[green]converged[/green]" if result.converged else "[yellow]iteration cap reached[/yellow]"
    console.print(
        f"[bold]{len(outcome.features)}[/bold] pitchers in [bold]{result.n_clusters}[/bold] clusters "
        f"after {result.n_iterations} iterations ({status}), inertia {result.inertia:.4f}"
    )

    summary = outcome.report.summary()
    table = Table(title="Clusters")
    table.add_column("Cluster", justify="right")
    table.add_column("Size", justify="right")
    for field_name in result.fields:
        table.add_column(field_name, justify="right")
    table.add_column("Members")
    for label, row in summary.iterrows():
        members = result.members(int(label))
        shown = ", ".join(members[:5]) + (f" (+{len(members) - 5})" if len(members) > 5 else "")
        table.add_row(
            str(label),
            str(int(row["size"])),
            *(f"{row[f]:.3f}" for f in result.fields),
            shown,
        )
    console.print(table)


def print_written(kind: str, path: Path) -> None:
    console.print(f"[bold green]Wrote[/bold green] {kind} to {path}")


def print_lookup(labels: dict[str, int]) -> None:
    table = Table(title="Cluster lookup")
    table.add_column("Pitcher")
    table.add_column("Cluster", justify="right")
    for name, label in labels.items():
        table.add_row(name, str(label))
    console.print(table)
    if len(set(labels.values())) == 1 and len(labels) > 1:
        console.print("[green]All named pitchers share a cluster.[/green]")
