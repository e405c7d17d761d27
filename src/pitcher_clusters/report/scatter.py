from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from matplotlib.figure import Figure

from pitcher_clusters.domain.errors import InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pitcher_clusters.domain.cluster import ClusterResult
    from pitcher_clusters.domain.feature_vector import FeatureVector

logger = logging.getLogger(__name__)


def plot_clusters(
    vectors: Sequence[FeatureVector],
    result: ClusterResult,
    path: str | Path,
    *,
    x_field: str = "pfx_x",
    y_field: str = "pfx_z",
    title: str | None = None,
) -> Path:
    """Write a 2-D scatter of clustered vectors, one colour per cluster.

    Centroids are drawn only when both axes are clustering fields.

    Raises:
        InvalidParameterError: If an axis field was not aggregated.
    """
    fields = vectors[0].fields if vectors else ()
    for axis_field in (x_field, y_field):
        if axis_field not in fields:
            msg = f"Cannot plot {axis_field!r}; available fields: {list(fields)}"
            raise InvalidParameterError(msg)

    assignment = result.assignment
    fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot()
    for label in range(result.n_clusters):
        members = [v for v in vectors if assignment.get(v.entity_id) == label]
        ax.scatter(
            [v.value(x_field) for v in members],
            [v.value(y_field) for v in members],
            s=18,
            alpha=0.75,
            label=f"Cluster {label} ({len(members)})",
        )

    if x_field in result.fields and y_field in result.fields:
        xi, yi = result.fields.index(x_field), result.fields.index(y_field)
        ax.scatter(
            [c[xi] for c in result.centroids],
            [c[yi] for c in result.centroids],
            marker="x",
            s=80,
            c="black",
            label="Centroids",
        )

    ax.set_xlabel(x_field)
    ax.set_ylabel(y_field)
    ax.set_title(title or f"{result.n_clusters} clusters by {x_field} / {y_field}")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best", fontsize="small")

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=150, bbox_inches="tight")
    logger.info("Saved cluster scatter to %s", out)
    return out
