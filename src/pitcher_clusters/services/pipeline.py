from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pitcher_clusters.aggregation.aggregator import aggregate_rows
from pitcher_clusters.clustering.kmeans import KMeansEngine
from pitcher_clusters.domain.errors import InvalidInputError, InvalidParameterError, PipelineError
from pitcher_clusters.domain.result import Err, Ok, Result
from pitcher_clusters.report.cluster_report import ClusterReport

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pitcher_clusters.config import PipelineSettings
    from pitcher_clusters.domain.cluster import ClusterResult
    from pitcher_clusters.domain.feature_vector import FeatureVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    features: list[FeatureVector]  # all aggregated fields
    cluster_inputs: list[FeatureVector]  # projected onto the clustering fields
    result: ClusterResult
    report: ClusterReport


def run_pipeline(
    rows: Iterable[Mapping[str, Any]],
    settings: PipelineSettings,
) -> Result[PipelineResult, PipelineError]:
    """Aggregate raw pitch rows per pitcher and cluster the summaries."""
    features = aggregate_rows(rows, settings.aggregation)
    logger.info("Aggregated %d qualifying pitchers", len(features))

    k = settings.clustering.n_clusters
    if len(features) < k:
        return Err(
            PipelineError(
                message=f"Only {len(features)} pitchers qualified; need at least {k} to form {k} clusters.",
                stage="aggregate",
            )
        )

    try:
        cluster_inputs = [v.select(settings.clustering.cluster_fields) for v in features]
    except KeyError as e:
        return Err(PipelineError(message=str(e.args[0]), stage="project"))

    engine = KMeansEngine.from_config(settings.clustering)
    try:
        result = engine.fit(cluster_inputs)
    except (InvalidInputError, InvalidParameterError) as e:
        return Err(PipelineError(message=str(e), stage="cluster"))

    report = ClusterReport(result, index_name=settings.aggregation.group_key)
    return Ok(PipelineResult(features=features, cluster_inputs=cluster_inputs, result=result, report=report))
