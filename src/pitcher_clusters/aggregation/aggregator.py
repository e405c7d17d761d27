"""Per-pitcher feature summarization.

Reduces pitch-level records to one FeatureVector per entity. Records are
filtered (pitch type, complete measurements), grouped by entity in a single
pass, and each group large enough to qualify is summarized field by field
with a robust statistic.
"""

from __future__ import annotations

import logging
import math
import statistics
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pitcher_clusters.domain.errors import ConfigError
from pitcher_clusters.domain.feature_vector import FeatureVector
from pitcher_clusters.ingest.column_maps import pitch_record_mapper

if TYPE_CHECKING:
    from pitcher_clusters.domain.pitch_record import PitchRecord

logger = logging.getLogger(__name__)

Statistic = Callable[[Sequence[float]], float]

STATISTICS: dict[str, Statistic] = {
    "median": statistics.median,
    "mean": statistics.fmean,
}

UNDEFINED_FILL: float = 0.0


def resolve_statistic(name: str) -> Statistic:
    try:
        return STATISTICS[name]
    except KeyError:
        msg = f"Unknown statistic: {name!r}. Use one of {sorted(STATISTICS)}."
        raise ConfigError(msg) from None


@dataclass(frozen=True)
class AggregationConfig:
    measurement_fields: tuple[str, ...]
    min_sample_count: int = 50
    group_key: str = "player_name"
    pitch_type_field: str = "pitch_type"
    # Empty means every pitch type passes
    pitch_types: tuple[str, ...] = ()
    statistic: Statistic = field(default=statistics.median, repr=False)
    # False excludes entities with an undefined statistic instead of zero-filling
    fill_undefined: bool = True
    predicate: Callable[[PitchRecord], bool] | None = field(default=None, repr=False)

    def accepts(self, record: PitchRecord) -> bool:
        if self.pitch_types and record.pitch_type not in self.pitch_types:
            return False
        if self.predicate is not None and not self.predicate(record):
            return False
        return record.has_all(self.measurement_fields)


def _summarize(values: list[float], statistic: Statistic) -> float | None:
    if not values:
        return None
    try:
        result = float(statistic(values))
    except statistics.StatisticsError:
        return None
    if math.isnan(result):
        return None
    return result


def aggregate_features(records: Iterable[PitchRecord], config: AggregationConfig) -> list[FeatureVector]:
    """Summarize records into one FeatureVector per qualifying entity.

    An entity qualifies when its count of accepted records is strictly
    greater than ``config.min_sample_count``. Records failing the filter or
    missing any measurement are dropped entirely before counting.

    Returns:
        FeatureVectors in first-seen entity order.
    """
    fields = config.measurement_fields
    groups: dict[str, list[PitchRecord]] = defaultdict(list)
    seen = 0
    for record in records:
        seen += 1
        if config.accepts(record):
            groups[record.entity_id].append(record)

    vectors: list[FeatureVector] = []
    insufficient = 0
    undefined = 0
    for entity_id, group in groups.items():
        if len(group) <= config.min_sample_count:
            insufficient += 1
            continue
        summary: list[float] = []
        for f in fields:
            value = _summarize([r.measurements[f] for r in group], config.statistic)  # type: ignore[misc]
            if value is None:
                if not config.fill_undefined:
                    break
                value = UNDEFINED_FILL
            summary.append(value)
        if len(summary) != len(fields):
            undefined += 1
            continue
        vectors.append(
            FeatureVector(
                entity_id=entity_id,
                values=tuple(summary),
                fields=fields,
                sample_size=len(group),
            )
        )

    accepted = sum(len(g) for g in groups.values())
    logger.debug(
        "Aggregated %d records (%d accepted) into %d entities; %d below minimum, %d undefined",
        seen,
        accepted,
        len(vectors),
        insufficient,
        undefined,
    )
    return vectors


def aggregate_rows(rows: Iterable[Mapping[str, Any]], config: AggregationConfig) -> list[FeatureVector]:
    """Map raw source rows to PitchRecords and aggregate them."""
    records = (
        pitch_record_mapper(
            row,
            entity_field=config.group_key,
            pitch_type_field=config.pitch_type_field,
            measurement_fields=config.measurement_fields,
        )
        for row in rows
    )
    return aggregate_features((r for r in records if r is not None), config)
