import math
from collections.abc import Mapping
from typing import Any

from pitcher_clusters.domain.pitch_record import PitchRecord


def _to_optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f


def _to_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    s = str(value).strip()
    if s == "":
        return None
    return s


def pitch_record_mapper(
    row: Mapping[str, Any],
    *,
    entity_field: str,
    pitch_type_field: str,
    measurement_fields: tuple[str, ...],
) -> PitchRecord | None:
    """Coerce one raw row into a PitchRecord.

    Measurements that are absent from the row or fail to parse are stored
    as None. Rows without an entity identifier cannot be grouped and map
    to None.
    """
    entity_id = _to_optional_str(row.get(entity_field))
    if entity_id is None:
        return None
    return PitchRecord(
        entity_id=entity_id,
        pitch_type=_to_optional_str(row.get(pitch_type_field)),
        measurements={f: _to_optional_float(row.get(f)) for f in measurement_fields},
    )
