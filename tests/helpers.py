from typing import Any

from pitcher_clusters.domain.feature_vector import FeatureVector
from pitcher_clusters.domain.pitch_record import PitchRecord


def pitch_row(
    name: str,
    pitch_type: str = "FF",
    release_speed: Any = 95.0,
    pfx_x: Any = -0.5,
    pfx_z: Any = 1.4,
) -> dict[str, Any]:
    return {
        "player_name": name,
        "pitch_type": pitch_type,
        "release_speed": release_speed,
        "pfx_x": pfx_x,
        "pfx_z": pfx_z,
    }


def pitch_record(name: str, pitch_type: str | None = "FF", **measurements: float | None) -> PitchRecord:
    values: dict[str, float | None] = {"release_speed": 95.0, "pfx_x": -0.5, "pfx_z": 1.4}
    values.update(measurements)
    return PitchRecord(entity_id=name, pitch_type=pitch_type, measurements=values)


def vector(name: str, *values: float, fields: tuple[str, ...] | None = None) -> FeatureVector:
    return FeatureVector(
        entity_id=name,
        values=tuple(float(v) for v in values),
        fields=fields or tuple(f"f{i}" for i in range(len(values))),
        sample_size=1,
    )
