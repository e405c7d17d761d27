from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PitchRecord:
    entity_id: str
    pitch_type: str | None = None
    # None marks a measurement that was missing or unparseable
    measurements: Mapping[str, float | None] = field(default_factory=dict)

    def has_all(self, fields: tuple[str, ...]) -> bool:
        return all(self.measurements.get(f) is not None for f in fields)
