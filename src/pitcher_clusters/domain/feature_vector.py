from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureVector:
    """Per-entity summary point.

    ``values[i]`` is the summary statistic of ``fields[i]`` over the
    ``sample_size`` records that qualified the entity.
    """

    entity_id: str
    values: tuple[float, ...]
    fields: tuple[str, ...]
    sample_size: int = 0

    @property
    def dimension(self) -> int:
        return len(self.values)

    def value(self, field_name: str) -> float:
        return self.values[self.fields.index(field_name)]

    def select(self, fields: tuple[str, ...]) -> FeatureVector:
        """Project onto a subset of fields, in the order given.

        Raises:
            KeyError: If a requested field was not aggregated.
        """
        missing = [f for f in fields if f not in self.fields]
        if missing:
            msg = f"Fields not present on feature vector for {self.entity_id!r}: {missing}"
            raise KeyError(msg)
        return FeatureVector(
            entity_id=self.entity_id,
            values=tuple(self.value(f) for f in fields),
            fields=fields,
            sample_size=self.sample_size,
        )
