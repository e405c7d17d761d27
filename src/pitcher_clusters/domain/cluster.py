from dataclasses import dataclass


@dataclass(frozen=True)
class Cluster:
    label: int
    centroid: tuple[float, ...]
    members: tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class ClusterResult:
    entity_ids: tuple[str, ...]
    labels: tuple[int, ...]  # parallel to entity_ids
    centroids: tuple[tuple[float, ...], ...]
    fields: tuple[str, ...]
    n_iterations: int
    converged: bool
    inertia_history: tuple[float, ...] = ()

    @property
    def n_clusters(self) -> int:
        return len(self.centroids)

    @property
    def inertia(self) -> float:
        return self.inertia_history[-1] if self.inertia_history else 0.0

    @property
    def assignment(self) -> dict[str, int]:
        return dict(zip(self.entity_ids, self.labels, strict=True))

    def members(self, label: int) -> tuple[str, ...]:
        return tuple(e for e, lab in zip(self.entity_ids, self.labels, strict=True) if lab == label)

    def clusters(self) -> list[Cluster]:
        return [
            Cluster(label=label, centroid=centroid, members=self.members(label))
            for label, centroid in enumerate(self.centroids)
        ]
