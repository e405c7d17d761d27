"""Lloyd's k-means over per-pitcher feature vectors.

Inputs are clustered in their native units; no scaling is applied, so
wider-range dimensions dominate the distance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pitcher_clusters.domain.cluster import ClusterResult
from pitcher_clusters.domain.errors import InvalidInputError, InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pitcher_clusters.domain.feature_vector import FeatureVector

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 300


@dataclass(frozen=True)
class ClusteringConfig:
    cluster_fields: tuple[str, ...]
    n_clusters: int = 4
    seed: int | None = 42
    max_iterations: int = DEFAULT_MAX_ITERATIONS


def _squared_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    diff = X[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.einsum("ijk,ijk->ij", diff, diff)


def assign_labels(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Nearest-centroid labels; argmin keeps the lowest label on ties."""
    return np.argmin(_squared_distances(X, centroids), axis=1)


def update_centroids(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Mean of each cluster's members. Empty clusters keep their centroid."""
    updated = centroids.copy()
    for k in range(centroids.shape[0]):
        mask = labels == k
        if mask.any():
            updated[k] = X[mask].mean(axis=0)
    return updated


def total_inertia(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    diff = X - centroids[labels]
    return float(np.einsum("ij,ij->", diff, diff))


class KMeansEngine:
    """Partition feature vectors into ``n_clusters`` groups.

    Initial centroids are K distinct input points drawn without replacement
    from a generator seeded with ``seed``. The same seed, input and K always
    yield the same result.
    """

    def __init__(
        self,
        n_clusters: int,
        *,
        seed: int | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        self._n_clusters = n_clusters
        self._seed = seed
        self._max_iterations = max_iterations

    @classmethod
    def from_config(cls, config: ClusteringConfig) -> KMeansEngine:
        return cls(config.n_clusters, seed=config.seed, max_iterations=config.max_iterations)

    @property
    def n_clusters(self) -> int:
        return self._n_clusters

    def _validate(self, vectors: Sequence[FeatureVector]) -> np.ndarray:
        dims = {v.dimension for v in vectors}
        if len(dims) > 1:
            msg = f"Feature vectors have mixed dimensionality: {sorted(dims)}"
            raise InvalidInputError(msg)
        if dims == {0}:
            msg = "Feature vectors must have at least one dimension."
            raise InvalidInputError(msg)
        field_sets = {v.fields for v in vectors}
        if len(field_sets) > 1:
            msg = f"Feature vectors describe different fields: {sorted(field_sets)}"
            raise InvalidInputError(msg)
        ids = [v.entity_id for v in vectors]
        if len(set(ids)) != len(ids):
            msg = "Feature vectors contain duplicate entity identifiers."
            raise InvalidInputError(msg)

        X = np.array([v.values for v in vectors], dtype=float)
        if X.size and not np.isfinite(X).all():
            msg = "Feature vectors contain non-finite values."
            raise InvalidInputError(msg)

        if self._max_iterations < 1:
            msg = f"max_iterations must be at least 1, got {self._max_iterations}."
            raise InvalidParameterError(msg)
        n_distinct = len({tuple(row) for row in X.tolist()})
        if not 1 <= self._n_clusters <= n_distinct:
            msg = f"n_clusters must be between 1 and the number of distinct vectors ({n_distinct}), got {self._n_clusters}."
            raise InvalidParameterError(msg)
        return X

    def _initial_centroids(self, X: np.ndarray) -> np.ndarray:
        # First occurrence of each distinct point, in input order
        _, first_idx = np.unique(X, axis=0, return_index=True)
        distinct = X[np.sort(first_idx)]
        rng = np.random.default_rng(self._seed)
        chosen = rng.choice(distinct.shape[0], size=self._n_clusters, replace=False)
        return distinct[chosen].copy()

    def _check_initial(self, initial: Sequence[Sequence[float]], dimension: int) -> np.ndarray:
        centroids = np.array(initial, dtype=float)
        if centroids.shape != (self._n_clusters, dimension):
            msg = f"initial_centroids must have shape ({self._n_clusters}, {dimension}), got {centroids.shape}."
            raise InvalidInputError(msg)
        if not np.isfinite(centroids).all():
            msg = "initial_centroids contain non-finite values."
            raise InvalidInputError(msg)
        if len({tuple(row) for row in centroids.tolist()}) != self._n_clusters:
            msg = "initial_centroids must be distinct."
            raise InvalidInputError(msg)
        return centroids

    def fit(
        self,
        vectors: Sequence[FeatureVector],
        initial_centroids: Sequence[Sequence[float]] | None = None,
    ) -> ClusterResult:
        """Run Lloyd's iteration to convergence or the iteration cap.

        Args:
            vectors: Feature vectors sharing the same fields.
            initial_centroids: Optional explicit starting centroids, one row
                per cluster. Overrides seeded sampling.

        Raises:
            InvalidInputError: Mixed dimensionality or fields, duplicate ids,
                non-finite values, or malformed initial centroids.
            InvalidParameterError: K outside [1, distinct vectors] or a
                non-positive iteration cap.
        """
        X = self._validate(vectors)
        if initial_centroids is not None:
            centroids = self._check_initial(initial_centroids, X.shape[1])
        else:
            centroids = self._initial_centroids(X)
        logger.debug("Initialized %d centroids for %d vectors (seed=%s)", self._n_clusters, len(vectors), self._seed)

        labels = assign_labels(X, centroids)
        history = [total_inertia(X, labels, centroids)]
        converged = False
        iterations = 0
        while iterations < self._max_iterations:
            iterations += 1
            centroids = update_centroids(X, labels, centroids)
            new_labels = assign_labels(X, centroids)
            history.append(total_inertia(X, new_labels, centroids))
            if np.array_equal(new_labels, labels):
                converged = True
                break
            labels = new_labels

        if converged:
            logger.info("k-means converged after %d iterations (inertia %.4f)", iterations, history[-1])
        else:
            logger.warning("k-means stopped at the iteration cap (%d) without converging", self._max_iterations)

        fields = vectors[0].fields if vectors[0].fields else tuple(f"x{i}" for i in range(X.shape[1]))
        return ClusterResult(
            entity_ids=tuple(v.entity_id for v in vectors),
            labels=tuple(int(label) for label in labels),
            centroids=tuple(tuple(float(c) for c in row) for row in centroids),
            fields=fields,
            n_iterations=iterations,
            converged=converged,
            inertia_history=tuple(history),
        )
