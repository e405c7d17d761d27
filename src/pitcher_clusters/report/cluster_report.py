from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from pitcher_clusters.domain.errors import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pitcher_clusters.domain.cluster import ClusterResult

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "player_name"


class ClusterReport:
    """One-hot view of a clustering run, keyed by entity identifier."""

    def __init__(self, result: ClusterResult, index_name: str = DEFAULT_INDEX_NAME) -> None:
        self._result = result
        self._index_name = index_name
        self._table = self._build_table()

    def _build_table(self) -> pd.DataFrame:
        k = self._result.n_clusters
        one_hot = np.eye(k, dtype=int)[list(self._result.labels)] if self._result.labels else np.zeros((0, k), dtype=int)
        return pd.DataFrame(
            one_hot,
            index=pd.Index(self._result.entity_ids, name=self._index_name),
            columns=list(range(k)),
        )

    @property
    def result(self) -> ClusterResult:
        return self._result

    @property
    def table(self) -> pd.DataFrame:
        return self._table.copy()

    def lookup(self, names: str | Iterable[str]) -> pd.DataFrame:
        """Return one-hot rows for the named entities, in the order given.

        Raises:
            KeyError: If any name was not clustered.
        """
        wanted = [names] if isinstance(names, str) else list(names)
        missing = [n for n in wanted if n not in self._table.index]
        if missing:
            msg = f"Not in cluster report: {missing}"
            raise KeyError(msg)
        return self._table.loc[wanted]

    def labels_for(self, names: str | Iterable[str]) -> dict[str, int]:
        rows = self.lookup(names)
        return {str(name): int(row.to_numpy().argmax()) for name, row in rows.iterrows()}

    def same_cluster(self, names: Iterable[str]) -> bool:
        """True when every named entity landed in one cluster."""
        return len(set(self.labels_for(names).values())) <= 1

    def summary(self) -> pd.DataFrame:
        """Cluster size and centroid coordinates, one row per label."""
        rows = [
            {"cluster": c.label, "size": c.size, **dict(zip(self._result.fields, c.centroid, strict=True))}
            for c in self._result.clusters()
        ]
        return pd.DataFrame(rows).set_index("cluster")

    def to_csv(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self._table.to_csv(out)
        logger.info("Wrote %d cluster assignments to %s", len(self._table), out)
        return out


def decode_one_hot(table: pd.DataFrame) -> dict[str, int]:
    """Map each row of a one-hot table back to its cluster label.

    Raises:
        InvalidInputError: If a row does not have exactly one cell set.
    """
    try:
        labels = [int(c) for c in table.columns]
    except (TypeError, ValueError) as e:
        msg = f"Cluster columns must be integer labels, got {list(table.columns)}"
        raise InvalidInputError(msg) from e

    assignment: dict[str, int] = {}
    for name, row in table.iterrows():
        hot = [label for label, cell in zip(labels, row.tolist(), strict=True) if cell == 1]
        if len(hot) != 1 or row.sum() != 1:
            msg = f"Row for {name!r} is not one-hot: {row.tolist()}"
            raise InvalidInputError(msg)
        assignment[str(name)] = hot[0]
    return assignment


def read_assignment(path: str | Path) -> dict[str, int]:
    """Parse a table written by ``ClusterReport.to_csv``."""
    raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    table = raw.set_index(raw.columns[0])
    try:
        table = table.astype(int)
    except ValueError as e:
        msg = f"Cluster cells in {path} must be 0/1 integers"
        raise InvalidInputError(msg) from e
    return decode_one_hot(table)
