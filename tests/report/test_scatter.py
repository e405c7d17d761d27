from pathlib import Path

import pytest

from pitcher_clusters.clustering.kmeans import KMeansEngine
from pitcher_clusters.domain.errors import InvalidParameterError
from pitcher_clusters.report.scatter import plot_clusters
from tests.helpers import vector

FIELDS = ("release_speed", "pfx_x", "pfx_z")


def _vectors() -> list:
    return [
        vector("Cole, Gerrit", 96.5, -0.6, 1.5, fields=FIELDS),
        vector("Skenes, Paul", 98.8, -0.7, 1.4, fields=FIELDS),
        vector("Sale, Chris", 94.6, 0.9, 0.8, fields=FIELDS),
        vector("Webb, Logan", 92.5, -1.2, 0.5, fields=FIELDS),
    ]


class TestPlotClusters:
    def test_writes_png(self, tmp_path: Path) -> None:
        features = _vectors()
        inputs = [v.select(("pfx_x", "pfx_z")) for v in features]
        result = KMeansEngine(2, seed=1).fit(inputs)
        out = plot_clusters(inputs, result, tmp_path / "plots" / "clusters.png")
        assert out.exists()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_axis_outside_clustering_fields(self, tmp_path: Path) -> None:
        features = _vectors()
        result = KMeansEngine(2, seed=1).fit([v.select(("pfx_x", "pfx_z")) for v in features])
        out = plot_clusters(features, result, tmp_path / "speed.png", x_field="release_speed", y_field="pfx_z")
        assert out.exists()

    def test_unknown_field_raises(self, tmp_path: Path) -> None:
        inputs = [v.select(("pfx_x", "pfx_z")) for v in _vectors()]
        result = KMeansEngine(2, seed=1).fit(inputs)
        with pytest.raises(InvalidParameterError, match="spin_rate"):
            plot_clusters(inputs, result, tmp_path / "x.png", x_field="spin_rate")
