from pitcher_clusters.domain.cluster import Cluster, ClusterResult


def _result() -> ClusterResult:
    return ClusterResult(
        entity_ids=("a", "b", "c"),
        labels=(1, 0, 1),
        centroids=((0.0, 0.0), (1.0, 1.0), (5.0, 5.0)),
        fields=("pfx_x", "pfx_z"),
        n_iterations=2,
        converged=True,
        inertia_history=(3.0, 1.5, 1.5),
    )


class TestClusterResult:
    def test_assignment(self) -> None:
        assert _result().assignment == {"a": 1, "b": 0, "c": 1}

    def test_members(self) -> None:
        result = _result()
        assert result.members(1) == ("a", "c")
        assert result.members(2) == ()

    def test_clusters_include_empty(self) -> None:
        clusters = _result().clusters()
        assert clusters[2] == Cluster(label=2, centroid=(5.0, 5.0), members=())
        assert [c.size for c in clusters] == [1, 2, 0]

    def test_inertia_is_last_recorded(self) -> None:
        result = _result()
        assert result.n_clusters == 3
        assert result.inertia == 1.5
