import pytest

from pitcher_clusters.domain.feature_vector import FeatureVector


@pytest.fixture
def fv() -> FeatureVector:
    return FeatureVector(
        entity_id="Cole, Gerrit",
        values=(96.5, -0.6, 1.5),
        fields=("release_speed", "pfx_x", "pfx_z"),
        sample_size=812,
    )


class TestFeatureVector:
    def test_dimension(self, fv: FeatureVector) -> None:
        assert fv.dimension == 3

    def test_value_by_field(self, fv: FeatureVector) -> None:
        assert fv.value("pfx_x") == -0.6

    def test_select_reorders_and_projects(self, fv: FeatureVector) -> None:
        projected = fv.select(("pfx_z", "pfx_x"))
        assert projected.values == (1.5, -0.6)
        assert projected.fields == ("pfx_z", "pfx_x")
        assert projected.entity_id == fv.entity_id
        assert projected.sample_size == 812

    def test_select_unknown_field(self, fv: FeatureVector) -> None:
        with pytest.raises(KeyError, match="spin"):
            fv.select(("spin",))

    def test_frozen(self, fv: FeatureVector) -> None:
        with pytest.raises(AttributeError):
            fv.values = (0.0,)  # type: ignore[misc]
