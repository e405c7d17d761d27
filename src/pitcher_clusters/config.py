from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from pitcher_clusters.aggregation.aggregator import AggregationConfig, resolve_statistic
from pitcher_clusters.clustering.kmeans import DEFAULT_MAX_ITERATIONS, ClusteringConfig
from pitcher_clusters.domain.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_YAML_PATH = "pitcher_clusters.yaml"
DEFAULT_ENV_PREFIX = "PITCHCLUSTER"

_DEFAULTS: dict[str, object] = {
    "aggregation": {
        "group_key": "player_name",
        "pitch_type_field": "pitch_type",
        "pitch_types": ["FF"],
        "min_sample_count": 50,
        "measurement_fields": ["release_speed", "pfx_x", "pfx_z"],
        "statistic": "median",
        "fill_undefined": True,
    },
    "clustering": {
        "cluster_fields": ["pfx_x", "pfx_z"],
        "n_clusters": 4,
        "seed": 42,
        "max_iterations": DEFAULT_MAX_ITERATIONS,
    },
}


@dataclass(frozen=True)
class PipelineSettings:
    aggregation: AggregationConfig
    clustering: ClusteringConfig


def create_config(
    yaml_path: str = DEFAULT_YAML_PATH,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    defaults: dict[str, object] | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``PITCHCLUSTER__CLUSTERING__N_CLUSTERS``.
        defaults: Default configuration values.
        overrides: Nested ``{"section": {"key": value}}`` values, typically from CLI flags.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    cleaned = _drop_none(overrides or {})
    if cleaned:
        layers.insert(0, config_from_dict(cleaned))

    return ConfigurationSet(*layers)


def _drop_none(overrides: Mapping[str, object]) -> dict[str, object]:
    result: dict[str, object] = {}
    for section, values in overrides.items():
        if isinstance(values, dict):
            kept = {k: v for k, v in values.items() if v is not None}
            if kept:
                result[section] = kept
        elif values is not None:
            result[section] = values
    return result


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        msg = f"{key} must be an integer, got {value!r}"
        raise ConfigError(msg)
    try:
        return int(value)
    except (TypeError, ValueError):
        msg = f"{key} must be an integer, got {value!r}"
        raise ConfigError(msg) from None


def _as_optional_int(key: str, value: Any) -> int | None:
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "none", "null")):
        return None
    return _as_int(key, value)


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    msg = f"{key} must be a boolean, got {value!r}"
    raise ConfigError(msg)


def _as_str_tuple(value: Any) -> tuple[str, ...]:
    # Env vars arrive as comma-separated strings
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(v) for v in value)


def load_pipeline_settings(cfg: ConfigurationSet | None = None) -> PipelineSettings:
    """Build typed pipeline settings from a configuration set.

    Raises:
        ConfigError: On values that cannot be coerced or are inconsistent.
    """
    if cfg is None:
        cfg = create_config()

    measurement_fields = _as_str_tuple(cfg["aggregation.measurement_fields"])
    if not measurement_fields:
        msg = "aggregation.measurement_fields must name at least one field"
        raise ConfigError(msg)

    aggregation = AggregationConfig(
        measurement_fields=measurement_fields,
        min_sample_count=_as_int("aggregation.min_sample_count", cfg["aggregation.min_sample_count"]),
        group_key=str(cfg["aggregation.group_key"]),
        pitch_type_field=str(cfg["aggregation.pitch_type_field"]),
        pitch_types=_as_str_tuple(cfg["aggregation.pitch_types"]),
        statistic=resolve_statistic(str(cfg["aggregation.statistic"])),
        fill_undefined=_as_bool("aggregation.fill_undefined", cfg["aggregation.fill_undefined"]),
    )

    cluster_fields = _as_str_tuple(cfg["clustering.cluster_fields"])
    unknown = [f for f in cluster_fields if f not in measurement_fields]
    if not cluster_fields or unknown:
        msg = f"clustering.cluster_fields must be a non-empty subset of {list(measurement_fields)}, got {list(cluster_fields)}"
        raise ConfigError(msg)

    clustering = ClusteringConfig(
        cluster_fields=cluster_fields,
        n_clusters=_as_int("clustering.n_clusters", cfg["clustering.n_clusters"]),
        seed=_as_optional_int("clustering.seed", cfg.get("clustering.seed")),
        max_iterations=_as_int("clustering.max_iterations", cfg["clustering.max_iterations"]),
    )
    return PipelineSettings(aggregation=aggregation, clustering=clustering)
