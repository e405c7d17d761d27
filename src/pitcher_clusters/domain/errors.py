from dataclasses import dataclass


class PitcherClustersError(Exception):
    pass


class InvalidInputError(PitcherClustersError):
    """Feature vectors that cannot be clustered as given."""


class InvalidParameterError(PitcherClustersError, ValueError):
    """A clustering or rendering parameter outside its valid range."""


class ConfigError(PitcherClustersError):
    pass


@dataclass(frozen=True)
class PipelineError:
    message: str
    stage: str
