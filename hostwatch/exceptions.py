"""Exception hierarchy for hostwatch."""


class HostwatchError(Exception):
    """Base class for all hostwatch errors."""


class SamplerError(HostwatchError):
    """A metric source could not be read.

    Attributes:
        dimension: The dimension whose sample failed (e.g. ``disk:/mnt/data``)
    """

    def __init__(self, dimension: str, message: str):
        super().__init__(f"failed to sample {dimension}: {message}")
        self.dimension = dimension


class ConfigError(HostwatchError, ValueError):
    """Invalid configuration. Fatal before monitoring starts."""
