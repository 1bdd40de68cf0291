"""liveconf

Watched, layered, read-only configuration for service processes.
"""

__version__ = "0.1.0"

from liveconf.config import MISSING, ConfigSnapshot, ConfigStore, PathResolver
from liveconf.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    InvalidArgumentError,
    MissingRequiredPropertyError,
)

__all__ = [
    "MISSING",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigSnapshot",
    "ConfigStore",
    "InvalidArgumentError",
    "MissingRequiredPropertyError",
    "PathResolver",
]
