"""Configuration loading, merging and lookup."""

from liveconf.config.config_store import ConfigStore
from liveconf.config.loader import load_config_file
from liveconf.config.path_resolver import MISSING, PathResolver
from liveconf.config.schema import ConfigSnapshot
from liveconf.config.watcher import FileWatcher

__all__ = [
    "MISSING",
    "ConfigSnapshot",
    "ConfigStore",
    "PathResolver",
    "FileWatcher",
    "load_config_file",
]
