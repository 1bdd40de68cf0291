"""Command-line interface for liveconf."""

from liveconf.cli.arguments import parse_arguments
from liveconf.cli.main import main

__all__ = ["main", "parse_arguments"]
