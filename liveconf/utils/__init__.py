"""Utility modules for liveconf."""

from liveconf.utils.logging_utils import setup_logging

__all__ = ["setup_logging"]
