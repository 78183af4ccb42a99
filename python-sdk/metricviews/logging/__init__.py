"""Logging module initialization."""

from metricviews.logging.config import LogConfig
from metricviews.logging.logger import new_logger, shutdown_logging

__all__ = ["LogConfig", "new_logger", "shutdown_logging"]
