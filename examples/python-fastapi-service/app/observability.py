"""Centralized observability singleton instances.

This module provides the logger and view registry shared across the
application.
"""
from typing import Optional

import structlog

from metricviews import LogConfig, ViewRegistry, new_logger, new_view_registry

# Singleton instances
_logger: Optional[structlog.BoundLogger] = None
_registry: Optional[ViewRegistry] = None


def initialize_observability(service_name: str) -> None:
    """
    Initialize the logger and view registry.

    This should be called once during application startup.

    Args:
        service_name: Name of the service for observability identification
    """
    global _logger, _registry

    config = LogConfig(service_name=service_name)
    _logger = new_logger(config)
    _registry = new_view_registry(config)


def get_logger() -> structlog.BoundLogger:
    """
    Get the singleton logger instance.

    Raises:
        RuntimeError: If observability has not been initialized
    """
    if _logger is None:
        raise RuntimeError(
            "Observability not initialized. Call initialize_observability() first."
        )
    return _logger


def get_registry() -> ViewRegistry:
    """
    Get the singleton view registry.

    Raises:
        RuntimeError: If observability has not been initialized
    """
    if _registry is None:
        raise RuntimeError(
            "Observability not initialized. Call initialize_observability() first."
        )
    return _registry


__all__ = [
    "initialize_observability",
    "get_logger",
    "get_registry",
]
