"""
Metric Views SDK for Python

Lets subsystems register the metric views they own under a namespace, and
lets exporters look them up by namespace or all at once.
"""

from metricviews.config import RegistryConfig
from metricviews.errors import (
    DuplicateNamespaceRegistrationError,
    UnregisteredNamespaceError,
    ViewRegistryError,
)
from metricviews.logging import LogConfig, new_logger
from metricviews.providers import OpenTelemetryViewProvider, PrometheusViewProvider, ViewProvider
from metricviews.registry import ViewRegistry, new_view_registry

__all__ = [
    # Registry
    "ViewRegistry",
    "new_view_registry",
    "RegistryConfig",
    # Providers
    "ViewProvider",
    "PrometheusViewProvider",
    "OpenTelemetryViewProvider",
    # Errors
    "ViewRegistryError",
    "UnregisteredNamespaceError",
    "DuplicateNamespaceRegistrationError",
    # Logging
    "new_logger",
    "LogConfig",
]

__version__ = "0.1.0"
