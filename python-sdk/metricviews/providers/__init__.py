"""View providers module initialization."""

from metricviews.providers.base import ViewProvider
from metricviews.providers.otel import OpenTelemetryViewProvider
from metricviews.providers.prometheus import PrometheusViewProvider

__all__ = ["ViewProvider", "PrometheusViewProvider", "OpenTelemetryViewProvider"]
