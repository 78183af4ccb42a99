"""
Tests for the Prometheus and OpenTelemetry view providers, driven through
a ViewRegistry the way services use them.
"""

import pytest
from opentelemetry.sdk.metrics.view import View
from prometheus_client import Counter, Gauge, Histogram

from metricviews import (
    OpenTelemetryViewProvider,
    PrometheusViewProvider,
    RegistryConfig,
    UnregisteredNamespaceError,
    ViewProvider,
    ViewRegistry,
)


def test_providers_satisfy_protocol(collector_registry):
    assert isinstance(PrometheusViewProvider(collector_registry), ViewProvider)
    assert isinstance(OpenTelemetryViewProvider(RegistryConfig(service_name="svc")), ViewProvider)


def test_prometheus_views_become_collectable(prometheus_registry, collector_registry):
    """Registered collectors are live in the wrapped CollectorRegistry."""
    runs = Counter("jobs_runs", "Job runs", registry=None)
    duration = Histogram("jobs_duration_seconds", "Job duration", registry=None)

    prometheus_registry.register("jobs", runs, duration)
    runs.inc()
    duration.observe(0.2)

    assert collector_registry.get_sample_value("jobs_runs_total") == 1.0
    assert collector_registry.get_sample_value("jobs_duration_seconds_count") == 1.0
    assert prometheus_registry.lookup("jobs") == (runs, duration)
    assert prometheus_registry.provider.collector_registry is collector_registry


def test_prometheus_activation_is_all_or_nothing(prometheus_registry, collector_registry):
    """A timeseries clash on the second collector unregisters the first."""
    prometheus_registry.register("queue", Counter("shared_events", "Events", registry=None))

    fresh = Gauge("worker_fresh", "Fresh gauge", registry=None)
    clash = Counter("shared_events", "Events again", registry=None)
    with pytest.raises(ValueError, match="Duplicated timeseries"):
        prometheus_registry.register("worker", fresh, clash)

    assert collector_registry.get_sample_value("worker_fresh") is None
    with pytest.raises(UnregisteredNamespaceError):
        prometheus_registry.lookup("worker")

    prometheus_registry.register("worker", fresh)
    assert collector_registry.get_sample_value("worker_fresh") == 0.0


def test_otel_views_reach_meter_provider():
    provider = OpenTelemetryViewProvider(RegistryConfig(service_name="checkout"))
    registry = ViewRegistry(provider)
    latency = View(instrument_name="http.server.duration")
    size = View(instrument_name="http.server.request.size")

    registry.register("http", latency, size)

    assert provider.views == [latency, size]
    meter_provider = provider.meter_provider()
    try:
        assert provider.meter_provider() is meter_provider
    finally:
        meter_provider.shutdown()


def test_otel_rejects_non_views():
    provider = OpenTelemetryViewProvider(RegistryConfig(service_name="checkout"))
    registry = ViewRegistry(provider)

    with pytest.raises(TypeError):
        registry.register("http", View(instrument_name="ok"), "not-a-view")

    assert provider.views == []
    with pytest.raises(UnregisteredNamespaceError):
        registry.lookup("http")


def test_otel_rejects_views_after_meter_provider_built():
    """Once the MeterProvider exists, further registrations fail and leave no trace."""
    provider = OpenTelemetryViewProvider(RegistryConfig(service_name="checkout"))
    registry = ViewRegistry(provider)
    registry.register("http", View(instrument_name="http.server.duration"))
    meter_provider = provider.meter_provider()

    try:
        with pytest.raises(RuntimeError):
            registry.register("grpc", View(instrument_name="rpc.server.duration"))

        with pytest.raises(UnregisteredNamespaceError):
            registry.lookup("grpc")
        assert len(registry.all_views()) == 1
        assert len(provider.views) == 1
    finally:
        meter_provider.shutdown()
