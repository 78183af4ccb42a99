"""HTTP request views."""

from dataclasses import dataclass, field
from typing import Any, List

from prometheus_client import Counter, Gauge, Histogram

from metricviews.registry import ViewRegistry


HTTP_NAMESPACE = "http"

SIZE_BUCKETS = [100, 1_000, 10_000, 100_000, 500_000, 1_000_000, 5_000_000, 10_000_000]


def _requests_total() -> Counter:
    return Counter(
        "http_requests_total",
        "Total number of HTTP requests",
        ["service", "method", "path", "status"],
        registry=None,
    )


def _request_duration_seconds() -> Histogram:
    return Histogram(
        "http_request_duration_seconds",
        "HTTP request duration in seconds",
        ["service", "method", "path"],
        registry=None,
    )


def _requests_in_flight() -> Gauge:
    return Gauge(
        "http_requests_in_flight",
        "Current number of in-flight HTTP requests",
        ["service"],
        registry=None,
    )


def _request_size_bytes() -> Histogram:
    return Histogram(
        "http_request_size_bytes",
        "Size of HTTP request bodies in bytes",
        ["service", "method", "path"],
        buckets=SIZE_BUCKETS,
        registry=None,
    )


def _response_size_bytes() -> Histogram:
    return Histogram(
        "http_response_size_bytes",
        "Size of HTTP response bodies in bytes",
        ["service", "method", "path"],
        buckets=SIZE_BUCKETS,
        registry=None,
    )


@dataclass
class HTTPViews:
    """Prometheus collectors describing HTTP traffic.

    The collectors are not registered anywhere when built; registering the
    namespace hands them to the registry's provider.
    """

    requests_total: Counter = field(default_factory=_requests_total)
    request_duration_seconds: Histogram = field(default_factory=_request_duration_seconds)
    requests_in_flight: Gauge = field(default_factory=_requests_in_flight)
    request_size_bytes: Histogram = field(default_factory=_request_size_bytes)
    response_size_bytes: Histogram = field(default_factory=_response_size_bytes)

    def as_list(self) -> List[Any]:
        return [
            self.requests_total,
            self.request_duration_seconds,
            self.requests_in_flight,
            self.request_size_bytes,
            self.response_size_bytes,
        ]

    def in_flight(self, service: str) -> Gauge:
        """The in-flight gauge child for ``service``."""
        return self.requests_in_flight.labels(service=service)

    def record(
        self,
        service: str,
        method: str,
        route: str,
        status: int,
        duration: float,
        request_size: int,
        response_size: int,
    ) -> None:
        """Record one finished request against every request view."""
        labels = {"service": service, "method": method, "path": route}
        self.requests_total.labels(status=str(status), **labels).inc()
        self.request_duration_seconds.labels(**labels).observe(duration)
        self.request_size_bytes.labels(**labels).observe(request_size)
        self.response_size_bytes.labels(**labels).observe(response_size)


def register_http_views(registry: ViewRegistry, namespace: str = HTTP_NAMESPACE) -> HTTPViews:
    """Build the HTTP views and register them under ``namespace``."""
    views = HTTPViews()
    registry.register(namespace, *views.as_list())
    return views
