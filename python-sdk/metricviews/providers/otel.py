"""OpenTelemetry view provider."""

import threading
from typing import List, Optional, Sequence

import structlog
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.metrics.view import View
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION

from metricviews.config import RegistryConfig


logger = structlog.get_logger(logger=__name__)


class OpenTelemetryViewProvider:
    """Collects OpenTelemetry SDK views for a lazily built MeterProvider.

    OpenTelemetry only accepts views when a MeterProvider is constructed, so
    activation is possible until ``meter_provider()`` is first called.
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self._views: List[View] = []
        self._meter_provider: Optional[MeterProvider] = None
        self._lock = threading.Lock()

    def activate(self, views: Sequence[View]) -> None:
        """Accept views for the MeterProvider that has not been built yet."""
        for view in views:
            if not isinstance(view, View):
                raise TypeError(
                    f"expected opentelemetry.sdk.metrics.view.View, got {type(view).__name__}"
                )

        with self._lock:
            if self._meter_provider is not None:
                raise RuntimeError("views cannot be activated after the MeterProvider has been created")
            self._views.extend(views)

        logger.debug("otel_views_activated", count=len(views))

    @property
    def views(self) -> List[View]:
        """Views activated so far, in activation order."""
        with self._lock:
            return list(self._views)

    def meter_provider(self, metric_readers: Sequence[MetricReader] = ()) -> MeterProvider:
        """Build the MeterProvider on first call and return it afterwards.

        Args:
            metric_readers: Readers attached when the provider is first built.
                Ignored on later calls.

        Returns:
            The MeterProvider configured with every activated view.
        """
        with self._lock:
            if self._meter_provider is None:
                resource = Resource.create({
                    SERVICE_NAME: self.config.service_name,
                    SERVICE_VERSION: self.config.service_version,
                    "deployment.environment": self.config.environment,
                })
                self._meter_provider = MeterProvider(
                    metric_readers=list(metric_readers),
                    resource=resource,
                    views=list(self._views),
                )
                logger.debug("meter_provider_created", views=len(self._views))
            return self._meter_provider
