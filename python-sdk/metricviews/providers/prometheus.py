"""Prometheus view provider."""

from typing import Any, List, Optional, Sequence

import structlog
from prometheus_client import REGISTRY, CollectorRegistry


logger = structlog.get_logger(logger=__name__)


class PrometheusViewProvider:
    """Activates prometheus_client collectors in a CollectorRegistry.

    Each view is a collector (Counter, Gauge, Histogram, Summary or a custom
    collector) created with ``registry=None``. Activation registers them in
    order and is all-or-nothing.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        # Use default registry
        self._registry = registry if registry is not None else REGISTRY

    @property
    def collector_registry(self) -> CollectorRegistry:
        """The registry exporters should scrape."""
        return self._registry

    def activate(self, views: Sequence[Any]) -> None:
        """Register every collector, undoing the batch if one is rejected."""
        registered: List[Any] = []
        try:
            for collector in views:
                self._registry.register(collector)
                registered.append(collector)
        except Exception:
            for collector in reversed(registered):
                self._registry.unregister(collector)
            raise

        logger.debug("collectors_registered", count=len(registered))
