"""Namespace view registry."""

import threading
from typing import Any, Dict, List, Optional, Tuple

import structlog

from metricviews.config import (
    PROVIDER_OPENTELEMETRY,
    PROVIDER_PROMETHEUS,
    RegistryConfig,
    new_config,
)
from metricviews.errors import DuplicateNamespaceRegistrationError, UnregisteredNamespaceError
from metricviews.providers.base import ViewProvider
from metricviews.providers.otel import OpenTelemetryViewProvider
from metricviews.providers.prometheus import PrometheusViewProvider


logger = structlog.get_logger(logger=__name__)


class ViewRegistry:
    """Maps namespaces to the metric views they own.

    A namespace registers its views once. The views are handed to the
    provider for activation and only become visible to ``lookup`` and
    ``all_views`` after activation succeeds. All state is guarded by a
    single lock; the provider is called without holding it.
    """

    def __init__(self, provider: ViewProvider, legacy_duplicate_check: bool = False):
        self.provider = provider
        self.legacy_duplicate_check = legacy_duplicate_check
        self._views: Dict[str, Tuple[Any, ...]] = {}
        # namespace -> ident of the thread activating it
        self._pending: Dict[str, int] = {}
        # thread ident -> namespace it is waiting to settle
        self._waiting: Dict[int, str] = {}
        self._lock = threading.Lock()
        self._settled = threading.Condition(self._lock)

    def register(self, namespace: str, *views: Any) -> None:
        """Register and activate the views owned by a namespace.

        Args:
            namespace: Unique, non-empty namespace name.
            *views: Opaque view objects understood by the provider.

        Raises:
            DuplicateNamespaceRegistrationError: If the namespace already
                registered its views, or if waiting for its pending
                activation would deadlock (a provider registering a
                namespace whose activation is waiting on this thread).
            Exception: Whatever the provider raises when activation fails,
                unchanged. The namespace stays unregistered.
        """
        if not isinstance(namespace, str) or not namespace:
            raise ValueError("namespace must be a non-empty string")

        me = threading.get_ident()
        with self._settled:
            # Wait for a concurrent activation of the same namespace to settle
            while namespace in self._pending:
                if self._waits_on(me, namespace):
                    raise DuplicateNamespaceRegistrationError(namespace)
                self._waiting[me] = namespace
                try:
                    self._settled.wait()
                finally:
                    del self._waiting[me]

            if self.legacy_duplicate_check:
                duplicate = namespace not in self._views
            else:
                duplicate = namespace in self._views
            if duplicate:
                raise DuplicateNamespaceRegistrationError(namespace)

            self._pending[namespace] = me

        activated = False
        try:
            self.provider.activate(views)
            activated = True
        finally:
            with self._settled:
                del self._pending[namespace]
                if not activated:
                    self._views.pop(namespace, None)
                elif not self.legacy_duplicate_check:
                    self._views[namespace] = tuple(views)
                self._settled.notify_all()

        logger.debug("views_registered", namespace=namespace, views=len(views))

    def _waits_on(self, thread: int, namespace: str) -> bool:
        """Whether waiting for ``namespace`` would end up waiting on ``thread``.

        Follows the chain of pending owners and the namespaces they are
        themselves waiting for. Must be called with the lock held.
        """
        owner = self._pending.get(namespace)
        while owner is not None:
            if owner == thread:
                return True
            blocked_on = self._waiting.get(owner)
            if blocked_on is None:
                return False
            owner = self._pending.get(blocked_on)
        return False

    def lookup(self, namespace: str) -> Tuple[Any, ...]:
        """Return the views registered under a namespace, in registration order.

        Raises:
            UnregisteredNamespaceError: If the namespace has no views.
        """
        with self._lock:
            views = self._views.get(namespace)
        if views is None:
            raise UnregisteredNamespaceError(namespace)
        return views

    def all_views(self) -> List[Any]:
        """Return the views of every namespace as one flat list."""
        views: List[Any] = []
        with self._lock:
            for namespace_views in self._views.values():
                views.extend(namespace_views)
        return views

    def namespaces(self) -> List[str]:
        """Return the names of all registered namespaces."""
        with self._lock:
            return list(self._views)

    def __contains__(self, namespace: object) -> bool:
        with self._lock:
            return namespace in self._views

    def __len__(self) -> int:
        with self._lock:
            return len(self._views)


def new_view_registry(config: Optional[RegistryConfig] = None) -> ViewRegistry:
    """Create a view registry backed by the configured provider.

    Args:
        config: Registry configuration. Read from the environment if omitted.

    Returns:
        A new, empty ViewRegistry.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    config = config or new_config()

    if config.provider == PROVIDER_PROMETHEUS:
        provider: ViewProvider = PrometheusViewProvider()
    elif config.provider == PROVIDER_OPENTELEMETRY:
        provider = OpenTelemetryViewProvider(config)
    else:
        raise ValueError(f"unknown view provider: {config.provider!r}")

    logger.debug("view_registry_created", provider=config.provider, service=config.service_name)
    return ViewRegistry(provider, legacy_duplicate_check=config.legacy_duplicate_check)
