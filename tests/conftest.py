"""Shared fixtures for view registry tests."""

import threading

import pytest
from prometheus_client import CollectorRegistry

from metricviews import PrometheusViewProvider, ViewRegistry


class ActivationFailed(Exception):
    """Raised by RecordingProvider for views it refuses."""


class RecordingProvider:
    """Provider that records every activation and rejects chosen views."""

    def __init__(self, reject=()):
        self.reject = set(reject)
        self.calls = []
        self._lock = threading.Lock()

    def activate(self, views):
        with self._lock:
            self.calls.append(tuple(views))
        bad = [v for v in views if v in self.reject]
        if bad:
            raise ActivationFailed(f"cannot activate {bad}")


class BlockingProvider(RecordingProvider):
    """Provider that parks inside activate until released."""

    def __init__(self, reject=()):
        super().__init__(reject)
        self.started = threading.Event()
        self.release = threading.Event()

    def activate(self, views):
        self.started.set()
        assert self.release.wait(timeout=5.0), "provider was never released"
        super().activate(views)


@pytest.fixture
def provider():
    return RecordingProvider(reject={"malformed"})


@pytest.fixture
def registry(provider):
    return ViewRegistry(provider)


@pytest.fixture
def collector_registry():
    return CollectorRegistry()


@pytest.fixture
def prometheus_registry(collector_registry):
    return ViewRegistry(PrometheusViewProvider(collector_registry))
