"""View registry configuration."""

import os
from dataclasses import dataclass, field


PROVIDER_PROMETHEUS = "prometheus"
PROVIDER_OPENTELEMETRY = "opentelemetry"


def env_bool(key: str, default: bool = True) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key, "").lower()
    if not value:
        return default
    return value in ("true", "1", "yes")


@dataclass
class RegistryConfig:
    """Configuration for a view registry and its provider.

    The service identity here is shared by everything built from the config:
    the OpenTelemetry resource and the log envelope.
    """

    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "unknown_service"))
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "production"))
    service_version: str = field(default_factory=lambda: os.getenv("SERVICE_VERSION", "unknown"))
    provider: str = field(default_factory=lambda: os.getenv("VIEW_PROVIDER", PROVIDER_PROMETHEUS))

    # Reproduce the inverted duplicate check of the legacy registry
    legacy_duplicate_check: bool = field(
        default_factory=lambda: env_bool("VIEW_REGISTRY_LEGACY_DUPLICATE_CHECK", False)
    )

    def __post_init__(self):
        """Normalize the provider name."""
        self.provider = self.provider.strip().lower()


def new_config(service_name: str = "") -> RegistryConfig:
    """Create a new RegistryConfig from environment variables."""
    if service_name:
        return RegistryConfig(service_name=service_name)
    return RegistryConfig()
