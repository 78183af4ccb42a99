"""Logging configuration."""

import os
from dataclasses import dataclass, field

from metricviews.config import RegistryConfig, env_bool


@dataclass
class LogConfig(RegistryConfig):
    """Registry configuration plus where and how much to log."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "info"))
    log_to_console: bool = field(default_factory=lambda: env_bool("LOG_CONSOLE_ENABLED", True))
    # Empty disables the JSON-lines file
    log_file_path: str = field(
        default_factory=lambda: os.getenv("LOG_FILE_PATH", "./logs/app.log")
        if env_bool("LOG_FILE_ENABLED", False)
        else ""
    )
