"""Structured logging for the view registry.

Library modules log through ``structlog.get_logger(logger=__name__)``;
``new_logger`` decides where those events end up.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Optional

import structlog
from structlog.types import EventDict, Processor

from metricviews.logging.config import LogConfig


_LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "warning": 30,
    "error": 40,
    "critical": 50,
}

_log_file: Optional[IO[str]] = None


class _Outputs:
    """Writes each rendered line to every configured stream."""

    def __init__(self, streams: List[IO[str]]):
        self.streams = streams

    def write(self, data: str) -> int:
        for stream in self.streams:
            stream.write(data)
        return len(data)

    def flush(self) -> None:
        for stream in self.streams:
            stream.flush()


def _envelope(config: LogConfig) -> Callable[[Any, str, EventDict], Dict[str, Any]]:
    service = {
        "name": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
    }

    def shape(logger: Any, method_name: str, event_dict: EventDict) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": event_dict.pop("level", method_name),
            "event": event_dict.pop("event", ""),
            "logger": event_dict.pop("logger", None),
            "service": service,
            "attributes": dict(event_dict),
        }

    return shape


def new_logger(config: Optional[LogConfig] = None) -> structlog.BoundLogger:
    """Route registry and application events to the configured outputs.

    Args:
        config: Logging configuration; read from the environment if omitted.

    Returns:
        A logger for application code, bound to the service identity.
    """
    global _log_file

    config = config or LogConfig()
    _close_log_file()

    streams: List[IO[str]] = []
    if config.log_to_console:
        streams.append(sys.stdout)
    if config.log_file_path:
        try:
            path = Path(config.log_file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            _log_file = path.open("a", encoding="utf-8")
            streams.append(_log_file)
        except OSError as e:
            sys.stderr.write(f"Warning: Failed to open log file: {e}\n")

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _envelope(config),
        structlog.processors.JSONRenderer(),
    ]

    # Module-level loggers exist before configuration, so they are not cached
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(config.log_level.lower(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_Outputs(streams)),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger(logger=config.service_name)


def shutdown_logging() -> None:
    """Close the log file and restore structlog's defaults."""
    _close_log_file()
    structlog.reset_defaults()


def _close_log_file() -> None:
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None
