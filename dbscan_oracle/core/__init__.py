# dbscan_oracle/core/__init__.py
# Shared infrastructure for the oracle.

from dbscan_oracle.core.logging_layer import (
    EventLogger,
    Event,
    EventFilter,
    LoggingError,
)

__all__ = [
    "EventLogger",
    "Event",
    "EventFilter",
    "LoggingError",
]
