# dbscan_oracle/core/logging_layer.py
# Event log for oracle scenarios.
#
# Scope: In-memory, event-sourced record of everything a scenario did:
# engine invocations, validator verdicts, skipped quality comparisons.
# Zero tolerance for lost events. No file IO. No global mutable state.
# All timestamps are caller-supplied. All hashes are deterministic.
#
# Canonical import:
#   from dbscan_oracle.core.logging_layer import EventLogger, Event, EventFilter

# ===========================================================================
# SECTION 1 -- STDLIB IMPORTS
# ===========================================================================

import hashlib
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

# ===========================================================================
# SECTION 2 -- CONSTANTS
# ===========================================================================

# Event type names emitted by the oracle.
COMPUTE_INVOKED:   str = "COMPUTE_INVOKED"
COMPUTE_FAILED:    str = "COMPUTE_FAILED"
VALIDATION_PASSED: str = "VALIDATION_PASSED"
VALIDATION_FAILED: str = "VALIDATION_FAILED"
QUALITY_SKIPPED:   str = "QUALITY_SKIPPED"
CONTRACT_CHECKED:  str = "CONTRACT_CHECKED"

# Sentinel strings used when numeric sanitization detects invalid values.
# The event is never dropped; the sentinel is stored in place of the value.
_NAN_SENTINEL: str = "NaN_DETECTED"
_INF_SENTINEL: str = "Inf_DETECTED"

_HASH_SEP: str = "|"

# ===========================================================================
# SECTION 3 -- DATACLASSES: Event, EventFilter
# ===========================================================================

@dataclass(frozen=True)
class Event:
    """
    Immutable record of a single oracle event.

    Fields
    ------
    id        : Deterministic identifier derived from the logger's counter.
    type      : Category string (COMPUTE_INVOKED, VALIDATION_FAILED, ...).
    timestamp : Caller-supplied datetime. Never generated internally.
    data      : Sanitized key-value payload.
    hash      : SHA-256 hex digest over (id, type, timestamp, data).
    """
    id: str
    type: str
    timestamp: datetime
    data: Dict[str, Any]
    hash: str


@dataclass
class EventFilter:
    """
    Filter criteria for EventLogger.query_events().

    Omitted fields apply no constraint. `limit` keeps the oldest matches.
    """
    event_type: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    limit: Optional[int] = None


# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _sanitize_numeric(value: Any) -> Any:
    """Replace float NaN or Inf with a sentinel string. Never raises."""
    if isinstance(value, float):
        if math.isnan(value):
            return _NAN_SENTINEL
        if math.isinf(value):
            return _INF_SENTINEL
    return value


def _sanitize_data(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _sanitize_numeric(v) for k, v in data.items()}


def _compute_hash(
    event_id: str,
    event_type: str,
    timestamp: datetime,
    data: Dict[str, Any],
) -> str:
    """
    Deterministic SHA-256 hex digest for an event.

    Preimage: id | type | timestamp.isoformat() | repr(sorted(data.items())).
    Sorting makes the digest independent of dict insertion order.
    """
    sorted_items: str = repr(sorted(data.items()))
    preimage: str = (
        event_id
        + _HASH_SEP
        + event_type
        + _HASH_SEP
        + timestamp.isoformat()
        + _HASH_SEP
        + sorted_items
    )
    return hashlib.sha256(preimage.encode("ascii", errors="replace")).hexdigest()


def _make_event_id(counter: int) -> str:
    return "EVT-{:016d}".format(counter)


# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Event-sourced logger with deterministic per-event hashes.

    One instance belongs to one scenario; nothing is shared between
    instances. log_event() raises LoggingError instead of discarding an
    event, so callers either handle the error or let it propagate.
    """

    def __init__(self) -> None:
        self._store: List[Event] = []
        self._counter: int = 0

    def log_event(self, event_type: str, data: Dict[str, Any], timestamp: datetime) -> str:
        """
        Record one event. Return the assigned event ID.

        Parameters
        ----------
        event_type : Non-empty category string.
        data       : Key-value payload. Float NaN/Inf are replaced with
                     sentinels; other values are stored as-is.
        timestamp  : Caller-supplied datetime.

        Raises
        ------
        LoggingError : If event_type is empty or timestamp is not a datetime.
        """
        if not event_type:
            raise LoggingError("event_type must be a non-empty string")
        if timestamp is None:
            raise LoggingError("timestamp must be caller-supplied; None is not permitted")
        if not isinstance(timestamp, datetime):
            raise LoggingError(
                "timestamp must be a datetime instance; got: {}".format(type(timestamp))
            )

        self._counter += 1
        event_id: str = _make_event_id(self._counter)
        sanitized: Dict[str, Any] = _sanitize_data(data)
        event_hash: str = _compute_hash(event_id, event_type, timestamp, sanitized)

        self._store.append(Event(
            id=event_id,
            type=event_type,
            timestamp=timestamp,
            data=sanitized,
            hash=event_hash,
        ))
        return event_id

    def query_events(self, filter: EventFilter) -> List[Event]:
        """
        Return events matching `filter` in insertion order (oldest first).

        Filtering order: event_type, start_time (inclusive), end_time
        (inclusive), then limit truncation.
        """
        if filter is None:
            raise LoggingError("filter must not be None")

        results: List[Event] = []
        for event in self._store:
            if filter.event_type is not None and event.type != filter.event_type:
                continue
            if filter.start_time is not None and event.timestamp < filter.start_time:
                continue
            if filter.end_time is not None and event.timestamp > filter.end_time:
                continue
            results.append(event)

        if filter.limit is not None:
            results = results[: filter.limit]

        return results

    def events_of_type(self, event_type: str) -> List[Event]:
        """Shorthand for query_events(EventFilter(event_type=event_type))."""
        return self.query_events(EventFilter(event_type=event_type))

    def event_count(self) -> int:
        return len(self._store)


# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """
    Raised by EventLogger when an invariant is violated.

    Never silently swallowed: every call site either handles it or lets it
    propagate.
    """
