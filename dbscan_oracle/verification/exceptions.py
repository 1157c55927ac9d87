# =============================================================================
# File:   dbscan_oracle/verification/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exception hierarchy for the result oracle. All exceptions are pure value
# objects: no side effects, no logging, no I/O.
#
# EXCEPTION HIERARCHY
# -------------------
#   OracleError(Exception)                 -- base; never raised directly
#     ContractViolation(OracleError)       -- result option gating broken
#     MismatchError(OracleError)           -- exact, structural or tolerance
#                                             comparison failed
#     UndefinedMetric(OracleError)         -- quality index requested for
#                                             fewer than two clusters or
#                                             coincident centroids
#
#   UpstreamFailure                        -- alias of compute.ComputeError.
#                                             The oracle never raises or wraps
#                                             it; engine errors propagate
#                                             verbatim.
#
# MESSAGE CONTRACT
# ----------------
# Every message is deterministic, ASCII-only and non-empty, and carries the
# scenario context (epsilon, min_observations, dataset) when one is known.
#
# =============================================================================

from __future__ import annotations

from typing import Any, Tuple

from dbscan_oracle.compute.exceptions import ComputeError

UpstreamFailure = ComputeError


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class OracleError(Exception):
    """
    Base class for all oracle exceptions.

    Attributes:
        field_name:  Output or field the failure concerns, or empty string.
        value:       Observed value, or None.
        message:     Human-readable description. Always non-empty.
    """

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "OracleError: message must be a non-empty string"
            )
        if not isinstance(field_name, str):
            raise ValueError(
                "OracleError: field_name must be a string"
            )
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OracleError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field_name == other.field_name
            and self.value == other.value
            and self.message == other.message
        )

    __hash__ = Exception.__hash__


def _context_suffix(context: Any) -> str:
    if context is None:
        return ""
    return " [" + context.describe() + "]"


# =============================================================================
# CONCRETE EXCEPTIONS
# =============================================================================

class ContractViolation(OracleError):
    """
    Raised when an optional output is reachable although its option was not
    requested, or unreachable although it was.

    Attributes:
        checks:  Tuple of failed ContractCheck records, one per offending
                 output.
        context: ScenarioContext of the run, or None.

    Message format:
        "ContractViolation: <n> result option check(s) failed: <details>."
    """

    def __init__(self, checks: Tuple[Any, ...], context: Any = None) -> None:
        if not checks:
            raise ValueError("ContractViolation: checks must be non-empty")
        details = "; ".join(c.describe() for c in checks)
        message = (
            "ContractViolation: "
            + str(len(checks))
            + " result option check(s) failed: "
            + details
            + "."
            + _context_suffix(context)
        )
        super().__init__(
            message=message,
            field_name=checks[0].option_name,
            value=tuple(c.option_name for c in checks),
        )
        self.checks:  Tuple[Any, ...] = tuple(checks)
        self.context: Any = context


class MismatchError(OracleError):
    """
    Raised when a computed output disagrees with its reference.

    Attributes:
        report:  The ValidationReport or QualityReport with the full
                 diagnostic payload (every mismatching row, or value,
                 reference, ratio and tolerance).

    Message format:
        "MismatchError: <summary>" + scenario context.
    """

    def __init__(self, summary: str, report: Any = None, field_name: str = "", value: Any = None) -> None:
        if not summary:
            raise ValueError("MismatchError: summary must be non-empty")
        context = getattr(report, "context", None)
        message = "MismatchError: " + summary + _context_suffix(context)
        super().__init__(message=message, field_name=field_name, value=value)
        self.report: Any = report


class UndefinedMetric(OracleError):
    """
    Raised when a clustering quality index has no defined value for the
    given partition. This is not a verdict on the clustering; callers gate
    quality comparison on cluster_count before asking for a score.

    Message format:
        "UndefinedMetric: <reason>."
    """

    def __init__(self, reason: str, value: Any = None) -> None:
        if not reason:
            raise ValueError("UndefinedMetric: reason must be non-empty")
        super().__init__(
            message="UndefinedMetric: " + reason + ".",
            field_name="davies_bouldin_index",
            value=value,
        )
