# =============================================================================
# File:   dbscan_oracle/compute/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exceptions raised by the compute engine boundary. Anything raised from
# this package is an upstream failure from the oracle's point of view and
# is propagated to the calling scenario without translation.
#
# EXCEPTION HIERARCHY
# -------------------
#   ComputeError(Exception)                      -- base; never raised directly
#     InvalidDescriptorError(ComputeError, ValueError)
#                                                -- epsilon / min_observations /
#                                                   float type out of range
#     InvalidInputError(ComputeError, ValueError)
#                                                -- malformed data or weights
#     DomainError(ComputeError, ValueError)      -- gated output queried while
#                                                   its option is unset
#
# All exceptions are value objects: no logging, no I/O. Messages are
# deterministic and always name the offending field and value.
#
# =============================================================================

from __future__ import annotations

from typing import Any


class ComputeError(Exception):
    """
    Base class for compute engine exceptions.

    Attributes:
        field_name:  Name of the offending field, or empty string.
        value:       The offending value, or None.
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
                "ComputeError: message must be a non-empty string"
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


class InvalidDescriptorError(ComputeError, ValueError):
    """
    Raised when a descriptor parameter violates its constraint.

    Message format:
        "InvalidDescriptorError: field '<field_name>' violates constraint
         '<constraint>': got <value>."
    """

    def __init__(self, field_name: str, value: Any, constraint: str) -> None:
        message = (
            "InvalidDescriptorError: field '"
            + field_name
            + "' violates constraint '"
            + constraint
            + "': got "
            + repr(value)
            + "."
        )
        super().__init__(message=message, field_name=field_name, value=value)
        self.constraint: str = constraint


class InvalidInputError(ComputeError, ValueError):
    """
    Raised when the data or weight table cannot be clustered
    (wrong shape, empty, non-finite, row count disagreement).
    """

    def __init__(self, field_name: str, value: Any, constraint: str) -> None:
        message = (
            "InvalidInputError: input '"
            + field_name
            + "' violates constraint '"
            + constraint
            + "': got "
            + repr(value)
            + "."
        )
        super().__init__(message=message, field_name=field_name, value=value)
        self.constraint: str = constraint


class DomainError(ComputeError, ValueError):
    """
    Raised when an optional result output is queried but was not requested
    in the result options that produced the result.

    Message format:
        "DomainError: result option '<option>' was not requested; the
         output is unavailable."
    """

    def __init__(self, option_name: str) -> None:
        message = (
            "DomainError: result option '"
            + option_name
            + "' was not requested; the output is unavailable."
        )
        super().__init__(message=message, field_name=option_name, value=None)
