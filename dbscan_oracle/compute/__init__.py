# dbscan_oracle/compute/__init__.py
# Compute engine boundary consumed by the oracle.
#
# Standard import pattern:
#   from dbscan_oracle.compute import compute, Descriptor, ResultOptions, HomogenTable

from .exceptions import (
    ComputeError,
    DomainError,
    InvalidDescriptorError,
    InvalidInputError,
)
from .options import ResultOption, ResultOptions
from .table import HomogenTable
from .descriptor import Descriptor
from .result import ComputeResult
from .engine import compute

__all__ = [
    # Exceptions
    "ComputeError",
    "DomainError",
    "InvalidDescriptorError",
    "InvalidInputError",
    # Options
    "ResultOption",
    "ResultOptions",
    # Data
    "HomogenTable",
    "Descriptor",
    "ComputeResult",
    # Engine
    "compute",
]
