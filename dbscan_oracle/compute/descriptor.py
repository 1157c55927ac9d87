# dbscan_oracle/compute/descriptor.py
# Descriptor -- the parameters of one DBSCAN compute request.

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, replace

from dbscan_oracle.compute.exceptions import InvalidDescriptorError
from dbscan_oracle.compute.options import ResultOptions
from dbscan_oracle.utils.constants import DEFAULT_FLOAT_TYPE, SUPPORTED_FLOAT_TYPES


@dataclass(frozen=True)
class Descriptor:
    """
    Immutable compute request.

    Fields:
      epsilon          -- Neighbourhood radius. Finite and >= 0. A point is
                          a neighbour when its distance is <= epsilon.
      min_observations -- Density threshold. A point is a core point when the
                          total weight of its neighbourhood (itself included)
                          is >= min_observations.
      result_options   -- Optional outputs the result must expose.
      float_type       -- Precision the computation runs in
                          ("float32" or "float64").

    Construction validates every field and raises InvalidDescriptorError.
    """
    epsilon:          float
    min_observations: int
    result_options:   ResultOptions = field(default=ResultOptions.RESPONSES)
    float_type:       str = DEFAULT_FLOAT_TYPE

    def __post_init__(self) -> None:
        eps = self.epsilon
        if isinstance(eps, bool) or not isinstance(eps, numbers.Real):
            raise InvalidDescriptorError("epsilon", eps, "must be a real number")
        if not math.isfinite(float(eps)):
            raise InvalidDescriptorError("epsilon", eps, "must be finite")
        if eps < 0:
            raise InvalidDescriptorError("epsilon", eps, "must be >= 0")

        min_obs = self.min_observations
        if isinstance(min_obs, bool) or not isinstance(min_obs, numbers.Integral):
            raise InvalidDescriptorError("min_observations", min_obs, "must be an integer")
        if min_obs < 1:
            raise InvalidDescriptorError("min_observations", min_obs, "must be >= 1")

        if not isinstance(self.result_options, ResultOptions):
            raise InvalidDescriptorError(
                "result_options", self.result_options, "must be a ResultOptions instance"
            )
        if self.float_type not in SUPPORTED_FLOAT_TYPES:
            raise InvalidDescriptorError(
                "float_type", self.float_type,
                "must be one of " + ", ".join(sorted(SUPPORTED_FLOAT_TYPES)),
            )

    def set_result_options(self, result_options: ResultOptions) -> "Descriptor":
        """Return a copy requesting `result_options` instead."""
        return replace(self, result_options=result_options)

    @property
    def dtype(self):
        return SUPPORTED_FLOAT_TYPES[self.float_type]
