# dbscan_oracle/compute/result.py
# ComputeResult -- result handle with gated optional outputs.
#
# Every optional output is held in a _Gated slot that knows whether its
# option was requested. Reading an unrequested slot raises DomainError;
# the raw value is never reachable without going through the gate.

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from dbscan_oracle.compute.exceptions import DomainError
from dbscan_oracle.compute.options import ResultOption, ResultOptions
from dbscan_oracle.compute.table import HomogenTable

T = TypeVar("T")


class _Gated(Generic[T]):
    """Presence-checked holder for one optional output."""

    __slots__ = ("_option", "_value", "_present")

    def __init__(self, option: ResultOption, value: Optional[T], present: bool) -> None:
        self._option = option
        self._value = value
        self._present = present

    @property
    def present(self) -> bool:
        return self._present

    def get(self) -> T:
        if not self._present:
            raise DomainError(self._option.value)
        return self._value  # type: ignore[return-value]


class ComputeResult:
    """
    Result of one DBSCAN computation.

    cluster_count and result_options are always readable. The four optional
    outputs are readable only when their option is in result_options:

      responses                -- n x 1 int table, cluster id per row, -1 noise.
      core_flags               -- n x 1 int table, 1 for core rows, 0 otherwise.
      core_observations        -- k x d table, the core rows in input order.
      core_observation_indices -- k x 1 int table, input indices of core rows.
    """

    def __init__(
        self,
        result_options:           ResultOptions,
        cluster_count:            int,
        responses:                Optional[HomogenTable] = None,
        core_flags:               Optional[HomogenTable] = None,
        core_observations:        Optional[HomogenTable] = None,
        core_observation_indices: Optional[HomogenTable] = None,
    ) -> None:
        self._result_options = result_options
        self._cluster_count = int(cluster_count)
        values = {
            ResultOption.RESPONSES:                responses,
            ResultOption.CORE_FLAGS:               core_flags,
            ResultOption.CORE_OBSERVATIONS:        core_observations,
            ResultOption.CORE_OBSERVATION_INDICES: core_observation_indices,
        }
        # Outputs that were not requested are dropped here, not just hidden.
        self._slots = {
            option: _Gated(
                option,
                value if result_options.test(option) else None,
                result_options.test(option),
            )
            for option, value in values.items()
        }

    @property
    def result_options(self) -> ResultOptions:
        return self._result_options

    @property
    def cluster_count(self) -> int:
        return self._cluster_count

    def get(self, option: ResultOption) -> HomogenTable:
        """Generic gated accessor. Raises DomainError if `option` is unset."""
        return self._slots[option].get()

    def get_responses(self) -> HomogenTable:
        return self.get(ResultOption.RESPONSES)

    def get_core_flags(self) -> HomogenTable:
        return self.get(ResultOption.CORE_FLAGS)

    def get_core_observations(self) -> HomogenTable:
        return self.get(ResultOption.CORE_OBSERVATIONS)

    def get_core_observation_indices(self) -> HomogenTable:
        return self.get(ResultOption.CORE_OBSERVATION_INDICES)

    @property
    def responses(self) -> HomogenTable:
        return self.get_responses()

    @property
    def core_flags(self) -> HomogenTable:
        return self.get_core_flags()

    @property
    def core_observations(self) -> HomogenTable:
        return self.get_core_observations()

    @property
    def core_observation_indices(self) -> HomogenTable:
        return self.get_core_observation_indices()

    def __repr__(self) -> str:
        return (
            "ComputeResult(cluster_count=" + str(self._cluster_count)
            + ", result_options=" + repr(self._result_options)
            + ")"
        )
