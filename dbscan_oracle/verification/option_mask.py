# dbscan_oracle/verification/option_mask.py
# OptionMaskEnforcer -- checks that a result exposes exactly the outputs
# its result options requested.
#
# Only availability is checked, never values. Every output is probed even
# after a failure so the report names all offending outputs at once.
# DomainError is the only exception treated as "unavailable"; anything else
# an accessor raises propagates unchanged.

from typing import Optional, Tuple

from dbscan_oracle.compute.exceptions import DomainError
from dbscan_oracle.compute.options import ResultOption, ResultOptions
from dbscan_oracle.compute.result import ComputeResult
from dbscan_oracle.verification.data_models.validation_report import (
    ContractCheck,
    ScenarioContext,
)
from dbscan_oracle.verification.exceptions import ContractViolation

_ACCESSORS = (
    (ResultOption.RESPONSES,                "get_responses"),
    (ResultOption.CORE_FLAGS,               "get_core_flags"),
    (ResultOption.CORE_OBSERVATIONS,        "get_core_observations"),
    (ResultOption.CORE_OBSERVATION_INDICES, "get_core_observation_indices"),
)


def _accessible(result: ComputeResult, accessor: str) -> bool:
    try:
        getattr(result, accessor)()
    except DomainError:
        return False
    return True


class OptionMaskEnforcer:
    """
    Method:
      enforce(options, result, context=None) -> tuple of ContractCheck

    Raises ContractViolation carrying every failed check if any output's
    availability disagrees with `options`.
    """

    def probe(self, options: ResultOptions, result: ComputeResult) -> Tuple[ContractCheck, ...]:
        """Probe all four outputs without raising on disagreement."""
        return tuple(
            ContractCheck(
                option_name=option.value,
                requested=options.test(option),
                accessible=_accessible(result, accessor),
            )
            for option, accessor in _ACCESSORS
        )

    def enforce(
        self,
        options: ResultOptions,
        result:  ComputeResult,
        context: Optional[ScenarioContext] = None,
    ) -> Tuple[ContractCheck, ...]:
        checks = self.probe(options, result)
        failed = tuple(c for c in checks if not c.passed)
        if failed:
            raise ContractViolation(failed, context=context)
        return checks
