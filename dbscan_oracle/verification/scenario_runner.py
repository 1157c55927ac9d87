# dbscan_oracle/verification/scenario_runner.py
# ScenarioRunner -- executes scenarios through a fresh ComputeOracle each.
#
# Single-threaded. Each scenario completes before the next begins and owns
# its own tables, oracle and event log. Oracle and engine exceptions are not
# caught here; they reach the caller with the scenario still identifiable
# through run_scenario().

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import numpy as np

from dbscan_oracle.compute.engine import compute
from dbscan_oracle.compute.table import HomogenTable
from dbscan_oracle.core.logging_layer import EventLogger
from dbscan_oracle.utils.constants import DEFAULT_DBI_TOLERANCE, SUPPORTED_FLOAT_TYPES
from dbscan_oracle.verification.data_models.scenario import (
    KIND_MODES,
    KIND_QUALITY,
    KIND_RESPONSES,
    Scenario,
)
from dbscan_oracle.verification.oracle import ComputeOracle, Engine

STATUS_PASS: str = "PASS"
STATUS_SKIP: str = "SKIP"


@dataclass(frozen=True)
class ScenarioOutcome:
    """
    Non-failing result of one scenario. Failures are raised, not recorded.

    Fields:
      scenario_id -- Scenario.scenario_id.
      group_id    -- Scenario.group_id.
      float_type  -- Precision the scenario ran under.
      status      -- STATUS_PASS or STATUS_SKIP.
      detail      -- Report summary or skip reason.
      event_count -- Events logged by the scenario's oracle.
    """
    scenario_id: str
    group_id:    str
    float_type:  str
    status:      str
    detail:      str
    event_count: int


def load_dataset(path: Path, float_type: str) -> HomogenTable:
    """
    Read a headerless, comma-separated numeric file into a table.

    Raises FileNotFoundError if `path` does not exist.
    """
    if not path.is_file():
        raise FileNotFoundError("Dataset file not found: " + str(path))
    array = np.loadtxt(path, delimiter=",", dtype=SUPPORTED_FLOAT_TYPES[float_type], ndmin=2)
    return HomogenTable(array)


class ScenarioRunner:
    """
    Runs Scenario definitions under one floating-point precision.

    External-dataset scenarios are skipped when no dataset root is
    configured. With a root configured, a missing file is a hard failure.
    """

    def __init__(
        self,
        float_type:   str,
        dataset_root: Optional[Path] = None,
        engine:       Engine = compute,
        logger_factory: Callable[[], EventLogger] = EventLogger,
    ) -> None:
        if float_type not in SUPPORTED_FLOAT_TYPES:
            raise ValueError(
                "ScenarioRunner: unsupported float_type " + repr(float_type)
            )
        self._float_type     = float_type
        self._dataset_root   = dataset_root
        self._engine         = engine
        self._logger_factory = logger_factory

    def _skip(self, scenario: Scenario, reason: str) -> ScenarioOutcome:
        return ScenarioOutcome(
            scenario_id=scenario.scenario_id,
            group_id=scenario.group_id,
            float_type=self._float_type,
            status=STATUS_SKIP,
            detail=reason,
            event_count=0,
        )

    def _data(self, scenario: Scenario) -> HomogenTable:
        dtype = SUPPORTED_FLOAT_TYPES[self._float_type]
        if scenario.is_external:
            return load_dataset(self._dataset_root / scenario.dataset_file, self._float_type)
        return HomogenTable.wrap(
            scenario.data, scenario.row_count, scenario.column_count, dtype=dtype
        )

    def _weights(self, scenario: Scenario) -> Optional[HomogenTable]:
        if scenario.weights is None:
            return None
        return HomogenTable.wrap(
            scenario.weights,
            len(scenario.weights),
            1,
            dtype=SUPPORTED_FLOAT_TYPES[self._float_type],
        )

    def run_scenario(self, scenario: Scenario) -> ScenarioOutcome:
        """
        Execute one scenario. Returns a PASS or SKIP outcome.

        Raises whatever the oracle raises (MismatchError, ContractViolation,
        UndefinedMetric, engine errors) or FileNotFoundError for a missing
        external dataset.
        """
        if self._float_type not in scenario.float_types:
            return self._skip(scenario, "not defined for " + self._float_type)
        if scenario.is_external and self._dataset_root is None:
            return self._skip(scenario, "no dataset root configured")

        data    = self._data(scenario)
        weights = self._weights(scenario)
        oracle  = ComputeOracle(
            engine=self._engine,
            float_type=self._float_type,
            scenario_id=scenario.scenario_id,
            dataset_id=scenario.dataset_id,
            logger=self._logger_factory(),
        )

        if scenario.kind == KIND_RESPONSES:
            report = oracle.check_responses(
                data, weights, scenario.epsilon, scenario.min_observations,
                scenario.expected_responses, structural=scenario.structural,
            )
            detail = report.summary()
        elif scenario.kind == KIND_QUALITY:
            tolerance = (
                scenario.relative_tolerance
                if scenario.relative_tolerance is not None
                else DEFAULT_DBI_TOLERANCE
            )
            report = oracle.check_quality(
                data, scenario.epsilon, scenario.min_observations,
                scenario.reference_score, tolerance, weights=weights,
            )
            if report.skipped:
                return ScenarioOutcome(
                    scenario_id=scenario.scenario_id,
                    group_id=scenario.group_id,
                    float_type=self._float_type,
                    status=STATUS_SKIP,
                    detail=report.summary(),
                    event_count=oracle.logger.event_count(),
                )
            detail = report.summary()
        elif scenario.kind == KIND_MODES:
            checks = oracle.check_modes(
                data, weights, scenario.epsilon, scenario.min_observations,
                scenario.result_options,
            )
            detail = str(len(checks)) + " option checks passed"
        else:
            raise ValueError("Unknown scenario kind: " + repr(scenario.kind))

        return ScenarioOutcome(
            scenario_id=scenario.scenario_id,
            group_id=scenario.group_id,
            float_type=self._float_type,
            status=STATUS_PASS,
            detail=detail,
            event_count=oracle.logger.event_count(),
        )

    def run_all(self, scenarios: Sequence[Scenario]) -> List[ScenarioOutcome]:
        """Execute scenarios in order. The first failure propagates."""
        return [self.run_scenario(s) for s in scenarios]
