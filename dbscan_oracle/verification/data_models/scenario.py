# dbscan_oracle/verification/data_models/scenario.py
# Scenario data class: one fixed, version-controlled oracle check.

from dataclasses import dataclass
from typing import Optional

from dbscan_oracle.compute.options import ResultOptions

# Scenario kinds. Each maps to one ComputeOracle check.
KIND_RESPONSES: str = "responses"   # exact label sequence
KIND_QUALITY:   str = "quality"     # Davies-Bouldin within tolerance
KIND_MODES:     str = "modes"       # result option gating

SCENARIO_KINDS = (KIND_RESPONSES, KIND_QUALITY, KIND_MODES)


@dataclass(frozen=True)
class Scenario:
    """
    A single immutable oracle scenario.

    Fields:
      scenario_id        -- Unique identifier (e.g. "CORE-01").
      group_id           -- Group the scenario belongs to
                            (G-MODE, G-DEG, G-BND, G-WGT, G-CORE, G-NOISE, G-EXT).
      kind               -- One of SCENARIO_KINDS.
      epsilon            -- Neighbourhood radius.
      min_observations   -- Density threshold.
      data               -- Flat row-major observations. Empty for external
                            datasets.
      row_count          -- Rows in `data`.
      column_count       -- Columns in `data`.
      weights            -- Optional per-row weights; None for unit weight.
      expected_responses -- Reference labels (KIND_RESPONSES).
      structural         -- Accept any relabelling (KIND_RESPONSES).
      result_options     -- Options to request (KIND_MODES).
      reference_score    -- Expected Davies-Bouldin index (KIND_QUALITY).
      relative_tolerance -- Tolerance for reference_score (KIND_QUALITY).
      dataset_file       -- CSV path relative to the dataset root, or "".
      float_types        -- Precisions the scenario is valid for.
      description        -- What the scenario demonstrates.
    """
    scenario_id:        str
    group_id:           str
    kind:               str
    epsilon:            float
    min_observations:   int
    data:               tuple = ()
    row_count:          int = 0
    column_count:       int = 0
    weights:            Optional[tuple] = None
    expected_responses: Optional[tuple] = None
    structural:         bool = False
    result_options:     Optional[ResultOptions] = None
    reference_score:    Optional[float] = None
    relative_tolerance: Optional[float] = None
    dataset_file:       str = ""
    float_types:        tuple = ("float32", "float64")
    description:        str = ""

    def __post_init__(self) -> None:
        if self.kind not in SCENARIO_KINDS:
            raise ValueError(
                "Scenario " + self.scenario_id + ": unknown kind " + repr(self.kind)
            )
        if self.kind == KIND_RESPONSES and self.expected_responses is None:
            raise ValueError("Scenario " + self.scenario_id + ": expected_responses is required")
        if self.kind == KIND_MODES and self.result_options is None:
            raise ValueError("Scenario " + self.scenario_id + ": result_options is required")
        if self.kind == KIND_QUALITY and self.reference_score is None:
            raise ValueError("Scenario " + self.scenario_id + ": reference_score is required")
        if not self.dataset_file and len(self.data) < self.row_count * self.column_count:
            raise ValueError(
                "Scenario " + self.scenario_id + ": data holds " + str(len(self.data))
                + " values; shape requires " + str(self.row_count * self.column_count)
            )

    @property
    def is_external(self) -> bool:
        return bool(self.dataset_file)

    @property
    def dataset_id(self) -> str:
        return self.dataset_file or "inline"
