# dbscan_oracle/verification/data_models/failure_record.py
# FailureRecord data class and failure type registry.

from dataclasses import asdict, dataclass


# ---------------------------------------------------------------------------
# FAILURE TYPE REGISTRY
# ---------------------------------------------------------------------------
# Exit code mapping:
#   Code 1 -- computed output disagrees with its reference
#   Code 2 -- result option gating broken
#   Code 3 -- scenario could not be evaluated (engine error, undefined
#             metric, missing dataset)
#   Code 4 -- internal oracle errors

FAILURE_TYPES = {
    # Exit Code 1
    "EXACT_MISMATCH":        1,
    "STRUCTURAL_MISMATCH":   1,
    "TOLERANCE_MISMATCH":    1,
    # Exit Code 2
    "CONTRACT_VIOLATION":    2,
    # Exit Code 3
    "UPSTREAM_FAILURE":      3,
    "UNDEFINED_METRIC":      3,
    "DATASET_MISSING":       3,
    # Exit Code 4
    "ORACLE_INTERNAL_ERROR": 4,
}


@dataclass(frozen=True)
class FailureRecord:
    """
    Failure record written to the runs directory on any hard failure.

    Fields:
      failure_type_id  -- Key from FAILURE_TYPES.
      exit_code        -- Integer exit code (1-4).
      scenario_id      -- Scenario that failed. Empty if not applicable.
      field_name       -- Output or field involved. Empty if not applicable.
      detected_at_iso  -- UTC ISO-8601 timestamp of detection.
      run_id           -- Identifier of this oracle invocation.
      oracle_version   -- ORACLE_VERSION at time of failure.
      float_type       -- Precision the failing scenario ran under.
      epsilon          -- Epsilon of the failing scenario, or None.
      min_observations -- min_observations of the failing scenario, or None.
      dataset_id       -- Dataset of the failing scenario. Empty if unknown.
      detail           -- Human-readable failure description.
    """
    failure_type_id:  str
    exit_code:        int
    scenario_id:      str
    field_name:       str
    detected_at_iso:  str
    run_id:           str
    oracle_version:   str
    float_type:       str
    epsilon:          object
    min_observations: object
    dataset_id:       str
    detail:           str

    def to_dict(self) -> dict:
        return asdict(self)
