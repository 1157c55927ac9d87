# dbscan_oracle/verification/data_models/validation_report.py
# Report data classes produced by the oracle validators.
# Every report is immutable and carries the ScenarioContext it belongs to.

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScenarioContext:
    """
    Identifies one oracle run well enough to reproduce it.

    Fields:
      scenario_id      -- Scenario identifier (e.g. "CORE-02"), or "" for ad hoc runs.
      dataset_id       -- Dataset name or "inline" for literal data.
      epsilon          -- Neighbourhood radius used.
      min_observations -- Density threshold used.
      float_type       -- "float32" or "float64".
      weighted         -- True if a weight table was supplied.
    """
    scenario_id:      str
    dataset_id:       str
    epsilon:          float
    min_observations: int
    float_type:       str
    weighted:         bool = False

    def describe(self) -> str:
        return (
            "scenario=" + (self.scenario_id or "(ad hoc)")
            + " dataset=" + self.dataset_id
            + " epsilon=" + repr(self.epsilon)
            + " min_observations=" + str(self.min_observations)
            + " float_type=" + self.float_type
            + " weighted=" + str(self.weighted)
        )


@dataclass(frozen=True)
class RowMismatch:
    """One row whose computed label disagrees with the reference."""
    row_index: int
    computed:  int
    reference: int

    def describe(self) -> str:
        return (
            "row " + str(self.row_index)
            + ": computed=" + str(self.computed)
            + " reference=" + str(self.reference)
        )


@dataclass(frozen=True)
class ValidationReport:
    """
    Outcome of a label-sequence comparison.

    Fields:
      passed     -- True iff no row mismatches.
      mode       -- "exact" or "structural".
      row_count  -- Number of rows compared.
      mismatches -- tuple of RowMismatch, every disagreeing row in input order.
      context    -- ScenarioContext, or None for a bare validator call.
    """
    passed:     bool
    mode:       str
    row_count:  int
    mismatches: tuple    # tuple of RowMismatch, immutable
    context:    Optional[ScenarioContext] = None

    def summary(self) -> str:
        if self.passed:
            return self.mode + " match on " + str(self.row_count) + " rows"
        return (
            str(len(self.mismatches)) + " of " + str(self.row_count)
            + " rows differ (" + self.mode + "): "
            + "; ".join(m.describe() for m in self.mismatches)
        )


@dataclass(frozen=True)
class QualityReport:
    """
    Outcome of a Davies-Bouldin comparison.

    When skipped is True no index was computed (fewer than two clusters) and
    value / ratio are None; a skipped report is neither a pass nor a failure.
    """
    passed:             bool
    skipped:            bool
    cluster_count:      int
    value:              Optional[float]
    reference:          float
    ratio:              Optional[float]
    relative_tolerance: float
    context:            Optional[ScenarioContext] = None
    skip_reason:        str = ""

    def summary(self) -> str:
        if self.skipped:
            return "quality comparison skipped: " + self.skip_reason
        return (
            "davies_bouldin_index=" + repr(self.value)
            + " reference=" + repr(self.reference)
            + " relative_difference=" + repr(self.ratio)
            + " tolerance=" + repr(self.relative_tolerance)
        )


@dataclass(frozen=True)
class ContractCheck:
    """
    Result of probing one optional output against the requested options.

    Fields:
      option_name -- Output probed (e.g. "core_flags").
      requested   -- True if the option was in the request.
      accessible  -- True if the accessor returned without DomainError.
    """
    option_name: str
    requested:   bool
    accessible:  bool

    @property
    def passed(self) -> bool:
        return self.requested == self.accessible

    def describe(self) -> str:
        if self.requested and not self.accessible:
            return "'" + self.option_name + "' requested but raised DomainError"
        if not self.requested and self.accessible:
            return "'" + self.option_name + "' not requested but was accessible"
        return "'" + self.option_name + "' ok"
