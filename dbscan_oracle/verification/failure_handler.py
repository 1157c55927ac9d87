# dbscan_oracle/verification/failure_handler.py
# FailureHandler -- hard failure policy for the oracle runner.
#
# On any failure: build a FailureRecord, write it as JSON to the runs
# directory, print a summary to stdout, exit with the registered code.
# No catch-and-continue. No retry. No fallback.
# If writing the record itself fails, report to stderr and exit 4.

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dbscan_oracle.compute.exceptions import ComputeError
from dbscan_oracle.verification.data_models.failure_record import FailureRecord, FAILURE_TYPES
from dbscan_oracle.verification.data_models.scenario import Scenario
from dbscan_oracle.verification.data_models.validation_report import QualityReport, ValidationReport
from dbscan_oracle.verification.exceptions import (
    ContractViolation,
    MismatchError,
    UndefinedMetric,
)
from dbscan_oracle.verification.oracle_version import ORACLE_VERSION


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def classify(exc: BaseException) -> str:
    """Map an exception raised by a scenario to a FAILURE_TYPES key."""
    if isinstance(exc, MismatchError):
        report = exc.report
        if isinstance(report, QualityReport):
            return "TOLERANCE_MISMATCH"
        if isinstance(report, ValidationReport) and report.mode == "structural":
            return "STRUCTURAL_MISMATCH"
        return "EXACT_MISMATCH"
    if isinstance(exc, ContractViolation):
        return "CONTRACT_VIOLATION"
    if isinstance(exc, UndefinedMetric):
        return "UNDEFINED_METRIC"
    if isinstance(exc, ComputeError):
        return "UPSTREAM_FAILURE"
    if isinstance(exc, FileNotFoundError):
        return "DATASET_MISSING"
    return "ORACLE_INTERNAL_ERROR"


class FailureHandler:
    """
    Enforces the hard failure policy.

    handle() and handle_from_exception() do not return: sys.exit() is
    always their last operation.
    """

    def __init__(self, runs_dir: Path, run_id: str):
        self._runs_dir = runs_dir
        self._run_id   = run_id

    def build_record(
        self,
        failure_type_id: str,
        detail:          str,
        scenario:        Optional[Scenario] = None,
        float_type:      str = "",
        field_name:      str = "",
    ) -> FailureRecord:
        return FailureRecord(
            failure_type_id=failure_type_id,
            exit_code=FAILURE_TYPES.get(failure_type_id, 4),
            scenario_id=scenario.scenario_id if scenario else "",
            field_name=field_name,
            detected_at_iso=_now_iso(),
            run_id=self._run_id,
            oracle_version=ORACLE_VERSION,
            float_type=float_type,
            epsilon=scenario.epsilon if scenario else None,
            min_observations=scenario.min_observations if scenario else None,
            dataset_id=scenario.dataset_id if scenario else "",
            detail=detail,
        )

    def handle(
        self,
        failure_type_id: str,
        detail:          str,
        scenario:        Optional[Scenario] = None,
        float_type:      str = "",
        field_name:      str = "",
    ) -> None:
        record = self.build_record(failure_type_id, detail, scenario, float_type, field_name)

        try:
            self._runs_dir.mkdir(parents=True, exist_ok=True)
            ts_compact = record.detected_at_iso.replace(":", "").replace("-", "").replace("+", "Z")[:16]
            filepath   = self._runs_dir / f"{self._run_id}_FAIL_{ts_compact}.json"

            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(record.to_dict(), f, indent=4, default=str)

            print(
                f"ORACLE RESULT: FAIL\n"
                f"Failure type:   {record.failure_type_id}\n"
                f"Exit code:      {record.exit_code}\n"
                f"Scenario:       {record.scenario_id or '(not applicable)'}\n"
                f"Float type:     {record.float_type or '(not applicable)'}\n"
                f"Detail:         {detail[:200]}\n"
                f"Record written: {filepath}"
            )

        except OSError as exc:
            sys.stderr.write(
                f"ORACLE_INTERNAL_ERROR: FailureHandler failed to write record: {exc}\n"
                f"Original failure: {failure_type_id} -- {detail}\n"
            )
            sys.exit(4)

        sys.exit(record.exit_code)

    def handle_from_exception(
        self,
        exc:        BaseException,
        scenario:   Optional[Scenario] = None,
        float_type: str = "",
    ) -> None:
        self.handle(
            failure_type_id=classify(exc),
            detail=str(exc) or type(exc).__name__,
            scenario=scenario,
            float_type=float_type,
            field_name=getattr(exc, "field_name", "") or "",
        )
