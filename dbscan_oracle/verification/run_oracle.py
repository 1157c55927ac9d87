# dbscan_oracle/verification/run_oracle.py
# DBSCAN Result Oracle -- Entry Point.
#
# Standard invocation:
#   python -m dbscan_oracle.verification.run_oracle --runs-dir runs
#
# With external datasets and a single precision:
#   python -m dbscan_oracle.verification.run_oracle \
#       --runs-dir runs \
#       --dataset-root /data/oracle \
#       --float-type float32 \
#       --group G-EXT
#
# EXIT CODES:
#   0  -- Every executed scenario passed.
#   1  -- EXACT_MISMATCH, STRUCTURAL_MISMATCH or TOLERANCE_MISMATCH.
#   2  -- CONTRACT_VIOLATION.
#   3  -- UPSTREAM_FAILURE, UNDEFINED_METRIC or DATASET_MISSING.
#   4  -- Internal oracle error.
#
# Single-threaded. Scenarios run in matrix order; the first failure stops
# the run.

import argparse
import json
import os
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from dbscan_oracle.utils.constants import (
    DATASET_ROOT_ENV,
    SUPPORTED_FLOAT_TYPES,
)
from dbscan_oracle.verification.failure_handler import FailureHandler
from dbscan_oracle.verification.oracle_version import (
    ORACLE_VERSION,
    RECORD_FORMAT_VERSION,
    SCENARIO_MATRIX_VERSION,
)
from dbscan_oracle.verification.scenario_runner import (
    STATUS_PASS,
    STATUS_SKIP,
    ScenarioOutcome,
    ScenarioRunner,
)
from dbscan_oracle.verification.scenarios.scenario_definitions import (
    GROUP_IDS,
    SCENARIO_MATRIX,
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="DBSCAN Result Oracle v" + ORACLE_VERSION,
        prog="python -m dbscan_oracle.verification.run_oracle",
    )
    parser.add_argument(
        "--runs-dir",
        required=True,
        help="Directory for PASS / FAIL run records.",
    )
    parser.add_argument(
        "--dataset-root",
        default=os.environ.get(DATASET_ROOT_ENV),
        help=(
            "Directory holding external CSV datasets. Defaults to $"
            + DATASET_ROOT_ENV
            + ". External scenarios are skipped when unset."
        ),
    )
    parser.add_argument(
        "--float-type",
        choices=sorted(SUPPORTED_FLOAT_TYPES) + ["all"],
        default="all",
        help="Precision to run under. 'all' runs every supported precision.",
    )
    parser.add_argument(
        "--group",
        action="append",
        choices=list(GROUP_IDS),
        default=None,
        help="Restrict the run to a scenario group. May be repeated.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Run the scenario matrix.

    On pass: writes a PASS record, prints a summary, exits 0.
    On any failure: FailureHandler exits non-zero.
    """
    args     = _parse_args(argv)
    run_id   = "RUN-" + datetime.now(timezone.utc).strftime("%Y%m%d") + "-" + str(uuid.uuid4())[:8].upper()
    runs_dir = Path(args.runs_dir)
    fh       = FailureHandler(runs_dir=runs_dir, run_id=run_id)

    dataset_root = Path(args.dataset_root) if args.dataset_root else None
    float_types  = (
        sorted(SUPPORTED_FLOAT_TYPES) if args.float_type == "all" else [args.float_type]
    )
    groups    = set(args.group) if args.group else set(GROUP_IDS)
    scenarios = [s for s in SCENARIO_MATRIX if s.group_id in groups]

    outcomes: List[ScenarioOutcome] = []
    for float_type in float_types:
        runner = ScenarioRunner(float_type=float_type, dataset_root=dataset_root)
        for scenario in scenarios:
            try:
                outcomes.append(runner.run_scenario(scenario))
            except Exception as exc:
                fh.handle_from_exception(exc, scenario=scenario, float_type=float_type)

    passed  = sum(1 for o in outcomes if o.status == STATUS_PASS)
    skipped = sum(1 for o in outcomes if o.status == STATUS_SKIP)

    ts = _now_iso()
    pass_record = {
        "result":                  "PASS",
        "run_id":                  run_id,
        "oracle_version":          ORACLE_VERSION,
        "scenario_matrix_version": SCENARIO_MATRIX_VERSION,
        "record_format_version":   RECORD_FORMAT_VERSION,
        "float_types":             float_types,
        "groups":                  sorted(groups),
        "dataset_root":            str(dataset_root) if dataset_root else None,
        "scenarios_passed":        passed,
        "scenarios_skipped":       skipped,
        "outcomes": [
            {
                "scenario_id": o.scenario_id,
                "group_id":    o.group_id,
                "float_type":  o.float_type,
                "status":      o.status,
                "detail":      o.detail,
            }
            for o in outcomes
        ],
        "timestamp_iso": ts,
    }

    ts_compact    = ts.replace(":", "").replace("-", "")[:16]
    pass_filepath = runs_dir / f"{run_id}_PASS_{ts_compact}.json"
    try:
        runs_dir.mkdir(parents=True, exist_ok=True)
        with open(pass_filepath, "w", encoding="utf-8") as f:
            json.dump(pass_record, f, indent=4)
    except OSError as exc:
        fh.handle("ORACLE_INTERNAL_ERROR", f"Failed to write pass record: {exc}")

    print(
        f"ORACLE RESULT: PASS\n"
        f"Run ID:          {run_id}\n"
        f"Oracle version:  {ORACLE_VERSION}\n"
        f"Float types:     {', '.join(float_types)}\n"
        f"Passed:          {passed}\n"
        f"Skipped:         {skipped}\n"
        f"Pass record:     {pass_filepath}\n"
        f"Timestamp:       {ts}"
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
