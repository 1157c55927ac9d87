#!/usr/bin/env python3
# =============================================================================
# DBSCAN RESULT ORACLE -- CI CHECKS RUNNER
# File:   scripts/run_ci_checks.py
# =============================================================================
#
# PURPOSE
# -------
# Runs the CI gate in two sequential stages:
#   Stage 1: pytest (unit tests)
#   Stage 2: oracle gate (full scenario matrix, both precisions)
#
# Exit codes:
#   0 -- All stages passed.
#   1 -- Stage 1 (pytest) failed.
#   2 -- Stage 2 (oracle gate) failed.
#
# Usage:
#   python scripts/run_ci_checks.py [--dataset-root PATH]
#
# Oracle run records are written to <repo>/runs.
# =============================================================================

from __future__ import annotations

import argparse
import pathlib
import subprocess
import sys

_REPO_ROOT = pathlib.Path(__file__).parent.parent
_RUNS_DIR  = _REPO_ROOT / "runs"
_PYTHON    = sys.executable


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _run(cmd: list[str], label: str) -> int:
    """Run a subprocess command with live output, return its exit code."""
    print(_separator())
    print(f"CI STAGE: {label}")
    print(f"CMD:      {' '.join(cmd)}")
    print(_separator("-"))
    sys.stdout.flush()

    proc = subprocess.run(cmd, cwd=str(_REPO_ROOT))
    return proc.returncode


def _fail(stage: str, rc: int) -> None:
    print(_separator())
    print(f"CI RESULT: FAIL  [stage={stage}  exit_code={rc}]")
    print(f"Merge BLOCKED: {stage} stage did not pass.")
    print(_separator())
    sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="DBSCAN oracle CI gate")
    parser.add_argument(
        "--dataset-root",
        default=None,
        help="Forwarded to the oracle runner. External scenarios skip without it.",
    )
    args = parser.parse_args(argv)

    print(_separator())
    print("DBSCAN ORACLE CI GATE -- starting")
    print(_separator())
    sys.stdout.flush()

    pytest_rc = _run([_PYTHON, "-m", "pytest"], "pytest")
    if pytest_rc != 0:
        _fail("pytest", pytest_rc)
        return 1

    print(_separator("-"))
    print("CI STAGE pytest: PASS")
    sys.stdout.flush()

    # Non-zero exit here carries the FAILURE_TYPES code of the first
    # failing scenario (1 mismatch, 2 contract, 3 upstream, 4 internal).
    oracle_cmd = [
        _PYTHON, "-m", "dbscan_oracle.verification.run_oracle",
        "--runs-dir", str(_RUNS_DIR),
    ]
    if args.dataset_root:
        oracle_cmd += ["--dataset-root", args.dataset_root]
    oracle_rc = _run(oracle_cmd, "oracle gate (scenario matrix)")
    if oracle_rc != 0:
        _fail("oracle", oracle_rc)
        return 2

    print(_separator("-"))
    print("CI STAGE oracle: PASS")

    print(_separator())
    print("CI RESULT: PASS  [stages=pytest,oracle]")
    print("Merge permitted.")
    print(_separator())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
