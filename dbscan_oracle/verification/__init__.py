# dbscan_oracle/verification/__init__.py
# DBSCAN Result Oracle.
# Oracle Version: 1.0.0
#
# Validates DBSCAN results two ways: exact (or structural) label agreement
# for small literal datasets, and Davies-Bouldin agreement within a relative
# tolerance for large ones. Separately verifies that a result exposes
# exactly the outputs its result options requested.
#
# ENTRY POINT:
#   python -m dbscan_oracle.verification.run_oracle --runs-dir [path]

from .oracle_version import (
    ORACLE_VERSION,
    SCENARIO_MATRIX_VERSION,
    RECORD_FORMAT_VERSION,
)
from .exceptions import (
    OracleError,
    ContractViolation,
    MismatchError,
    UndefinedMetric,
    UpstreamFailure,
)
from .tolerance import within_tolerance, relative_difference
from .quality_metric import (
    centers_of_mass,
    cluster_count,
    cluster_ids,
    davies_bouldin_index,
)
from .exact_match import (
    ExactMatchValidator,
    StructuralMatchValidator,
    structurally_equivalent,
)
from .option_mask import OptionMaskEnforcer
from .oracle import ComputeOracle
from .scenario_runner import ScenarioRunner, ScenarioOutcome
from .failure_handler import FailureHandler
from .run_oracle import main as run_oracle

__all__ = [
    # Version constants
    "ORACLE_VERSION",
    "SCENARIO_MATRIX_VERSION",
    "RECORD_FORMAT_VERSION",
    # Exceptions
    "OracleError",
    "ContractViolation",
    "MismatchError",
    "UndefinedMetric",
    "UpstreamFailure",
    # Comparators and metrics
    "within_tolerance",
    "relative_difference",
    "centers_of_mass",
    "cluster_count",
    "cluster_ids",
    "davies_bouldin_index",
    # Validators
    "ExactMatchValidator",
    "StructuralMatchValidator",
    "structurally_equivalent",
    "OptionMaskEnforcer",
    # Orchestration
    "ComputeOracle",
    "ScenarioRunner",
    "ScenarioOutcome",
    "FailureHandler",
    # Entry point
    "run_oracle",
]
