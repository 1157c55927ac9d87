# dbscan_oracle/utils/constants.py
# Version: 1.0.0
# Single authoritative definition of oracle-wide constants.
#
# Standard import pattern:
#   from dbscan_oracle.utils.constants import (
#       NOISE_LABEL,
#       DEFAULT_DBI_TOLERANCE,
#       SUPPORTED_FLOAT_TYPES,
#       DATASET_ROOT_ENV,
#   )

import numpy as np


# ---------------------------------------------------------------------------
# PARTITION LABELS
# ---------------------------------------------------------------------------

NOISE_LABEL: int = -1    # Row not assigned to any cluster.


# ---------------------------------------------------------------------------
# QUALITY COMPARISON
# ---------------------------------------------------------------------------

# Relative tolerance applied to Davies-Bouldin comparisons when a scenario
# does not state its own.
DEFAULT_DBI_TOLERANCE: float = 1.0e-4

# A quality score needs at least two clusters to be defined.
MIN_CLUSTERS_FOR_QUALITY: int = 2


# ---------------------------------------------------------------------------
# FLOATING-POINT TYPES
# ---------------------------------------------------------------------------
# Every scenario may run under either precision. Keys are the names accepted
# on the command line and stored in reports.

SUPPORTED_FLOAT_TYPES: dict = {
    "float32": np.float32,
    "float64": np.float64,
}

DEFAULT_FLOAT_TYPE: str = "float64"


# ---------------------------------------------------------------------------
# EXTERNAL DATASETS
# ---------------------------------------------------------------------------

# Environment variable naming the directory that holds external CSV datasets.
DATASET_ROOT_ENV: str = "DBSCAN_ORACLE_DATASET_ROOT"
