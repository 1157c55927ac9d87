# dbscan_oracle/verification/scenarios/scenario_definitions.py
# Version: 1.0.0
# Fixed, version-controlled scenario matrix for the result oracle.
#
# NO SCENARIO IS GENERATED FROM RANDOM DATA.
# Literal datasets have no geometric ambiguity, so the engine's input-order
# labelling makes their exact label sequences reproducible.
#
# Execution order: G-MODE, G-DEG, G-BND, G-WGT, G-CORE, G-NOISE, G-EXT.

from typing import Optional

from dbscan_oracle.compute.options import ResultOptions
from dbscan_oracle.verification.data_models.scenario import (
    KIND_MODES,
    KIND_QUALITY,
    KIND_RESPONSES,
    Scenario,
)


# ---------------------------------------------------------------------------
# CANONICAL DATASETS
# ---------------------------------------------------------------------------

# DS-01: three distinct 5-dimensional rows; no pair within 0.01 of another.
_DS_THREE_ROWS: tuple = (
    0.0, 5.0, 0.0, 0.0, 0.0,
    1.0, 1.0, 4.0, 0.0, 0.0,
    1.0, 0.0, 0.0, 5.0, 1.0,
)

# DS-02: 1-D chain. 2, 3, 4 are mutually reachable at epsilon 1; the rest
# are two or more apart from every other point.
_DS_CHAIN: tuple = (0.0, 2.0, 3.0, 4.0, 6.0, 8.0, 10.0)

# DS-03: 1-D with a duplicate at 1.0.
_DS_DUPLICATE: tuple = (0.0, 1.0, 1.0)

# DS-04: two 1-D points one unit apart.
_DS_PAIR: tuple = (0.0, 1.0)

# DS-05: two 1-D points half a unit apart.
_DS_CLOSE_PAIR: tuple = (0.0, 0.5)

# DS-06: two 1-D points two units apart.
_DS_FAR_PAIR: tuple = (0.0, 2.0)


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def _responses(
    scenario_id:      str,
    group_id:         str,
    data:             tuple,
    column_count:     int,
    epsilon:          float,
    min_observations: int,
    expected:         tuple,
    weights:          Optional[tuple] = None,
    description:      str = "",
) -> Scenario:
    return Scenario(
        scenario_id=scenario_id,
        group_id=group_id,
        kind=KIND_RESPONSES,
        epsilon=epsilon,
        min_observations=min_observations,
        data=data,
        row_count=len(data) // column_count,
        column_count=column_count,
        weights=weights,
        expected_responses=expected,
        description=description,
    )


def _external(
    scenario_id:        str,
    dataset_file:       str,
    epsilon:            float,
    min_observations:   int,
    reference_score:    float,
    relative_tolerance: float,
    float_types:        tuple = ("float32", "float64"),
    description:        str = "",
) -> Scenario:
    return Scenario(
        scenario_id=scenario_id,
        group_id="G-EXT",
        kind=KIND_QUALITY,
        epsilon=epsilon,
        min_observations=min_observations,
        reference_score=reference_score,
        relative_tolerance=relative_tolerance,
        dataset_file=dataset_file,
        float_types=float_types,
        description=description,
    )


# ---------------------------------------------------------------------------
# GROUP G-MODE: result option gating, every subset of the four options
# ---------------------------------------------------------------------------

_G_MODE = [
    Scenario(
        scenario_id="MODE-{:02d}".format(index),
        group_id="G-MODE",
        kind=KIND_MODES,
        epsilon=0.01,
        min_observations=1,
        data=_DS_THREE_ROWS,
        row_count=3,
        column_count=5,
        result_options=options,
        description="Only " + repr(options) + " may be readable.",
    )
    for index, options in enumerate(ResultOptions.all_subsets())
]


# ---------------------------------------------------------------------------
# GROUP G-DEG: degenerate input -- every row isolated
# ---------------------------------------------------------------------------

_G_DEG = [
    _responses(
        "DEG-01", "G-DEG", _DS_THREE_ROWS, 5, 0.01, 1, (0, 1, 2),
        weights=(1.0, 1.1, 1.0),
        description="Isolated rows, each weight >= 1: every row its own cluster.",
    ),
]


# ---------------------------------------------------------------------------
# GROUP G-BND: epsilon boundary -- distance == epsilon is a neighbour
# ---------------------------------------------------------------------------

_G_BND = [
    _responses(
        "BND-01", "G-BND", _DS_PAIR, 1, 2.0, 2, (0, 0),
        description="Pair well inside epsilon forms one cluster.",
    ),
    _responses(
        "BND-02", "G-BND", _DS_DUPLICATE, 1, 1.0, 2, (0, 0, 0),
        description="Distance exactly epsilon: all three rows in one cluster.",
    ),
    _responses(
        "BND-03", "G-BND", _DS_DUPLICATE, 1, 0.999, 2, (-1, 0, 0),
        description="Epsilon just below the gap: row 0 becomes noise.",
    ),
]


# ---------------------------------------------------------------------------
# GROUP G-WGT: weights replace unit counts in the density threshold
# ---------------------------------------------------------------------------

_G_WGT = [
    _responses(
        "WGT-01", "G-WGT", _DS_PAIR, 1, 0.5, 6, (-1, -1),
        description="Unit weights fall short of 6: both noise.",
    ),
    _responses(
        "WGT-02", "G-WGT", _DS_PAIR, 1, 0.5, 6, (-1, -1),
        weights=(5.0, 5.0),
        description="Weights 5/5 fall short of 6: both noise.",
    ),
    _responses(
        "WGT-03", "G-WGT", _DS_PAIR, 1, 0.5, 6, (0, -1),
        weights=(6.0, 5.0),
        description="Weight 6 reaches the threshold alone: first row a cluster, second noise.",
    ),
    _responses(
        "WGT-04", "G-WGT", _DS_PAIR, 1, 0.5, 6, (0, 1),
        weights=(6.0, 6.0),
        description="Rows outside each other's radius, each weight 6: two clusters.",
    ),
    _responses(
        "WGT-05", "G-WGT", _DS_CLOSE_PAIR, 1, 0.5, 6, (0, 0),
        weights=(6.0, 6.0),
        description="Rows inside each other's radius, each weight 6: one cluster.",
    ),
]


# ---------------------------------------------------------------------------
# GROUP G-CORE: core-chain propagation on a 1-D chain, epsilon 1
# ---------------------------------------------------------------------------

_G_CORE = [
    _responses(
        "CORE-01", "G-CORE", _DS_CHAIN, 1, 1.0, 1, (0, 1, 1, 1, 2, 3, 4),
        description="Every row is core; the 2-3-4 chain shares one cluster.",
    ),
    _responses(
        "CORE-02", "G-CORE", _DS_CHAIN, 1, 1.0, 2, (-1, 0, 0, 0, -1, -1, -1),
        description="Only the chain is dense enough.",
    ),
    _responses(
        "CORE-03", "G-CORE", _DS_CHAIN, 1, 1.0, 3, (-1, 0, 0, 0, -1, -1, -1),
        description="Row 3 is core; 2 and 4 join as border rows.",
    ),
    _responses(
        "CORE-04", "G-CORE", _DS_CHAIN, 1, 1.0, 4, (-1, -1, -1, -1, -1, -1, -1),
        description="No neighbourhood reaches 4: all noise.",
    ),
]


# ---------------------------------------------------------------------------
# GROUP G-NOISE: epsilon below every pairwise distance
# ---------------------------------------------------------------------------

_G_NOISE = [
    _responses(
        "NOISE-01", "G-NOISE", _DS_FAR_PAIR, 1, 1.0, 2, (-1, -1),
        description="Pair farther apart than epsilon with min_observations 2: both noise.",
    ),
]


# ---------------------------------------------------------------------------
# GROUP G-EXT: external datasets, Davies-Bouldin within tolerance
# ---------------------------------------------------------------------------

_G_EXT = [
    _external(
        "EXT-01", "workloads/mnist/dataset/mnist_test.csv",
        1.7e3, 3, 1.584515, 1.0e-3,
        float_types=("float32",),
        description="mnist, 10K samples. Double precision has a known issue upstream.",
    ),
    _external(
        "EXT-02", "workloads/hepmass/dataset/hepmass_10t_test.csv",
        5.0, 3, 0.78373, 1.0e-3,
        description="hepmass, 10K samples.",
    ),
    _external(
        "EXT-03", "workloads/road_network/dataset/road_network_20t_cluster.csv",
        1.0e3, 220, 0.00036, 1.0e-1,
        description="road_network, 20K samples.",
    ),
]


# ---------------------------------------------------------------------------
# COMPLETE MATRIX
# ---------------------------------------------------------------------------

SCENARIO_MATRIX: tuple = tuple(
    _G_MODE + _G_DEG + _G_BND + _G_WGT + _G_CORE + _G_NOISE + _G_EXT
)

SCENARIO_COUNT: int = len(SCENARIO_MATRIX)

GROUP_IDS: tuple = ("G-MODE", "G-DEG", "G-BND", "G-WGT", "G-CORE", "G-NOISE", "G-EXT")
