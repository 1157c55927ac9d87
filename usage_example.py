# usage_example.py
# Minimal usage example for dbscan_oracle.verification.ComputeOracle.
# This file is not part of the dbscan_oracle package. For reference only.

from dbscan_oracle.compute import HomogenTable, ResultOptions
from dbscan_oracle.verification import ComputeOracle, MismatchError

# Inputs: 1-D chain. Only 2, 3 and 4 lie within 1.0 of each other.
data = HomogenTable.wrap([0.0, 2.0, 3.0, 4.0, 6.0, 8.0, 10.0], 7, 1)

oracle = ComputeOracle(float_type="float64", scenario_id="example")

# Exact labels
report = oracle.check_responses(
    data, None, epsilon=1.0, min_observations=2,
    reference=[-1, 0, 0, 0, -1, -1, -1],
)
print(report.summary())

# Result option gating: only responses and core_flags may be readable.
checks = oracle.check_modes(
    data, None, 1.0, 2, ResultOptions.RESPONSES | ResultOptions.CORE_FLAGS,
)
for check in checks:
    print(check.describe())

# Quality: a single cluster leaves the Davies-Bouldin index undefined, so
# the comparison is skipped rather than failed.
quality = oracle.check_quality(data, 1.0, 2, reference_score=0.5)
print(quality.summary())

# Expected output:
# exact match on 7 rows
# 'responses' ok
# 'core_flags' ok
# 'core_observations' ok
# 'core_observation_indices' ok
# quality comparison skipped: cluster_count=1 is below 2

# MismatchError example:
try:
    oracle.check_responses(data, None, 1.0, 1, [0, 0, 0, 0, 0, 0, 0])
except MismatchError as exc:
    print(exc.report.summary())
