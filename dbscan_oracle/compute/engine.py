# dbscan_oracle/compute/engine.py
# Compute engine boundary -- brute-force DBSCAN via scikit-learn.
#
# compute(descriptor, data, weights=None) -> ComputeResult
#
# The oracle treats this function as an opaque external collaborator.
# It is invoked synchronously; it has no timeout and performs no retry.
# Every error it raises derives from ComputeError.
#
# Labelling follows scikit-learn: rows are visited in input order and each
# unlabelled core row starts the next cluster id, so scripted inputs without
# geometric ambiguity get reproducible labels.

from __future__ import annotations

from typing import Optional

import numpy as np
from sklearn.cluster import DBSCAN

from dbscan_oracle.compute.descriptor import Descriptor
from dbscan_oracle.compute.exceptions import InvalidInputError
from dbscan_oracle.compute.options import ResultOption
from dbscan_oracle.compute.result import ComputeResult
from dbscan_oracle.compute.table import HomogenTable
from dbscan_oracle.utils.constants import NOISE_LABEL

# scikit-learn rejects eps == 0. The smallest positive double squares to 0.0
# in the squared-distance radius test, so only coincident rows are neighbours.
_ZERO_EPSILON_SUBSTITUTE: float = float(np.nextafter(0.0, 1.0))


def _check_data(data: HomogenTable) -> None:
    if not isinstance(data, HomogenTable):
        raise InvalidInputError("data", type(data).__name__, "must be a HomogenTable")
    if data.row_count < 1 or data.column_count < 1:
        raise InvalidInputError(
            "data", (data.row_count, data.column_count), "must have at least one row and one column"
        )
    if not np.all(np.isfinite(data.to_numpy())):
        raise InvalidInputError("data", "non-finite entry", "all values must be finite")


def _check_weights(weights: HomogenTable, row_count: int) -> None:
    if not isinstance(weights, HomogenTable):
        raise InvalidInputError("weights", type(weights).__name__, "must be a HomogenTable")
    if weights.column_count != 1:
        raise InvalidInputError("weights", weights.column_count, "must have exactly one column")
    if weights.row_count != row_count:
        raise InvalidInputError(
            "weights", weights.row_count, "row count must equal data row count " + str(row_count)
        )
    if not np.all(np.isfinite(weights.to_numpy())):
        raise InvalidInputError("weights", "non-finite entry", "all values must be finite")


def _has_weights(weights: Optional[HomogenTable]) -> bool:
    """An empty table stands for "no weights", same as None."""
    return weights is not None and not (
        isinstance(weights, HomogenTable) and not weights.has_data
    )


def compute(
    descriptor: Descriptor,
    data:       HomogenTable,
    weights:    Optional[HomogenTable] = None,
) -> ComputeResult:
    """
    Cluster `data` with the parameters in `descriptor`.

    Args:
        descriptor: Validated compute request.
        data:       n x d table of observations.
        weights:    Optional n x 1 table of observation weights. None or an
                    empty table means unit weight for every row.

    Returns:
        ComputeResult exposing only the outputs in descriptor.result_options.

    Raises:
        InvalidInputError: data or weights malformed.
    """
    _check_data(data)
    sample_weight = None
    if _has_weights(weights):
        _check_weights(weights, data.row_count)
        sample_weight = np.asarray(weights.pull_column(0), dtype=np.float64)

    x = data.astype(descriptor.dtype).to_numpy()
    eps = float(descriptor.epsilon)
    if eps == 0.0:
        eps = _ZERO_EPSILON_SUBSTITUTE

    model = DBSCAN(
        eps=eps,
        min_samples=int(descriptor.min_observations),
        metric="euclidean",
        algorithm="brute",
    )
    labels = model.fit_predict(x, sample_weight=sample_weight)

    labels = np.asarray(labels, dtype=np.int32)
    core_indices = np.asarray(model.core_sample_indices_, dtype=np.int64)
    core_flags = np.zeros(labels.shape[0], dtype=np.int32)
    core_flags[core_indices] = 1
    cluster_count = int(np.unique(labels[labels != NOISE_LABEL]).size)

    options = descriptor.result_options
    return ComputeResult(
        result_options=options,
        cluster_count=cluster_count,
        responses=(
            HomogenTable.from_array(labels)
            if options.test(ResultOption.RESPONSES) else None
        ),
        core_flags=(
            HomogenTable.from_array(core_flags)
            if options.test(ResultOption.CORE_FLAGS) else None
        ),
        core_observations=(
            HomogenTable(x[core_indices].reshape(core_indices.size, data.column_count))
            if options.test(ResultOption.CORE_OBSERVATIONS) else None
        ),
        core_observation_indices=(
            HomogenTable.from_array(core_indices)
            if options.test(ResultOption.CORE_OBSERVATION_INDICES) else None
        ),
    )
