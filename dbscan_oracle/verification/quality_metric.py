# dbscan_oracle/verification/quality_metric.py
# Davies-Bouldin clustering validity index.
#
# Used as a relabelling-invariant proxy for "same clustering" when exact
# label agreement cannot be expected across implementations or hardware.
#
# Noise rows (label -1) take no part in any step. All arithmetic runs in
# float64 regardless of the precision the points arrive in.
#
#   centroid c_i   = mean of the rows labelled i
#   dispersion s_i = mean Euclidean distance of those rows to c_i
#   R_ij           = (s_i + s_j) / ||c_i - c_j||          (i != j)
#   D_i            = max_j R_ij
#   index          = mean_i D_i                           (lower is better)
#
# Fewer than two clusters, or two clusters with coincident centroids, leave
# the index undefined and raise UndefinedMetric.

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from dbscan_oracle.utils.constants import MIN_CLUSTERS_FOR_QUALITY, NOISE_LABEL
from dbscan_oracle.verification.exceptions import UndefinedMetric


def _as_points(points) -> np.ndarray:
    arr = np.asarray(getattr(points, "to_numpy", lambda: points)(), dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError("points must be 2-D; got ndim=" + str(arr.ndim))
    return arr


def _as_labels(labels) -> np.ndarray:
    arr = np.asarray(getattr(labels, "to_numpy", lambda: labels)())
    if arr.ndim == 2:
        if arr.shape[1] != 1:
            raise ValueError("labels must be a single column; got " + str(arr.shape[1]) + " columns")
        arr = arr[:, 0]
    if arr.ndim != 1:
        raise ValueError("labels must be 1-D; got ndim=" + str(arr.ndim))
    if arr.dtype.kind not in "iu":
        numeric = arr.astype(np.float64)
        off = np.flatnonzero(numeric != np.round(numeric))
        if off.size:
            raise ValueError(
                "labels must be integer-valued; row " + str(int(off[0]))
                + " holds " + repr(float(numeric[off[0]]))
            )
    return arr.astype(np.int64)


def cluster_ids(labels) -> np.ndarray:
    """Sorted distinct non-noise labels."""
    lab = _as_labels(labels)
    return np.unique(lab[lab != NOISE_LABEL])


def cluster_count(labels) -> int:
    """Number of distinct non-noise labels."""
    return int(cluster_ids(labels).size)


def centers_of_mass(points, labels) -> Tuple[np.ndarray, np.ndarray]:
    """
    Mean position of every non-noise cluster.

    Returns:
        (ids, centroids) -- ids is the sorted array of cluster labels;
        centroids[k] is the centroid of cluster ids[k].
    """
    x = _as_points(points)
    lab = _as_labels(labels)
    if lab.shape[0] != x.shape[0]:
        raise ValueError(
            "labels length " + str(lab.shape[0])
            + " does not match point count " + str(x.shape[0])
        )
    ids = np.unique(lab[lab != NOISE_LABEL])
    centroids = np.empty((ids.size, x.shape[1]), dtype=np.float64)
    for k, cid in enumerate(ids):
        centroids[k] = x[lab == cid].mean(axis=0)
    return ids, centroids


def davies_bouldin_index(
    points,
    labels,
    centroids: Optional[np.ndarray] = None,
) -> float:
    """
    Davies-Bouldin index of the partition `labels` over `points`.

    Args:
        points:    n x d array-like or HomogenTable.
        labels:    length-n labels (1-D or n x 1), -1 for noise.
        centroids: Optional precomputed centroids ordered like
                   cluster_ids(labels). Computed when omitted.

    Raises:
        UndefinedMetric: fewer than two clusters, or coincident centroids.
    """
    x = _as_points(points)
    lab = _as_labels(labels)
    ids, computed = centers_of_mass(x, lab)

    if ids.size < MIN_CLUSTERS_FOR_QUALITY:
        raise UndefinedMetric(
            "at least " + str(MIN_CLUSTERS_FOR_QUALITY)
            + " clusters are required; partition has " + str(ids.size),
            value=int(ids.size),
        )

    if centroids is None:
        centers = computed
    else:
        centers = np.asarray(centroids, dtype=np.float64)
        if centers.shape != computed.shape:
            raise ValueError(
                "centroids shape " + str(centers.shape)
                + " does not match expected " + str(computed.shape)
            )

    dispersion = np.empty(ids.size, dtype=np.float64)
    for k, cid in enumerate(ids):
        members = x[lab == cid]
        dispersion[k] = np.linalg.norm(members - centers[k], axis=1).mean()

    diff = centers[:, np.newaxis, :] - centers[np.newaxis, :, :]
    separation = np.sqrt((diff * diff).sum(axis=2))
    off_diagonal = ~np.eye(ids.size, dtype=bool)
    if np.any(separation[off_diagonal] == 0.0):
        i, j = np.argwhere((separation == 0.0) & off_diagonal)[0]
        raise UndefinedMetric(
            "clusters " + str(int(ids[i])) + " and " + str(int(ids[j]))
            + " have coincident centroids",
            value=(int(ids[i]), int(ids[j])),
        )

    similarity = np.full((ids.size, ids.size), -np.inf)
    spread = dispersion[:, np.newaxis] + dispersion[np.newaxis, :]
    similarity[off_diagonal] = spread[off_diagonal] / separation[off_diagonal]
    worst = similarity.max(axis=1)
    return float(worst.mean())
