import numpy as np
import pytest
from sklearn.metrics import davies_bouldin_score

from dbscan_oracle.compute import HomogenTable
from dbscan_oracle.verification import (
    UndefinedMetric,
    centers_of_mass,
    cluster_count,
    cluster_ids,
    davies_bouldin_index,
)


class TestClusterCounting:

    def test_noise_excluded(self):
        assert cluster_count([-1, 0, 0, 1, -1]) == 2
        assert cluster_ids([-1, 3, 1, 3]).tolist() == [1, 3]

    def test_all_noise(self):
        assert cluster_count([-1, -1]) == 0

    def test_column_table_accepted(self):
        assert cluster_count(HomogenTable.wrap([0, 1, 1], 3, 1)) == 2


class TestCentersOfMass:

    def test_means_per_cluster(self):
        ids, centroids = centers_of_mass([[0.0], [1.0], [10.0], [11.0], [50.0]], [0, 0, 1, 1, -1])
        assert ids.tolist() == [0, 1]
        assert centroids[:, 0].tolist() == [0.5, 10.5]

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            centers_of_mass([[0.0], [1.0]], [0])


class TestDaviesBouldinIndex:

    def test_two_blobs_known_value(self, two_blobs):
        assert davies_bouldin_index(two_blobs, [0, 0, 1, 1]) == pytest.approx(0.1)

    def test_noise_rows_ignored(self):
        points = [[0.0], [1.0], [10.0], [11.0], [1000.0]]
        assert davies_bouldin_index(points, [0, 0, 1, 1, -1]) == pytest.approx(0.1)

    def test_invariant_under_relabelling(self, two_blobs):
        assert davies_bouldin_index(two_blobs, [0, 0, 1, 1]) == pytest.approx(
            davies_bouldin_index(two_blobs, [7, 7, 2, 2])
        )

    def test_precomputed_centroids_used(self, two_blobs):
        _, centroids = centers_of_mass(two_blobs, [0, 0, 1, 1])
        assert davies_bouldin_index(two_blobs, [0, 0, 1, 1], centroids) == pytest.approx(0.1)

    def test_centroid_shape_checked(self, two_blobs):
        with pytest.raises(ValueError):
            davies_bouldin_index(two_blobs, [0, 0, 1, 1], np.zeros((3, 1)))

    def test_float32_points_evaluated_in_double(self):
        points = np.array([[0.0], [1.0], [10.0], [11.0]], dtype=np.float32)
        assert davies_bouldin_index(points, [0, 0, 1, 1]) == pytest.approx(0.1, rel=1e-12)

    def test_agrees_with_scikit_learn(self):
        rng = np.random.default_rng(7)
        points = np.vstack([
            rng.normal(loc=(0.0, 0.0), scale=0.5, size=(30, 2)),
            rng.normal(loc=(5.0, 5.0), scale=0.8, size=(30, 2)),
            rng.normal(loc=(0.0, 8.0), scale=0.3, size=(30, 2)),
        ])
        labels = np.repeat([0, 1, 2], 30)
        assert davies_bouldin_index(points, labels) == pytest.approx(
            davies_bouldin_score(points, labels), rel=1e-9
        )

    @pytest.mark.parametrize("labels", [[-1, -1, -1, -1], [0, 0, 0, 0], [0, 0, -1, -1]])
    def test_fewer_than_two_clusters_undefined(self, two_blobs, labels):
        with pytest.raises(UndefinedMetric) as info:
            davies_bouldin_index(two_blobs, labels)
        assert info.value.field_name == "davies_bouldin_index"

    def test_coincident_centroids_undefined(self):
        points = [[-1.0], [1.0], [0.0]]
        with pytest.raises(UndefinedMetric, match="coincident"):
            davies_bouldin_index(points, [0, 0, 1])


class TestLabelValidation:

    def test_fractional_labels_rejected(self):
        with pytest.raises(ValueError, match="integer-valued"):
            cluster_count([0.2, 0.9])

    def test_fractional_labels_rejected_by_index(self, two_blobs):
        with pytest.raises(ValueError):
            davies_bouldin_index(two_blobs, [0.0, 0.0, 1.0, 1.5])

    def test_integral_float_labels_accepted(self):
        assert cluster_count([-1.0, 0.0, 1.0]) == 2
