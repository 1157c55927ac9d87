from datetime import datetime, timezone

import pytest

from dbscan_oracle.compute import HomogenTable
from dbscan_oracle.core.logging_layer import EventLogger
from dbscan_oracle.verification.data_models.validation_report import ScenarioContext

FIXED_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning one fixed UTC instant, for reproducible event hashes."""
    return lambda: FIXED_TIME


@pytest.fixture
def event_logger() -> EventLogger:
    return EventLogger()


@pytest.fixture
def context() -> ScenarioContext:
    return ScenarioContext(
        scenario_id="CORE-02",
        dataset_id="inline",
        epsilon=1.0,
        min_observations=2,
        float_type="float64",
    )


@pytest.fixture
def two_blobs() -> HomogenTable:
    """
    1-d points 0, 1 and 10, 11. With eps 1.5, min 2 DBSCAN gives two
    clusters: centroids 0.5 and 10.5, dispersion 0.5 each, so the
    Davies-Bouldin index is (0.5 + 0.5) / 10 = 0.1.
    """
    return HomogenTable.wrap([0.0, 1.0, 10.0, 11.0], 4, 1)


@pytest.fixture
def chain() -> HomogenTable:
    return HomogenTable.wrap([0.0, 2.0, 3.0, 4.0, 6.0, 8.0, 10.0], 7, 1)
