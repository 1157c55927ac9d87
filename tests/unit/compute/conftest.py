import pytest

from dbscan_oracle.compute import HomogenTable


@pytest.fixture
def three_rows() -> HomogenTable:
    """Three well separated 5-d rows. With eps 0.01, min 1 each is its own cluster."""
    return HomogenTable.wrap(
        [
            0.0, 5.0, 0.0, 0.0, 0.0,
            1.0, 1.0, 4.0, 0.0, 0.0,
            1.0, 0.0, 0.0, 5.0, 1.0,
        ],
        3,
        5,
    )


@pytest.fixture
def chain() -> HomogenTable:
    """1-d chain 0, 2, 3, 4, 6, 8, 10. Only 2, 3, 4 are within 1 of each other."""
    return HomogenTable.wrap([0.0, 2.0, 3.0, 4.0, 6.0, 8.0, 10.0], 7, 1)
