# dbscan_oracle/compute/table.py
# HomogenTable -- immutable, row-major numeric table.
#
# The table owns a read-only numpy array. Nothing handed out by the table
# can be used to mutate it: wrap() copies the caller's buffer and every
# accessor returns a read-only view.

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np


class HomogenTable:
    """
    A row_count x column_count table holding values of a single dtype.

    Construct with HomogenTable.wrap(buffer, row_count, column_count) where
    `buffer` is a flat row-major sequence, or HomogenTable.from_array(arr)
    for an existing 2-D array.
    """

    __slots__ = ("_array",)

    def __init__(self, array: np.ndarray) -> None:
        if array.ndim != 2:
            raise ValueError(
                "HomogenTable: array must be 2-D; got ndim=" + str(array.ndim)
            )
        frozen = np.array(array, copy=True, order="C")
        frozen.setflags(write=False)
        object.__setattr__(self, "_array", frozen)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("HomogenTable is immutable")

    @classmethod
    def wrap(
        cls,
        buffer:       Sequence[float],
        row_count:    int,
        column_count: int,
        dtype:        Any = np.float64,
    ) -> "HomogenTable":
        """
        Build a table from a flat row-major buffer.

        Only the first row_count * column_count values are used; a shorter
        buffer raises ValueError.
        """
        if row_count < 0 or column_count < 0:
            raise ValueError(
                "HomogenTable.wrap: row_count and column_count must be >= 0; got "
                + repr((row_count, column_count))
            )
        flat = np.asarray(buffer, dtype=dtype).ravel()
        needed = row_count * column_count
        if flat.size < needed:
            raise ValueError(
                "HomogenTable.wrap: buffer holds "
                + str(flat.size)
                + " values; "
                + str(needed)
                + " required for shape "
                + repr((row_count, column_count))
            )
        return cls(flat[:needed].reshape(row_count, column_count))

    @classmethod
    def from_array(cls, array: Any, dtype: Optional[Any] = None) -> "HomogenTable":
        arr = np.asarray(array, dtype=dtype)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        return cls(arr)

    @property
    def row_count(self) -> int:
        return int(self._array.shape[0])

    @property
    def column_count(self) -> int:
        return int(self._array.shape[1])

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    @property
    def has_data(self) -> bool:
        return self._array.size > 0

    def pull_rows(self, start: int = 0, stop: int = -1) -> np.ndarray:
        """
        Return rows [start, stop) as a flat, read-only, row-major buffer.

        stop == -1 means "through the last row".
        """
        if stop == -1:
            stop = self.row_count
        if not 0 <= start <= stop <= self.row_count:
            raise IndexError(
                "HomogenTable.pull_rows: range "
                + repr((start, stop))
                + " outside [0, "
                + str(self.row_count)
                + "]"
            )
        return self._array[start:stop].reshape(-1)

    def pull_column(self, column: int = 0) -> np.ndarray:
        """Return one column as a read-only 1-D view."""
        if not 0 <= column < self.column_count:
            raise IndexError(
                "HomogenTable.pull_column: column "
                + str(column)
                + " outside [0, "
                + str(self.column_count)
                + ")"
            )
        return self._array[:, column]

    def to_numpy(self) -> np.ndarray:
        """Read-only 2-D view of the table."""
        return self._array

    def astype(self, dtype: Any) -> "HomogenTable":
        if np.dtype(dtype) == self._array.dtype:
            return self
        return HomogenTable(self._array.astype(dtype))

    def __repr__(self) -> str:
        return (
            "HomogenTable(row_count=" + str(self.row_count)
            + ", column_count=" + str(self.column_count)
            + ", dtype=" + str(self._array.dtype)
            + ")"
        )
