# dbscan_oracle/verification/exact_match.py
# Label-sequence validators.
#
# ExactMatchValidator      -- row-wise label equality. For references built
#                             with the same tie-breaking as the engine.
# StructuralMatchValidator -- equality up to a bijective relabelling of the
#                             non-noise clusters. Noise rows must coincide.
#
# Both compare every row and report every disagreement; neither stops at
# the first mismatch. Both return a report; raising is the caller's call.

from typing import Dict, List, Optional

import numpy as np

from dbscan_oracle.utils.constants import NOISE_LABEL
from dbscan_oracle.verification.data_models.validation_report import (
    RowMismatch,
    ScenarioContext,
    ValidationReport,
)
from dbscan_oracle.verification.exceptions import MismatchError


def _single_column(labels, side: str) -> np.ndarray:
    """Flatten an n x 1 table / array / sequence to 1-D ints."""
    arr = labels.to_numpy() if hasattr(labels, "to_numpy") else np.asarray(labels)
    if arr.ndim == 2:
        if arr.shape[1] != 1:
            raise MismatchError(
                side + " labels must be a single column; got " + str(arr.shape[1]) + " columns",
                field_name="column_count",
                value=int(arr.shape[1]),
            )
        arr = arr[:, 0]
    elif arr.ndim != 1:
        raise MismatchError(
            side + " labels must be one-dimensional; got ndim=" + str(arr.ndim),
            field_name="column_count",
            value=int(arr.ndim),
        )
    arr = np.asarray(arr)
    if arr.dtype.kind not in "iu":
        numeric = arr.astype(np.float64)
        off = np.flatnonzero(numeric != np.round(numeric))
        if off.size:
            raise MismatchError(
                side + " labels must be integer-valued; row " + str(int(off[0]))
                + " holds " + repr(float(numeric[off[0]])),
                field_name="labels",
                value=float(numeric[off[0]]),
            )
    return arr.astype(np.int64)


def _paired(computed, reference):
    comp = _single_column(computed, "computed")
    ref = _single_column(reference, "reference")
    if comp.shape[0] != ref.shape[0]:
        raise MismatchError(
            "row count differs: computed=" + str(comp.shape[0])
            + " reference=" + str(ref.shape[0]),
            field_name="row_count",
            value=(int(comp.shape[0]), int(ref.shape[0])),
        )
    return comp, ref


class ExactMatchValidator:
    """
    Compares two label sequences row by row with no relabelling tolerance.

    Method:
      validate(computed, reference, context=None) -> ValidationReport

    Raises MismatchError only for precondition failures (row count differs,
    more than one column). Row disagreements go into the report.
    """

    def validate(
        self,
        computed,
        reference,
        context: Optional[ScenarioContext] = None,
    ) -> ValidationReport:
        comp, ref = _paired(computed, reference)
        mismatches = tuple(
            RowMismatch(row_index=int(i), computed=int(comp[i]), reference=int(ref[i]))
            for i in np.flatnonzero(comp != ref)
        )
        return ValidationReport(
            passed=len(mismatches) == 0,
            mode="exact",
            row_count=int(comp.shape[0]),
            mismatches=mismatches,
            context=context,
        )


class StructuralMatchValidator:
    """
    Compares two partitions up to relabelling.

    Walks the rows in input order building a computed->reference label map
    and its inverse. A row is a mismatch when exactly one side is noise, or
    when its pair contradicts a mapping fixed by an earlier row (in either
    direction). The partitions are structurally equivalent iff no row
    mismatches.
    """

    def validate(
        self,
        computed,
        reference,
        context: Optional[ScenarioContext] = None,
    ) -> ValidationReport:
        comp, ref = _paired(computed, reference)
        forward: Dict[int, int] = {}
        backward: Dict[int, int] = {}
        mismatches: List[RowMismatch] = []

        for i in range(comp.shape[0]):
            c = int(comp[i])
            r = int(ref[i])
            c_noise = c == NOISE_LABEL
            r_noise = r == NOISE_LABEL
            if c_noise or r_noise:
                if c_noise != r_noise:
                    mismatches.append(RowMismatch(row_index=i, computed=c, reference=r))
                continue
            known_r = forward.get(c)
            known_c = backward.get(r)
            if known_r is None and known_c is None:
                forward[c] = r
                backward[r] = c
            elif known_r != r or known_c != c:
                # Conflicting rows never enter the maps.
                mismatches.append(RowMismatch(row_index=i, computed=c, reference=r))

        return ValidationReport(
            passed=not mismatches,
            mode="structural",
            row_count=int(comp.shape[0]),
            mismatches=tuple(mismatches),
            context=context,
        )


def structurally_equivalent(computed, reference) -> bool:
    """True iff the two partitions are equal up to relabelling."""
    return StructuralMatchValidator().validate(computed, reference).passed
