# dbscan_oracle/verification/tolerance.py
# Relative-tolerance scalar comparison.


def relative_difference(value: float, reference: float) -> float:
    """
    |value - reference| / max(|value|, |reference|).

    Returns 0.0 when both sides are zero.
    """
    max_abs = max(abs(value), abs(reference))
    if max_abs == 0.0:
        return 0.0
    return abs(value - reference) / max_abs


def within_tolerance(value: float, reference: float, relative_tolerance: float) -> bool:
    """
    True iff `value` agrees with `reference` to within `relative_tolerance`.

    Both zero is always a match. Otherwise the relative difference must be
    strictly below the tolerance. Symmetric in value and reference.
    NaN on either side never matches.
    """
    if value == 0.0 and reference == 0.0:
        return True
    return relative_difference(value, reference) < relative_tolerance
