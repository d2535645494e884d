"""
Variant selection for "any two of N" calculators.

Margin, discount and ROI accept any two of a handful of related
quantities. Each valid pair is its own input type; this module maps a
loose set of optional values onto the first matching type.
"""

import dataclasses
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from fincalc.calculations.errors import InvalidInputError

T = TypeVar("T")

INSUFFICIENT_VALUES = "Please provide at least 2 values"

# Supplied values within a cent (or a hundredth of a percent) of the
# solved value are treated as agreeing
MATCH_TOLERANCE = 0.01


def select_variant(
    values: Dict[str, Optional[float]],
    variants: Sequence[Tuple[Tuple[str, str], Type[T]]],
) -> T:
    """
    Build the first variant whose two fields are both present.

    Args:
        values: Field name to value, None meaning unknown
        variants: (field pair, variant class) in priority order

    Raises:
        InvalidInputError: If fewer than two values are present or every
            present value is zero
    """
    present = {name: value for name, value in values.items() if value is not None}
    if len(present) < 2 or all(value == 0 for value in present.values()):
        raise InvalidInputError(INSUFFICIENT_VALUES)

    for fields, variant in variants:
        if all(name in present for name in fields):
            return variant(*(present[name] for name in fields))

    raise InvalidInputError(INSUFFICIENT_VALUES)


def mismatched_values(
    values: Dict[str, Optional[float]],
    variant: Any,
    solved: Any,
    labels: Optional[Dict[str, str]] = None,
) -> List[str]:
    """
    List the supplied values beyond the chosen pair that disagree with the solution.

    Args:
        values: Every value the caller supplied, None meaning unknown
        variant: The variant built by select_variant
        solved: Result record solved from that variant
        labels: Display names for the error messages
    """
    labels = labels or {}
    used = {f.name for f in dataclasses.fields(variant)}
    errors = []
    for name, value in values.items():
        if value is None or name in used:
            continue
        if not math.isclose(value, getattr(solved, name), rel_tol=0, abs_tol=MATCH_TOLERANCE):
            label = labels.get(name, name.replace("_", " ").capitalize())
            errors.append(f"{label} does not match the other values")
    return errors
