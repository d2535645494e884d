"""
Calculation Errors

Every calculator either returns a complete result or raises one of these.
Messages are human-readable and may be shown to the user as-is.
"""

import math
from typing import Iterable, List, Union

RESULT_TOO_LARGE = "Result is too large to represent"


class CalculationError(ValueError):
    """Base class for calculation failures."""

    kind = "calculation_error"

    def __init__(self, errors: Union[str, Iterable[str]]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class InvalidInputError(CalculationError):
    """One or more inputs violate a validation rule."""

    kind = "invalid_input"


class DomainError(CalculationError):
    """Inputs are individually valid but the formula has no finite answer."""

    kind = "domain_error"


class ConvergenceError(CalculationError):
    """An iterative solver could not reach tolerance within its iteration cap."""

    kind = "no_convergence"


def raise_if_errors(errors: List[str]) -> None:
    """Raise InvalidInputError carrying every collected message, if any."""
    if errors:
        raise InvalidInputError(errors)


def check_finite(*values: float) -> None:
    """Raise DomainError if any value overflowed to infinity or NaN."""
    if not all(math.isfinite(value) for value in values):
        raise DomainError(RESULT_TOO_LARGE)
