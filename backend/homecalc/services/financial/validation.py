"""
Input validation for the calculation engine.

Every public engine function checks its numeric inputs here before doing any
arithmetic, so a NaN or infinity never leaks into a result.
"""

import math
from typing import Iterable, Optional


class ValidationError(ValueError):
    """Raised when an engine input is not usable. ``field`` names the input."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def require_finite(field: str, value: float) -> float:
    """Return ``value`` as a float, raising if it is NaN, infinite or not a number."""
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number, not a boolean")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValidationError(field, f"must be finite, got {value!r}")
    return number


def require_positive(field: str, value: float) -> float:
    number = require_finite(field, value)
    if number <= 0:
        raise ValidationError(field, f"must be greater than zero, got {value!r}")
    return number


def require_all_finite(field: str, values: Iterable[float]) -> list:
    return [require_finite(f"{field}[{i}]", v) for i, v in enumerate(values)]


def require_choice(field: str, value: Optional[str], choices: Iterable[str]) -> str:
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(field, f"must be one of {', '.join(choices)}, got {value!r}")
    return value
