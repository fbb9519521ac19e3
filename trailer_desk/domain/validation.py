"""Input guards shared by the calculators"""

import logging
import math
from typing import Optional

from trailer_desk.domain.exceptions import InvalidInputError


def require_finite(name: str, value: float) -> float:
    """Reject NaN and infinities, return the value as float"""
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e

    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


def non_negative_amount(name: str, value: float) -> float:
    """
    Validate a monetary input and clamp negatives to zero.

    Negative amounts are logged as warnings rather than rejected so that a
    single bad field does not break a whole quote screen.
    """
    number = require_finite(name, value)
    if number < 0:
        logging.warning(
            f"Negative {name} clamped to zero",
            extra={"field": name, "value": number},
        )
        return 0.0
    return number


def require_term(name: str, value: int, maximum: Optional[int] = None) -> int:
    """Terms are whole months, never negative and at most `maximum` when given"""
    number = require_finite(name, value)
    if number < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {value!r}")
    if maximum is not None and number > maximum:
        raise InvalidInputError(f"{name} must be <= {maximum}, got {value!r}")
    if number != int(number):
        raise InvalidInputError(f"{name} must be a whole number of months, got {value!r}")
    return int(number)
