import logging
import math
import sys
from fractions import Fraction

import numpy as np

logger = logging.getLogger(__name__)


def round_half_up(value) -> int:
    """Round to the nearest whole unit, halves away from zero for non-negative values."""
    if isinstance(value, int):
        return value
    return int(np.floor(value + 0.5))


def scale_half_up(amount, rate, divisor=1) -> int:
    """
    round_half_up(amount * rate / divisor), computed on exact fractions.
    Rates are taken at their decimal value (0.15 is 3/20), so integer amounts of any size
    neither lose precision nor overflow.
    """
    return math.floor(Fraction(amount) * Fraction(str(rate)) / Fraction(str(divisor)) + Fraction(1, 2))


def scaled(value, factor=1, divisor=1, field: str = 'value') -> float:
    """value * factor / divisor as a float; results beyond the float range saturate at the largest float."""
    try:
        result = value * factor / divisor
    except OverflowError:
        result = math.inf
    if math.isinf(result):
        logger.debug("Saturating %s %r x %r / %r at the largest float", field, value, factor, divisor)
        return sys.float_info.max
    return result


def coerce_number(value, field: str = 'value'):
    """
    Convert user-supplied input to a non-negative number.

    Non-negative integers are returned as they are, so counts and their sums stay exact.
    Anything else is converted to a finite float. Missing, non-numeric (booleans included),
    non-finite and negative values all become 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        logger.debug("Ignoring boolean %s %r", field, value)
        return 0.0
    if isinstance(value, int):
        if value < 0:
            logger.debug("Clamping %s %r to 0", field, value)
            return 0.0
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring non-numeric %s %r", field, value)
        return 0.0
    if not math.isfinite(number) or number < 0:
        logger.debug("Clamping %s %r to 0", field, value)
        return 0.0
    return number


def coerce_signed(value, field: str = 'value'):
    """Like coerce_number, but negative amounts keep their sign."""
    if value is None or isinstance(value, bool):
        return coerce_number(value, field=field)
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring non-numeric %s %r", field, value)
        return 0.0
    if not math.isfinite(number):
        logger.debug("Ignoring non-finite %s %r", field, value)
        return 0.0
    return number


def coerce_quantity(value, field: str = 'quantity') -> int:
    """Convert user-supplied input to a non-negative integer count; fractional counts are truncated."""
    if isinstance(value, str):
        # parseInt-style: "3" and "3.7" are both 3
        value = value.strip()
        try:
            value = int(value)
        except ValueError:
            pass
    return int(coerce_number(value, field=field))


def first_present(*values):
    """Return the first value which is neither None nor empty, else None."""
    for v in values:
        if v is None or v == '':
            continue
        return v
    return None


def first_positive(*values):
    """Return the first value which coerces to a positive number, else 0.0."""
    for v in values:
        number = coerce_number(v)
        if number > 0:
            return number
    return 0.0
