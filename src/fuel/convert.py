"""
convert.py — Fuel economy conversion: miles per gallon ⇄ liters per 100 km

================================================================================
THE FORMULA
================================================================================

    l/100km = (liters per gallon × 100 / kilometers per mile) / mpg
    mpg     = (liters per gallon × 100 / kilometers per mile) / (l/100km)

The relation is a reciprocal, so one function converts in both directions.
The constant is ≈ 235.2145833, a non-terminating decimal: computed with
float it carries IEEE 754 artifacts. Here it is computed with the digit
buffers of core.py, truncated to the requested precision.

================================================================================
USAGE
================================================================================

    from fuel import convert

    convert("123")      # "1.912"
    convert("30", 1)    # "7.8"

    # Cross-check with decimal.Decimal (20 fraction digits, half-up)
    from fuel import approximate_convert
    approximate_convert("123")

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Final
import logging

from .core import (
    DigitPair,
    DivisionByZeroError,
    FixedDecimal,
    InvalidInputError,
    required_buffer_size,
    split_digits,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# PHYSICAL CONSTANTS
# ==============================================================================

# Exact by definition (US liquid gallon, international mile). Never floats.
LITERS_PER_GALLON: Final[str] = "3.785411784"
KILOMETERS_PER_MILE: Final[str] = "1.609344"

# Split once at import, read-only afterwards
LITERS_PER_HUNDRED_GALLONS_DIGITS: Final[DigitPair] = split_digits(LITERS_PER_GALLON).scaled(2)
KILOMETERS_PER_MILE_DIGITS: Final[DigitPair] = split_digits(KILOMETERS_PER_MILE)


# ==============================================================================
# SETTINGS
# ==============================================================================

DEFAULT_PRECISION: Final[int] = 3

# Extra whole digits for the carries of intermediate products and quotients
DEFAULT_MARGIN: Final[int] = 3

# Division runs up to 9 x width trial multiplications of width^2 digit steps,
# so the cost grows with the cube of the precision
MAX_PRECISION: Final[int] = 20

# Decimal places of the approximate converter
APPROXIMATE_DECIMAL_PLACES: Final[int] = 20


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative int, got {value!r}")


@dataclass(frozen=True, slots=True)
class ConversionSettings:
    """
    Buffer sizing parameters of a conversion.

    margin: extra whole digits reserved for carry growth
    precision: fraction digits kept in the result (truncated, not rounded)
    """
    margin: int = DEFAULT_MARGIN
    precision: int = DEFAULT_PRECISION

    def __post_init__(self):
        _check_count("margin", self.margin)
        _check_count("precision", self.precision)
        if self.precision > MAX_PRECISION:
            raise ValueError(f"precision exceeds the limit of {MAX_PRECISION}")

    def with_precision(self, precision: int) -> ConversionSettings:
        return replace(self, precision=precision)


DEFAULT_SETTINGS: Final[ConversionSettings] = ConversionSettings()


# ==============================================================================
# EXACT CONVERSION
# ==============================================================================

def convert(
    value: str | int | float | Decimal,
    precision: int | None = None,
    settings: ConversionSettings | None = None,
) -> str:
    """
    Converts mpg to l/100km and vice versa with digit-buffer arithmetic.

    STEPS:
    1. Split the input (the constants are split at import)
    2. Size a common buffer from margin, precision and the three operands
    3. Encode the constants and divide them: the conversion factor
    4. Encode the input and divide the factor by it
    5. Format

    Every operand is encoded at the requested precision, so the constants
    themselves are truncated to `precision` fraction digits before dividing.
    Precision is capped at MAX_PRECISION: the digit search of the division
    makes a call at that cap take a fraction of a second in CPython.

    Args:
        value: non-negative decimal literal, e.g. "123" or "7.84"
        precision: fraction digits of the result, overrides settings.precision
        settings: margin and default precision (DEFAULT_SETTINGS if omitted)

    Returns:
        Canonical decimal string, e.g. "1.912"

    Raises:
        InvalidInputError: malformed literal
        DivisionByZeroError: value is zero (at the given precision)
        ValueError: invalid precision or margin
    """
    settings = settings or DEFAULT_SETTINGS
    if precision is not None:
        settings = settings.with_precision(precision)

    input_digits = split_digits(value)
    size = required_buffer_size(
        settings.margin,
        settings.precision,
        [LITERS_PER_HUNDRED_GALLONS_DIGITS, KILOMETERS_PER_MILE_DIGITS, input_digits],
    )
    logger.debug("Buffer size for %r: whole=%d fraction=%d", value, size.whole, size.fraction)

    factor = (
        FixedDecimal.from_pair(LITERS_PER_HUNDRED_GALLONS_DIGITS, size)
        / FixedDecimal.from_pair(KILOMETERS_PER_MILE_DIGITS, size)
    )
    logger.debug("Conversion factor: %s", factor)

    divisor = FixedDecimal.from_pair(input_digits, size)
    if divisor.is_zero():
        raise DivisionByZeroError(
            f"{value!r} is zero at precision {settings.precision}"
        )

    return str(factor / divisor)


# ==============================================================================
# APPROXIMATE CONVERSION (cross-check)
# ==============================================================================

def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"Not a number: {value!r}")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        raise InvalidInputError(f"Not a number: {value!r}") from e
    if not number.is_finite():
        raise InvalidInputError(f"Not a finite number: {value!r}")
    return number


def _plain(number: Decimal) -> str:
    """Fixed-point notation, no trailing zeros."""
    return format(number.normalize(), "f")


def approximate_convert(value: str | int | float | Decimal) -> str:
    """
    Same ratio with decimal.Decimal, for comparison and testing only.

    Factor and result are each rounded half-up to
    APPROXIMATE_DECIMAL_PLACES fraction digits. Unlike convert() the
    constants are never truncated, so the two results differ in the last
    digits.

    Raises:
        InvalidInputError: not a finite number
        DivisionByZeroError: value is zero
    """
    divisor = _to_decimal(value)
    if divisor.is_zero():
        raise DivisionByZeroError(f"{value!r} is zero")

    quantum = Decimal(1).scaleb(-APPROXIMATE_DECIMAL_PLACES)
    with localcontext() as ctx:
        # Enough significant digits to hold every quotient before quantizing
        ctx.prec = APPROXIMATE_DECIMAL_PLACES + 10 + max(0, -divisor.adjusted())
        factor = (
            Decimal(100) * Decimal(LITERS_PER_GALLON) / Decimal(KILOMETERS_PER_MILE)
        ).quantize(quantum, rounding=ROUND_HALF_UP)
        result = (factor / divisor).quantize(quantum, rounding=ROUND_HALF_UP)
        return _plain(result)
