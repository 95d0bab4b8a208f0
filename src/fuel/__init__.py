"""
fuel — Exact fuel economy conversion on fixed-width decimal digit buffers

Converts miles per gallon to liters per 100 km (and back) without binary
floating point: numbers are buffers of decimal digits with a fixed
decimal point, and add, subtract, multiply and divide work digit by digit.

================================================================================
QUICK START
================================================================================

Conversion:

    from fuel import convert

    convert("123")          # "1.912"   (precision 3, truncated)
    convert("1", 3)         # "235.265"

Digit arithmetic:

    from fuel import BufferSize, FixedDecimal

    size = BufferSize(whole=4, fraction=4)
    a = FixedDecimal.of("378.54", size)
    b = FixedDecimal.of("1.6", size)
    str(a / b)              # "236.5875"

Raw primitives:

    from fuel import split_digits, required_buffer_size, encode, divide, format_buffer

    digits = split_digits("5")
    size = required_buffer_size(3, 4, [digits, split_digits("15")])
    quotient = divide(encode(digits, size), encode(split_digits("15"), size), size.fraction)
    format_buffer(quotient, size)   # "0.3333"

================================================================================
"""

# Digit engine
from .core import (
    BufferSize,
    DigitArithmeticError,
    DigitPair,
    DivisionByZeroError,
    FixedDecimal,
    InvalidInputError,
    NegativeResultError,
    PrecisionOverflowError,
    add,
    compare,
    divide,
    encode,
    format_buffer,
    multiply,
    required_buffer_size,
    split_digits,
    subtract,
)

# Conversion
from .convert import (
    DEFAULT_MARGIN,
    DEFAULT_PRECISION,
    DEFAULT_SETTINGS,
    KILOMETERS_PER_MILE,
    LITERS_PER_GALLON,
    MAX_PRECISION,
    ConversionSettings,
    approximate_convert,
    convert,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "BufferSize",
    "DigitPair",
    "FixedDecimal",
    "split_digits",
    "required_buffer_size",
    "encode",
    "format_buffer",
    "add",
    "subtract",
    "multiply",
    "divide",
    "compare",
    # Errors
    "DigitArithmeticError",
    "InvalidInputError",
    "PrecisionOverflowError",
    "NegativeResultError",
    "DivisionByZeroError",
    # Conversion
    "ConversionSettings",
    "DEFAULT_SETTINGS",
    "DEFAULT_PRECISION",
    "DEFAULT_MARGIN",
    "MAX_PRECISION",
    "LITERS_PER_GALLON",
    "KILOMETERS_PER_MILE",
    "convert",
    "approximate_convert",
]
