"""
core.py — Fixed-width decimal digit arithmetic

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   A number is a flat buffer of decimal digits (0-9), most significant first.
   The first W positions hold the whole part, the last F the fraction part:
   the decimal point is implicit and fixed. Never floating point.

2. FIXED WIDTH
   Every operand of an operation shares the same (W, F). The width is chosen
   once, before any arithmetic, by required_buffer_size(); there is no
   dynamic resizing. Buffers of different width raise TypeError.

3. NO ALIASING
   Every primitive allocates a fresh result buffer. Operands are never
   mutated, so a buffer has exactly one owner.

4. TRUNCATION, NOT ROUNDING
   Fraction digits that do not fit in F are dropped: when encoding, when a
   partial product is shifted right, when a quotient stops at F digits.

5. FAIL FAST
   Malformed literals, lost carries, negative differences and division by
   zero raise immediately. No partial result is meaningful after that.

================================================================================
BUFFER LAYOUT
================================================================================

    digits = DigitPair(whole=(1, 2, 3), fraction=(4, 5, 6))
    size = BufferSize(whole=5, fraction=7)

    encode(digits, size)
    # bytearray([0, 0, 1, 2, 3, 4, 5, 6, 0, 0, 0, 0])
    #           |     whole    |      fraction       |

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence
import math
import re


# ==============================================================================
# ERRORS
# ==============================================================================

class DigitArithmeticError(ValueError):
    """Base class for every failure of the digit engine."""


class InvalidInputError(DigitArithmeticError):
    """The literal is not a non-negative decimal number."""


class PrecisionOverflowError(DigitArithmeticError):
    """A significant digit does not fit in the whole part of the buffer."""


class NegativeResultError(DigitArithmeticError):
    """Subtraction with minuend < subtrahend; buffers have no sign digit."""


class DivisionByZeroError(DigitArithmeticError, ZeroDivisionError):
    """The divisor buffer holds the value zero."""


# ==============================================================================
# DIGIT SPLITTER
# ==============================================================================

_LITERAL_PATTERN = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?")
_DIGITS_PATTERN = re.compile(r"[0-9]*")


@dataclass(frozen=True, slots=True)
class DigitPair:
    """
    Whole and fraction digits of a decimal literal, most significant first.

    Either tuple may be empty: "5" -> ((5,), ()), ".25" -> ((), (2, 5)).
    """
    whole: tuple[int, ...]
    fraction: tuple[int, ...]

    def scaled(self, power: int) -> DigitPair:
        """
        Moves the decimal point `power` places to the right (exact x 10**power).

        Negative powers move it to the left.
        """
        digits = self.whole + self.fraction
        point = len(self.whole) + power
        if point < 0:
            digits = (0,) * -point + digits
            point = 0
        if point > len(digits):
            digits = digits + (0,) * (point - len(digits))
        return DigitPair(whole=digits[:point], fraction=digits[point:])


def _literal_text(value: str | int | float | Decimal) -> str:
    # bool is an int subclass, never a fuel figure
    if isinstance(value, bool):
        raise InvalidInputError(f"Not a decimal literal: {value!r}")
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidInputError(f"Not a finite number: {value!r}")
        return format(value, "f")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInputError(f"Not a finite number: {value!r}")
        # repr is the shortest round-tripping form, "f" drops the exponent
        return format(Decimal(repr(value)), "f")
    if isinstance(value, int):
        return str(value)
    raise InvalidInputError(
        f"Unsupported literal type: {type(value).__name__}. "
        f"Use str, int, float or Decimal."
    )


def split_digits(value: str | int | float | Decimal) -> DigitPair:
    """
    Splits a decimal literal into whole and fraction digits.

    Args:
        value: "123.456", 123.456, 42 or Decimal("0.5")

    Returns:
        DigitPair, e.g. ((1, 2, 3), (4, 5, 6))

    Raises:
        InvalidInputError: signs, exponents in text, letters, several points,
            empty text, NaN/infinity
    """
    text = _literal_text(value)
    match = _LITERAL_PATTERN.fullmatch(text)
    if match is None or not (match["whole"] or match["fraction"]):
        raise InvalidInputError(f"Not a non-negative decimal literal: {text!r}")

    return DigitPair(
        whole=tuple(int(c) for c in match["whole"]),
        fraction=tuple(int(c) for c in match["fraction"] or ""),
    )


# ==============================================================================
# BUFFER SIZER
# ==============================================================================

@dataclass(frozen=True, slots=True)
class BufferSize:
    """Dimensions (W, F) shared by every buffer of one computation."""
    whole: int
    fraction: int

    def __post_init__(self):
        for name in ("whole", "fraction"):
            count = getattr(self, name)
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValueError(f"{name} must be a non-negative int, got {count!r}")

    @property
    def width(self) -> int:
        return self.whole + self.fraction


def required_buffer_size(
    margin: int,
    precision: int,
    operands: Iterable[DigitPair],
) -> BufferSize:
    """
    Smallest common size able to hold every operand and the results.

    W = margin + max(precision, longest whole part), F = precision.
    The margin absorbs the carry growth of intermediate products and
    quotients; the caller recomputes the size for every new set of operands.
    """
    if isinstance(margin, bool) or not isinstance(margin, int) or margin < 0:
        raise ValueError(f"margin must be a non-negative int, got {margin!r}")
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision must be a non-negative int, got {precision!r}")

    lengths = [precision, *(len(op.whole) for op in operands)]
    return BufferSize(whole=max(lengths) + margin, fraction=precision)


# ==============================================================================
# ENCODER / FORMATTER
# ==============================================================================

def encode(digits: DigitPair, size: BufferSize) -> bytearray:
    """
    Places a digit pair into a fresh buffer of `size.width` digits.

    Whole digits are right-aligned in the first W slots, fraction digits
    left-aligned in the last F slots. Fraction digits beyond F are dropped.

    Raises:
        PrecisionOverflowError: if the significant whole digits exceed W
    """
    whole = digits.whole
    while whole and whole[0] == 0:
        whole = whole[1:]
    if len(whole) > size.whole:
        raise PrecisionOverflowError(
            f"{len(whole)} whole digits do not fit in a buffer with "
            f"{size.whole} whole positions"
        )

    buffer = bytearray(size.width)
    buffer[size.whole - len(whole):size.whole] = bytes(whole)
    fraction = digits.fraction[:size.fraction]
    buffer[size.whole:size.whole + len(fraction)] = bytes(fraction)
    return buffer


def format_buffer(buffer: Sequence[int], size: BufferSize) -> str:
    """
    Canonical decimal string: no leading zeros in the whole part ("0" if
    nothing is left), no trailing zeros in the fraction, no point if the
    fraction is empty.
    """
    text = "".join(str(d) for d in buffer)
    whole = text[:size.whole].lstrip("0") or "0"
    fraction = text[size.whole:size.width].rstrip("0")
    return f"{whole}.{fraction}" if fraction else whole


# ==============================================================================
# ARITHMETIC PRIMITIVES
# ==============================================================================

def _check_same_width(a: Sequence[int], b: Sequence[int]) -> None:
    if len(a) != len(b):
        raise TypeError(
            f"Buffers of different width: {len(a)} vs {len(b)}. "
            f"Encode both operands with the same BufferSize."
        )


def compare(a: Sequence[int], b: Sequence[int]) -> int:
    """Returns -1, 0 or 1 as value(a) is less than, equal to or greater than value(b)."""
    _check_same_width(a, b)
    for x, y in zip(a, b):
        if x != y:
            return 1 if x > y else -1
    return 0


def _add(a: Sequence[int], b: Sequence[int]) -> tuple[bytearray, int]:
    total = bytearray(len(a))
    carry = 0
    for i in range(len(a) - 1, -1, -1):
        carry, total[i] = divmod(a[i] + b[i] + carry, 10)
    return total, carry


def add(a: Sequence[int], b: Sequence[int]) -> bytearray:
    """
    Digit-by-digit sum with carry, least significant position first.

    Raises:
        PrecisionOverflowError: carry out of the most significant position
    """
    _check_same_width(a, b)
    total, carry = _add(a, b)
    if carry:
        raise PrecisionOverflowError("Carry out of the most significant digit")
    return total


def subtract(a: Sequence[int], b: Sequence[int]) -> bytearray:
    """
    Digit-by-digit difference with borrow. Requires value(a) >= value(b).

    Raises:
        NegativeResultError: if value(a) < value(b)
    """
    _check_same_width(a, b)
    difference = bytearray(len(a))
    borrow = 0
    for i in range(len(a) - 1, -1, -1):
        x = a[i] + borrow
        if x >= b[i]:
            difference[i] = x - b[i]
            borrow = 0
        else:
            difference[i] = x + 10 - b[i]
            borrow = -1
    if borrow:
        raise NegativeResultError("Subtrahend greater than minuend")
    return difference


def _place(buffer: bytearray, index: int, digit: int) -> bool:
    """Writes a shifted digit. True when a non-zero digit falls off the left end."""
    if index < 0:
        return digit != 0
    if index < len(buffer):
        buffer[index] = digit
    return False


def _multiply(
    a: Sequence[int],
    b: Sequence[int],
    fraction_size: int,
) -> tuple[bytearray, bool]:
    width = len(a)
    product = bytearray(width)
    overflow = False

    # shift > 0 moves the partial towards the least significant end
    shift = fraction_size
    for i in range(width - 1, -1, -1):
        multiplier = b[i]
        if multiplier:
            partial = bytearray(width)
            carry = 0
            for j in range(width - 1, -1, -1):
                carry, digit = divmod(a[j] * multiplier + carry, 10)
                overflow |= _place(partial, j + shift, digit)
            overflow |= _place(partial, shift - 1, carry)

            product, carry = _add(product, partial)
            overflow |= carry != 0
        shift -= 1

    return product, overflow


def multiply(a: Sequence[int], b: Sequence[int], fraction_size: int) -> bytearray:
    """
    Schoolbook long multiplication.

    ALGORITHM:
    1. For every digit of b, least significant first, multiply all digits
       of a by it, propagating the carry.
    2. Shift the partial product by a counter that starts at fraction_size
       and decreases by one per digit of b: this lines its decimal point up
       with the buffer's.
    3. Sum the partial products with add().

    Digits shifted past the least significant end are dropped, so every
    partial product is truncated to the buffer's fraction width.

    Raises:
        PrecisionOverflowError: if a significant digit is shifted past the
            most significant end or the sum carries out of it
    """
    _check_same_width(a, b)
    product, overflow = _multiply(a, b, fraction_size)
    if overflow:
        raise PrecisionOverflowError("Product does not fit in the buffer")
    return product


def _exceeds(
    candidate: Sequence[int],
    divisor: Sequence[int],
    dividend: Sequence[int],
    fraction_size: int,
) -> bool:
    product, overflow = _multiply(candidate, divisor, fraction_size)
    return overflow or compare(product, dividend) > 0


def divide(a: Sequence[int], b: Sequence[int], fraction_size: int) -> bytearray:
    """
    Floor quotient of a / b, truncated to fraction_size fraction digits.

    CONTRACT:
    - a == b: the digit 1 at index len - fraction_size - 1
    - otherwise: the largest q representable in the buffer such that
      multiply(q, b, fraction_size) <= a

    ALGORITHM:
    Built only from multiply() and compare(). multiply() is monotone in q,
    so q is found digit by digit from the most significant position: each
    position scans the candidate digits upward from 0 and keeps the last one
    whose product does not exceed a. A product that overflows the buffer
    exceeds a by definition. The all-9s buffer is the upper bound.

    PERFORMANCE:
    Up to 9 trial multiplications per digit position, each quadratic in the
    buffer width. Simple, not asymptotically optimal.

    Raises:
        DivisionByZeroError: if value(b) == 0
        ValueError: if fraction_size is not a valid index offset
    """
    _check_same_width(a, b)
    width = len(a)
    if not 0 <= fraction_size < width:
        raise ValueError(
            f"fraction_size must be in [0, {width - 1}], got {fraction_size}"
        )
    if not any(b):
        raise DivisionByZeroError("Division by a zero buffer")

    quotient = bytearray(width)
    if compare(a, b) == 0:
        quotient[width - fraction_size - 1] = 1
        return quotient
    if not any(a):
        return quotient

    for position in range(width):
        for digit in range(1, 10):
            quotient[position] = digit
            if _exceeds(quotient, b, a, fraction_size):
                quotient[position] = digit - 1
                break

    return quotient


# ==============================================================================
# FIXED DECIMAL (value object)
# ==============================================================================

@dataclass(frozen=True, slots=True)
class FixedDecimal:
    """
    Domain Primitive over a digit buffer.

    INVARIANTS:
    1. len(_digits) == _size.width, every digit in 0-9
    2. Immutable: every operation returns a new instance
    3. Operations between different sizes raise TypeError
    4. Never converted to or from float internally

    USAGE:
        size = BufferSize(whole=6, fraction=3)
        factor = FixedDecimal.of("378.5411784", size) / FixedDecimal.of("1.609344", size)
        str(factor)  # "235.265"

    SERIALIZATION:
        {"digits": "000378541", "whole": 6, "fraction": 3}
    """
    _digits: bytes
    _size: BufferSize

    def __post_init__(self):
        if len(self._digits) != self._size.width:
            raise ValueError(
                f"{len(self._digits)} digits for a buffer of width {self._size.width}"
            )
        if any(d > 9 for d in self._digits):
            raise ValueError(f"Not a digit buffer: {list(self._digits)}")

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: str | int | float | Decimal, size: BufferSize) -> FixedDecimal:
        """Parses and encodes a literal. Extra fraction digits are truncated."""
        return cls.from_pair(split_digits(value), size)

    @classmethod
    def from_pair(cls, digits: DigitPair, size: BufferSize) -> FixedDecimal:
        return cls(_digits=bytes(encode(digits, size)), _size=size)

    @classmethod
    def zero(cls, size: BufferSize) -> FixedDecimal:
        return cls(_digits=bytes(size.width), _size=size)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: object, op: str) -> FixedDecimal:
        if not isinstance(other, FixedDecimal):
            raise TypeError(
                f"Operation not allowed: FixedDecimal {op} {type(other).__name__}. "
                f"Use FixedDecimal.of() to convert."
            )
        if self._size != other._size:
            raise TypeError(
                f"Different buffer sizes: {self._size} {op} {other._size}."
            )
        return other

    def _derive(self, digits: bytearray) -> FixedDecimal:
        return FixedDecimal(_digits=bytes(digits), _size=self._size)

    def __add__(self, other: FixedDecimal) -> FixedDecimal:
        other = self._check_compatible(other, "+")
        return self._derive(add(self._digits, other._digits))

    def __sub__(self, other: FixedDecimal) -> FixedDecimal:
        other = self._check_compatible(other, "-")
        return self._derive(subtract(self._digits, other._digits))

    def __mul__(self, other: FixedDecimal) -> FixedDecimal:
        other = self._check_compatible(other, "*")
        return self._derive(multiply(self._digits, other._digits, self._size.fraction))

    def __truediv__(self, other: FixedDecimal) -> FixedDecimal:
        other = self._check_compatible(other, "/")
        return self._derive(divide(self._digits, other._digits, self._size.fraction))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __lt__(self, other: FixedDecimal) -> bool:
        other = self._check_compatible(other, "<")
        return compare(self._digits, other._digits) < 0

    def __le__(self, other: FixedDecimal) -> bool:
        other = self._check_compatible(other, "<=")
        return compare(self._digits, other._digits) <= 0

    def __gt__(self, other: FixedDecimal) -> bool:
        other = self._check_compatible(other, ">")
        return compare(self._digits, other._digits) > 0

    def __ge__(self, other: FixedDecimal) -> bool:
        other = self._check_compatible(other, ">=")
        return compare(self._digits, other._digits) >= 0

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    @property
    def digits(self) -> bytes:
        return self._digits

    @property
    def size(self) -> BufferSize:
        return self._size

    def is_zero(self) -> bool:
        return not any(self._digits)

    def __str__(self) -> str:
        return format_buffer(self._digits, self._size)

    def __repr__(self) -> str:
        return (
            f"FixedDecimal('{self}', whole={self._size.whole}, "
            f"fraction={self._size.fraction})"
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """
        Format: {"digits": str, "whole": int, "fraction": int}

        The digits are kept as a string of the full buffer, never as float.
        """
        return {
            "digits": "".join(str(d) for d in self._digits),
            "whole": self._size.whole,
            "fraction": self._size.fraction,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FixedDecimal:
        text = data["digits"]
        if not isinstance(text, str) or _DIGITS_PATTERN.fullmatch(text) is None:
            raise InvalidInputError(f"Not a digit string: {text!r}")
        size = BufferSize(whole=data["whole"], fraction=data["fraction"])
        return cls(_digits=bytes(int(c) for c in text), _size=size)
