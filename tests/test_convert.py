"""
test_convert.py — Tests for the conversion layer

Tests cover:
- Physical constants and their digit form
- convert(): end-to-end scenarios, precision, settings, errors, logging
- approximate_convert(): Decimal cross-check values and errors
"""

import pytest
from decimal import Decimal, getcontext
import logging

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fuel import (
    DEFAULT_SETTINGS,
    MAX_PRECISION,
    ConversionSettings,
    DigitPair,
    DivisionByZeroError,
    InvalidInputError,
    approximate_convert,
    convert,
)
from fuel.convert import (
    KILOMETERS_PER_MILE_DIGITS,
    LITERS_PER_HUNDRED_GALLONS_DIGITS,
)


# ==============================================================================
# Constants
# ==============================================================================

class TestConstants:

    def test_liters_per_hundred_gallons(self):
        assert LITERS_PER_HUNDRED_GALLONS_DIGITS == DigitPair((3, 7, 8), (5, 4, 1, 1, 7, 8, 4))

    def test_kilometers_per_mile(self):
        assert KILOMETERS_PER_MILE_DIGITS == DigitPair((1,), (6, 0, 9, 3, 4, 4))


# ==============================================================================
# convert()
# ==============================================================================

class TestConvert:
    """End-to-end conversions on digit buffers."""

    def test_default_precision(self):
        assert convert("123") == "1.912"

    def test_one_mpg(self):
        # The constants are truncated to 3 fraction digits before dividing:
        # 378.541 / 1.609 under the truncating multiply gives 235.265
        assert convert("1", 3) == "235.265"

    def test_precision_zero(self):
        assert convert("235.2145833", 0) == "1"

    def test_precision_zero_factor(self):
        assert convert("1", 0) == "378"

    @pytest.mark.parametrize("value, precision, expected", [
        ("10", 2, "23.65"),
        ("2.5", 4, "94.0884"),
        ("30", 3, "7.842"),
        ("7.84", 2, "30.17"),
        ("0.5", 3, "470.531"),
        ("1000", 3, "0.235"),
        ("100", 5, "2.35215"),
    ])
    def test_scenarios(self, value, precision, expected):
        assert convert(value, precision) == expected

    def test_number_inputs(self):
        assert convert(123) == "1.912"
        assert convert(2.5, 4) == "94.0884"
        assert convert(Decimal("7.84"), 2) == "30.17"

    def test_settings(self):
        settings = ConversionSettings(margin=4, precision=2)
        assert convert("10", settings=settings) == "23.65"

    def test_precision_overrides_settings(self):
        settings = ConversionSettings(precision=0)
        assert convert("123", 3, settings=settings) == "1.912"

    def test_malformed_input_raises(self):
        with pytest.raises(InvalidInputError):
            convert("abc")

        with pytest.raises(InvalidInputError):
            convert("-5")

    def test_zero_raises(self):
        with pytest.raises(DivisionByZeroError):
            convert("0")

    def test_zero_at_precision_raises(self):
        # 0.0001 truncates to 0.000 in a 3-digit fraction
        with pytest.raises(DivisionByZeroError):
            convert("0.0001", 3)

    def test_invalid_precision_raises(self):
        with pytest.raises(ValueError):
            convert("1", -1)

        with pytest.raises(ValueError):
            convert("1", MAX_PRECISION + 1)

    def test_precision_at_limit(self):
        # constants are exact at this precision, only the last digits drift
        assert convert("100", MAX_PRECISION).startswith("2.35214583333333")

    def test_logs_buffer_size_and_factor(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="fuel.convert"):
            convert("123")

        messages = [r.getMessage() for r in caplog.records]
        assert "Buffer size for '123': whole=6 fraction=3" in messages
        assert "Conversion factor: 235.265" in messages


class TestConversionSettings:

    def test_defaults(self):
        assert DEFAULT_SETTINGS == ConversionSettings(margin=3, precision=3)

    def test_with_precision(self):
        settings = ConversionSettings(margin=5).with_precision(1)
        assert settings == ConversionSettings(margin=5, precision=1)

    def test_precision_limit_accepted(self):
        assert ConversionSettings(precision=MAX_PRECISION).precision == 20

    @pytest.mark.parametrize("kwargs", [
        {"margin": -1},
        {"precision": -1},
        {"precision": MAX_PRECISION + 1},
        {"precision": 2.5},
        {"margin": True},
    ])
    def test_invalid_settings_raise(self, kwargs):
        with pytest.raises(ValueError):
            ConversionSettings(**kwargs)


# ==============================================================================
# approximate_convert()
# ==============================================================================

class TestApproximateConvert:
    """Decimal cross-check: 20 fraction digits, half-up."""

    def test_one(self):
        assert approximate_convert("1") == "235.21458333333333333333"

    def test_123(self):
        assert approximate_convert("123") == "1.91231368563685636856"

    def test_fraction_input(self):
        assert approximate_convert("7.84") == "30.00186011904761904762"

    def test_number_inputs(self):
        assert approximate_convert(123) == approximate_convert("123")
        assert approximate_convert(Decimal("7.84")) == approximate_convert("7.84")

    def test_agrees_with_exact_conversion_prefix(self):
        assert approximate_convert("123").startswith(convert("123"))

    def test_zero_raises(self):
        with pytest.raises(DivisionByZeroError):
            approximate_convert("0")

    @pytest.mark.parametrize("value", ["abc", "inf", "NaN", True])
    def test_invalid_input_raises(self, value):
        with pytest.raises(InvalidInputError):
            approximate_convert(value)

    def test_does_not_leak_context(self):
        prec = getcontext().prec
        approximate_convert("0.000001")
        assert getcontext().prec == prec


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
