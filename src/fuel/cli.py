"""fuel-convert: command line front end of the converter."""

from __future__ import annotations
import argparse
import logging
import sys

from .convert import DEFAULT_PRECISION, approximate_convert, convert

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuel-convert",
        description="Convert miles per gallon to liters per 100 km and vice versa "
        "with exact decimal arithmetic",
    )
    parser.add_argument("value", help="Value to convert, e.g. 123 or 7.84")
    parser.add_argument(
        "precision",
        nargs="?",
        type=int,
        default=DEFAULT_PRECISION,
        help=f"Fraction digits of the result, truncated (default: {DEFAULT_PRECISION})",
    )
    parser.add_argument(
        "--approximate",
        action="store_true",
        help="Print the decimal.Decimal cross-check value instead",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.approximate:
            result = approximate_convert(args.value)
        else:
            result = convert(args.value, args.precision)
    except ValueError as e:
        # DigitArithmeticError and invalid settings
        logger.debug("Conversion of %r failed", args.value, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
