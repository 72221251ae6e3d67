"""Convert binary numbers of up to eight digits to decimal."""

from __future__ import annotations

import argparse
import sys

MAX_DIGITS = 8


def bin2dec(text: str) -> int:
    """Return the decimal value of a binary string of at most eight digits.

    Raises ValueError when the input is too long or holds anything but 0 and 1.
    """
    if len(text.encode("utf-8")) > MAX_DIGITS:
        raise ValueError("input must be no more than 8 digits")
    if any(char not in "01" for char in text):
        raise ValueError("input must only contain 0 and 1.")
    return sum(int(char) << power for power, char in enumerate(reversed(text)))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="Bin2Dec",
        description="Convert binary numbers (up to 8 digits) to decimal format.",
    )
    parser.add_argument(
        "binary",
        metavar="BINARY",
        help="Binary number to convert (max 8 digits)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the command line, convert and print the result."""
    args = _build_parser().parse_args(argv)
    try:
        value = bin2dec(args.binary)
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
    else:
        print(f"Decimal output: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())