"""Convert CSV to JSON and JSON to CSV."""

from __future__ import annotations

import argparse
import json
import math
import re
import sys
from pathlib import Path
from typing import Any

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class ConversionError(Exception):
    """Raised when input cannot be read, parsed or converted."""


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into fields, honouring double quotes."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    chars = iter(line)
    pending: str | None = None
    while True:
        if pending is not None:
            char, pending = pending, None
        else:
            char = next(chars, None)
            if char is None:
                break
        if char == '"':
            if in_quotes:
                following = next(chars, None)
                if following == '"':
                    current.append('"')
                else:
                    in_quotes = False
                    if following is None:
                        break
                    pending = following
            else:
                in_quotes = True
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def guess_json_value(text: str) -> Any:
    """Turn a CSV field into null, an integer, a float, a boolean or a string."""
    trimmed = text.strip()
    if not trimmed:
        return None
    if _INT_RE.fullmatch(trimmed):
        number = int(trimmed)
        if _I64_MIN <= number <= _I64_MAX:
            return number
    if _FLOAT_RE.fullmatch(trimmed) or _SPECIAL_FLOAT_RE.fullmatch(trimmed):
        number = float(trimmed)
        return number if math.isfinite(number) else None
    lowered = trimmed.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    return trimmed


def csv_to_json(csv_input: str, pretty: bool = False) -> str:
    """Convert CSV text with a header row into a JSON array of objects."""
    lines = _split_lines(csv_input)
    if not lines:
        raise ConversionError("CSV input is empty")
    headers = parse_csv_line(lines[0])
    if not headers:
        raise ConversionError("CSV header row is empty")

    records = []
    for row_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        fields = parse_csv_line(line)
        if len(fields) != len(headers):
            raise ConversionError(
                f"CSV row {row_number} has {len(fields)} fields "
                f"but header has {len(headers)}"
            )
        records.append(
            {header: guess_json_value(field) for header, field in zip(headers, fields)}
        )

    if pretty:
        return json.dumps(records, indent=2, ensure_ascii=False, sort_keys=True)
    return json.dumps(
        records, separators=(",", ":"), ensure_ascii=False, sort_keys=True
    )


def json_value_to_string(value: Any) -> str:
    """Render a JSON value as the text of a CSV cell (before escaping)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, sort_keys=True)


def escape_csv_field(text: str) -> str:
    """Quote a field if it holds a comma, a quote or a newline."""
    if any(char in text for char in ',"\n'):
        return '"' + text.replace('"', '""') + '"'
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported value {name}")


def json_to_csv(json_input: str) -> str:
    """Convert a JSON array of objects into CSV with sorted column names."""
    try:
        value = json.loads(json_input, parse_constant=_reject_constant)
    except ValueError as error:
        raise ConversionError(f"invalid JSON: {error}") from error

    if not isinstance(value, list):
        raise ConversionError("JSON root must be an array of objects")
    if not value:
        raise ConversionError("JSON array is empty")
    if not all(isinstance(item, dict) for item in value):
        raise ConversionError("JSON array elements must be objects")

    keys = sorted({key for item in value for key in item})
    lines = [",".join(keys)]
    lines.extend(
        ",".join(escape_csv_field(json_value_to_string(item.get(key))) for key in keys)
        for item in value
    )
    return "".join(f"{line}\n" for line in lines)


def read_input(path: str | Path | None = None) -> str:
    """Read text from a file, or from standard input when path is None or '-'."""
    if path is not None and str(path) != "-":
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise ConversionError(f"failed to read: '{path}': {error}") from error
    try:
        data = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as error:
        raise ConversionError(f"failed to read from STDIN: {error}") from error
    if not data.strip():
        raise ConversionError("input is empty")
    return data


def write_output(path: str | Path | None, data: str) -> None:
    """Write data to a file, or print it when path is None or '-'."""
    if path is None or str(path) == "-":
        print(data)
        return
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(data)
    except OSError as error:
        raise ConversionError(f"failed to write '{path}': {error}") from error
    print(f"Wrote {len(data.encode('utf-8'))} bytes to {path}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv2json", description="Convert CSV to JSON or JSON to CSV."
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    commands = parser.add_subparsers(dest="command", required=True)

    to_json = commands.add_parser("to-json", help="Convert CSV to JSON")
    to_json.add_argument("-i", "--input")
    to_json.add_argument("-o", "--output")
    to_json.add_argument("-p", "--pretty", action="store_true")

    to_csv = commands.add_parser("to-csv", help="Convert JSON to CSV")
    to_csv.add_argument("-i", "--input")
    to_csv.add_argument("-o", "--output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the converter from the command line."""
    args = _build_parser().parse_args(argv)
    try:
        text = read_input(args.input)
        if args.command == "to-json":
            result = csv_to_json(text, args.pretty)
        else:
            result = json_to_csv(text)
        write_output(args.output, result)
    except ConversionError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())