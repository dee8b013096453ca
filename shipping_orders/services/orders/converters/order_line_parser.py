"""
Parser for bulk-load order files.

Each record is one line with exactly five pipe-delimited fields:

    <ignored>|<customer name>|<shipper name>|<weight>|<distance>

The first field is a legacy placeholder and is never read. Blank lines are
skipped by the caller; there is no header line.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple

from shipping_orders.utils.error_handler import ErrorCode, ValidationException

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
EXPECTED_FIELDS = 5

# ASCII numerals only; float() and int() would also take "1_000" or "nan"
_WEIGHT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DISTANCE_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ParsedOrderLine:
    """Fields extracted from one bulk-load line."""

    line_number: int
    customer_name: str
    shipper_name: str
    weight: float
    distance: int


def parse_order_line(line: str, line_number: int = 0) -> ParsedOrderLine:
    """
    Parse one non-blank line.

    Raises:
        ValidationException: If the field count is wrong or a number does not parse
    """
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) != EXPECTED_FIELDS:
        raise ValidationException(
            message=f"Expected {EXPECTED_FIELDS} fields, found {len(parts)}",
            field="line",
            invalid_value=line.strip(),
            expected_format="ignored|customer|shipper|weight|distance",
            error_code=ErrorCode.INVALID_LINE_FORMAT,
            details={"line_number": line_number},
        )

    _, customer_name, shipper_name, raw_weight, raw_distance = (part.strip() for part in parts)

    if not _WEIGHT_PATTERN.fullmatch(raw_weight):
        raise ValidationException(
            message=f"Weight is not a number: {raw_weight!r}",
            field="weight",
            invalid_value=raw_weight,
            error_code=ErrorCode.INVALID_LINE_FORMAT,
            details={"line_number": line_number},
        )

    if not _DISTANCE_PATTERN.fullmatch(raw_distance):
        raise ValidationException(
            message=f"Distance is not a whole number: {raw_distance!r}",
            field="distance",
            invalid_value=raw_distance,
            error_code=ErrorCode.INVALID_LINE_FORMAT,
            details={"line_number": line_number},
        )

    return ParsedOrderLine(
        line_number=line_number,
        customer_name=customer_name,
        shipper_name=shipper_name,
        weight=float(raw_weight),
        distance=int(raw_distance),
    )


def iter_order_file(path: str | Path, encoding: str = "utf-8") -> Iterator[Tuple[int, str]]:
    """
    Stream ``(line_number, line)`` pairs from a bulk-load file.

    Line numbers start at 1. Raises OSError if the file cannot be opened.
    """
    with open(path, "r", encoding=encoding) as handle:
        for line_number, line in enumerate(handle, start=1):
            yield line_number, line.rstrip("\r\n")
