"""
Size expression parser for sizecmp.

Turns human-readable sizes such as "10MB", "2.5GiB" or "512k" into byte
counts. Every unit is a binary multiple (powers of 1024) and unit matching
is case-insensitive.

A string that contains no letter at all is read as zero bytes, so "100"
and "" both parse to 0. Callers that want raw bytes must say so with a
"B" suffix.
"""

import re
import math
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from ..errors import InvalidSize


logger = logging.getLogger(__name__)


BYTE = 1
KILOBYTE = 1 << 10
MEGABYTE = 1 << 20
GIGABYTE = 1 << 30
TERABYTE = 1 << 40
PETABYTE = 1 << 50
EXABYTE = 1 << 60

UNIT_MULTIPLIERS: Dict[str, int] = {
    'B': BYTE,
    'K': KILOBYTE, 'KB': KILOBYTE, 'KIB': KILOBYTE,
    'M': MEGABYTE, 'MB': MEGABYTE, 'MIB': MEGABYTE,
    'G': GIGABYTE, 'GB': GIGABYTE, 'GIB': GIGABYTE,
    'T': TERABYTE, 'TB': TERABYTE, 'TIB': TERABYTE,
    'P': PETABYTE, 'PB': PETABYTE, 'PIB': PETABYTE,
    'E': EXABYTE, 'EB': EXABYTE, 'EIB': EXABYTE,
}

# Largest value a signed 64-bit byte count can hold
MAX_BYTES = (1 << 63) - 1

_NUMBER_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')


@dataclass(frozen=True)
class SizeExpression:
    """
    A parsed size expression.

    Attributes:
        magnitude: Non-negative numeric part of the expression
        unit: Normalized unit suffix (e.g. 'MB', 'GIB', 'B'), empty when absent
    """
    magnitude: float
    unit: str

    @property
    def multiplier(self) -> int:
        return UNIT_MULTIPLIERS[self.unit] if self.unit else 0

    def to_bytes(self) -> int:
        """Reduce the expression to a whole number of bytes."""
        if not self.unit:
            return 0
        return math.floor(self.magnitude * self.multiplier)


def split_expression(text: str) -> Tuple[str, str]:
    """
    Split a normalized size string at its first alphabetic character.

    Returns:
        Tuple of (numeric_prefix, unit_suffix). The suffix is empty when the
        string contains no letter.
    """
    for index, char in enumerate(text):
        if char.isalpha():
            return text[:index], text[index:]
    return text, ''


def parse_expression(text: str) -> SizeExpression:
    """
    Parse a size string into a SizeExpression.

    Args:
        text: Size string such as "10MB" or "1.5 gib"

    Returns:
        The parsed SizeExpression

    Raises:
        InvalidSize: If the magnitude is not a non-negative number or the
            unit is not recognized
    """
    normalized = (text or '').strip().upper()
    number, unit = split_expression(normalized)

    if not unit:
        # No letter anywhere: the expression denotes zero bytes
        return SizeExpression(magnitude=0.0, unit='')

    if not _NUMBER_RE.match(number):
        raise InvalidSize(text, "size must be a non-negative number")

    magnitude = float(number)
    if magnitude < 0:
        raise InvalidSize(text, "size must be a non-negative number")
    if not math.isfinite(magnitude):
        raise InvalidSize(text, f"size {text.strip()} exceeds the maximum of {MAX_BYTES} bytes")

    if unit not in UNIT_MULTIPLIERS:
        raise InvalidSize(text, f"unrecognized size unit {unit}")

    return SizeExpression(magnitude=magnitude, unit=unit)


def parse_size(text: str) -> int:
    """
    Convert a size expression to a byte count.

    Args:
        text: Size string such as "10MB", "2.5GiB" or "0"

    Returns:
        Number of bytes, floored to a whole number

    Raises:
        InvalidSize: If the expression is malformed, negative, uses an
            unknown unit, or does not fit in a signed 64-bit integer
    """
    expression = parse_expression(text)
    size_bytes = expression.to_bytes()

    if size_bytes > MAX_BYTES:
        raise InvalidSize(text, f"size {text.strip()} exceeds the maximum of {MAX_BYTES} bytes")

    logger.debug(f"Parsed size expression '{text}' as {size_bytes} bytes")
    return size_bytes


def format_size(size_bytes: int) -> str:
    """Get a byte count in human-readable binary units."""
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB', 'PB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} EB"
