"""
Input guards for lognorm.

Oversized lines never reach the parsers, and values exported to CSV are
neutralized so a spreadsheet will not evaluate them.
"""

from lognorm.core.exceptions import LogNormError

__all__ = [
    "MAX_LINE_LENGTH",
    "CSV_FORMULA_PREFIXES",
    "LineTooLongError",
    "validate_line_length",
    "sanitize_csv_cell",
]


# Appliance lines are a few hundred bytes; anything past 1MiB is garbage
MAX_LINE_LENGTH = 1024 * 1024

# Leading characters a spreadsheet treats as the start of a formula
CSV_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


class LineTooLongError(LogNormError):
    """A line is longer than the configured limit; no parser was tried."""

    def __init__(self, size: int, limit: int = MAX_LINE_LENGTH):
        super().__init__(
            f"Line is {size:,} bytes, limit is {limit:,}",
            details={"line_length": size, "max_length": limit},
        )
        self.line_length = size
        self.max_length = limit


def validate_line_length(line: str, max_length: int = MAX_LINE_LENGTH) -> str:
    """
    Reject a line whose UTF-8 size exceeds ``max_length``.

    Returns the line unchanged so the call can be chained.
    """
    size = len(line.encode("utf-8", errors="replace"))
    if size > max_length:
        raise LineTooLongError(size, max_length)
    return line


def sanitize_csv_cell(value: str) -> str:
    """Prefix formula-looking cells with a quote; appliance fields are untrusted."""
    if value.startswith(CSV_FORMULA_PREFIXES):
        return f"'{value}"
    return value
