"""
Base parser class for lognorm parsers.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone, tzinfo
from ipaddress import IPv4Address, IPv6Address, ip_address

from dateutil import parser as dateutil_parser

from lognorm.core.models import SiemLog

__all__ = ["BaseParser", "to_millis", "parse_unsigned"]


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# ASCII digits only; int() would also take signs, underscores and padding
_UNSIGNED = re.compile(r"[0-9]+")


def to_millis(value: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (value - EPOCH) // timedelta(milliseconds=1)


def parse_unsigned(value: str) -> int | None:
    """Parse a run of ASCII digits, returning None for anything else."""
    if _UNSIGNED.fullmatch(value):
        return int(value)
    return None


class BaseParser(ABC):
    """
    Base class for all log parsers.

    Subclasses must implement:
        - parse(log: SiemLog) -> SiemLog

    A parser either returns the same record, enriched, or raises
    NoMatchingParser / ParserError carrying the record untouched.

    Attributes:
        name: Unique identifier for this parser
        supported_formats: List of format names this parser handles
    """

    name: str = "base"
    supported_formats: list[str] = []

    @abstractmethod
    def parse(self, log: SiemLog) -> SiemLog:
        """
        Parse ``log.message`` and enrich ``log`` in place.

        Args:
            log: Record carrying the raw line

        Returns:
            The same record with normalized fields set

        Raises:
            NoMatchingParser: The line is not in this parser's format
            ParserError: The line is in this format but a field is corrupt
        """
        pass

    def _parse_rfc3339(self, value: str) -> datetime | None:
        """
        Parse an RFC 3339 timestamp.

        Returns None when the text is not a full date-time with an offset.
        """
        try:
            parsed = dateutil_parser.isoparse(value)
        except (ValueError, OverflowError):
            return None
        if parsed.tzinfo is None:
            return None
        return parsed

    def _parse_local_timestamp(
        self,
        value: str,
        zone: tzinfo,
        fmt: str = "%Y-%m-%d %H:%M:%S",
    ) -> datetime | None:
        """Parse a wall-clock timestamp and attach the device time zone."""
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=zone)
        except ValueError:
            return None

    def _parse_ip(self, value: str) -> IPv4Address | IPv6Address | None:
        """Parse an IPv4/IPv6 address, or None when it is not one."""
        try:
            return ip_address(value)
        except ValueError:
            return None
