"""
lognorm - Normalize network appliance logs into structured SIEM records.

Supports the MySQL general query log and PulseSecure VPN gateway logs.

Usage:
    from lognorm import SiemLog, parse_log, extract_fields

    # Let the registry pick the parser
    log = parse_log("2021-04-08T12:14:18.123456Z        12 Query     SELECT 1")
    log.get_field("database.query")

    # Force a format and keep the caller's record
    record = SiemLog(message=line, origin=ip_address("10.0.0.111"))
    parse_log(record, format="pulse_secure")

    # Tokenize key=value text directly
    extract_fields('user=alice realm="Users"')
"""

__version__ = "0.1.0"

from lognorm.core.models import (
    NONE_SENTINEL,
    LoginOutcome,
    RemoteLogin,
    AuthEvent,
    ParsedMessage,
    SiemLog,
)
from lognorm.core.base import BaseParser
from lognorm.core.exceptions import (
    LogNormError,
    NoMatchingParser,
    ParserError,
    FieldFormatError,
    ConfigurationError,
)
from lognorm.parsers import ParserRegistry, registry
from lognorm.parsers.tokenizer import extract_fields
from lognorm.parsers.mysql import MySQLGeneralParser
from lognorm.parsers.pulse import PulseSecureParser

__all__ = [
    # Version
    "__version__",
    # Core models
    "NONE_SENTINEL",
    "LoginOutcome",
    "RemoteLogin",
    "AuthEvent",
    "ParsedMessage",
    "SiemLog",
    # Base classes
    "BaseParser",
    # Exceptions
    "LogNormError",
    "NoMatchingParser",
    "ParserError",
    "FieldFormatError",
    "ConfigurationError",
    # Registry
    "ParserRegistry",
    "registry",
    # Parsers
    "MySQLGeneralParser",
    "PulseSecureParser",
    # Convenience functions
    "extract_fields",
    "parse_log",
]


def parse_log(log: SiemLog | str, format: str | None = None) -> SiemLog:
    """
    Normalize one log line.

    Args:
        log: A record carrying the raw line, or the line itself
        format: Optional format name to force a specific parser

    Returns:
        The enriched record

    Raises:
        NoMatchingParser: No parser recognized the line
        ParserError: The line was recognized but a field is corrupt
    """
    if isinstance(log, str):
        log = SiemLog(message=log)
    return registry.parse(log, format_name=format)
