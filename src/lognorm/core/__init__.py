"""
Core data models and base classes for lognorm.
"""

from lognorm.core.models import (
    NONE_SENTINEL,
    FieldValue,
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
from lognorm.core.security import (
    MAX_LINE_LENGTH,
    LineTooLongError,
    validate_line_length,
    sanitize_csv_cell,
)

__all__ = [
    "NONE_SENTINEL",
    "FieldValue",
    "LoginOutcome",
    "RemoteLogin",
    "AuthEvent",
    "ParsedMessage",
    "SiemLog",
    "BaseParser",
    "LogNormError",
    "NoMatchingParser",
    "ParserError",
    "FieldFormatError",
    "ConfigurationError",
    # Security
    "MAX_LINE_LENGTH",
    "LineTooLongError",
    "validate_line_length",
    "sanitize_csv_cell",
]
