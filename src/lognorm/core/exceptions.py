"""
Custom exceptions for lognorm.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lognorm.core.models import SiemLog

__all__ = [
    "LogNormError",
    "NoMatchingParser",
    "ParserError",
    "FieldFormatError",
    "ConfigurationError",
]


class LogNormError(Exception):
    """Base exception for all lognorm errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class _RecordError(LogNormError):
    """Error that hands the caller's record back untouched."""

    def __init__(
        self,
        message: str,
        log: "SiemLog",
        parser_name: str | None = None,
    ):
        details = {}
        line = log.message
        details["line"] = line[:100] + "..." if len(line) > 100 else line
        if parser_name is not None:
            details["parser"] = parser_name
        super().__init__(message, details)
        self.log = log
        self.parser_name = parser_name


class NoMatchingParser(_RecordError):
    """
    Raised when a line does not look like the parser's format at all.

    A routing signal: the caller may hand ``exc.log`` to another parser.
    """

    def __init__(
        self,
        log: "SiemLog",
        parser_name: str | None = None,
        message: str = "No matching parser",
    ):
        super().__init__(message, log, parser_name)


class ParserError(_RecordError):
    """
    Raised when a line matched the format but a required sub-field is corrupt.

    Callers should report it as a data-quality problem instead of trying
    other parsers.
    """

    def __init__(
        self,
        message: str,
        log: "SiemLog",
        parser_name: str | None = None,
    ):
        super().__init__(message, log, parser_name)


class FieldFormatError(LogNormError):
    """
    Raised by sub-field helpers that have no record at hand.

    Parsers convert it into a ParserError carrying the record.
    """

    def __init__(self, message: str, value: str | None = None):
        details = {}
        if value is not None:
            details["value"] = value[:100] + "..." if len(value) > 100 else value
        super().__init__(message, details)
        self.value = value


class ConfigurationError(LogNormError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key
