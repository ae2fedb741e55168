"""
Parser registry and the built-in appliance parsers.
"""

import logging
from typing import Type

from lognorm.config import settings
from lognorm.core.base import BaseParser
from lognorm.core.exceptions import NoMatchingParser, ParserError
from lognorm.core.models import SiemLog
from lognorm.core.security import validate_line_length

__all__ = [
    "ParserRegistry",
    "registry",
    "BaseParser",
]

logger = logging.getLogger(__name__)


class ParserRegistry:
    """
    Ordered set of parser classes with format-name aliases.

    A record is offered to each parser in turn until one recognizes it.

    Usage:
        from lognorm.parsers import registry

        log = registry.parse(SiemLog(message=line))
        log = registry.parse(SiemLog(message=line), format_name="welf")
    """

    def __init__(self):
        self._parsers: dict[str, Type[BaseParser]] = {}
        self._format_to_parser: dict[str, str] = {}
        self._instances: dict[str, BaseParser] = {}

    def register(self, parser_class: Type[BaseParser]) -> None:
        """
        Add a parser class after the ones already registered.

        Its ``supported_formats`` become aliases for ``parser_class.name``.
        """
        self._parsers[parser_class.name] = parser_class
        self._instances.pop(parser_class.name, None)
        for alias in parser_class.supported_formats:
            self._format_to_parser[alias] = parser_class.name

    def get_parser_class(self, format_name: str) -> Type[BaseParser] | None:
        """Look up the class behind a format alias or parser name without building it."""
        return self._parsers.get(self._format_to_parser.get(format_name, format_name))

    def get_parser(self, format_name: str) -> BaseParser | None:
        """
        Return the parser behind a format alias or parser name.

        Each parser is built on first use and reused afterwards, so its
        settings are read once per registry.

        Args:
            format_name: ``"welf"``, ``"mysql"``, ``"pulse_secure"``...

        Returns:
            The parser, or None for an unknown name

        Raises:
            ConfigurationError: The parser rejected its settings
        """
        parser_class = self.get_parser_class(format_name)
        if parser_class is None:
            return None
        parser = self._instances.get(parser_class.name)
        if parser is None:
            parser = self._instances[parser_class.name] = parser_class()
        return parser

    def parse(
        self,
        log: SiemLog,
        format_name: str | None = None,
        max_line_length: int | None = None,
    ) -> SiemLog:
        """
        Normalize a record with the first parser that recognizes it.

        Parsers are tried in registration order. A parser that raises
        NoMatchingParser passes the record on to the next one; a
        ParserError stops the search, since the line was recognized.

        Args:
            log: Record carrying the raw line
            format_name: Only try this format's parser
            max_line_length: Override for the configured line limit

        Returns:
            The enriched record

        Raises:
            NoMatchingParser: No parser recognized the line
            ParserError: The recognizing parser found corrupt data
            LineTooLongError: The line exceeds the length limit
            ValueError: ``format_name`` is not registered
            ConfigurationError: A parser rejected its settings
        """
        validate_line_length(log.message, max_line_length or settings.max_line_length)

        if format_name is not None:
            parser = self.get_parser(format_name)
            if parser is None:
                raise ValueError(f"Unknown format: {format_name}")
            parsers = [parser]
        else:
            parsers = [self.get_parser(name) for name in self._parsers]

        for parser in parsers:
            try:
                return parser.parse(log)
            except NoMatchingParser as exc:
                log = exc.log
            except ParserError as exc:
                logger.warning("%s could not parse line: %s", parser.name, exc)
                raise

        raise NoMatchingParser(log)

    def list_parsers(self) -> list[str]:
        """Parser names in dispatch order."""
        return list(self._parsers)

    def list_formats(self) -> list[str]:
        """Every accepted ``--format`` alias."""
        return list(self._format_to_parser)


registry = ParserRegistry()


def _register_builtin_parsers() -> None:
    # The parser modules import submodules of this package
    from lognorm.parsers.mysql import MySQLGeneralParser
    from lognorm.parsers.pulse import PulseSecureParser

    # Dispatch order
    registry.register(MySQLGeneralParser)
    registry.register(PulseSecureParser)


_register_builtin_parsers()
