"""
MySQL general query log parser.

Lines have a fixed-width prefix: a 27 character RFC 3339 timestamp, a
right-aligned thread id ending at offset 37, then the command::

    2021-04-08T12:14:18.123456Z        12 Query     SELECT 1
    2021-04-08T12:14:18.123456Z        12 Connect   root@localhost on shop using TCP/IP
    2021-04-08T12:14:18.123456Z        12 Quit

Syslog relays may prepend their own header, so the prefix is located from
the command marker rather than assumed to start the line.
"""

import logging
import re
from dataclasses import dataclass

from lognorm.core.base import BaseParser, parse_unsigned, to_millis
from lognorm.core.exceptions import FieldFormatError, NoMatchingParser
from lognorm.core.models import NONE_SENTINEL, LoginOutcome, SiemLog
from lognorm.parsers.classification import build_event

__all__ = [
    "MySQLGeneralParser",
    "ConnectionInfo",
    "validate_shape",
    "extract_general_fields",
    "parse_connection",
]

logger = logging.getLogger(__name__)


# Checked in this order; the first one present wins
MARKERS = (" Query ", " Connect ", " Quit")

PREFIX_LENGTH = 37  # Timestamp, separator and thread id block
TIMESTAMP_END = 27
MIN_LINE_LENGTH = 42

CONNECT_PATTERN = re.compile(
    r'^(?P<user>[^@\s]+)@(?P<host>\S+)\s+on\s+(?P<database>\S*)\s*using\s+(?P<transport>.+)$'
)
ACCESS_DENIED_PATTERN = re.compile(
    r"^Access denied for user '(?P<user>[^']*)'@'(?P<host>[^']*)'"
)


@dataclass(frozen=True)
class ConnectionInfo:
    """What a Connect entry says about the client."""
    user: str
    host: str
    database: str
    transport: str
    outcome: LoginOutcome


def validate_shape(line: str) -> str | None:
    """
    Find the fixed-width part of a general log line.

    Returns:
        The line trimmed to start at the timestamp, or None if it does not
        have the expected shape
    """
    for marker in MARKERS:
        pos = line.find(marker)
        if pos >= 0:
            break
    else:
        return None

    candidate = line[pos - PREFIX_LENGTH:] if pos >= PREFIX_LENGTH else line

    if not candidate or candidate[0] not in "0123456789":
        return None
    if len(candidate) < MIN_LINE_LENGTH:
        return None
    if candidate[PREFIX_LENGTH] != " " or candidate[TIMESTAMP_END] != " ":
        return None
    return candidate


def extract_general_fields(line: str) -> list[str]:
    """
    Split a shape-validated line into timestamp, thread id, command, argument.

    A missing piece is left out, so callers can check for exactly 4 fields.
    The argument may be empty (``Quit``).
    """
    fields = []
    timestamp = line[:TIMESTAMP_END]
    session = line[TIMESTAMP_END + 1:PREFIX_LENGTH].strip()
    rest = line[PREFIX_LENGTH + 1:].split(None, 1)

    for piece in (timestamp, session, rest[0] if rest else ""):
        if piece:
            fields.append(piece)
    fields.append(rest[1].strip() if len(rest) > 1 else "")
    return fields


def parse_connection(content: str) -> ConnectionInfo:
    """
    Parse the argument of a Connect entry.

    Raises:
        FieldFormatError: The text is neither a connection nor an access denial
    """
    match = CONNECT_PATTERN.match(content)
    if match:
        return ConnectionInfo(
            user=match["user"],
            host=match["host"],
            database=match["database"],
            transport=match["transport"].strip(),
            outcome=LoginOutcome.SUCCESS,
        )

    match = ACCESS_DENIED_PATTERN.match(content)
    if match:
        return ConnectionInfo(
            user=match["user"],
            host=match["host"],
            database="",
            transport="",
            outcome=LoginOutcome.FAIL,
        )

    raise FieldFormatError("Unrecognized connection entry", value=content)


class MySQLGeneralParser(BaseParser):
    """
    Parse MySQL general query log entries (Query, Connect, Quit).
    """

    name = "mysql_general"
    supported_formats = ["mysql_general", "mysql"]

    def parse(self, log: SiemLog) -> SiemLog:
        """Parse one general log line, enriching ``log`` only on success."""
        line = validate_shape(log.message)
        if line is None:
            raise NoMatchingParser(log, self.name)

        fields = extract_general_fields(line)
        if len(fields) != 4:
            raise NoMatchingParser(log, self.name)

        timestamp = self._parse_rfc3339(fields[0])
        if timestamp is None:
            raise NoMatchingParser(log, self.name)

        session, dataset, content = fields[1], fields[2], fields[3]

        log.event_created = to_millis(timestamp)
        session_id = parse_unsigned(session)
        if session_id is not None:
            log.add_field("session.id", session_id)
        else:
            log.add_field("session.name", session)
        log.add_field("event.dataset", dataset)

        if dataset == "Query":
            log.add_field("database.query", content)
        elif dataset == "Connect":
            try:
                self._enrich_connection(log, content)
            except FieldFormatError as exc:
                # The entry itself parsed fine; keep what we have
                logger.debug("Skipping connection details: %s", exc)

        log.service = "MySQL"
        log.product = "MySQL"
        log.category = "Database"
        return log

    def _enrich_connection(self, log: SiemLog, content: str) -> None:
        info = parse_connection(content)

        log.add_field("user.name", info.user)
        source_ip = self._parse_ip(info.host)
        if source_ip is not None:
            log.add_field("source.ip", source_ip)
        elif info.host:
            log.add_field("source.domain", info.host)
        if info.database:
            log.add_field("database.name", info.database)
        if info.transport:
            log.add_field("network.transport", info.transport)

        log.event = build_event(
            info.outcome,
            hostname=str(log.origin) if log.origin is not None else NONE_SENTINEL,
            user_name=info.user,
            domain=info.database or NONE_SENTINEL,
            source_address=info.host or NONE_SENTINEL,
        )
