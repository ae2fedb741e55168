"""
PulseSecure (Ivanti Connect Secure) VPN gateway log parser.

The gateway ships WELF-style key=value lines, usually behind a syslog
header::

    2021-04-08T12:14:18-07:00 10.0.0.111 PulseSecure: id=firewall time="2021-04-08 12:14:18" pri=6
    fw=10.0.0.9 ... user=usertest2 realm="Users" ... src=82.213.178.130 ...
    msg="AUT31504: Login succeeded for usertest2/Users (session:00000000) from 82.213.178.130"

The ``msg`` field embeds an event code (category + numeric id) that drives
classification.
"""

import logging
from dataclasses import dataclass

from lognorm.config import resolve_timezone, settings
from lognorm.core.base import BaseParser, parse_unsigned, to_millis
from lognorm.core.exceptions import FieldFormatError, NoMatchingParser, ParserError
from lognorm.core.models import NONE_SENTINEL, ParsedMessage, SiemLog
from lognorm.parsers.classification import build_event, classify
from lognorm.parsers.tokenizer import extract_fields

__all__ = [
    "PulseSecureParser",
    "AuxiliaryFields",
    "parse_message",
    "read_auxiliary_fields",
]

logger = logging.getLogger(__name__)


SYSLOG_TAG = "PulseSecure:"
MESSAGE_SEPARATOR = ": "
CATEGORY_LENGTH = 3


@dataclass(frozen=True)
class AuxiliaryFields:
    """Identity and addressing fields that accompany every message."""
    user: str
    realm: str
    firewall: str
    source: str
    agent: str


def parse_message(msg: str) -> ParsedMessage:
    """
    Split ``AUT31504: Login succeeded ...`` into category, id and description.

    Raises:
        FieldFormatError: No ``": "`` separator, or the id is not an
            unsigned integer
    """
    identifier, separator, description = msg.partition(MESSAGE_SEPARATOR)
    if not separator:
        raise FieldFormatError("Message has no event code separator", value=msg)

    if len(identifier) <= CATEGORY_LENGTH:
        raise FieldFormatError("Event code too short", value=identifier)

    category = identifier[:CATEGORY_LENGTH]
    event_id = parse_unsigned(identifier[CATEGORY_LENGTH:])
    if event_id is None:
        raise FieldFormatError("Event id is not an unsigned integer", value=identifier)

    return ParsedMessage(category=category, event_id=event_id, description=description)


def read_auxiliary_fields(fields: dict[str, str]) -> AuxiliaryFields:
    """Read the identity fields, substituting sentinels for absent ones."""
    return AuxiliaryFields(
        user=fields.get("user", ""),
        realm=fields.get("realm", NONE_SENTINEL),
        firewall=fields.get("fw", NONE_SENTINEL),
        source=fields.get("src", NONE_SENTINEL),
        agent=fields.get("agent", ""),
    )


class PulseSecureParser(BaseParser):
    """
    Parse PulseSecure key=value lines.

    Extracts:
        - Event code and category from ``msg``, and a login event when the
          code is one of the classified ones
        - Observer address (``fw``), remote address (``src``), user, realm
          and user agent
        - Event time from ``time`` in the appliance's time zone
    """

    name = "pulse_secure"
    supported_formats = ["pulse_secure", "pulsesecure", "welf"]

    def __init__(self, timezone: str | None = None):
        self.timezone = resolve_timezone(timezone or settings.pulse_timezone)

    def parse(self, log: SiemLog) -> SiemLog:
        """Parse one PulseSecure line, enriching ``log`` only on success."""
        text = self._payload(log.message)
        if text is None:
            raise NoMatchingParser(log, self.name)

        fields = extract_fields(text)
        if "id" not in fields:
            raise NoMatchingParser(log, self.name)

        aux = read_auxiliary_fields(fields)

        parsed = None
        if "msg" in fields:
            try:
                parsed = parse_message(fields["msg"])
            except FieldFormatError as exc:
                raise ParserError(exc.message, log, self.name) from exc

        observer_ip = None
        if aux.firewall != NONE_SENTINEL:
            observer_ip = self._parse_ip(aux.firewall)
            if observer_ip is None:
                raise ParserError(f"Invalid appliance address: {aux.firewall!r}", log, self.name)

        created = None
        if "time" in fields:
            timestamp = self._parse_local_timestamp(fields["time"], self.timezone)
            if timestamp is None:
                raise ParserError(f"Invalid time field: {fields['time']!r}", log, self.name)
            created = to_millis(timestamp)

        # Everything below only writes to the record
        if parsed is not None:
            log.add_field("event.code", parsed.event_id)
            log.add_field("event.dataset", parsed.category)
            outcome = classify(parsed.category, parsed.event_id)
            if outcome is not None:
                log.event = build_event(
                    outcome,
                    hostname=aux.firewall,
                    user_name=aux.user,
                    domain=aux.realm,
                    source_address=aux.source,
                )
            else:
                logger.debug("Unclassified event %s%s", parsed.category, parsed.event_id)

        if aux.user:
            log.add_field("user.name", aux.user)
        if aux.realm != NONE_SENTINEL and aux.realm:
            log.add_field("user.domain", aux.realm)
        if aux.source != NONE_SENTINEL:
            source_ip = self._parse_ip(aux.source)
            if source_ip is not None:
                log.add_field("source.ip", source_ip)
            else:
                log.add_field("source.address", aux.source)
        if aux.agent:
            log.add_field("user_agent.original", aux.agent)
        if observer_ip is not None:
            log.add_field("observer.ip", observer_ip)
        if created is not None:
            log.event_created = created

        log.service = "PulseSecure"
        log.product = "PulseSecure"
        log.category = "VPN"
        return log

    def _payload(self, line: str) -> str | None:
        """Return the key=value part after the syslog tag, if this looks like one."""
        pos = line.find(SYSLOG_TAG)
        if pos >= 0:
            return line[pos + len(SYSLOG_TAG):].strip()
        stripped = line.strip()
        if stripped.startswith("id="):
            return stripped
        return None
