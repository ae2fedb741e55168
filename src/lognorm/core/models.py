"""
Core data models for lognorm.

These dataclasses define the normalized record that every parser populates
and the small authentication event taxonomy attached to it.
"""

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Union

__all__ = [
    "NONE_SENTINEL",
    "FieldValue",
    "LoginOutcome",
    "RemoteLogin",
    "AuthEvent",
    "ParsedMessage",
    "SiemLog",
]


# Placeholder for absent hostname/domain/address fields. Downstream
# consumers match on this exact text.
NONE_SENTINEL = "_NONE_"

FieldValue = Union[str, int, IPv4Address, IPv6Address]


class LoginOutcome(Enum):
    """Normalized outcome of an authentication attempt."""
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    LOCKOUT = "LOCKOUT"
    ESTABLISH = "ESTABLISH"


@dataclass(frozen=True)
class RemoteLogin:
    """Who logged in, under which domain, and from where."""
    user_name: str
    domain: str
    source_address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_name": self.user_name,
            "domain": self.domain,
            "source_address": self.source_address,
        }


@dataclass(frozen=True)
class AuthEvent:
    """A classified login event reported by ``hostname``."""
    hostname: str
    outcome: LoginOutcome
    login_type: RemoteLogin

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "auth",
            "hostname": self.hostname,
            "outcome": self.outcome.value,
            "login_type": {"remote": self.login_type.to_dict()},
        }


@dataclass(frozen=True)
class ParsedMessage:
    """
    An appliance message split into its identifier and description.

    ``AUT31504: Login succeeded`` becomes ``("AUT", 31504, "Login succeeded")``.
    """
    category: str
    event_id: int
    description: str


@dataclass
class SiemLog:
    """
    The record a parser enriches in place.

    The caller constructs it around the raw ``message``; parsers only fill
    in the remaining attributes.
    """
    message: str
    date: int = 0  # Reception time, epoch milliseconds
    origin: IPv4Address | IPv6Address | None = None

    event_created: int | None = None
    fields: dict[str, FieldValue] = field(default_factory=dict)
    event: AuthEvent | None = None

    service: str = ""
    product: str = ""
    category: str = ""

    def __post_init__(self):
        if self.event_created is None:
            self.event_created = self.date

    def add_field(self, name: str, value: FieldValue) -> None:
        """Set a dotted field such as ``user.name``."""
        self.fields[name] = value

    def get_field(self, name: str) -> FieldValue | None:
        """Return a field value or None when it was never set."""
        return self.fields.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        return {
            "message": self.message,
            "date": self.date,
            "origin": str(self.origin) if self.origin is not None else None,
            "event_created": self.event_created,
            "service": self.service,
            "product": self.product,
            "category": self.category,
            "event": self.event.to_dict() if self.event else None,
            "fields": {
                name: value if isinstance(value, (str, int)) else str(value)
                for name, value in self.fields.items()
            },
        }
