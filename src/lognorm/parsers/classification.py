"""
PulseSecure event code classification.

Each appliance message carries a category code and a numeric id
(``AUT31504``). Only a handful of (category, id) pairs describe a login
whose outcome is worth normalizing; everything else is recognized but
left unclassified. The table below is the single source of truth for
that mapping.
"""

import logging

from lognorm.core.models import AuthEvent, LoginOutcome, RemoteLogin

__all__ = [
    "CLASSIFICATION",
    "KNOWN_CATEGORIES",
    "classify",
    "is_recognized",
    "build_event",
]

logger = logging.getLogger(__name__)


# category -> event id -> outcome (None: recognized, intentionally unclassified)
CLASSIFICATION: dict[str, dict[int, LoginOutcome | None]] = {
    "AUT": {
        31504: LoginOutcome.SUCCESS,  # Login succeeded
        24412: LoginOutcome.SUCCESS,
        24414: LoginOutcome.SUCCESS,
        24326: LoginOutcome.ESTABLISH,  # Primary authentication successful
        30684: LoginOutcome.ESTABLISH,
        24327: LoginOutcome.FAIL,
        30685: LoginOutcome.FAIL,
        22673: None,  # Logout
        31085: None,  # Concurrent user limit
    },
    "ADM": {
        22668: LoginOutcome.SUCCESS,
        20716: None,
        23452: None,
        24511: None,
        22671: None,
    },
    "USR": {},
    "PTR": {},
    "NWC": {},
    "ERR": {},
    "WEB": {},
    "ARC": {},
}

KNOWN_CATEGORIES = frozenset(CLASSIFICATION)


def classify(category: str, event_id: int) -> LoginOutcome | None:
    """
    Look up the login outcome for an event code.

    Unknown categories and ids are routine and return None, never raise.
    """
    outcome = CLASSIFICATION.get(category, {}).get(event_id)
    if category not in KNOWN_CATEGORIES:
        logger.debug("Unrecognized PulseSecure category %s (id %s)", category, event_id)
    return outcome


def is_recognized(category: str, event_id: int) -> bool:
    """True when the pair is listed explicitly or its category has no ids of interest."""
    ids = CLASSIFICATION.get(category)
    if ids is None:
        return False
    return not ids or event_id in ids


def build_event(
    outcome: LoginOutcome,
    hostname: str,
    user_name: str,
    domain: str,
    source_address: str,
) -> AuthEvent:
    """Build the normalized login event; all identity values are taken verbatim."""
    return AuthEvent(
        hostname=hostname,
        outcome=outcome,
        login_type=RemoteLogin(
            user_name=user_name,
            domain=domain,
            source_address=source_address,
        ),
    )
