"""
Validity Period - Message expiry coding for message centres
===========================================================

A message centre keeps an undelivered message for the "validity period"
given as a single relative-validity byte:

- 0..143:   steps of 5 minutes, where 0 is 5 minutes (up to 12 hours)
- 144..167: steps of 30 minutes past 12 hours (up to 24 hours)
- 168..196: steps of 1 day past 1 day (up to 30 days)
- 197..255: steps of 1 week (up to 63 weeks)

Messages carry their expiry as an absolute ISO 8601 timestamp in the
``Valid_until`` header; the functions here turn that into the byte the
modem puts in the ``Validity`` header.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from core.logging import get_logger

from .headers import Header
from .message import SmsMessage

logger = get_logger("sms.validity")

# Extended ISO 8601 date-time with a required offset, as in 2026-10-18T12:00:00+03:00
_ISO_OFFSET_DATE_TIME = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}(:\d{2}(\.\d{1,9})?)?([Zz]|[+-]\d{2}:\d{2}(:\d{2})?)"
)

# Durations in minutes
FIVE = 5
HALF_HOUR = 30
HALF_DAY = 24 * HALF_HOUR
DAY = 2 * HALF_DAY
WEEK = 7 * DAY

MAX_VALIDITY = 255
EXPIRED = -1


def minutes_to_validity(minutes: int) -> int:
    """
    Convert whole minutes to the validity code not exceeding them.

    Args:
        minutes: Time left until expiry, in whole minutes

    Returns:
        The validity code 0..255, or -1 when five minutes or less remain
    """
    if minutes > 63 * WEEK:
        return MAX_VALIDITY
    if minutes > 30 * DAY:
        # Weekly steps are counted from 4 weeks, not from 30 days
        return 196 + (minutes - 4 * WEEK) // WEEK
    if minutes > DAY:
        return 167 + (minutes - DAY) // DAY
    if minutes > HALF_DAY:
        return 143 + (minutes - HALF_DAY) // HALF_HOUR
    if minutes > FIVE:
        return (minutes - FIVE) // FIVE
    return EXPIRED


def parse_expiry(iso_expiry: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 date and time that includes a UTC offset.

    Returns:
        An aware datetime, or None if the value is not a full date-time
        with offset
    """
    if not isinstance(iso_expiry, str):
        return None

    text = iso_expiry.strip()
    if not _ISO_OFFSET_DATE_TIME.fullmatch(text):
        return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        expiry = datetime.fromisoformat(text)
    except ValueError:
        return None

    if expiry.tzinfo is None or expiry.utcoffset() is None:
        return None
    return expiry


def compute_validity(iso_expiry: str, mock: bool = False, now: Optional[datetime] = None) -> int:
    """
    Compute the validity code for a message expiring at iso_expiry.

    In mock mode the seconds left are used as if they were minutes, so
    that expiry can be exercised at sixty times the real pace.

    Args:
        iso_expiry: ISO 8601 date-time with offset, e.g. 2026-10-18T12:00:00+03:00
        mock: Treat seconds as minutes
        now: Current time (aware), defaults to the system clock

    Returns:
        The validity code 0..255, or -1 if the message has expired, expires
        within five minutes, or iso_expiry cannot be parsed
    """
    expiry = parse_expiry(iso_expiry)
    if expiry is None:
        logger.error(f"Failed to parse Valid_until ISO date: {iso_expiry!r}")
        return EXPIRED

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()

    seconds_left = int((expiry - now).total_seconds())

    if mock:
        validity = minutes_to_validity(seconds_left)
        logger.debug(f"[MOCK] compute_validity({iso_expiry}) = {seconds_left}s -> {validity}")
    else:
        validity = minutes_to_validity(seconds_left // 60)
        logger.debug(f"compute_validity({iso_expiry}) = {seconds_left // 60}m -> {validity}")

    if validity < 0:
        logger.info(
            f"SMS expired with {seconds_left // 60}m ({seconds_left}s) left till {iso_expiry}"
        )

    return validity


def apply_validity(message: SmsMessage, mock: Optional[bool] = None, now: Optional[datetime] = None) -> int:
    """
    Set the Validity header of a message from its Valid_until header.

    Args:
        message: The message to update
        mock: Treat seconds as minutes; defaults to whether the message
              has a Mock header
        now: Current time (aware), defaults to the system clock

    Returns:
        The validity code, or -1 if the message has no usable expiry or has
        expired, in which case any Validity header is removed
    """
    expiry = message.get_header(Header.VALID_UNTIL)
    if expiry is None:
        return EXPIRED

    if mock is None:
        mock = message.has_header(Header.MOCK)

    validity = compute_validity(expiry, mock=mock, now=now)
    if validity < 0:
        message.remove_header(Header.VALIDITY)
    else:
        message.set_header(Header.VALIDITY, str(validity))
    return validity
