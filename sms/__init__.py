"""
SMS Module - Codecs for SMS message data
========================================

This module provides:
- SmsMessage: header/body message envelope and its text format
- Header: the recognized header names
- Validity: expiry to validity-period coding
- Phone codes: 9-digit numbers as XXX-XXX base-32 codes
"""

from .headers import Header
from .message import SmsMessage, TIMESTAMP_FORMAT, format_timestamp
from .phone import (
    CROCKFORD_ALPHABET,
    PhoneNumberEncoder,
    decode_phone_code,
    encode_phone_number,
)
from .validity import apply_validity, compute_validity, minutes_to_validity

__all__ = [
    "Header",
    "SmsMessage",
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "CROCKFORD_ALPHABET",
    "PhoneNumberEncoder",
    "encode_phone_number",
    "decode_phone_code",
    "minutes_to_validity",
    "compute_validity",
    "apply_validity",
]
