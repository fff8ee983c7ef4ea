"""
Header Vocabulary - Names of the headers carried by message envelopes
=====================================================================

A single point of definition for the header names understood by the
gateways and brokers that exchange message files. The envelope itself
accepts any header name; these are the ones with agreed meaning.
"""

from enum import Enum
from typing import Union


class Header(str, Enum):
    """Recognized message header names."""
    CREATED = "Created"                        # Creation timestamp of the message
    BOUNCE = "Bounce"                          # Bounce the message back as incoming
    DISCHARGED = "Discharged"                  # Timestamp the centre delivered or errored out
    FAIL_REASON = "Fail_reason"                # Textual explanation set along with FAILED
    FAILED = "Failed"                          # Timestamp of failure
    FLASH = "Flash"                            # Make the message flash on screen
    FROM = "From"                              # Sender of incoming message or delivery report
    FROM_SMSC = "From_SMSC"                    # Number of the handling message centre
    IMSI = "IMSI"                              # International Mobile Subscriber Identity
    MESSAGE_ID = "Message_id"                  # Correlates delivery reports
    MOCK = "Mock"                              # Hand to the mock backend instead of sending
    MODEM = "Modem"                            # Modem that handled the message or report
    RECEIVED = "Received"                      # Timestamp incoming message was received
    REPORT_RECEIVED = "Report_received"        # Timestamp the delivery report was received
    REPORT_SENT = "Report_sent"                # Timestamp of the send the report relates to
    REPORT_STATUS_CODE = "Report_status_code"  # Status code (0..255) on delivery report
    REPORT_STATUS_LINE = "Report_status_line"  # Comma-separated code, type, text
    SENT = "Sent"                              # Timestamp sent to the message centre
    SUBJECT = "Subject"
    TO = "To"                                  # Number of the addressee
    VALID_UNTIL = "Valid_until"                # ISO 8601 expiry timestamp
    VALIDITY = "Validity"                      # Coded validity period for the message centre

    def __str__(self) -> str:
        return self.value


HeaderName = Union[Header, str]


def header_name(name: HeaderName) -> str:
    """Return the plain string form of a header name."""
    if isinstance(name, Header):
        return name.value
    return name
