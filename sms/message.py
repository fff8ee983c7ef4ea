"""
Message Envelope - Header/body text representation of an SMS
============================================================

Messages travel between the spooler, the broker and the modem gateway as
small text files in a mail-like format:

    To: 255712345678
    Valid_until: 2026-10-18T12:00:00+03:00

    The message body

A block of ``Name: Value`` header lines, one blank line, then the body
verbatim. This module provides the in-memory message and its text and
file (de)serialization.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from core.exceptions import EnvelopeIOError, InvalidArgumentError
from core.logging import get_logger

from .headers import HeaderName, header_name

logger = get_logger("sms.message")

# Pattern yy-MM-dd HH:mm:ss, local time
TIMESTAMP_FORMAT = "%y-%m-%d %H:%M:%S"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TRAILING_LINE_BREAK = re.compile(r"(?:\r\n|\r|\n)\Z")

PathLike = Union[str, Path]
Timestamp = Union[datetime, int, float]


def split_lines(text: str) -> List[str]:
    """
    Split text into lines the way a line reader would.

    Any of CRLF, CR or LF ends a line, and a terminator at the very end
    of the text does not start an extra empty line.
    """
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def format_timestamp(when: Optional[Timestamp] = None, fmt: str = TIMESTAMP_FORMAT) -> str:
    """
    Format a point in time for use as a header value.

    Args:
        when: A datetime (naive values are taken as local time, aware
              values are converted to local time) or a POSIX timestamp.
              Defaults to now.
        fmt: strftime pattern

    Returns:
        The formatted local time
    """
    if when is None:
        moment = datetime.now()
    elif isinstance(when, datetime):
        moment = when.astimezone() if when.tzinfo is not None else when
    elif isinstance(when, (int, float)) and not isinstance(when, bool):
        moment = datetime.fromtimestamp(when)
    else:
        raise InvalidArgumentError(f"Not a timestamp: {when!r}")
    return moment.strftime(fmt)


class SmsMessage:
    """
    An SMS message: ordered headers plus a body.

    Header values are stored trimmed and are never empty; setting a
    header to a blank value removes it. The body is kept exactly as
    given. Headers serialize in the order they were first set.

    Setters return the message itself so calls can be chained:

        text = SmsMessage("Hello").set_header(Header.TO, "255712345678").as_string()

    Example:
        msg = SmsMessage.parse("To: 123\\n\\nHi there")
        msg.get_header("To")        # "123"
        msg.body                    # "Hi there"
    """

    def __init__(self, body: str = "", headers: Optional[Mapping[HeaderName, str]] = None):
        """
        Create a message.

        Args:
            body: Message body (default empty)
            headers: Initial headers; blank values are dropped

        Raises:
            InvalidArgumentError: If a header name or value cannot be serialized
        """
        self._headers: Dict[str, str] = {}
        self._body = ""
        self.set_body(body)
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    @classmethod
    def create(cls, headers: Optional[Mapping[HeaderName, str]] = None, body: str = "") -> "SmsMessage":
        """Create a message from optional headers and body."""
        return cls(body, headers)

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    @property
    def headers(self) -> Dict[str, str]:
        """A copy of the headers, in serialization order."""
        return dict(self._headers)

    def has_header(self, name: HeaderName) -> bool:
        return _key(name) in self._headers

    def get_header(self, name: HeaderName, default: Optional[str] = None) -> Optional[str]:
        """
        Get a header value.

        Args:
            name: Header name
            default: Returned when the header is absent

        Returns:
            The trimmed value, or default
        """
        return self._headers.get(_key(name), default)

    def set_header(self, name: HeaderName, value) -> "SmsMessage":
        """
        Set a header to a value.

        The value is converted to text and trimmed. A value that is None
        or blank after trimming removes the header.

        Raises:
            InvalidArgumentError: If the name is empty or contains a colon or
                line break, or the value contains a line break
        """
        key = _key(name)
        _check_name(key)

        text = "" if value is None else str(value).strip()
        if not text:
            self._headers.pop(key, None)
            return self

        if "\n" in text or "\r" in text:
            raise InvalidArgumentError(
                "Header value must be a single line",
                {"header": key}
            )

        self._headers[key] = text
        return self

    def set_timestamp_header(self, name: HeaderName, when: Optional[Timestamp] = None) -> "SmsMessage":
        """
        Set a header to a local timestamp formatted as ``yy-MM-dd HH:mm:ss``.

        Args:
            name: Header name
            when: datetime or POSIX timestamp, defaults to now
        """
        return self.set_header(name, format_timestamp(when))

    def remove_header(self, name: HeaderName) -> "SmsMessage":
        self._headers.pop(_key(name), None)
        return self

    def add_header(self, line: str) -> bool:
        """
        Set a header from a ``Name: Value`` line.

        The name ends at the first colon; everything after it is the value.
        Lines without a colon, with an empty name, or with a line break
        inside the name or value are ignored.

        Args:
            line: A single header line, without terminator

        Returns:
            True if the header is now set, False if the line was ignored or
            its value was blank
        """
        name, colon, value = line.partition(":")
        name = name.strip()
        if not colon or not name:
            logger.debug(f"Ignoring malformed header line: {line!r}")
            return False

        try:
            self.set_header(name, value)
        except InvalidArgumentError as e:
            logger.debug(f"Ignoring malformed header line: {line!r} ({e.message})")
            return False
        return name in self._headers

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    @property
    def body(self) -> str:
        return self._body

    @body.setter
    def body(self, text: str) -> None:
        self.set_body(text)

    def get_body(self) -> str:
        return self._body

    def set_body(self, text: str) -> "SmsMessage":
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Message body must be text, got {type(text).__name__}")
        self._body = text
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def as_string(self) -> str:
        """
        Serialize the message.

        Each header as ``Name: Value`` plus newline, a blank line, then
        the body with nothing added or removed.
        """
        parts = [f"{name}: {value}\n" for name, value in self._headers.items()]
        parts.append("\n")
        parts.append(self._body)
        return "".join(parts)

    def as_bytes(self, encoding: str = "utf-8") -> bytes:
        return self.as_string().encode(encoding)

    @classmethod
    def parse(cls, source: Union[str, bytes, Iterable[Union[str, bytes]]], encoding: str = "utf-8") -> "SmsMessage":
        """
        Parse a message from text, bytes or lines.

        Lines up to the first empty line are header lines; the remaining
        lines, joined with newlines, are the body. Input without an empty
        line is all headers. Malformed header lines are skipped.

        Args:
            source: Message text, encoded bytes, or an iterable of lines
                    (for example an open file); line terminators are removed
            encoding: Encoding for bytes input

        Returns:
            A new SmsMessage

        Raises:
            InvalidArgumentError: If bytes input cannot be decoded
        """
        if isinstance(source, (bytes, bytearray)):
            source = _decode(bytes(source), encoding)

        if isinstance(source, str):
            lines = iter(split_lines(source))
        else:
            lines = (_strip_terminator(line, encoding) for line in source)

        message = cls()
        for line in lines:
            if line == "":
                break
            message.add_header(line)
        message._body = "\n".join(lines)

        logger.debug(
            f"Parsed message with {len(message._headers)} header(s) "
            f"and {len(message._body)} body character(s)"
        )
        return message

    @classmethod
    def read_file(cls, path: PathLike, encoding: str = "utf-8") -> "SmsMessage":
        """
        Read and parse a message file.

        Raises:
            EnvelopeIOError: If the file cannot be read or decoded
        """
        try:
            with open(path, "r", encoding=encoding, newline="") as f:
                text = f.read()
        except OSError as e:
            raise EnvelopeIOError(f"Failed to read message file: {e}", path=str(path)) from e
        except UnicodeDecodeError as e:
            raise EnvelopeIOError(
                f"Message file is not valid {encoding} text", path=str(path)
            ) from e

        return cls.parse(text)

    def write_file(self, path: PathLike, encoding: str = "utf-8") -> None:
        """
        Write the message to a file, replacing its content.

        Raises:
            EnvelopeIOError: If the file cannot be written
        """
        try:
            with open(path, "w", encoding=encoding, newline="") as f:
                f.write(self.as_string())
        except OSError as e:
            raise EnvelopeIOError(f"Failed to write message file: {e}", path=str(path)) from e
        except UnicodeEncodeError as e:
            raise EnvelopeIOError(
                f"Message cannot be encoded as {encoding}", path=str(path)
            ) from e

        logger.debug(f"Wrote message file {path}")

    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"SmsMessage(body={self._body!r}, headers={self._headers!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SmsMessage):
            return NotImplemented
        return (
            list(self._headers.items()) == list(other._headers.items())
            and self._body == other._body
        )


def _key(name: HeaderName) -> str:
    if not isinstance(name, str):
        raise InvalidArgumentError(f"Header name must be text, got {type(name).__name__}")
    return header_name(name).strip()


def _check_name(key: str) -> None:
    if not key or any(c in key for c in ":\r\n"):
        raise InvalidArgumentError(
            "Header name must be non-empty without colon or line break",
            {"header": key}
        )


def _decode(data: bytes, encoding: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"Message is not valid {encoding} text") from e


def _strip_terminator(line: Union[str, bytes], encoding: str) -> str:
    if isinstance(line, (bytes, bytearray)):
        line = _decode(bytes(line), encoding)
    return _TRAILING_LINE_BREAK.sub("", line, count=1)
