"""
Phone Number Codes - Human-transcribable codes for 9-digit numbers
=================================================================

A 9-digit national phone number is written as six base-32 symbols from
Douglas Crockford's alphabet, grouped as ``XXX-XXX``. The alphabet leaves
out I, L, O and U, so a code read aloud or copied by hand survives the
usual confusions: on decoding, case is ignored, I and L read as 1 and O
reads as 0.

    encode_phone_number("000000001")   # "000-001"
    decode_phone_code("000-00l")       # "000000001"
"""

import re

from core.exceptions import InvalidArgumentError
from core.logging import get_logger

logger = get_logger("sms.phone")

CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
BASE = len(CROCKFORD_ALPHABET)

NUMBER_LENGTH = 9
CODE_LENGTH = 6
GROUP_LENGTH = 3
MAX_PHONE_NUMBER = 10 ** NUMBER_LENGTH - 1

_NUMBER_PATTERN = re.compile(r"[0-9]{%d}" % NUMBER_LENGTH)
_LOOK_ALIKES = str.maketrans({"I": "1", "L": "1", "O": "0"})
_SYMBOL_VALUES = {symbol: value for value, symbol in enumerate(CROCKFORD_ALPHABET)}


class PhoneNumberEncoder:
    """
    Converts between 9-digit phone numbers and their ``XXX-XXX`` codes.

    The encoder holds no state; a single instance can be shared freely.
    Every valid number survives ``decode(encode(number))`` unchanged.
    """

    def encode(self, number: str) -> str:
        """
        Encode a phone number.

        Args:
            number: Exactly nine decimal digits

        Returns:
            The code as two dash-separated groups of three symbols

        Raises:
            InvalidArgumentError: If number is not exactly nine digits
        """
        if not isinstance(number, str) or not _NUMBER_PATTERN.fullmatch(number):
            raise InvalidArgumentError(
                f"Phone number must be exactly {NUMBER_LENGTH} digits",
                {"number": number}
            )

        value = int(number)
        symbols = []
        for _ in range(CODE_LENGTH):
            value, digit = divmod(value, BASE)
            symbols.append(CROCKFORD_ALPHABET[digit])
        code = "".join(reversed(symbols))

        return f"{code[:GROUP_LENGTH]}-{code[GROUP_LENGTH:]}"

    def decode(self, code: str) -> str:
        """
        Decode a phone code.

        The dash between the groups is optional, letters may be in either
        case, and I, L and O are read as 1, 1 and 0.

        Args:
            code: Six symbols, optionally as ``XXX-XXX``

        Returns:
            The nine-digit phone number

        Raises:
            InvalidArgumentError: If the code has the wrong length, contains
                a symbol outside the alphabet, or stands for a value beyond
                the nine-digit range
        """
        if not isinstance(code, str):
            raise InvalidArgumentError("Phone code must be text", {"code": code})

        symbols = code
        if len(symbols) == CODE_LENGTH + 1 and symbols[GROUP_LENGTH] == "-":
            symbols = symbols[:GROUP_LENGTH] + symbols[GROUP_LENGTH + 1:]

        # upper() can lengthen non-ASCII text ("ß" -> "SS")
        symbols = symbols.upper().translate(_LOOK_ALIKES)
        if len(symbols) != CODE_LENGTH:
            raise InvalidArgumentError(
                f"Phone code must be {CODE_LENGTH} symbols, optionally as XXX-XXX",
                {"code": code}
            )

        value = 0
        for symbol in symbols:
            digit = _SYMBOL_VALUES.get(symbol)
            if digit is None:
                raise InvalidArgumentError(
                    f"Invalid symbol in phone code: {symbol!r}",
                    {"code": code}
                )
            value = value * BASE + digit

        if value > MAX_PHONE_NUMBER:
            raise InvalidArgumentError(
                "Phone code is outside the phone number range",
                {"code": code, "value": value}
            )

        return f"{value:0{NUMBER_LENGTH}d}"


_encoder = PhoneNumberEncoder()

encode_phone_number = _encoder.encode
decode_phone_code = _encoder.decode
