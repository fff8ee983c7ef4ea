"""
Test Phone Codes
================

Unit tests for phone number encoding and decoding.
"""

import pytest
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sms.phone import (
    CROCKFORD_ALPHABET,
    PhoneNumberEncoder,
    decode_phone_code,
    encode_phone_number,
)
from core.exceptions import InvalidArgumentError, SMSUtilsError


@pytest.fixture
def encoder():
    """Create a PhoneNumberEncoder."""
    return PhoneNumberEncoder()


class TestEncode:
    """Tests for encoding numbers."""

    def test_zero(self, encoder):
        assert encoder.encode("000000000") == "000-000"

    def test_one(self, encoder):
        assert encoder.encode("000000001") == "000-001"

    def test_highest(self, encoder):
        assert encoder.encode("999999999") == "XSN-JFZ"

    def test_mid_range(self, encoder):
        assert encoder.encode("782334124") == "QA2-Y5C"
        assert encoder.encode("182237814") == "5DS-EKP"

    def test_place_values(self, encoder):
        """Symbol positions are most significant first."""
        assert encoder.encode("000000032") == "000-010"
        assert encoder.encode("000001024") == "000-100"
        assert encoder.encode(f"{32 ** 5:09d}") == "100-000"

    def test_output_uses_alphabet(self, encoder):
        for n in range(987654321, 0, -12345678):
            code = encoder.encode(f"{n:09d}")
            assert len(code) == 7
            assert code[3] == "-"
            assert all(c in CROCKFORD_ALPHABET for c in code.replace("-", ""))

    def test_never_emits_ambiguous_letters(self, encoder):
        codes = "".join(encoder.encode(f"{n:09d}") for n in range(0, 999999999, 7777777))
        assert not set("ILOU") & set(codes)

    @pytest.mark.parametrize("number", ["0", "0000000000", "", "12345678"])
    def test_wrong_length(self, encoder, number):
        with pytest.raises(InvalidArgumentError):
            encoder.encode(number)

    @pytest.mark.parametrize("number", ["12345678a", "-12345678", "1234 5678", "١٢٣٤٥٦٧٨٩"])
    def test_non_digits(self, encoder, number):
        with pytest.raises(InvalidArgumentError):
            encoder.encode(number)

    def test_not_a_string(self, encoder):
        with pytest.raises(InvalidArgumentError):
            encoder.encode(123456789)


class TestDecode:
    """Tests for decoding codes."""

    def test_zero(self, encoder):
        assert encoder.decode("000-000") == "000000000"

    def test_mid_range(self, encoder):
        assert encoder.decode("QA2-Y5C") == "782334124"

    def test_dashless(self, encoder):
        assert encoder.decode("QA2Y5C") == encoder.decode("QA2-Y5C")
        encoder.decode("ABCDEF")

    def test_lower_case(self, encoder):
        assert encoder.decode("abc-def") == encoder.decode("ABC-DEF")

    def test_disambiguation(self, encoder):
        assert encoder.decode("Lli-1Oo") == encoder.decode("LLI-100")
        assert encoder.decode("LLI-100") == "034636800"

    def test_not_crockford(self, encoder):
        with pytest.raises(InvalidArgumentError):
            encoder.decode("ABC+DEF")

    @pytest.mark.parametrize("code", ["ABC-DEU", "ABC-DE*", "ABC DEF", "00000ß", "000-00ﬀ"])
    def test_invalid_symbol(self, encoder, code):
        with pytest.raises(InvalidArgumentError):
            encoder.decode(code)

    @pytest.mark.parametrize("code", ["", "ABC", "ABC-DE", "ABCDEFG", "AB-CDEF", "ABC--DEF"])
    def test_wrong_length(self, encoder, code):
        with pytest.raises(InvalidArgumentError):
            encoder.decode(code)

    @pytest.mark.parametrize("code", ["XSN-JG0", "ZZZ-ZZZ", "Y00-000"])
    def test_out_of_range(self, encoder, code):
        with pytest.raises(InvalidArgumentError):
            encoder.decode(code)

    def test_error_is_value_error(self, encoder):
        with pytest.raises(ValueError):
            encoder.decode("ZZZ-ZZZ")
        with pytest.raises(SMSUtilsError):
            encoder.decode("ZZZ-ZZZ")


class TestRoundTrip:
    """Encoding then decoding gives back the number."""

    @pytest.mark.parametrize("number", ["000000000", "000000001", "999999999", "782334124"])
    def test_boundaries(self, encoder, number):
        assert encoder.decode(encoder.encode(number)) == number

    def test_range(self, encoder):
        for n in range(987654321, 0, -12345678):
            number = f"{n:09d}"
            assert encoder.decode(encoder.encode(number)) == number

    def test_module_functions(self):
        assert decode_phone_code(encode_phone_number("555123456")) == "555123456"
