"""
Unit tests for the core primitives.

Tests:
- Base32 encoding and decoding (RFC 4648 vectors)
- Lenient and strict decoding of malformed text
- HOTP counter packing, dynamic truncation and RFC 4226 vectors
"""

import pytest
import base64
from unittest.mock import patch

from totpvault.core_crypto.base32 import (
    Base32Codec, ALPHABET, encode, encode_per_byte, decode, is_valid
)
from totpvault.core_crypto.hotp import hotp, counter_bytes, dynamic_truncate
from totpvault.errors import InvalidBase32


RFC_KEY = b"12345678901234567890"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

# RFC 4226 Appendix D
RFC4226_CODES = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]


class TestBase32Encode:
    """Tests for Base32 encoding."""

    def test_rfc4648_vectors(self):
        """Encoding should match RFC 4648 section 10 without padding."""
        assert encode(b"") == ""
        assert encode(b"f") == "MY"
        assert encode(b"fo") == "MZXQ"
        assert encode(b"foo") == "MZXW6"
        assert encode(b"foob") == "MZXW6YQ"
        assert encode(b"fooba") == "MZXW6YTB"
        assert encode(b"foobar") == "MZXW6YTBOI"

    def test_rfc_secret(self):
        """The RFC 4226 key should encode to its well-known secret."""
        assert encode(RFC_KEY) == RFC_SECRET

    def test_no_padding_emitted(self):
        """Encoded text should never contain padding."""
        for length in range(1, 12):
            assert "=" not in encode(bytes(range(length)))

    def test_round_trip(self):
        """decode(encode(data)) should return data for unaligned lengths."""
        for length in range(0, 23):
            data = bytes((i * 37 + 11) & 0xFF for i in range(length))
            assert decode(encode(data)) == data

    def test_per_byte_uses_low_five_bits(self):
        """Per-byte mapping should take the low 5 bits of each byte."""
        assert encode_per_byte(bytes([0, 1, 25, 26, 31])) == "ABZ27"
        assert encode_per_byte(bytes([32, 33, 255])) == "AB7"

    def test_per_byte_length(self):
        """Per-byte mapping should produce one character per byte."""
        data = bytes(range(40))
        result = encode_per_byte(data)
        assert len(result) == len(data)
        assert all(c in ALPHABET for c in result)

    def test_per_byte_empty(self):
        """Empty input should give empty output."""
        assert encode_per_byte(b"") == ""


class TestBase32Decode:
    """Tests for Base32 decoding."""

    def test_rfc4648_vectors(self):
        """Padded RFC 4648 vectors should decode."""
        assert decode("MY======") == b"f"
        assert decode("MZXQ====") == b"fo"
        assert decode("MZXW6===") == b"foo"
        assert decode("MZXW6YQ=") == b"foob"
        assert decode("MZXW6YTBOI======") == b"foobar"

    def test_matches_stdlib(self):
        """Valid padded text should decode like base64.b32decode."""
        data = b"\x00\xff\x10secret-bytes\x7f"
        text = base64.b32encode(data).decode()
        assert decode(text) == base64.b32decode(text)

    def test_empty(self):
        """Empty text should decode to empty bytes."""
        assert decode("") == b""
        assert decode("", strict=True) == b""

    def test_only_padding(self):
        """Text made only of padding should decode to empty bytes."""
        assert decode("========") == b""

    def test_case_insensitive(self):
        """Lowercase text should decode like uppercase."""
        assert decode(RFC_SECRET.lower()) == RFC_KEY
        assert decode("mZxW6yTbOi") == b"foobar"

    def test_padding_anywhere_stripped(self):
        """Padding characters should be removed wherever they appear."""
        assert decode("MZ=XW=6") == b"foo"

    def test_trailing_bits_discarded(self):
        """Bits that do not complete a byte should be dropped."""
        assert decode("M") == b""
        assert decode("MZX") == b"f"

    def test_unknown_characters_skipped(self):
        """Lenient decode should skip characters outside the alphabet."""
        assert decode("MZ XW6") == b"foo"
        assert decode("MZ-XW-6!") == b"foo"
        assert decode("0189") == b""

    def test_lenient_never_raises(self):
        """Lenient decode should accept any text."""
        for text in ["\x00\x01", "ß", "🔑🔑🔑", "{}[]", "   "]:
            assert isinstance(decode(text), bytes)

    def test_groups_of_eight(self):
        """Skipped characters should shorten only their own 8-character group."""
        # Second group has 7 valid characters: 35 bits, 4 bytes, 3 bits lost
        assert decode("GEZDGNBV!GY3TQOJQ") == b"123456789"

    def test_strict_rejects_unknown(self):
        """Strict decode should raise on the first unknown character."""
        with pytest.raises(InvalidBase32) as exc_info:
            decode("MZ XW6", strict=True)
        assert exc_info.value.char == " "
        assert exc_info.value.position == 2

    def test_strict_error_is_value_error(self):
        """InvalidBase32 should be catchable as ValueError."""
        with pytest.raises(ValueError):
            decode("MZXW1", strict=True)

    def test_strict_accepts_valid(self):
        """Strict decode should accept valid text, padding and lowercase."""
        assert decode("mzxw6===", strict=True) == b"foo"

    def test_is_valid(self):
        """is_valid should flag only non-alphabet characters."""
        assert is_valid("MZXW6===")
        assert is_valid("mzxw6")
        assert not is_valid("MZXW1")
        assert not is_valid("MZ XW6")


class TestBase32Codec:
    """Tests for the codec object."""

    def test_default_is_lenient(self):
        """Default codec should skip unknown characters."""
        codec = Base32Codec()
        assert not codec.strict
        assert codec.decode("MZ XW6") == b"foo"

    def test_strict_codec(self):
        """Strict codec should raise on unknown characters."""
        codec = Base32Codec(strict=True)
        with pytest.raises(InvalidBase32):
            codec.decode("MZ XW6")

    def test_encode_methods(self):
        """Codec should expose both encoders."""
        codec = Base32Codec()
        assert codec.encode(b"foobar") == "MZXW6YTBOI"
        assert codec.encode_per_byte(bytes([0, 1])) == "AB"


class TestHOTP:
    """Tests for HOTP (RFC 4226)."""

    def test_rfc4226_vectors(self):
        """All 10 RFC 4226 test vectors should match."""
        for counter, expected in enumerate(RFC4226_CODES):
            assert hotp(RFC_KEY, counter, 6) == expected

    def test_eight_digits(self):
        """8-digit code at counter 1 should match RFC 6238."""
        assert hotp(RFC_KEY, 1, 8) == "94287082"

    def test_counter_bytes(self):
        """Counter should be packed big-endian in the low 4 bytes."""
        assert counter_bytes(0) == bytes(8)
        assert counter_bytes(1) == b"\x00" * 7 + b"\x01"
        assert counter_bytes(0x01020304) == b"\x00\x00\x00\x00\x01\x02\x03\x04"

    def test_counter_high_bytes_always_zero(self):
        """Counters wrap to 32 bits; the high 4 bytes stay zero."""
        assert counter_bytes(-1) == b"\x00\x00\x00\x00\xff\xff\xff\xff"
        assert counter_bytes(2 ** 32) == bytes(8)
        assert counter_bytes(2 ** 32 + 5) == counter_bytes(5)

    def test_dynamic_truncate_rfc_example(self):
        """RFC 4226 section 5.4 example digest should truncate to 0x50ef7f19."""
        digest = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
        assert dynamic_truncate(digest) == 0x50EF7F19

    def test_dynamic_truncate_clears_sign_bit(self):
        """The top bit of the extracted value should be masked off."""
        digest = b"\xff" * 19 + b"\x00"
        assert dynamic_truncate(digest) == 0x7FFFFFFF

    def test_dynamic_truncate_max_offset(self):
        """Offset 15 should read bytes 15 to 18."""
        digest = bytes(15) + b"\x01\x02\x03\x04" + b"\x0f"
        assert dynamic_truncate(digest) == 0x01020304

    def test_zero_padding(self):
        """Small values should be left-padded with zeros."""
        with patch("totpvault.core_crypto.hotp.dynamic_truncate", return_value=42):
            assert hotp(RFC_KEY, 0, 6) == "000042"
            assert hotp(RFC_KEY, 0, 8) == "00000042"

    def test_long_codes(self):
        """Codes longer than 10 digits should still have exact length."""
        code = hotp(RFC_KEY, 1, 12)
        assert len(code) == 12
        assert code.endswith("94287082")

    def test_empty_key(self):
        """An empty key should still produce a code."""
        code = hotp(b"", 0, 6)
        assert len(code) == 6
        assert code.isdigit()
