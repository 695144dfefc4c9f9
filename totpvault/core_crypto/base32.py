"""
Base32 Codec (RFC 4648 alphabet)

Secrets are exchanged as Base32 text: the letters A-Z and the digits 2-7.

Two encoders are provided:
- encode(): RFC 4648 bit-stream packing, 5 output characters per 8 bits
  of input, padding stripped. decode(encode(data)) == data always holds.
- encode_per_byte(): one character per input byte, taken from the low
  5 bits of that byte. This is not Base32 packing and cannot be decoded
  back to the input; it only turns random bytes into random Base32 text
  for secret generation.

The decoder accepts either letter case, drops '=' padding wherever it appears
and unpacks 5 bits per character in groups of 8 characters. Bits left
over at the end of a group (fewer than 8) are discarded. Characters
outside the alphabet are skipped, or rejected in strict mode.
"""

import base64
from typing import Dict

from ..errors import InvalidBase32


ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
PAD_CHAR = '='
GROUP_SIZE = 8       # Characters per decode group (8 * 5 = 40 bits = 5 bytes)
BITS_PER_CHAR = 5

# Reverse lookup, case-insensitive
_REVERSE: Dict[str, int] = {}
for _value, _char in enumerate(ALPHABET):
    _REVERSE[_char] = _value
    _REVERSE[_char.lower()] = _value


def encode(data: bytes) -> str:
    """
    Encode bytes as unpadded RFC 4648 Base32.

    Args:
        data: Raw bytes

    Returns:
        Base32 string without '=' padding
    """
    return base64.b32encode(data).decode('ascii').rstrip(PAD_CHAR)


def encode_per_byte(data: bytes) -> str:
    """
    Map each byte to one alphabet character using its low 5 bits.

    Output has the same length as the input. Used to render random
    bytes as a secret; the mapping discards 3 bits per byte, so the
    result does not decode back to data.
    """
    return ''.join(ALPHABET[byte & 0x1F] for byte in data)


def decode(text: str, strict: bool = False) -> bytes:
    """
    Decode Base32 text to bytes.

    Args:
        text: Base32 string, any case, padding optional
        strict: Raise on characters outside the alphabet instead of
            skipping them

    Returns:
        Decoded bytes (empty for empty input)

    Raises:
        InvalidBase32: In strict mode, for the first unknown character.
            The position counts characters after '=' removal.
    """
    if not text:
        return b''

    cleaned = text.replace(PAD_CHAR, '')
    output = bytearray()

    for start in range(0, len(cleaned), GROUP_SIZE):
        buffer = 0
        bits = 0
        for position in range(start, min(start + GROUP_SIZE, len(cleaned))):
            char = cleaned[position]
            value = _REVERSE.get(char)
            if value is None:
                if strict:
                    raise InvalidBase32(char, position)
                continue

            buffer = (buffer << BITS_PER_CHAR) | value
            bits += BITS_PER_CHAR
            if bits >= 8:
                bits -= 8
                output.append((buffer >> bits) & 0xFF)
                buffer &= (1 << bits) - 1
        # Incomplete trailing bits of the group are dropped

    return bytes(output)


def is_valid(text: str) -> bool:
    """Check that text holds only alphabet characters and padding."""
    return all(char in _REVERSE or char == PAD_CHAR for char in text)


class Base32Codec:
    """
    Base32 codec with a fixed decoding policy.

    Example:
        >>> codec = Base32Codec()
        >>> codec.decode(codec.encode(b"hello"))
        b'hello'
    """

    def __init__(self, strict: bool = False):
        self._strict = strict

    @property
    def strict(self) -> bool:
        """Whether unknown characters raise instead of being skipped."""
        return self._strict

    def encode(self, data: bytes) -> str:
        """RFC 4648 encoding without padding."""
        return encode(data)

    def encode_per_byte(self, data: bytes) -> str:
        """One character per byte from its low 5 bits."""
        return encode_per_byte(data)

    def decode(self, text: str) -> bytes:
        """Decode with this codec's strictness."""
        return decode(text, strict=self._strict)

    def __repr__(self) -> str:
        return f"Base32Codec(strict={self._strict})"
