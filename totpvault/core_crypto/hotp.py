"""
HOTP (HMAC-based One-Time Password) core, RFC 4226.

hotp() keys HMAC-SHA1 with the decoded secret, hashes an 8-byte
big-endian counter and reduces the digest to a decimal code by
dynamic truncation.
"""

import hashlib
import hmac
import struct


DIGEST_SIZE = 20          # SHA-1 output in bytes
COUNTER_MASK = 0xFFFFFFFF  # Counter occupies the low 4 bytes only


def counter_bytes(counter: int) -> bytes:
    """
    Pack a counter as the 8-byte HOTP message.

    The high 4 bytes are always zero and the low 4 bytes hold the
    counter as an unsigned 32-bit value, so negative counters wrap
    (-1 becomes 0xFFFFFFFF).
    """
    return struct.pack('>II', 0, counter & COUNTER_MASK)


def dynamic_truncate(digest: bytes) -> int:
    """
    Dynamic truncation (RFC 4226 section 5.3).

    Args:
        digest: 20-byte HMAC-SHA1 output

    Returns:
        31-bit integer taken from the digest
    """
    # Offset from the low 4 bits of the last byte
    offset = digest[DIGEST_SIZE - 1] & 0x0F
    value = struct.unpack('>I', digest[offset:offset + 4])[0]
    return value & 0x7FFFFFFF


def hotp(key: bytes, counter: int, digits: int) -> str:
    """
    Generate an HOTP code.

    Args:
        key: Raw secret bytes
        counter: Counter value (time slice for TOTP)
        digits: Code length

    Returns:
        Code string of exactly `digits` characters, zero-padded
    """
    digest = hmac.new(key, counter_bytes(counter), hashlib.sha1).digest()
    value = dynamic_truncate(digest) % (10 ** digits)
    return str(value).zfill(digits)
