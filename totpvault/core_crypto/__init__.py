# Core Cryptography Module
"""
Low-level building blocks for one-time passwords:
- Base32 encoding and decoding (RFC 4648 alphabet)
- HOTP with HMAC-SHA1 and dynamic truncation (RFC 4226)
"""

from .base32 import Base32Codec, encode, encode_per_byte, decode
from .hotp import hotp, counter_bytes, dynamic_truncate

__all__ = [
    'Base32Codec',
    'encode',
    'encode_per_byte',
    'decode',
    'hotp',
    'counter_bytes',
    'dynamic_truncate',
]
